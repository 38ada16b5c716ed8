"""Core data types for countdown breakdowns and render plans."""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable

UNIT_KEYS: tuple[str, ...] = ("years", "weeks", "days", "hours", "minutes", "seconds")


class SessionState(enum.Enum):
    CREATED = "created"
    RUNNING = "running"
    TERMINATED = "terminated"


class LiveRegion(str, enum.Enum):
    """Value written to the surface's ``aria-live`` attribute."""

    POLITE = "polite"
    OFF = "off"


class SlotState(enum.Enum):
    SHOWN = "shown"
    HIDDEN = "hidden"  # rendered, but hidden from assistive technology
    REMOVED = "removed"


@dataclass(frozen=True, slots=True)
class UnitConfig:
    singular: str
    plural: str
    allowed: bool = True


@dataclass(frozen=True, slots=True)
class Unit:
    """A unit key tagged with its configuration."""

    key: str
    config: UnitConfig


@dataclass(frozen=True, slots=True)
class DisplayOptions:
    compact: bool = False
    allow_negative: bool = False
    pad_values: bool = False
    show_zeroes: bool = False
    separator: str = ", "


@dataclass(frozen=True, slots=True)
class TimeBreakdown:
    """Six-unit decomposition of a signed millisecond delta.

    Unit values are magnitudes; the sign lives in ``is_negative``.
    ``delta_ms`` is the signed delta the breakdown was computed from.
    """

    years: int = 0
    weeks: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    is_negative: bool = False
    delta_ms: int = 0

    def values(self) -> tuple[int, ...]:
        return tuple(getattr(self, key) for key in UNIT_KEYS)

    def value(self, key: str) -> int:
        if key not in UNIT_KEYS:
            raise KeyError(key)
        return getattr(self, key)

    def as_dict(self) -> dict[str, int]:
        return {key: getattr(self, key) for key in UNIT_KEYS}


@dataclass(frozen=True, slots=True)
class RenderSlot:
    unit: str
    value: int
    text: str
    accessibility_hidden: bool = False
    removed: bool = False

    @property
    def state(self) -> SlotState:
        if self.removed:
            return SlotState.REMOVED
        if self.accessibility_hidden:
            return SlotState.HIDDEN
        return SlotState.SHOWN


@dataclass(frozen=True, slots=True)
class RenderPlan:
    """Resolved display for one tick. ``slots`` holds every allowed unit."""

    slots: tuple[RenderSlot, ...]
    live_region: LiveRegion
    terminal: bool = False
    separator: str = ", "

    @property
    def visible_slots(self) -> tuple[RenderSlot, ...]:
        return tuple(slot for slot in self.slots if not slot.removed)

    @property
    def text(self) -> str:
        return self.separator.join(slot.text for slot in self.visible_slots)

    def slot(self, unit: str) -> RenderSlot | None:
        for slot in self.slots:
            if slot.unit == unit:
                return slot
        return None


@dataclass(frozen=True, slots=True)
class TimerEvent:
    """Payload passed to on_create, on_tick and on_end hooks."""

    target_ms: int
    delta_ms: int
    is_negative: bool
    years: int
    weeks: int
    days: int
    hours: int
    minutes: int
    seconds: int
    tick_number: int = 0

    @classmethod
    def from_breakdown(
        cls, target_ms: int, breakdown: TimeBreakdown, tick_number: int = 0,
    ) -> TimerEvent:
        return cls(
            target_ms=target_ms,
            delta_ms=breakdown.delta_ms,
            is_negative=breakdown.is_negative,
            tick_number=tick_number,
            **breakdown.as_dict(),
        )


Hook = Callable[[TimerEvent], None]


class ConfigurationWarning(UserWarning):
    """Issued when a countdown target is missing or cannot be parsed."""


class SessionStateError(RuntimeError):
    """Raised on an illegal lifecycle transition (e.g. starting twice)."""

    def __init__(self, state: SessionState, message: str) -> None:
        self.state = state
        super().__init__(message)
