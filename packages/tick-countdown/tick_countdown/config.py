"""Timer configuration: display options, unit labels, and lifecycle hooks."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from tick_countdown.types import UNIT_KEYS, DisplayOptions, Hook, Unit, UnitConfig

HOOK_ERROR_POLICIES = ("raise", "log")

DEFAULT_UNITS: tuple[Unit, ...] = tuple(
    Unit(key=key, config=UnitConfig(singular=key[:-1], plural=key))
    for key in UNIT_KEYS
)

_HOOK_KEYS = ("on_create", "on_tick", "on_end")
_OPTION_KEYS = ("compact", "allow_negative", "pad_values", "show_zeroes", "separator")
_UNIT_FIELDS = ("allowed", "singular", "plural")


@dataclass(frozen=True)
class TimerConfig:
    """Immutable configuration for one countdown.

    Attributes:
        units: Six tagged unit records, always ordered years..seconds.
        options: Display options shared by every unit.
        on_create: Called once, before the first recomputation.
        on_tick: Called after every non-terminal recomputation.
        on_end: Called once when the countdown reaches zero.
        hook_errors: ``"raise"`` cancels the session and propagates a hook
            exception; ``"log"`` logs it and keeps ticking.
    """

    units: tuple[Unit, ...] = DEFAULT_UNITS
    options: DisplayOptions = field(default_factory=DisplayOptions)
    on_create: Hook | None = None
    on_tick: Hook | None = None
    on_end: Hook | None = None
    hook_errors: str = "raise"

    def __post_init__(self) -> None:
        keys = tuple(unit.key for unit in self.units)
        if keys != UNIT_KEYS:
            raise ValueError(f"units must be ordered {UNIT_KEYS}, got {keys}")
        if self.hook_errors not in HOOK_ERROR_POLICIES:
            raise ValueError(
                f"hook_errors must be one of {HOOK_ERROR_POLICIES}, got {self.hook_errors!r}"
            )
        for name in _HOOK_KEYS:
            hook = getattr(self, name)
            if hook is not None and not callable(hook):
                raise ValueError(f"{name} must be callable, got {type(hook).__name__}")

    def unit(self, key: str) -> Unit:
        for unit in self.units:
            if unit.key == key:
                return unit
        raise KeyError(key)


def make_config(options: Mapping[str, Any] | None = None) -> TimerConfig:
    """Build a TimerConfig from a flat options mapping.

    Per-unit mappings (``{"years": {"allowed": False}}``) merge over the
    English defaults, so a partial mapping keeps the default labels.
    """
    options = dict(options or {})
    unknown = set(options) - set(_HOOK_KEYS) - set(_OPTION_KEYS) - set(UNIT_KEYS) - {"hook_errors"}
    if unknown:
        raise ValueError(f"Unknown countdown options: {sorted(unknown)}")

    units = []
    for default in DEFAULT_UNITS:
        overrides = options.get(default.key) or {}
        bad = set(overrides) - set(_UNIT_FIELDS)
        if bad:
            raise ValueError(f"Unknown fields for unit {default.key!r}: {sorted(bad)}")
        allowed = overrides.get("allowed", default.config.allowed)
        if not isinstance(allowed, bool):
            raise ValueError(
                f"allowed for unit {default.key!r} must be a bool, got {allowed!r}"
            )
        units.append(
            Unit(
                key=default.key,
                config=UnitConfig(
                    singular=overrides.get("singular", default.config.singular),
                    plural=overrides.get("plural", default.config.plural),
                    allowed=allowed,
                ),
            )
        )

    display = DisplayOptions(
        **{key: options[key] for key in _OPTION_KEYS if key in options}
    )
    return TimerConfig(
        units=tuple(units),
        options=display,
        on_create=options.get("on_create"),
        on_tick=options.get("on_tick"),
        on_end=options.get("on_end"),
        hook_errors=options.get("hook_errors", "raise"),
    )
