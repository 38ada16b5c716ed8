"""Rendering surfaces that receive render plans."""
from __future__ import annotations

from typing import Protocol

from tick_countdown.types import RenderPlan


class Surface(Protocol):
    def get_attribute(self, name: str) -> str | None: ...

    def set_attribute(self, name: str, value: str) -> None: ...

    def render(self, plan: RenderPlan) -> None: ...


class TextSurface:
    """In-memory surface: a flat attribute map plus one text line.

    Each rendered slot carries its own ``aria-label`` and ``aria-hidden``
    values in ``slot_attributes``.
    """

    def __init__(self, attributes: dict[str, str] | None = None) -> None:
        self.attributes: dict[str, str] = dict(attributes or {})
        self.text: str = ""
        self.slot_attributes: dict[str, dict[str, str]] = {}
        self._order: list[str] = []
        self.render_count = 0

    @property
    def order(self) -> list[str]:
        """Units in the currently rendered sequence."""
        return list(self._order)

    def get_attribute(self, name: str) -> str | None:
        return self.attributes.get(name)

    def set_attribute(self, name: str, value: str) -> None:
        self.attributes[name] = value

    def clear(self) -> None:
        self.text = ""
        self.slot_attributes.clear()
        self._order = []

    def render(self, plan: RenderPlan) -> None:
        visible = plan.visible_slots
        order = [slot.unit for slot in visible]
        if order != self._order:
            # Separators only sit between rendered slots; dropped slots
            # take theirs with them.
            for unit in set(self._order) - set(order):
                self.slot_attributes.pop(unit, None)
            self._order = order

        for slot in visible:
            self.slot_attributes[slot.unit] = {
                "aria-label": slot.text,
                "aria-hidden": "true" if slot.accessibility_hidden else "false",
            }
        self.text = plan.separator.join(slot.text for slot in visible)
        self.set_attribute("aria-live", plan.live_region.value)
        self.render_count += 1
