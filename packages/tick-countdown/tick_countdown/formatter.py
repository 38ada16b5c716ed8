"""Display text for a single unit value."""
from __future__ import annotations

from tick_countdown.types import UnitConfig


def pad_value(value: int, pad_values: bool) -> str:
    if pad_values and 0 <= value < 10:
        return f"0{value}"
    return str(value)


def pick_label(value: int, config: UnitConfig) -> str:
    return config.singular if value == 1 else config.plural


def format_value(value: int, config: UnitConfig, pad_values: bool = False) -> str:
    """Render ``"<value> <label>"``, e.g. ``"03 hours"`` or ``"1 minute"``."""
    return f"{pad_value(value, pad_values)} {pick_label(value, config)}"
