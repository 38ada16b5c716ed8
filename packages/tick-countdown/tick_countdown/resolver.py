"""Resolve which units render, which are hidden, and the live-region policy."""
from __future__ import annotations

from typing import Sequence

from tick_countdown.formatter import format_value
from tick_countdown.types import (
    DisplayOptions,
    LiveRegion,
    RenderPlan,
    RenderSlot,
    TimeBreakdown,
    Unit,
)

_FINEST_UNIT = "seconds"


def highest_nonzero_index(values: Sequence[int]) -> int | None:
    """Index of the first value above zero, or None when all are zero."""
    for index, value in enumerate(values):
        if value > 0:
            return index
    return None


def resolve(
    breakdown: TimeBreakdown,
    units: Sequence[Unit],
    options: DisplayOptions,
) -> RenderPlan:
    """Build the RenderPlan for one tick. Pure: equal inputs, equal plans.

    Leading zero-valued units (everything above the highest nonzero unit)
    are hidden from assistive technology and, unless ``show_zeroes`` is
    set, removed from the rendered sequence. ``seconds`` is exempt. The
    live region is polite when the finest allowed unit is the one doing
    the talking, otherwise only on minute boundaries. When the delta has
    run out and negatives are not allowed, every value reads 0 and the
    plan is terminal.
    """
    allowed = [unit for unit in units if unit.config.allowed]
    values = [breakdown.value(unit.key) for unit in allowed]
    highest = highest_nonzero_index(values)
    leading = len(allowed) if highest is None else highest
    # With nothing nonzero the last allowed unit becomes the speaking target.
    speaking = len(allowed) - 1 if highest is None else highest

    terminal = breakdown.delta_ms <= 0 and not options.allow_negative

    slots: list[RenderSlot] = []
    for index, (unit, value) in enumerate(zip(allowed, values)):
        hidden = False
        removed = False
        if index < leading and value == 0 and unit.key != _FINEST_UNIT:
            hidden = True
            removed = not options.show_zeroes
        if options.compact:
            removed = index != speaking

        shown_value = 0 if terminal else value
        slots.append(
            RenderSlot(
                unit=unit.key,
                value=shown_value,
                text=format_value(shown_value, unit.config, options.pad_values),
                accessibility_hidden=hidden,
                removed=removed,
            )
        )

    if highest is None or highest == len(allowed) - 1:
        live_region = LiveRegion.POLITE
    elif breakdown.seconds == 0:
        live_region = LiveRegion.POLITE
    else:
        live_region = LiveRegion.OFF

    return RenderPlan(
        slots=tuple(slots),
        live_region=live_region,
        terminal=terminal,
        separator="" if options.compact else options.separator,
    )
