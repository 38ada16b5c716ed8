"""Tests for unit visibility resolution and live-region policy."""
from dataclasses import replace

import pytest

from tick_countdown.breakdown import MS_PER_DAY, MS_PER_SECOND
from tick_countdown.config import DEFAULT_UNITS
from tick_countdown.resolver import highest_nonzero_index, resolve
from tick_countdown.types import (
    DisplayOptions,
    LiveRegion,
    SlotState,
    TimeBreakdown,
    UnitConfig,
)


def units_allowing(*keys):
    return tuple(
        replace(unit, config=replace(unit.config, allowed=unit.key in keys))
        for unit in DEFAULT_UNITS
    )


def visible_units(plan):
    return [slot.unit for slot in plan.visible_slots]


# --- highest_nonzero_index ---

def test_highest_nonzero_index():
    assert highest_nonzero_index([0, 0, 3, 0]) == 2
    assert highest_nonzero_index([1, 0]) == 0
    assert highest_nonzero_index([0, 0, 0]) is None
    assert highest_nonzero_index([]) is None


# --- Zero suppression ---

def test_minutes_and_seconds():
    b = TimeBreakdown(minutes=1, seconds=30, delta_ms=90 * MS_PER_SECOND)
    plan = resolve(b, DEFAULT_UNITS, DisplayOptions())

    assert visible_units(plan) == ["minutes", "seconds"]
    seconds = plan.slot("seconds")
    assert seconds.removed is False
    assert seconds.accessibility_hidden is False
    for key in ("years", "weeks", "days", "hours"):
        slot = plan.slot(key)
        assert slot.accessibility_hidden is True
        assert slot.state is SlotState.REMOVED
    assert plan.text == "1 minute, 30 seconds"
    assert plan.terminal is False


def test_ninety_days_removes_years():
    b = TimeBreakdown(weeks=12, days=6, delta_ms=90 * MS_PER_DAY)
    plan = resolve(b, DEFAULT_UNITS, DisplayOptions())

    assert "years" not in visible_units(plan)
    assert visible_units(plan) == ["weeks", "days", "hours", "minutes", "seconds"]
    assert plan.text == "12 weeks, 6 days, 0 hours, 0 minutes, 0 seconds"


def test_zeros_after_highest_unit_stay_visible_and_spoken():
    b = TimeBreakdown(days=2, seconds=4, delta_ms=2 * MS_PER_DAY + 4000)
    plan = resolve(b, DEFAULT_UNITS, DisplayOptions())
    hours = plan.slot("hours")
    assert hours.state is SlotState.SHOWN
    assert hours.text == "0 hours"


def test_show_zeroes_keeps_leading_units_but_hides_them():
    b = TimeBreakdown(hours=5, delta_ms=5 * 3600 * MS_PER_SECOND)
    plan = resolve(b, DEFAULT_UNITS, DisplayOptions(show_zeroes=True))

    assert visible_units(plan) == list(b.as_dict())
    assert plan.slot("years").state is SlotState.HIDDEN
    assert plan.slot("days").state is SlotState.HIDDEN
    assert plan.slot("hours").state is SlotState.SHOWN
    assert plan.text.startswith("0 years, 0 weeks, 0 days, 5 hours")


def test_zero_seconds_is_never_suppressed():
    b = TimeBreakdown(delta_ms=400)
    plan = resolve(b, DEFAULT_UNITS, DisplayOptions())
    assert visible_units(plan) == ["seconds"]
    assert plan.slot("seconds").accessibility_hidden is False
    assert plan.terminal is False


def test_disallowed_units_are_skipped():
    b = TimeBreakdown(days=3, hours=2, minutes=0, seconds=5, delta_ms=1)
    plan = resolve(b, units_allowing("minutes", "seconds"), DisplayOptions())
    assert [slot.unit for slot in plan.slots] == ["minutes", "seconds"]
    assert visible_units(plan) == ["seconds"]


# --- Live region ---

def test_live_region_off_between_minute_boundaries():
    b = TimeBreakdown(hours=1, seconds=12, delta_ms=1)
    assert resolve(b, DEFAULT_UNITS, DisplayOptions()).live_region is LiveRegion.OFF


def test_live_region_polite_on_minute_boundary():
    b = TimeBreakdown(hours=1, minutes=3, seconds=0, delta_ms=1)
    assert resolve(b, DEFAULT_UNITS, DisplayOptions()).live_region is LiveRegion.POLITE


def test_live_region_polite_when_seconds_are_highest():
    b = TimeBreakdown(seconds=42, delta_ms=42 * MS_PER_SECOND)
    assert resolve(b, DEFAULT_UNITS, DisplayOptions()).live_region is LiveRegion.POLITE


def test_live_region_polite_when_everything_is_zero():
    b = TimeBreakdown(delta_ms=0)
    assert resolve(b, DEFAULT_UNITS, DisplayOptions()).live_region is LiveRegion.POLITE


def test_live_region_uses_last_allowed_unit():
    b = TimeBreakdown(minutes=7, seconds=33, delta_ms=1)
    plan = resolve(b, units_allowing("hours", "minutes"), DisplayOptions())
    assert plan.live_region is LiveRegion.POLITE


# --- Compact ---

def test_compact_shows_only_highest_unit():
    b = TimeBreakdown(years=1, delta_ms=400 * MS_PER_DAY)
    plan = resolve(b, DEFAULT_UNITS, DisplayOptions(compact=True))
    assert visible_units(plan) == ["years"]
    assert plan.separator == ""
    assert plan.text == "1 year"


def test_compact_with_lower_units_nonzero():
    b = TimeBreakdown(days=3, hours=4, minutes=5, seconds=6, delta_ms=1)
    plan = resolve(b, DEFAULT_UNITS, DisplayOptions(compact=True))
    assert visible_units(plan) == ["days"]
    assert plan.text == "3 days"


def test_compact_all_zero_keeps_last_allowed_unit():
    b = TimeBreakdown(delta_ms=0)
    plan = resolve(b, units_allowing("days", "hours"), DisplayOptions(compact=True))
    assert visible_units(plan) == ["hours"]
    assert plan.text == "0 hours"


# --- Terminal ---

def test_terminal_when_all_zero():
    b = TimeBreakdown(delta_ms=0)
    plan = resolve(b, DEFAULT_UNITS, DisplayOptions())
    assert plan.terminal is True
    assert all(slot.value == 0 for slot in plan.slots)
    assert plan.text == "0 seconds"


def test_terminal_forces_zero_when_past_target():
    b = TimeBreakdown(days=3, hours=1, is_negative=True, delta_ms=-(3 * MS_PER_DAY + 3600000))
    plan = resolve(b, DEFAULT_UNITS, DisplayOptions())
    assert plan.terminal is True
    assert all(slot.value == 0 for slot in plan.slots)
    assert plan.text == "0 days, 0 hours, 0 minutes, 0 seconds"


def test_allow_negative_counts_up():
    b = TimeBreakdown(days=3, hours=1, is_negative=True, delta_ms=-(3 * MS_PER_DAY + 3600000))
    plan = resolve(b, DEFAULT_UNITS, DisplayOptions(allow_negative=True))
    assert plan.terminal is False
    assert plan.slot("days").value == 3
    assert plan.text == "3 days, 1 hour, 0 minutes, 0 seconds"


# --- Formatting options ---

def test_padded_values_and_custom_separator():
    b = TimeBreakdown(hours=2, minutes=5, seconds=9, delta_ms=1)
    plan = resolve(b, DEFAULT_UNITS, DisplayOptions(pad_values=True, separator=" : "))
    assert plan.text == "02 hours : 05 minutes : 09 seconds"


def test_custom_labels_flow_through():
    units = tuple(
        replace(unit, config=UnitConfig(singular="s", plural="s")) if unit.key == "seconds" else unit
        for unit in DEFAULT_UNITS
    )
    plan = resolve(TimeBreakdown(seconds=5, delta_ms=5000), units, DisplayOptions())
    assert plan.text == "5 s"


# --- Purity ---

@pytest.mark.parametrize(
    "options",
    [DisplayOptions(), DisplayOptions(compact=True), DisplayOptions(show_zeroes=True)],
)
def test_resolve_is_idempotent(options):
    b = TimeBreakdown(weeks=3, minutes=9, seconds=1, delta_ms=1)
    assert resolve(b, DEFAULT_UNITS, options) == resolve(b, DEFAULT_UNITS, options)
