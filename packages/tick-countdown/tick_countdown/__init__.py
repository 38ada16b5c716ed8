"""tick-countdown - Accessible countdown and count-up displays."""
from __future__ import annotations

from tick_countdown.breakdown import calendar_year, compute_breakdown, is_leap_year
from tick_countdown.clock import Clock
from tick_countdown.config import TimerConfig, make_config
from tick_countdown.formatter import format_value
from tick_countdown.host import bootstrap_surface, create_countdown, parse_target
from tick_countdown.resolver import highest_nonzero_index, resolve
from tick_countdown.session import TickScheduler, TimerSession
from tick_countdown.surface import Surface, TextSurface
from tick_countdown.types import (
    UNIT_KEYS,
    ConfigurationWarning,
    DisplayOptions,
    LiveRegion,
    RenderPlan,
    RenderSlot,
    SessionState,
    SessionStateError,
    SlotState,
    TimeBreakdown,
    TimerEvent,
    Unit,
    UnitConfig,
)

__all__ = [
    "UNIT_KEYS",
    "Clock",
    "ConfigurationWarning",
    "DisplayOptions",
    "LiveRegion",
    "RenderPlan",
    "RenderSlot",
    "SessionState",
    "SessionStateError",
    "SlotState",
    "Surface",
    "TextSurface",
    "TickScheduler",
    "TimeBreakdown",
    "TimerConfig",
    "TimerEvent",
    "TimerSession",
    "Unit",
    "UnitConfig",
    "bootstrap_surface",
    "calendar_year",
    "compute_breakdown",
    "create_countdown",
    "format_value",
    "highest_nonzero_index",
    "is_leap_year",
    "make_config",
    "parse_target",
    "resolve",
]
