"""Host-side setup: target parsing, surface bootstrapping, and the factory."""
from __future__ import annotations

import logging
import math
import warnings
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Any, Mapping

from tick_countdown.clock import Clock
from tick_countdown.config import make_config
from tick_countdown.session import TickScheduler, TimerSession
from tick_countdown.surface import Surface
from tick_countdown.types import ConfigurationWarning

logger = logging.getLogger(__name__)

DEFAULT_LABEL = "Countdown timer"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_EARLIEST = datetime.min.replace(tzinfo=timezone.utc) + timedelta(days=1)
_LATEST = datetime.max.replace(tzinfo=timezone.utc) - timedelta(days=1)


def parse_target(value: Any) -> int | None:
    """Epoch milliseconds for ``value``, or None when missing or unparsable.

    Accepts ISO 8601 strings, ``datetime`` objects, and numbers (already
    epoch milliseconds). Naive date-times are read as host local time.
    NaN, infinities and instants outside the calendar range are rejected.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return _in_calendar_range(int(value))
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return None
    if isinstance(value, datetime):
        try:
            timestamp_ms = int(value.timestamp() * 1000)
        except (ValueError, OverflowError, OSError):
            return None
        return _in_calendar_range(timestamp_ms)
    return None


def _in_calendar_range(timestamp_ms: int) -> int | None:
    # A day of margin keeps local-time conversion inside datetime's range.
    try:
        instant = _EPOCH + timedelta(milliseconds=timestamp_ms)
    except OverflowError:
        return None
    if not _EARLIEST <= instant <= _LATEST:
        return None
    return timestamp_ms


def bootstrap_surface(surface: Surface) -> None:
    """One-time accessibility attributes for a countdown surface."""
    if surface.get_attribute("role") != "timer":
        surface.set_attribute("role", "timer")
    if not surface.get_attribute("tabindex"):
        surface.set_attribute("tabindex", "0")
    if not surface.get_attribute("aria-label"):
        surface.set_attribute("aria-label", DEFAULT_LABEL)
    surface.set_attribute("aria-atomic", "true")


def create_countdown(
    target: Any,
    surface: Surface | None = None,
    options: Mapping[str, Any] | None = None,
    clock: Clock | None = None,
    tz: tzinfo | None = None,
) -> TickScheduler:
    """Build an unstarted TickScheduler counting toward ``target``.

    A missing or unparsable target is not fatal: a ConfigurationWarning is
    issued, the error is logged, and the current time is used instead.
    """
    clock = clock if clock is not None else Clock()
    config = make_config(options)

    target_ms = parse_target(target)
    if target_ms is None:
        message = (
            f"Countdown target {target!r} is missing or not a valid date string; "
            "using the current time instead"
        )
        logger.error(message)
        warnings.warn(message, ConfigurationWarning, stacklevel=2)
        target_ms = clock.now_ms()

    if surface is not None:
        bootstrap_surface(surface)

    session = TimerSession(target_ms, config, tz=tz)
    return TickScheduler(session, clock=clock, surface=surface)
