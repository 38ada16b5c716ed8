"""TimerSession and TickScheduler - per-countdown state and its tick loop."""
from __future__ import annotations

import asyncio
import logging
import time
from datetime import tzinfo

from tick_countdown.breakdown import compute_breakdown
from tick_countdown.clock import Clock
from tick_countdown.config import TimerConfig
from tick_countdown.resolver import resolve
from tick_countdown.surface import Surface
from tick_countdown.types import (
    Hook,
    RenderPlan,
    SessionState,
    SessionStateError,
    TimeBreakdown,
    TimerEvent,
)

logger = logging.getLogger(__name__)


class TimerSession:
    """State owned by one countdown: target, config, and the last tick."""

    def __init__(
        self,
        target_ms: int,
        config: TimerConfig | None = None,
        tz: tzinfo | None = None,
    ) -> None:
        self.target_ms = target_ms
        self.config = config if config is not None else TimerConfig()
        self.tz = tz
        self.state = SessionState.CREATED
        self.breakdown: TimeBreakdown | None = None
        self.plan: RenderPlan | None = None

    @property
    def running(self) -> bool:
        return self.state is SessionState.RUNNING

    @property
    def terminated(self) -> bool:
        return self.state is SessionState.TERMINATED

    def measure(self, now_ms: int) -> TimeBreakdown:
        delta_ms = self.target_ms - now_ms
        return compute_breakdown(delta_ms, self.target_ms, now_ms, self.tz)

    def recompute(self, now_ms: int) -> RenderPlan:
        """Measure against ``now_ms`` and store the breakdown and plan."""
        self.breakdown = self.measure(now_ms)
        self.plan = resolve(self.breakdown, self.config.units, self.config.options)
        return self.plan


class TickScheduler:
    """Drives a TimerSession: Created -> Running -> Terminated.

    ``start`` fires ``on_create`` and recomputes immediately. Every
    following tick recomputes from wall-clock time, renders the plan, and
    fires ``on_tick``; a terminal plan stops ticking for good and fires
    ``on_end``. ``cancel`` stops without ``on_end`` and is idempotent.
    """

    def __init__(
        self,
        session: TimerSession,
        clock: Clock | None = None,
        surface: Surface | None = None,
    ) -> None:
        self._session = session
        self._clock = clock if clock is not None else Clock()
        self._surface = surface

    @property
    def session(self) -> TimerSession:
        return self._session

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def surface(self) -> Surface | None:
        return self._surface

    @property
    def state(self) -> SessionState:
        return self._session.state

    # --- Lifecycle ---

    def start(self) -> RenderPlan:
        session = self._session
        if session.state is not SessionState.CREATED:
            raise SessionStateError(
                session.state, f"Cannot start a session that is {session.state.value}"
            )
        initial = session.measure(self._clock.now_ms())
        self._fire(
            session.config.on_create,
            TimerEvent.from_breakdown(session.target_ms, initial, self._clock.tick_number),
        )
        session.state = SessionState.RUNNING
        logger.debug("Countdown to %d started", session.target_ms)
        return self._step()

    def tick(self) -> RenderPlan | None:
        """Recompute once. A no-op returning the last plan once terminated."""
        session = self._session
        if session.state is SessionState.CREATED:
            raise SessionStateError(session.state, "Session has not been started")
        if session.state is SessionState.TERMINATED:
            return session.plan
        return self._step()

    def _step(self) -> RenderPlan:
        session = self._session
        tick_number = self._clock.advance()
        plan = session.recompute(self._clock.now_ms())
        breakdown = session.breakdown
        assert breakdown is not None
        if self._surface is not None:
            self._surface.render(plan)

        if plan.terminal:
            session.state = SessionState.TERMINATED
            logger.debug("Countdown to %d reached zero", session.target_ms)
            ended = TimeBreakdown(is_negative=breakdown.is_negative, delta_ms=breakdown.delta_ms)
            self._fire(
                session.config.on_end,
                TimerEvent.from_breakdown(session.target_ms, ended, tick_number),
            )
            return plan

        self._fire(
            session.config.on_tick,
            TimerEvent.from_breakdown(session.target_ms, breakdown, tick_number),
        )
        return plan

    def cancel(self) -> None:
        session = self._session
        if session.state is SessionState.TERMINATED:
            return
        session.state = SessionState.TERMINATED
        logger.debug("Countdown to %d canceled", session.target_ms)

    def _fire(self, hook: Hook | None, event: TimerEvent) -> None:
        if hook is None:
            return
        try:
            hook(event)
        except Exception:
            if self._session.config.hook_errors == "log":
                logger.exception("Countdown hook %r failed", hook)
                return
            self.cancel()
            raise

    # --- Drivers ---

    def run(self, n: int) -> RenderPlan | None:
        """Recompute up to ``n`` times without sleeping. Starts if needed."""
        if n <= 0:
            return self._session.plan
        if self._session.state is SessionState.CREATED:
            self.start()
            n -= 1
        for _ in range(n):
            if not self._session.running:
                break
            self.tick()
        return self._session.plan

    def run_forever(self) -> None:
        """Block, ticking once per clock period until terminated."""
        if self._session.state is SessionState.CREATED:
            self.start()
        period = self._clock.period
        last = time.monotonic()
        while self._session.running:
            sleep_time = period - (time.monotonic() - last)
            if sleep_time > 0:
                time.sleep(sleep_time)
            if not self._session.running:
                break
            last = time.monotonic()
            self.tick()

    async def run_async(self) -> None:
        """Same as run_forever, but yields to the event loop between ticks."""
        if self._session.state is SessionState.CREATED:
            self.start()
        period = self._clock.period
        loop = asyncio.get_running_loop()
        last = loop.time()
        try:
            while self._session.running:
                sleep_time = period - (loop.time() - last)
                await asyncio.sleep(max(sleep_time, 0))
                if not self._session.running:
                    break
                last = loop.time()
                self.tick()
        except asyncio.CancelledError:
            self.cancel()
            raise
