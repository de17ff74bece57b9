"""Background scheduler invoking the simulation's tick entry points.

Each named tick runs in its own asyncio task at the cadence configured in
``SchedulerConfig``. The simulation itself owns no timers; this module is
the only place that decides when ticks happen.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from backend.game_session import GameSession
from growsim import GameState, SimContext
from growsim.automation import run_automation
from growsim.harvest import process_curing_tick
from growsim.market import generate_offers, update_market_data
from growsim.plants import advance_plant_phases, check_for_pests, drift_environment_values
from growsim.research import progress_research
from growsim.world_events import maybe_trigger_event, tick_event

logger = logging.getLogger(__name__)

TickFn = Callable[[GameState, SimContext, float, float], GameState]


def _phases(state: GameState, ctx: SimContext, now: float, interval: float) -> GameState:
    return advance_plant_phases(state, ctx, tick_size=interval)


def _curing(state: GameState, ctx: SimContext, now: float, interval: float) -> GameState:
    return process_curing_tick(state, ctx, now)


def _market(state: GameState, ctx: SimContext, now: float, interval: float) -> GameState:
    return update_market_data(state, ctx, now)


def _pests(state: GameState, ctx: SimContext, now: float, interval: float) -> GameState:
    return check_for_pests(state, ctx, now)


def _drift(state: GameState, ctx: SimContext, now: float, interval: float) -> GameState:
    return drift_environment_values(state, ctx)


def _research(state: GameState, ctx: SimContext, now: float, interval: float) -> GameState:
    return progress_research(state, ctx, amount=interval)


def _event_expiry(state: GameState, ctx: SimContext, now: float, interval: float) -> GameState:
    return tick_event(state, ctx, now)


def _random_event(state: GameState, ctx: SimContext, now: float, interval: float) -> GameState:
    state, _ = maybe_trigger_event(state, ctx, now)
    return state


def _automation(state: GameState, ctx: SimContext, now: float, interval: float) -> GameState:
    return run_automation(state, ctx, now)


def _offers(state: GameState, ctx: SimContext, now: float, interval: float) -> GameState:
    if now < state.trade.next_offer_refresh_at:
        return state
    return generate_offers(state, ctx, now)


@dataclass(frozen=True)
class TickSpec:
    fn: TickFn
    interval_field: str  # SchedulerConfig attribute holding the cadence


TICKS: Dict[str, TickSpec] = {
    "phases": TickSpec(_phases, "phase_interval"),
    "curing": TickSpec(_curing, "curing_interval"),
    "market": TickSpec(_market, "market_interval"),
    "pests": TickSpec(_pests, "pest_interval"),
    "drift": TickSpec(_drift, "drift_interval"),
    "research": TickSpec(_research, "research_interval"),
    "events": TickSpec(_event_expiry, "event_interval"),
    "random-event": TickSpec(_random_event, "random_event_interval"),
    "automation": TickSpec(_automation, "automation_interval"),
    "offers": TickSpec(_offers, "offer_interval"),
}


class TickScheduler:
    """Runs every registered tick on its own cadence against a session."""

    def __init__(self, session: GameSession) -> None:
        self._session = session
        self._tasks: Dict[str, asyncio.Task] = {}
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def interval(self, name: str) -> float:
        return float(getattr(self._session.ctx.config.scheduler, TICKS[name].interval_field))

    async def run_tick(self, name: str, interval: Optional[float] = None) -> GameState:
        """Run one tick immediately.

        Raises:
            KeyError: If ``name`` is not a registered tick
        """
        spec = TICKS[name]
        step = self.interval(name) if interval is None else interval
        return await self._session.tick(spec.fn, self._session.now(), step)

    async def start(self) -> None:
        if self._running:
            logger.warning("Tick scheduler already running")
            return
        self._running = True
        for name in TICKS:
            self._tasks[name] = asyncio.create_task(self._loop(name), name=f"tick_{name}")
        logger.info("Tick scheduler started (%d ticks)", len(self._tasks))

    async def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        for name, task in list(self._tasks.items()):
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
            logger.debug("Tick task %s cancelled", name)
        self._tasks.clear()
        logger.info("Tick scheduler stopped")

    async def _loop(self, name: str) -> None:
        interval = self.interval(name)
        while self._running:
            await asyncio.sleep(interval)
            try:
                await self.run_tick(name, interval)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error("Tick %s failed: %s", name, e, exc_info=True)
