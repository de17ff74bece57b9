"""The single running game: current snapshot plus its simulation context.

Every command and tick goes through ``GameSession`` under one asyncio lock,
so the HTTP handlers and the background tick loops never interleave.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
import time
from collections import deque
from enum import Enum
from typing import Any, Callable, Deque, Dict, List, Optional, Tuple

from growsim import GameState, Result, SimContext, initial_state
from growsim.events import (
    CuringCompletedEvent,
    EventBus,
    PestOutbreakEvent,
    PhaseAdvancedEvent,
    PlantHarvestedEvent,
    ResearchCompletedEvent,
    StrainBredEvent,
    TradeCompletedEvent,
)

logger = logging.getLogger(__name__)

ACTIVITY_EVENTS = (
    PhaseAdvancedEvent,
    PlantHarvestedEvent,
    CuringCompletedEvent,
    TradeCompletedEvent,
    StrainBredEvent,
    ResearchCompletedEvent,
    PestOutbreakEvent,
)

Command = Callable[..., Tuple[GameState, Result]]
Tick = Callable[..., GameState]


def to_jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


def event_to_dict(event: object) -> Dict[str, Any]:
    data = to_jsonable(dataclasses.asdict(event)) if dataclasses.is_dataclass(event) else {}
    data["type"] = type(event).__name__
    return data


class GameSession:
    """Owns the current ``GameState`` and swaps it after each transform."""

    def __init__(
        self,
        seed: Optional[int] = None,
        state: Optional[GameState] = None,
        clock: Callable[[], float] = time.time,
        activity_limit: int = 100,
    ) -> None:
        self.event_bus = EventBus()
        if seed is None:
            seed = int(clock() * 1000) & 0xFFFFFFFF
        self.ctx = SimContext.seeded(seed, event_bus=self.event_bus)
        self.state = state if state is not None else initial_state(self.ctx.catalog)
        self.clock = clock
        self.lock = asyncio.Lock()
        self._activity: Deque[Dict[str, Any]] = deque(maxlen=activity_limit)
        for event_type in ACTIVITY_EVENTS:
            self.event_bus.subscribe(event_type, self._record_activity)
        logger.info("Game session created (seed=%d)", seed)

    def _record_activity(self, event: object) -> None:
        entry = event_to_dict(event)
        entry["at"] = self.clock()
        self._activity.append(entry)

    def now(self) -> float:
        return self.clock()

    def activity(self) -> List[Dict[str, Any]]:
        return list(self._activity)

    async def apply(self, fn: Command, *args: Any, **kwargs: Any) -> Result:
        """Run one command against the current snapshot and keep the new one."""
        async with self.lock:
            new_state, result = fn(self.state, self.ctx, *args, **kwargs)
            self.state = new_state
        if result.is_err():
            logger.debug("%s refused: %s", getattr(fn, "__name__", fn), result.error)
        return result

    async def tick(self, fn: Tick, *args: Any, **kwargs: Any) -> GameState:
        async with self.lock:
            self.state = fn(self.state, self.ctx, *args, **kwargs)
            return self.state

    async def replace_state(self, state: GameState) -> None:
        async with self.lock:
            self.state = state
        logger.info("Game state replaced")
