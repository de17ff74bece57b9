"""Synchronous event bus for domain event dispatch.

Commands and ticks emit frozen domain events after they have built the
new snapshot. Handlers only observe: they never feed back into the state,
so a run with or without subscribers produces identical snapshots.
"""

from __future__ import annotations

from collections import defaultdict
from typing import TypeVar
from collections.abc import Callable

T = TypeVar("T")


class EventBus:
    """Synchronous event bus for domain events.

    Example:
        bus = EventBus()
        bus.subscribe(PlantHarvestedEvent, handle_harvest)
        bus.emit(PlantHarvestedEvent(slot=0, plant_id="plant-1", ...))
    """

    def __init__(self) -> None:
        self._handlers: dict[type, list[Callable]] = defaultdict(list)

    def emit(self, event: object) -> None:
        """Dispatch ``event`` to every handler subscribed to its exact type."""
        handlers = self._handlers.get(type(event))
        if handlers:
            for handler in list(handlers):
                handler(event)

    def subscribe(self, event_type: type[T], handler: Callable[[T], None]) -> None:
        self._handlers[event_type].append(handler)
