"""Domain events and the synchronous bus that carries them."""

from growsim.events.domain_events import (
    CuringCompletedEvent,
    PestOutbreakEvent,
    PhaseAdvancedEvent,
    PlantHarvestedEvent,
    ResearchCompletedEvent,
    StrainBredEvent,
    TradeCompletedEvent,
)
from growsim.events.event_bus import EventBus

__all__ = [
    "CuringCompletedEvent",
    "EventBus",
    "PestOutbreakEvent",
    "PhaseAdvancedEvent",
    "PlantHarvestedEvent",
    "ResearchCompletedEvent",
    "StrainBredEvent",
    "TradeCompletedEvent",
]
