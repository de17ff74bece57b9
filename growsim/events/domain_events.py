"""Domain event definitions for grow-simulation telemetry.

Events are data-only facts emitted after a state transition completed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PhaseAdvancedEvent:
    """A plant moved to its next growth phase.

    Attributes:
        slot: Slot index of the plant
        plant_id: Plant identity
        phase: The phase index entered
    """

    slot: int
    plant_id: str
    phase: int


@dataclass(frozen=True)
class PlantHarvestedEvent:
    """A plant was harvested into a curing batch.

    Attributes:
        slot: Slot that was emptied
        plant_id: Harvested plant
        strain_id: Strain of the plant
        quantity: Yield placed into curing
        quality_score: Quality carried into curing
        research_points: Points awarded for the harvest
    """

    slot: int
    plant_id: str
    strain_id: str
    quantity: int
    quality_score: float
    research_points: int


@dataclass(frozen=True)
class CuringCompletedEvent:
    """A curing batch became an inventory batch.

    Attributes:
        batch_id: Id shared by the curing and inventory batch
        quantity: Buds moved into inventory
        tier: Quality tier letter
        rushed: True if the batch was rushed manually
        spoiled: True if it was collected past the grace window
    """

    batch_id: str
    quantity: int
    tier: str
    rushed: bool
    spoiled: bool


@dataclass(frozen=True)
class TradeCompletedEvent:
    """Buds were sold.

    Attributes:
        channel: "dealer" or "offer"
        counterparty: Dealer id or offer id
        quantity: Buds sold
        revenue: Nugs earned
    """

    channel: str
    counterparty: str
    quantity: int
    revenue: int


@dataclass(frozen=True)
class StrainBredEvent:
    strain_id: str
    generation: int
    mutation_id: Optional[str]


@dataclass(frozen=True)
class ResearchCompletedEvent:
    node_id: str


@dataclass(frozen=True)
class PestOutbreakEvent:
    infestation_id: str
    pest_id: str
    slot: int
    severity: float
