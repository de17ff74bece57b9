"""Immutable game-state snapshot.

One ``GameState`` value is threaded through every command and tick. All
records are frozen dataclasses; updates build new values with
``dataclasses.replace`` so a refused command can hand back the exact input
object.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Mapping, Optional, Tuple

from growsim.catalog import Catalog
from growsim.catalog.types import (
    LightCycle,
    QualityTier,
    SoilType,
    Strain,
    Trend,
)
from growsim.config import growth as growth_constants

STARTING_NUGS = 1000
STARTING_BUDS = 500
STARTING_SLOTS = 2


@dataclass(frozen=True)
class Environment:
    """Micro-environment around one plant."""

    ph: float = 6.0
    ec: float = 1.2
    humidity: float = 60.0
    temperature: float = 24.0


@dataclass(frozen=True)
class GlobalEnvironment:
    ph: float = 6.2
    ec: float = 1.5
    humidity: float = 60.0
    temperature: float = 24.0
    light_cycle: LightCycle = LightCycle.VEG
    co2: float = 400.0


@dataclass(frozen=True)
class TrainingRecord:
    technique_id: str
    success_level: float
    applied_at: float


@dataclass(frozen=True)
class PlantModifiers:
    """Per-plant care bookkeeping.

    Attributes:
        water_stacks: Successful waterings so far, capped
        fertilizer_applied: One-shot fertilizer flag
        soil: Soil tier chosen at planting
        last_water_at: Clock time of the last watering (None = never)
        last_fertilize_at: Clock time of the last fertilizing (None = never)
        quality: Quality multiplier, kept inside the configured bounds
        training: Applied training techniques with their success levels
        enhancers: Applied yield-enhancer ids
        infestations: Ids of active PestInfestation records on this plant
        terpenes: Derived terpene profile (strain profile shaped by environment)
        phenotype_id: Phenotype carried over from a mother plant
    """

    water_stacks: int = 0
    fertilizer_applied: bool = False
    soil: SoilType = SoilType.BASIC
    last_water_at: Optional[float] = None
    last_fertilize_at: Optional[float] = None
    quality: float = growth_constants.QUALITY_START
    training: Tuple[TrainingRecord, ...] = ()
    enhancers: Tuple[str, ...] = ()
    infestations: Tuple[str, ...] = ()
    terpenes: Mapping[str, float] = field(default_factory=dict)
    phenotype_id: Optional[str] = None


@dataclass(frozen=True)
class Plant:
    id: str
    strain_id: str
    planted_at: float
    phase: int = 0
    elapsed: float = 0.0
    modifiers: PlantModifiers = field(default_factory=PlantModifiers)
    environment: Environment = field(default_factory=Environment)


@dataclass(frozen=True)
class CuringBatch:
    """Harvested product waiting to cure into an inventory batch."""

    id: str
    quantity: int
    started_at: float
    duration: float
    quality_score: float
    strain_id: Optional[str] = None

    @property
    def due_at(self) -> float:
        return self.started_at + self.duration


@dataclass(frozen=True)
class InventoryBatch:
    id: str
    quantity: int
    tier: QualityTier
    price_multiplier: float
    quality_score: float = 1.0
    strain_id: Optional[str] = None


@dataclass(frozen=True)
class PestInfestation:
    id: str
    pest_id: str
    slot: int
    plant_id: str
    severity: float
    detected_at: float
    treated: bool = False


@dataclass(frozen=True)
class MotherPlant:
    id: str
    strain_id: str
    acquired_at: float
    max_clones: int
    phenotype_id: Optional[str] = None
    clones_taken: int = 0

    @property
    def clones_remaining(self) -> int:
        return max(0, self.max_clones - self.clones_taken)


@dataclass(frozen=True)
class DealerRelationship:
    dealer_id: str
    level: int = 0
    total_deals: int = 0
    last_deal_at: Optional[float] = None
    loyalty_bonus: float = 0.0


@dataclass(frozen=True)
class TradeContract:
    id: str
    dealer_id: str
    quantity: int
    price_per_bud: float
    weeks: int
    started_at: float
    next_delivery_at: float
    total_deliveries: int
    completed_deliveries: int = 0
    strain_id: Optional[str] = None


@dataclass(frozen=True)
class TradeOffer:
    """Anonymous buyer offer."""

    id: str
    quantity: int
    price_per_bud: float


@dataclass(frozen=True)
class TradeState:
    reputation: int = 0
    total_revenue: int = 0
    relationships: Mapping[str, DealerRelationship] = field(default_factory=dict)
    contracts: Tuple[TradeContract, ...] = ()
    offers: Tuple[TradeOffer, ...] = ()
    next_offer_refresh_at: float = 0.0


@dataclass(frozen=True)
class PricePoint:
    timestamp: float
    price: float


@dataclass(frozen=True)
class MarketData:
    strain_id: str
    base_price: float
    current_price: float
    demand: int
    supply: int
    volatility: float
    trend: Trend = Trend.STABLE
    price_history: Tuple[PricePoint, ...] = ()


@dataclass(frozen=True)
class ActiveCondition:
    condition_id: str
    remaining: int


@dataclass(frozen=True)
class MarketState:
    strains: Mapping[str, MarketData] = field(default_factory=dict)
    conditions: Tuple[ActiveCondition, ...] = ()


@dataclass(frozen=True)
class ActiveResearch:
    node_id: str
    progress: float
    started_at: float


@dataclass(frozen=True)
class ResearchState:
    points: int = 0
    completed: Tuple[str, ...] = ()
    active: Optional[ActiveResearch] = None


@dataclass(frozen=True)
class AutomationState:
    enabled: bool = False
    employee_id: Optional[str] = None
    replant_strain_id: Optional[str] = None


@dataclass(frozen=True)
class ActiveEvent:
    event_id: str
    started_at: float
    ends_at: float


@dataclass(frozen=True)
class Stats:
    total_harvests: int = 0
    total_buds_harvested: int = 0
    total_buds_cured: int = 0
    total_buds_sold: int = 0
    total_nugs_earned: int = 0
    total_trades: int = 0
    total_waterings: int = 0
    perfect_waterings: int = 0
    water_chain: int = 0
    best_water_chain: int = 0
    strains_bred: int = 0


@dataclass(frozen=True)
class QuestProgress:
    quest_id: str
    progress: int = 0
    claimed: bool = False


@dataclass(frozen=True)
class Settings:
    random_events_enabled: bool = True
    pest_frequency: float = growth_constants.PEST_FREQUENCY_DEFAULT


@dataclass(frozen=True)
class GameState:
    """Complete simulation snapshot."""

    nugs: int = STARTING_NUGS
    buds: int = STARTING_BUDS
    slots: Tuple[Optional[Plant], ...] = (None,) * STARTING_SLOTS
    automation: Tuple[AutomationState, ...] = (AutomationState(),) * STARTING_SLOTS
    custom_strains: Mapping[str, Strain] = field(default_factory=dict)
    discovered_strains: Tuple[str, ...] = ()
    curing: Tuple[CuringBatch, ...] = ()
    inventory: Tuple[InventoryBatch, ...] = ()
    infestations: Tuple[PestInfestation, ...] = ()
    mother_plants: Tuple[MotherPlant, ...] = ()
    trade: TradeState = field(default_factory=TradeState)
    market: MarketState = field(default_factory=MarketState)
    research: ResearchState = field(default_factory=ResearchState)
    employees: Tuple[str, ...] = ()
    upgrades: Mapping[str, int] = field(default_factory=dict)
    env_upgrades: Tuple[str, ...] = ()
    environment: GlobalEnvironment = field(default_factory=GlobalEnvironment)
    event: Optional[ActiveEvent] = None
    stats: Stats = field(default_factory=Stats)
    quests: Tuple[QuestProgress, ...] = ()
    settings: Settings = field(default_factory=Settings)
    next_id: int = 1

    # ------------------------------------------------------------------
    # Read helpers
    # ------------------------------------------------------------------

    def plant_at(self, slot: int) -> Optional[Plant]:
        if 0 <= slot < len(self.slots):
            return self.slots[slot]
        return None

    def has_slot(self, slot: int) -> bool:
        return 0 <= slot < len(self.slots)

    def upgrade_level(self, upgrade_id: str) -> int:
        return self.upgrades.get(upgrade_id, 0)

    def tracked_buds(self) -> int:
        return sum(batch.quantity for batch in self.inventory)

    def untracked_buds(self) -> int:
        """Buds held outside any inventory batch (starting stock, quest rewards)."""
        return max(0, self.buds - self.tracked_buds())

    # ------------------------------------------------------------------
    # Write helpers (return new snapshots)
    # ------------------------------------------------------------------

    def with_plant(self, slot: int, plant: Optional[Plant]) -> "GameState":
        slots = list(self.slots)
        slots[slot] = plant
        return replace(self, slots=tuple(slots))

    def with_automation(self, slot: int, automation: AutomationState) -> "GameState":
        entries = list(self.automation)
        entries[slot] = automation
        return replace(self, automation=tuple(entries))

    def allocate_id(self, prefix: str) -> Tuple["GameState", str]:
        """Reserve a deterministic unique id such as ``plant-7``."""
        return replace(self, next_id=self.next_id + 1), f"{prefix}-{self.next_id}"


def resolve_strain(state: GameState, catalog: Catalog, strain_id: Optional[str]) -> Optional[Strain]:
    """Look a strain up among catalog strains and bred strains."""
    if strain_id is None:
        return None
    strain = catalog.strains.get(strain_id)
    if strain is not None:
        return strain
    return state.custom_strains.get(strain_id)


def initial_market(catalog: Catalog) -> MarketState:
    strains: Dict[str, MarketData] = {}
    for seed in catalog.market_seeds.values():
        strains[seed.strain_id] = MarketData(
            strain_id=seed.strain_id,
            base_price=seed.base_price,
            current_price=seed.base_price,
            demand=seed.demand,
            supply=seed.supply,
            volatility=seed.volatility,
        )
    return MarketState(strains=strains)


def initial_state(catalog: Optional[Catalog] = None) -> GameState:
    """The canonical fresh-game snapshot, also the default-fill source on load."""
    if catalog is None:
        from growsim.catalog import default_catalog

        catalog = default_catalog()
    return GameState(
        discovered_strains=tuple(catalog.starter_strains),
        market=initial_market(catalog),
        quests=tuple(QuestProgress(quest.id) for quest in catalog.quests),
    )
