"""Catalog record types and tagged variants.

Everything here is immutable reference data. String-tagged fields from the
game data (rarity, dealer type, mutation type, effect type, specialization)
are closed ``Enum`` variants; dispatch sites cover every member and raise
``SimulationError`` on anything unexpected.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Tuple

from growsim.exceptions import SimulationError


class Rarity(Enum):
    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"

    @property
    def rank(self) -> int:
        return _RARITY_ORDER.index(self)

    @classmethod
    def from_rank(cls, rank: int) -> "Rarity":
        return _RARITY_ORDER[max(0, min(len(_RARITY_ORDER) - 1, rank))]


_RARITY_ORDER = (Rarity.COMMON, Rarity.RARE, Rarity.EPIC, Rarity.LEGENDARY)

RARITY_YIELD_MULTIPLIERS = {
    Rarity.COMMON: 1.0,
    Rarity.RARE: 1.3,
    Rarity.EPIC: 1.6,
    Rarity.LEGENDARY: 2.5,
}


class QualityTier(Enum):
    """Sale tier of a cured batch, C lowest, S highest."""

    C = "C"
    B = "B"
    A = "A"
    S = "S"

    @property
    def rank(self) -> int:
        return _TIER_ORDER.index(self)

    def meets(self, requirement: "QualityTier") -> bool:
        return self.rank >= requirement.rank


_TIER_ORDER = (QualityTier.C, QualityTier.B, QualityTier.A, QualityTier.S)


class SoilType(Enum):
    BASIC = "basic"
    LIGHT_MIX = "light-mix"
    ALL_MIX = "all-mix"


class MutationType(Enum):
    YIELD = "yield"
    QUALITY = "quality"
    SPEED = "speed"
    SUPER = "super"  # Both yield and speed


class Specialization(Enum):
    """Employee capability; ALL covers every automated action."""

    WATERING = "watering"
    FERTILIZING = "fertilizing"
    HARVESTING = "harvesting"
    ALL = "all"

    def covers(self, capability: "Specialization") -> bool:
        return self is Specialization.ALL or self is capability


class DealerType(Enum):
    STREET = "street"
    MIDDLEMAN = "middleman"
    VIP = "vip"
    WHOLESALE = "wholesale"
    TOURIST = "tourist"
    DISPENSARY = "dispensary"


class EffectType(Enum):
    YIELD_MULTIPLIER = "yield_multiplier"
    TIME_REDUCTION = "time_reduction"
    QUALITY_BOOST = "quality_boost"
    TERPENE_BOOST = "terpene_boost"
    COST_REDUCTION = "cost_reduction"
    UNLOCK_FEATURE = "unlock_feature"


class UpgradeEffect(Enum):
    WATER_BONUS = "water_bonus"
    FERTILIZER_SAFETY = "fertilizer_safety"
    TIME_REDUCTION = "time_reduction"
    SLOT = "slot"
    PEST_PROTECTION = "pest_protection"


class ResearchCategory(Enum):
    LIGHTING = "lighting"
    NUTRIENTS = "nutrients"
    ENVIRONMENT = "environment"
    GENETICS = "genetics"
    AUTOMATION = "automation"


class Trend(Enum):
    RISING = "rising"
    FALLING = "falling"
    STABLE = "stable"


class LightCycle(Enum):
    VEG = "veg"
    FLOWER = "flower"


class EnvParameter(Enum):
    PH = "ph"
    EC = "ec"
    HUMIDITY = "humidity"
    TEMPERATURE = "temperature"
    CO2 = "co2"


class QuestType(Enum):
    HARVEST = "harvest"
    SELL = "sell"
    WATER = "water"


class Currency(Enum):
    NUGS = "nugs"
    BUDS = "buds"


@dataclass(frozen=True)
class Phase:
    index: int
    name: str
    duration: float
    water_recommended: bool = False
    fertilizer_recommended: bool = False


@dataclass(frozen=True)
class SoilTier:
    soil: SoilType
    cost: int
    yield_bonus: float
    time_multiplier: float


@dataclass(frozen=True)
class Mutation:
    """A rare multiplicative trait attached to a bred strain.

    ``bonus`` is a multiplier: above 1.0 for yield/quality/super, below 1.0
    for speed (it scales growth time directly).
    """

    id: str
    name: str
    type: MutationType
    bonus: float
    rarity: Rarity

    def yield_multiplier(self) -> float:
        if self.type is MutationType.YIELD or self.type is MutationType.SUPER:
            return self.bonus
        if self.type is MutationType.QUALITY or self.type is MutationType.SPEED:
            return 1.0
        raise SimulationError(f"Unhandled mutation type: {self.type}")

    def quality_multiplier(self) -> float:
        if self.type is MutationType.QUALITY:
            return self.bonus
        if self.type in (MutationType.YIELD, MutationType.SPEED, MutationType.SUPER):
            return 1.0
        raise SimulationError(f"Unhandled mutation type: {self.type}")

    def time_multiplier(self) -> float:
        if self.type is MutationType.SPEED:
            return self.bonus
        if self.type is MutationType.SUPER:
            return 1.0 / self.bonus
        if self.type in (MutationType.YIELD, MutationType.QUALITY):
            return 1.0
        raise SimulationError(f"Unhandled mutation type: {self.type}")


@dataclass(frozen=True)
class Strain:
    """Genetic template for planting.

    Catalog strains are generation 0 with no parents; bred strains carry
    their generation, parent pair and an optional mutation.
    """

    id: str
    name: str
    rarity: Rarity
    base_yield: float
    time_multiplier: float
    water_tolerance: float
    nutrient_sensitivity: float
    seed_price: int
    terpenes: Mapping[str, float] = field(default_factory=dict)
    generation: int = 0
    parents: Optional[Tuple[str, str]] = None
    mutation: Optional[Mutation] = None


@dataclass(frozen=True)
class Dealer:
    id: str
    name: str
    type: DealerType
    quality_requirement: QualityTier
    price_multiplier: float
    min_quantity: int
    max_quantity: int
    available_from: int  # Hour 0-23
    available_until: int  # Inclusive; may wrap past midnight
    risk_level: int  # 0-100
    unlock_reputation: int
    preferred_strains: Tuple[str, ...] = ()
    preferred_terpenes: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Pest:
    id: str
    name: str
    base_chance: float
    damage_per_tick: float
    spread_rate: float


@dataclass(frozen=True)
class Treatment:
    id: str
    name: str
    price: int
    effectiveness: float
    targets: Tuple[str, ...]  # Pest ids, or ("all",)

    def treats(self, pest_id: str) -> bool:
        return "all" in self.targets or pest_id in self.targets


@dataclass(frozen=True)
class Upgrade:
    id: str
    name: str
    base_price: int
    max_level: int
    effect_per_level: float
    effect: UpgradeEffect


@dataclass(frozen=True)
class EnvUpgrade:
    id: str
    name: str
    price: int
    parameter: EnvParameter
    stabilization: float  # Fraction of drift removed


@dataclass(frozen=True)
class ResearchEffect:
    type: EffectType
    value: float
    target: Optional[str] = None


@dataclass(frozen=True)
class ResearchNode:
    id: str
    name: str
    category: ResearchCategory
    cost: int
    time_required: int  # Progress ticks at amount 1.0
    prerequisites: Tuple[str, ...]
    effects: Tuple[ResearchEffect, ...]


@dataclass(frozen=True)
class Employee:
    id: str
    name: str
    specialization: Specialization
    price: int
    efficiency: float


@dataclass(frozen=True)
class TrainingTechnique:
    id: str
    name: str
    cost: int
    yield_bonus: float
    quality_impact: float
    stress_risk: float
    available_phases: Tuple[int, ...]
    cooldown: Optional[float] = None
    one_time_only: bool = False


@dataclass(frozen=True)
class Enhancer:
    id: str
    name: str
    price: int
    yield_multiplier: float
    quality_penalty: float
    banned: bool = False


@dataclass(frozen=True)
class Terpene:
    id: str
    name: str
    price_modifier: float


@dataclass(frozen=True)
class MarketCondition:
    id: str
    name: str
    duration: int  # Market ticks
    price_multiplier: float
    demand_change: int
    affected_strains: Tuple[str, ...] = ()  # Empty means every strain

    def affects(self, strain_id: str) -> bool:
        return not self.affected_strains or strain_id in self.affected_strains


@dataclass(frozen=True)
class Competitor:
    id: str
    name: str
    reputation: int
    aggressiveness: float
    preferred_strains: Tuple[str, ...]


@dataclass(frozen=True)
class MarketSeed:
    """Starting market figures for one strain."""

    strain_id: str
    base_price: float
    demand: int
    supply: int
    volatility: float


@dataclass(frozen=True)
class GlobalEventPreset:
    id: str
    name: str
    duration: float = 60.0
    price_multiplier: float = 1.0
    quantity_multiplier: float = 1.0
    growth_multiplier: float = 1.0
    curing_multiplier: float = 1.0
    perfect_window: Optional[float] = None


@dataclass(frozen=True)
class Phenotype:
    id: str
    name: str
    rarity: Rarity
    yield_bonus: float = 0.0
    quality_bonus: float = 0.0
    speed_bonus: float = 0.0
    resistance_bonus: float = 0.0


@dataclass(frozen=True)
class QuestTemplate:
    id: str
    type: QuestType
    goal: int
    reward: int
    reward_currency: Currency
