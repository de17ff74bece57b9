"""Simulation configuration dataclasses.

Each group mirrors one constants module so tests and the backend can
override individual values with ``dataclasses.replace``.
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple

from growsim.config import automation as automation_constants
from growsim.config import breeding as breeding_constants
from growsim.config import growth as growth_constants
from growsim.config import harvest as harvest_constants
from growsim.config import market as market_constants
from growsim.config import research as research_constants
from growsim.exceptions import ConfigurationError


@dataclass
class GrowthConfig:
    """Care-action costs, cooldowns and quality bounds."""

    quality_min: float = growth_constants.QUALITY_MIN
    quality_max: float = growth_constants.QUALITY_MAX
    time_multiplier_min: float = growth_constants.TIME_MULTIPLIER_MIN
    time_multiplier_max: float = growth_constants.TIME_MULTIPLIER_MAX
    water_cost: int = growth_constants.WATER_COST
    water_cooldown: float = growth_constants.WATER_COOLDOWN
    water_max_stacks: int = growth_constants.WATER_MAX_STACKS
    perfect_window: float = growth_constants.PERFECT_WINDOW_BASE
    fertilize_cost: int = growth_constants.FERTILIZE_COST
    fertilize_cooldown: float = growth_constants.FERTILIZE_COOLDOWN
    yield_variance: float = growth_constants.YIELD_VARIANCE


@dataclass
class CuringConfig:
    """Curing durations and score adjustments."""

    base_duration: float = harvest_constants.CURING_BASE_DURATION
    min_duration: float = harvest_constants.CURING_MIN_DURATION
    natural_bonus: float = harvest_constants.CURING_NATURAL_BONUS
    score_cap: float = harvest_constants.CURING_SCORE_CAP
    grace_period: float = harvest_constants.CURING_GRACE_PERIOD
    spoil_penalty: float = harvest_constants.CURING_SPOIL_PENALTY
    rush_penalty: float = harvest_constants.CURING_RUSH_PENALTY
    score_floor: float = harvest_constants.CURING_SCORE_FLOOR


@dataclass
class MarketConfig:
    """Offer generation, dealer and dynamic pricing knobs."""

    offer_count: int = market_constants.OFFER_COUNT
    offer_refresh_cooldown: float = market_constants.OFFER_REFRESH_COOLDOWN
    haggle_success_chance: float = market_constants.HAGGLE_SUCCESS_CHANCE
    dealer_base_price: float = market_constants.DEALER_BASE_PRICE
    dealer_incidents: bool = True
    condition_spawn_chance: float = market_constants.CONDITION_SPAWN_CHANCE


@dataclass
class BreedingConfig:
    """Mutation odds and offspring pricing."""

    mutation_base_chance: float = breeding_constants.MUTATION_BASE_CHANCE
    mutation_chance_per_generation: float = breeding_constants.MUTATION_CHANCE_PER_GENERATION
    mutation_chance_cap: float = breeding_constants.MUTATION_CHANCE_CAP
    seed_discount: float = breeding_constants.SEED_DISCOUNT
    mother_plant_cost: int = breeding_constants.MOTHER_PLANT_COST
    clone_cost: int = breeding_constants.CLONE_COST
    max_clones: int = breeding_constants.MAX_CLONES


@dataclass
class ResearchConfig:
    """Research point formulas and bonus caps."""

    harvest_points_divisor: int = research_constants.HARVEST_POINTS_DIVISOR
    trade_points_divisor: int = research_constants.TRADE_POINTS_DIVISOR
    rarity_point_weights: Dict[str, float] = field(
        default_factory=lambda: dict(research_constants.RARITY_POINT_WEIGHTS)
    )
    yield_cap: float = research_constants.RESEARCH_YIELD_CAP
    time_reduction_cap: float = research_constants.RESEARCH_TIME_REDUCTION_CAP


@dataclass
class AutomationConfig:
    """Employee automation knobs."""

    skill_scale: float = automation_constants.SKILL_SCALE
    auto_fertilize_phases: Tuple[int, ...] = automation_constants.AUTO_FERTILIZE_PHASES
    replant_soil: str = automation_constants.AUTO_REPLANT_SOIL


@dataclass
class SchedulerConfig:
    """Tick cadences (seconds) used by the external scheduler."""

    phase_interval: float = 1.0
    curing_interval: float = 1.0
    event_interval: float = 1.0
    market_interval: float = 10.0
    pest_interval: float = 60.0
    drift_interval: float = 5.0
    research_interval: float = 1.0
    automation_interval: float = 2.0
    offer_interval: float = 1.0
    random_event_interval: float = 30.0
    random_event_chance: float = 0.2


@dataclass
class SimulationConfig:
    """Top-level configuration bundle handed to every command via the context."""

    growth: GrowthConfig = field(default_factory=GrowthConfig)
    curing: CuringConfig = field(default_factory=CuringConfig)
    market: MarketConfig = field(default_factory=MarketConfig)
    breeding: BreedingConfig = field(default_factory=BreedingConfig)
    research: ResearchConfig = field(default_factory=ResearchConfig)
    automation: AutomationConfig = field(default_factory=AutomationConfig)
    scheduler: SchedulerConfig = field(default_factory=SchedulerConfig)

    def validate(self) -> None:
        """Raise ``ConfigurationError`` for values no tick can run with."""
        for name, value in vars(self.scheduler).items():
            if name.endswith("_interval") and value <= 0:
                raise ConfigurationError(f"scheduler.{name} must be positive, got {value}")
        for name, value in (
            ("scheduler.random_event_chance", self.scheduler.random_event_chance),
            ("market.haggle_success_chance", self.market.haggle_success_chance),
            ("breeding.mutation_chance_cap", self.breeding.mutation_chance_cap),
        ):
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"{name} must be within [0, 1], got {value}")
        if self.growth.quality_min > self.growth.quality_max:
            raise ConfigurationError("growth.quality_min exceeds growth.quality_max")
        if self.curing.min_duration > self.curing.base_duration:
            raise ConfigurationError("curing.min_duration exceeds curing.base_duration")
