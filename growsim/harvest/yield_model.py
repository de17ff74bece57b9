"""Harvest yield formula.

    yield = base x rarity x mutation x quality x soil x water stacks
            x training x enhancers x research x phenotype x variance

floored to an integer. Each factor is kept in a breakdown so the API can
show where a harvest came from.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from growsim.catalog.types import RARITY_YIELD_MULTIPLIERS, Strain
from growsim.config import growth as growth_constants
from growsim.context import SimContext
from growsim.plants.modifiers import plant_phenotype
from growsim.research.bonuses import research_bonuses
from growsim.state import GameState, Plant
from growsim.util.rng import require_rng


@dataclass(frozen=True)
class YieldBreakdown:
    base: float
    rarity: float
    mutation: float
    quality: float
    soil: float
    water: float
    training: float
    enhancers: float
    research: float
    phenotype: float
    variance: float

    @property
    def pre_variance(self) -> float:
        return (
            self.base
            * self.rarity
            * self.mutation
            * self.quality
            * self.soil
            * self.water
            * self.training
            * self.enhancers
            * self.research
            * self.phenotype
        )

    @property
    def total(self) -> int:
        return max(0, int(math.floor(self.pre_variance * self.variance)))


def water_stack_factor(stacks: int) -> float:
    return 1.0 + min(growth_constants.WATER_STACK_YIELD_CAP, stacks * growth_constants.WATER_STACK_YIELD_STEP)


def training_factor(plant: Plant, ctx: SimContext) -> float:
    """Product of technique bonuses, each scaled by its success level."""
    factor = 1.0
    for record in plant.modifiers.training:
        technique = ctx.catalog.training.get(record.technique_id)
        if technique is None:
            continue
        factor *= 1.0 + (technique.yield_bonus - 1.0) * record.success_level
    return factor


def enhancer_factor(plant: Plant, ctx: SimContext) -> float:
    factor = 1.0
    for enhancer_id in plant.modifiers.enhancers:
        enhancer = ctx.catalog.enhancers.get(enhancer_id)
        if enhancer is not None:
            factor *= enhancer.yield_multiplier
    return factor


def compute_yield(
    state: GameState,
    ctx: SimContext,
    plant: Plant,
    strain: Strain,
    variance: Optional[float] = None,
) -> YieldBreakdown:
    """Evaluate the yield formula for ``plant``.

    Args:
        variance: Explicit variance factor; drawn from the context RNG
            within +/- the configured spread when omitted.
    """
    if variance is None:
        spread = ctx.config.growth.yield_variance
        variance = require_rng(ctx, "yield_model.compute_yield").uniform(1.0 - spread, 1.0 + spread)
    phenotype = plant_phenotype(plant, ctx.catalog)
    return YieldBreakdown(
        base=strain.base_yield,
        rarity=RARITY_YIELD_MULTIPLIERS[strain.rarity],
        mutation=strain.mutation.yield_multiplier() if strain.mutation is not None else 1.0,
        quality=plant.modifiers.quality,
        soil=ctx.catalog.soil(plant.modifiers.soil).yield_bonus,
        water=water_stack_factor(plant.modifiers.water_stacks),
        training=training_factor(plant, ctx),
        enhancers=enhancer_factor(plant, ctx),
        research=research_bonuses(state, ctx).yield_multiplier,
        phenotype=1.0 + phenotype.yield_bonus if phenotype is not None else 1.0,
        variance=variance,
    )
