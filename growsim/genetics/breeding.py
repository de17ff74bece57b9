"""Crossing two strains into a new generation.

Numeric traits and terpene profiles are averaged with a little jitter, a
mutation may attach, and the offspring gets a procedural name, a seed
price and its own entry in the strain market.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import replace
from typing import Dict, Mapping, Optional, Tuple

from growsim.catalog.types import Mutation, Rarity, Strain
from growsim.config import BreedingConfig
from growsim.config import breeding as breeding_constants
from growsim.config import market as market_constants
from growsim.context import SimContext
from growsim.events import StrainBredEvent
from growsim.genetics.mutation import roll_mutation
from growsim.genetics.naming import generate_strain_name
from growsim.result import FailureReason, Result, fail, ok
from growsim.state import GameState, MarketData, resolve_strain
from growsim.util.math_utils import clamp
from growsim.util.rng import require_rng

logger = logging.getLogger(__name__)


def _jitter(rng: random.Random, value: float, spread: float) -> float:
    return value * (1.0 + rng.uniform(-spread, spread))


def mix_terpenes(
    rng: random.Random, first: Mapping[str, float], second: Mapping[str, float]
) -> Dict[str, float]:
    """Per-compound average with jitter; faint compounds drop out."""
    mixed: Dict[str, float] = {}
    for compound in sorted(set(first) | set(second)):
        average = (first.get(compound, 0.0) + second.get(compound, 0.0)) / 2.0
        value = clamp(_jitter(rng, average, breeding_constants.TERPENE_JITTER), 0.0, 100.0)
        if value >= breeding_constants.TERPENE_MIN_KEEP:
            mixed[compound] = round(value, 1)
    return mixed


def offspring_rarity(rng: random.Random, p1: Strain, p2: Strain, mutation: Optional[Mutation]) -> Rarity:
    """Rarity without a mutation tops out at epic; a mutation lifts it to its own tier."""
    rank = min(max(p1.rarity.rank, p2.rarity.rank), Rarity.EPIC.rank)
    if rng.random() < breeding_constants.RARITY_UPGRADE_CHANCE:
        rank = min(rank + 1, Rarity.EPIC.rank)
    rarity = Rarity.from_rank(rank)
    if mutation is not None and mutation.rarity.rank > rarity.rank:
        rarity = mutation.rarity
    return rarity


def offspring_seed_price(p1: Strain, p2: Strain, mutation: Optional[Mutation], config: BreedingConfig) -> int:
    price = (p1.seed_price + p2.seed_price) / 2.0 * config.seed_discount
    if mutation is not None:
        price *= breeding_constants.MUTATION_SEED_PRICE_FACTORS.get(mutation.rarity.value, 1.0)
    return max(breeding_constants.SEED_PRICE_MIN, int(math.floor(price)))


def cross_strains(
    rng: random.Random,
    p1: Strain,
    p2: Strain,
    strain_id: str,
    name: str,
    mutation_pool: Tuple[Mutation, ...],
    config: BreedingConfig,
) -> Strain:
    """Pure crossing rule, separated from bookkeeping for testing."""
    generation = max(p1.generation, p2.generation) + 1
    mutation = roll_mutation(rng, generation, mutation_pool, config)
    time_multiplier = clamp(
        _jitter(rng, (p1.time_multiplier + p2.time_multiplier) / 2.0, breeding_constants.TIME_JITTER),
        breeding_constants.TIME_MULTIPLIER_MIN,
        breeding_constants.TIME_MULTIPLIER_MAX,
    )
    return Strain(
        id=strain_id,
        name=name,
        rarity=offspring_rarity(rng, p1, p2, mutation),
        base_yield=round(_jitter(rng, (p1.base_yield + p2.base_yield) / 2.0, breeding_constants.YIELD_JITTER), 1),
        time_multiplier=round(time_multiplier, 3),
        water_tolerance=round(
            clamp(
                (p1.water_tolerance + p2.water_tolerance) / 2.0
                + rng.uniform(-breeding_constants.TOLERANCE_JITTER, breeding_constants.TOLERANCE_JITTER),
                0.0,
                1.0,
            ),
            3,
        ),
        nutrient_sensitivity=round(
            clamp(
                (p1.nutrient_sensitivity + p2.nutrient_sensitivity) / 2.0
                + rng.uniform(-breeding_constants.TOLERANCE_JITTER, breeding_constants.TOLERANCE_JITTER),
                0.0,
                1.0,
            ),
            3,
        ),
        seed_price=offspring_seed_price(p1, p2, mutation, config),
        terpenes=mix_terpenes(rng, p1.terpenes, p2.terpenes),
        generation=generation,
        parents=(p1.id, p2.id),
        mutation=mutation,
    )


def _bred_market_entry(state: GameState, strain: Strain) -> MarketData:
    parent_prices = [
        state.market.strains[parent].base_price
        for parent in strain.parents or ()
        if parent in state.market.strains
    ]
    if parent_prices:
        average = sum(parent_prices) / len(parent_prices)
    else:
        average = market_constants.DEALER_BASE_PRICE
    base = round(average * (1.0 + market_constants.BRED_STRAIN_PRICE_PER_GENERATION * strain.generation), 2)
    return MarketData(
        strain_id=strain.id,
        base_price=base,
        current_price=base,
        demand=market_constants.BRED_STRAIN_DEMAND,
        supply=0,
        volatility=market_constants.BRED_STRAIN_VOLATILITY,
    )


def _allocate_strain_id(state: GameState, generation: int) -> Tuple[GameState, str]:
    while True:
        state, strain_id = state.allocate_id(f"custom-gen{generation}")
        if strain_id not in state.custom_strains:
            return state, strain_id


def breed(
    state: GameState,
    ctx: SimContext,
    parent1: str,
    parent2: str,
) -> Tuple[GameState, Result[Strain, FailureReason]]:
    """Cross two known strains (catalog or bred) into a new custom strain."""
    p1 = resolve_strain(state, ctx.catalog, parent1)
    p2 = resolve_strain(state, ctx.catalog, parent2)
    if p1 is None or p2 is None:
        return state, fail(FailureReason.UNKNOWN_STRAIN)

    rng = require_rng(ctx, "breeding.breed")
    generation = max(p1.generation, p2.generation) + 1
    state, strain_id = _allocate_strain_id(state, generation)
    taken = {strain.name for strain in state.custom_strains.values()}
    taken.update(strain.name for strain in ctx.catalog.strains.values())
    name = generate_strain_name(rng, generation, taken)
    strain = cross_strains(rng, p1, p2, strain_id, name, ctx.catalog.mutations, ctx.config.breeding)

    custom = dict(state.custom_strains)
    custom[strain.id] = strain
    market_strains = dict(state.market.strains)
    market_strains[strain.id] = _bred_market_entry(state, strain)
    state = replace(
        state,
        custom_strains=custom,
        discovered_strains=state.discovered_strains + (strain.id,),
        market=replace(state.market, strains=market_strains),
        stats=replace(state.stats, strains_bred=state.stats.strains_bred + 1),
    )
    mutation_id = strain.mutation.id if strain.mutation is not None else None
    if mutation_id is not None:
        logger.info("Bred %s (gen %d) with mutation %s", strain.id, generation, mutation_id)
    else:
        logger.debug("Bred %s (gen %d) from %s x %s", strain.id, generation, p1.id, p2.id)
    ctx.emit(StrainBredEvent(strain_id=strain.id, generation=generation, mutation_id=mutation_id))
    return state, ok(strain)
