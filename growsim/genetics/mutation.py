"""Mutation rolls for bred strains."""

from __future__ import annotations

import random
from dataclasses import replace
from typing import Optional, Sequence

from growsim.catalog.types import Mutation, MutationType, Rarity
from growsim.config import BreedingConfig
from growsim.config import breeding as breeding_constants
from growsim.exceptions import SimulationError


def mutation_chance(generation: int, config: BreedingConfig) -> float:
    """Probability that an offspring of ``generation`` mutates.

    Non-decreasing in generation and capped.
    """
    chance = config.mutation_base_chance + max(0, generation) * config.mutation_chance_per_generation
    return min(config.mutation_chance_cap, chance)


def legendary_odds(generation: int) -> float:
    odds = breeding_constants.LEGENDARY_BASE_ODDS + max(0, generation) * breeding_constants.LEGENDARY_ODDS_PER_GENERATION
    return min(breeding_constants.LEGENDARY_ODDS_CAP, odds)


def draw_mutation_tier(rng: random.Random, generation: int) -> Rarity:
    roll = rng.random()
    legendary = legendary_odds(generation)
    if roll < legendary:
        return Rarity.LEGENDARY
    if roll < legendary + breeding_constants.EPIC_ODDS:
        return Rarity.EPIC
    return Rarity.RARE


def cap_mutation(mutation: Mutation) -> Mutation:
    """Clamp a mutation's bonus to the ceiling for its type."""
    if mutation.type is MutationType.YIELD:
        bonus = min(mutation.bonus, breeding_constants.YIELD_BONUS_CAP)
    elif mutation.type is MutationType.QUALITY:
        bonus = min(mutation.bonus, breeding_constants.QUALITY_BONUS_CAP)
    elif mutation.type is MutationType.SPEED:
        bonus = max(mutation.bonus, breeding_constants.SPEED_BONUS_FLOOR)
    elif mutation.type is MutationType.SUPER:
        bonus = min(mutation.bonus, breeding_constants.SUPER_BONUS_CAP)
    else:
        raise SimulationError(f"Unhandled mutation type: {mutation.type}")
    if bonus == mutation.bonus:
        return mutation
    return replace(mutation, bonus=bonus)


def roll_mutation(
    rng: random.Random,
    generation: int,
    pool: Sequence[Mutation],
    config: BreedingConfig,
) -> Optional[Mutation]:
    """Roll for a mutation; on a hit draw a tier, then a mutation of that tier.

    Falls back to the whole pool when the drawn tier has no entries.
    """
    if not pool or rng.random() >= mutation_chance(generation, config):
        return None
    tier = draw_mutation_tier(rng, generation)
    candidates = [m for m in pool if m.rarity is tier] or list(pool)
    return cap_mutation(candidates[rng.randrange(len(candidates))])
