"""Care actions: water, fertilize, training and yield enhancers.

Each action is gated (plant present, cooldown, one-shot flags, funds) and
computes a signed quality delta that is clamped into the configured
quality band before it is stored.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

from growsim.catalog.types import QuestType
from growsim.config import growth as growth_constants
from growsim.context import SimContext
from growsim.exceptions import SimulationError
from growsim.plants.modifiers import clamp_quality, fertilizer_safety, perfect_window, water_bonus
from growsim.quests import record_quest_progress
from growsim.research.bonuses import research_bonuses
from growsim.result import FailureReason, Result, fail, ok
from growsim.state import GameState, Plant, TrainingRecord, resolve_strain
from growsim.util.math_utils import clamp
from growsim.util.rng import require_rng

logger = logging.getLogger(__name__)


class CareAction(Enum):
    WATER = "water"
    FERTILIZE = "fertilize"


@dataclass(frozen=True)
class CareOutcome:
    """What a successful care action did to the plant."""

    quality_delta: float
    quality: float
    perfect: bool = False


def _quality_multiplier(state: GameState, ctx: SimContext, plant: Plant) -> float:
    strain = resolve_strain(state, ctx.catalog, plant.strain_id)
    if strain is None or strain.mutation is None:
        return 1.0
    return strain.mutation.quality_multiplier()


def _apply_delta(state: GameState, ctx: SimContext, plant: Plant, delta: float) -> Tuple[float, float]:
    """Scale positive deltas by the strain's quality mutation and clamp the result."""
    if delta > 0:
        delta *= _quality_multiplier(state, ctx, plant)
    before = plant.modifiers.quality
    after = clamp_quality(before + delta, ctx.config.growth)
    return after - before, after


def remaining_cooldown(state: GameState, ctx: SimContext, slot: int, action: CareAction, now: float) -> float:
    """Seconds until ``action`` is allowed again on ``slot`` (0.0 when ready)."""
    plant = state.plant_at(slot)
    if plant is None:
        return 0.0
    growth = ctx.config.growth
    if action is CareAction.WATER:
        last, cooldown = plant.modifiers.last_water_at, growth.water_cooldown
    elif action is CareAction.FERTILIZE:
        last, cooldown = plant.modifiers.last_fertilize_at, growth.fertilize_cooldown
    else:
        raise SimulationError(f"Unhandled care action: {action}")
    if last is None:
        return 0.0
    return max(0.0, last + cooldown - now)


def is_perfect_timing(state: GameState, ctx: SimContext, plant: Plant, now: float) -> bool:
    """True when watering lands inside the window right after the cooldown expires."""
    last = plant.modifiers.last_water_at
    if last is None:
        return False
    ready_for = now - (last + ctx.config.growth.water_cooldown)
    return 0.0 <= ready_for <= perfect_window(state, ctx)


def water_chain_bonus(chain: int) -> float:
    steps = math.floor(chain / growth_constants.WATER_CHAIN_STEP)
    return min(growth_constants.WATER_CHAIN_BONUS_MAX, steps * growth_constants.WATER_CHAIN_BONUS_PER_STEP)


def water(
    state: GameState,
    ctx: SimContext,
    slot: int,
    skill_bonus: float = 0.0,
    now: float = 0.0,
) -> Tuple[GameState, Result[CareOutcome, FailureReason]]:
    """Water the plant in ``slot``.

    Gates are checked in order: plant present, cooldown, funds, stack cap.
    A refused call returns the input state untouched.

    Args:
        skill_bonus: Scalar bonus earned by the player (or an employee)
        now: Current clock time in seconds
    """
    plant = state.plant_at(slot)
    if plant is None:
        return state, fail(FailureReason.EMPTY_SLOT)
    growth = ctx.config.growth
    if remaining_cooldown(state, ctx, slot, CareAction.WATER, now) > 0:
        return state, fail(FailureReason.COOLDOWN)
    cost = research_bonuses(state, ctx).discounted("water", growth.water_cost)
    if state.nugs < cost:
        return state, fail(FailureReason.INSUFFICIENT_FUNDS)
    if plant.modifiers.water_stacks >= growth.water_max_stacks:
        return state, fail(FailureReason.MAX_WATER)

    perfect = is_perfect_timing(state, ctx, plant, now)
    stats = state.stats
    chain = stats.water_chain + 1 if perfect else 0
    if perfect:
        skill_bonus += water_chain_bonus(chain)

    phase = ctx.catalog.phase(plant.phase)
    if phase.water_recommended:
        delta = growth_constants.WATER_RECOMMENDED_DELTA * (1.0 + water_bonus(state, ctx.catalog))
        if perfect:
            delta += growth_constants.WATER_PERFECT_BONUS
        delta += skill_bonus
    else:
        delta = growth_constants.WATER_WRONG_PHASE_DELTA
        if perfect:
            delta += growth_constants.WATER_PERFECT_BONUS_WRONG_PHASE
        delta += skill_bonus * growth_constants.WATER_SKILL_WRONG_PHASE_SCALE

    applied, quality = _apply_delta(state, ctx, plant, delta)
    modifiers = replace(
        plant.modifiers,
        water_stacks=plant.modifiers.water_stacks + 1,
        last_water_at=now,
        quality=quality,
    )
    stats = replace(
        stats,
        total_waterings=stats.total_waterings + 1,
        perfect_waterings=stats.perfect_waterings + (1 if perfect else 0),
        water_chain=chain,
        best_water_chain=max(stats.best_water_chain, chain),
    )
    state = replace(state, nugs=state.nugs - cost, stats=stats)
    state = state.with_plant(slot, replace(plant, modifiers=modifiers))
    state = record_quest_progress(state, ctx, QuestType.WATER, 1)
    logger.debug("Watered slot %d: delta=%.3f perfect=%s", slot, applied, perfect)
    return state, ok(CareOutcome(quality_delta=applied, quality=quality, perfect=perfect))


def fertilize(
    state: GameState,
    ctx: SimContext,
    slot: int,
    now: float = 0.0,
) -> Tuple[GameState, Result[CareOutcome, FailureReason]]:
    """Feed the plant in ``slot`` once.

    In a recommended phase the plant gains quality unless the nutrient-burn
    roll hits; its probability is the strain's nutrient sensitivity reduced
    by fertilizer-safety upgrades. Outside those phases feeding costs quality.
    """
    plant = state.plant_at(slot)
    if plant is None:
        return state, fail(FailureReason.EMPTY_SLOT)
    growth = ctx.config.growth
    if remaining_cooldown(state, ctx, slot, CareAction.FERTILIZE, now) > 0:
        return state, fail(FailureReason.COOLDOWN)
    if plant.modifiers.fertilizer_applied:
        return state, fail(FailureReason.ALREADY_APPLIED)
    cost = research_bonuses(state, ctx).discounted("nutrients", growth.fertilize_cost)
    if state.nugs < cost:
        return state, fail(FailureReason.INSUFFICIENT_FUNDS)

    phase = ctx.catalog.phase(plant.phase)
    if phase.fertilizer_recommended:
        strain = resolve_strain(state, ctx.catalog, plant.strain_id)
        sensitivity = strain.nutrient_sensitivity if strain is not None else 0.0
        burn_chance = clamp(sensitivity * (1.0 - fertilizer_safety(state, ctx.catalog)), 0.0, 1.0)
        rng = require_rng(ctx, "care.fertilize")
        if rng.random() < burn_chance:
            delta = growth_constants.FERTILIZE_BURN_DELTA
        else:
            delta = growth_constants.FERTILIZE_RECOMMENDED_DELTA
    else:
        delta = growth_constants.FERTILIZE_WRONG_PHASE_DELTA

    applied, quality = _apply_delta(state, ctx, plant, delta)
    modifiers = replace(
        plant.modifiers,
        fertilizer_applied=True,
        last_fertilize_at=now,
        quality=quality,
    )
    state = replace(state, nugs=state.nugs - cost)
    state = state.with_plant(slot, replace(plant, modifiers=modifiers))
    logger.debug("Fertilized slot %d: delta=%.3f", slot, applied)
    return state, ok(CareOutcome(quality_delta=applied, quality=quality))


def _last_training(plant: Plant, technique_id: str) -> Optional[TrainingRecord]:
    matches = [record for record in plant.modifiers.training if record.technique_id == technique_id]
    return matches[-1] if matches else None


def apply_training(
    state: GameState,
    ctx: SimContext,
    slot: int,
    technique_id: str,
    success_level: float,
    now: float = 0.0,
) -> Tuple[GameState, Result[CareOutcome, FailureReason]]:
    """Apply a plant-training technique with a success level in [0, 1].

    The yield effect is recorded and evaluated at harvest. Quality moves
    immediately: a stress roll (more likely at low success) costs the
    technique's quality impact, otherwise the plant gains it scaled by
    the success level.
    """
    plant = state.plant_at(slot)
    if plant is None:
        return state, fail(FailureReason.EMPTY_SLOT)
    technique = ctx.catalog.training.get(technique_id)
    if technique is None:
        return state, fail(FailureReason.UNKNOWN_TECHNIQUE)
    if plant.phase not in technique.available_phases:
        return state, fail(FailureReason.WRONG_PHASE)
    previous = _last_training(plant, technique_id)
    if previous is not None and technique.one_time_only:
        return state, fail(FailureReason.ALREADY_APPLIED)
    if previous is not None and technique.cooldown is not None and now < previous.applied_at + technique.cooldown:
        return state, fail(FailureReason.COOLDOWN)
    if state.nugs < technique.cost:
        return state, fail(FailureReason.INSUFFICIENT_FUNDS)

    success = clamp(success_level, 0.0, 1.0)
    rng = require_rng(ctx, "care.apply_training")
    if rng.random() < technique.stress_risk * (1.0 - success):
        delta = -technique.quality_impact
    else:
        delta = technique.quality_impact * success

    applied, quality = _apply_delta(state, ctx, plant, delta)
    record = TrainingRecord(technique_id=technique_id, success_level=success, applied_at=now)
    modifiers = replace(plant.modifiers, quality=quality, training=plant.modifiers.training + (record,))
    state = replace(state, nugs=state.nugs - technique.cost)
    state = state.with_plant(slot, replace(plant, modifiers=modifiers))
    logger.debug("Training %s on slot %d: success=%.2f delta=%.3f", technique_id, slot, success, applied)
    return state, ok(CareOutcome(quality_delta=applied, quality=quality))


def apply_enhancer(
    state: GameState,
    ctx: SimContext,
    slot: int,
    enhancer_id: str,
) -> Tuple[GameState, Result[CareOutcome, FailureReason]]:
    """Apply a yield enhancer: more yield at harvest, a quality penalty now."""
    plant = state.plant_at(slot)
    if plant is None:
        return state, fail(FailureReason.EMPTY_SLOT)
    enhancer = ctx.catalog.enhancers.get(enhancer_id)
    if enhancer is None:
        return state, fail(FailureReason.UNKNOWN_ENHANCER)
    if enhancer_id in plant.modifiers.enhancers:
        return state, fail(FailureReason.ALREADY_APPLIED)
    if state.nugs < enhancer.price:
        return state, fail(FailureReason.INSUFFICIENT_FUNDS)

    before = plant.modifiers.quality
    quality = clamp_quality(before * (1.0 - enhancer.quality_penalty), ctx.config.growth)
    modifiers = replace(
        plant.modifiers,
        quality=quality,
        enhancers=plant.modifiers.enhancers + (enhancer_id,),
    )
    state = replace(state, nugs=state.nugs - enhancer.price)
    state = state.with_plant(slot, replace(plant, modifiers=modifiers))
    if enhancer.banned:
        logger.info("Banned enhancer %s applied to slot %d", enhancer_id, slot)
    return state, ok(CareOutcome(quality_delta=quality - before, quality=quality))
