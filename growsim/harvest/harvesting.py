"""Harvest command: plant -> curing batch."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from growsim.catalog.types import QuestType
from growsim.config import research as research_constants
from growsim.context import SimContext
from growsim.events import PlantHarvestedEvent
from growsim.harvest.curing import start_curing
from growsim.harvest.yield_model import YieldBreakdown, compute_yield
from growsim.plants.growth import is_harvest_ready
from growsim.quests import record_quest_progress
from growsim.research.bonuses import research_bonuses
from growsim.research.progression import add_research_points, harvest_research_points
from growsim.result import FailureReason, Result, fail, ok
from growsim.state import GameState, resolve_strain

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HarvestReceipt:
    batch_id: str
    quantity: int
    quality_score: float
    research_points: int
    breakdown: YieldBreakdown


def harvest(
    state: GameState,
    ctx: SimContext,
    slot: int,
    now: float = 0.0,
    variance: Optional[float] = None,
) -> Tuple[GameState, Result[HarvestReceipt, FailureReason]]:
    """Harvest a ready plant into a new curing batch and empty its slot.

    The batch quantity is exactly the computed yield. The quality score
    carried into curing is the plant's quality multiplier plus the research
    quality boost.
    """
    plant = state.plant_at(slot)
    if plant is None:
        return state, fail(FailureReason.EMPTY_SLOT)
    if not is_harvest_ready(state, ctx, slot):
        return state, fail(FailureReason.NOT_READY)
    strain = resolve_strain(state, ctx.catalog, plant.strain_id)
    if strain is None:
        return state, fail(FailureReason.UNKNOWN_STRAIN)

    breakdown = compute_yield(state, ctx, plant, strain, variance=variance)
    quantity = breakdown.total
    boost = research_bonuses(state, ctx).quality_boost
    score = plant.modifiers.quality + boost * research_constants.QUALITY_BOOST_SCALE
    points = harvest_research_points(score, strain.rarity, ctx.config.research)

    state = state.with_plant(slot, None)
    state = replace(state, infestations=tuple(i for i in state.infestations if i.plant_id != plant.id))
    state, batch = start_curing(state, ctx, quantity, score, now, strain_id=strain.id)
    stats = state.stats
    state = replace(
        state,
        stats=replace(
            stats,
            total_harvests=stats.total_harvests + 1,
            total_buds_harvested=stats.total_buds_harvested + quantity,
        ),
    )
    state = add_research_points(state, points)
    state = record_quest_progress(state, ctx, QuestType.HARVEST, 1)

    logger.info("Harvested %s from slot %d: %d buds (score %.2f)", plant.id, slot, quantity, score)
    ctx.emit(
        PlantHarvestedEvent(
            slot=slot,
            plant_id=plant.id,
            strain_id=strain.id,
            quantity=quantity,
            quality_score=score,
            research_points=points,
        )
    )
    receipt = HarvestReceipt(
        batch_id=batch.id,
        quantity=quantity,
        quality_score=score,
        research_points=points,
        breakdown=breakdown,
    )
    return state, ok(receipt)
