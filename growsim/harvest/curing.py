"""Curing pipeline: harvested product becomes tiered inventory over time.

A batch cured on time gains a small quality bump; one collected well past
its due time spoils a little instead. Rushing finishes immediately at a
larger penalty.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Tuple

from growsim.catalog.shop import CURING_UPGRADE_ID
from growsim.config import harvest as harvest_constants
from growsim.context import SimContext
from growsim.events import CuringCompletedEvent
from growsim.harvest.quality import tier_for_score
from growsim.result import FailureReason, Result, fail, ok
from growsim.state import CuringBatch, GameState, InventoryBatch
from growsim.world_events import active_event_preset

logger = logging.getLogger(__name__)


def curing_duration(state: GameState, ctx: SimContext) -> float:
    """Seconds a new batch needs, shortened by climate control, scaled by events."""
    config = ctx.config.curing
    level = state.upgrade_level(CURING_UPGRADE_ID)
    duration = config.base_duration * (1.0 - level * harvest_constants.CURING_CLIMATE_REDUCTION)
    event = active_event_preset(state, ctx.catalog)
    if event is not None:
        duration *= event.curing_multiplier
    return max(config.min_duration, duration)


def start_curing(
    state: GameState,
    ctx: SimContext,
    quantity: int,
    quality_score: float,
    now: float,
    strain_id: Optional[str] = None,
) -> Tuple[GameState, CuringBatch]:
    state, batch_id = state.allocate_id("batch")
    batch = CuringBatch(
        id=batch_id,
        quantity=quantity,
        started_at=now,
        duration=curing_duration(state, ctx),
        quality_score=quality_score,
        strain_id=strain_id,
    )
    return replace(state, curing=state.curing + (batch,)), batch


def _finish_batch(
    state: GameState,
    ctx: SimContext,
    batch: CuringBatch,
    score: float,
    rushed: bool,
    spoiled: bool,
) -> Tuple[GameState, InventoryBatch]:
    """Replace one curing batch with exactly one inventory batch of equal quantity."""
    tier, multiplier = tier_for_score(score)
    item = InventoryBatch(
        id=batch.id,
        quantity=batch.quantity,
        tier=tier,
        price_multiplier=multiplier,
        quality_score=round(score, 4),
        strain_id=batch.strain_id,
    )
    state = replace(
        state,
        curing=tuple(b for b in state.curing if b.id != batch.id),
        inventory=state.inventory + (item,),
        buds=state.buds + batch.quantity,
        stats=replace(state.stats, total_buds_cured=state.stats.total_buds_cured + batch.quantity),
    )
    logger.debug("Batch %s cured: %d buds tier %s", batch.id, batch.quantity, tier.value)
    ctx.emit(
        CuringCompletedEvent(
            batch_id=batch.id,
            quantity=batch.quantity,
            tier=tier.value,
            rushed=rushed,
            spoiled=spoiled,
        )
    )
    return state, item


def process_curing_tick(state: GameState, ctx: SimContext, now: float) -> GameState:
    """Curing tick: finish every batch whose due time has passed."""
    config = ctx.config.curing
    for batch in [b for b in state.curing if now >= b.due_at]:
        spoiled = now - batch.due_at > config.grace_period
        score = batch.quality_score
        if spoiled:
            score = max(min(score, config.score_floor), score - config.spoil_penalty)
        else:
            score = max(score, min(config.score_cap, score + config.natural_bonus))
        state, _ = _finish_batch(state, ctx, batch, score, rushed=False, spoiled=spoiled)
    return state


def rush_curing(
    state: GameState,
    ctx: SimContext,
    batch_id: str,
) -> Tuple[GameState, Result[InventoryBatch, FailureReason]]:
    """Finish a batch now, paying a quality penalty larger than the natural bonus."""
    batch = next((b for b in state.curing if b.id == batch_id), None)
    if batch is None:
        return state, fail(FailureReason.UNKNOWN_BATCH)
    config = ctx.config.curing
    score = max(min(batch.quality_score, config.score_floor), batch.quality_score - config.rush_penalty)
    state, item = _finish_batch(state, ctx, batch, score, rushed=True, spoiled=False)
    return state, ok(item)
