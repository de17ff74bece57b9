"""Single-slot research progression.

At most one node is in progress. Points are spent when a node starts and
are forfeited if it is cancelled. Progress ticks move the active node
toward 100; at 100 it joins the completed set and the slot clears.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import List, Tuple

from growsim.catalog import Catalog
from growsim.catalog.types import Rarity, ResearchNode
from growsim.config import ResearchConfig
from growsim.context import SimContext
from growsim.events import ResearchCompletedEvent
from growsim.result import FailureReason, Result, fail, ok
from growsim.state import ActiveResearch, GameState

logger = logging.getLogger(__name__)

PROGRESS_COMPLETE = 100.0


def harvest_research_points(quality_score: float, rarity: Rarity, config: ResearchConfig) -> int:
    """Points for a harvest: quality percent in tens, weighted by rarity."""
    quality_pct = max(0.0, quality_score * 100.0)
    base = math.floor(quality_pct / config.harvest_points_divisor)
    weight = config.rarity_point_weights.get(rarity.value, 1.0)
    return int(math.floor(base * weight))


def trade_research_points(quantity: int, config: ResearchConfig) -> int:
    """Points for a dealer trade: one per block of buds, at least one."""
    return max(1, quantity // config.trade_points_divisor)


def add_research_points(state: GameState, amount: int) -> GameState:
    if amount == 0:
        return state
    points = max(0, state.research.points + amount)
    return replace(state, research=replace(state.research, points=points))


def available_research(state: GameState, catalog: Catalog) -> List[ResearchNode]:
    """Nodes not yet completed whose prerequisites are all completed."""
    completed = set(state.research.completed)
    return [
        node
        for node in catalog.research.values()
        if node.id not in completed and all(p in completed for p in node.prerequisites)
    ]


def start_research(
    state: GameState,
    ctx: SimContext,
    node_id: str,
    now: float = 0.0,
) -> Tuple[GameState, Result[str, FailureReason]]:
    """Spend points and occupy the research slot with ``node_id``."""
    node = ctx.catalog.research.get(node_id)
    if node is None:
        return state, fail(FailureReason.UNKNOWN_NODE)
    research = state.research
    if node_id in research.completed:
        return state, fail(FailureReason.ALREADY_COMPLETED)
    if research.active is not None:
        return state, fail(FailureReason.RESEARCH_ACTIVE)
    if any(prereq not in research.completed for prereq in node.prerequisites):
        return state, fail(FailureReason.PREREQUISITES_MISSING)
    if research.points < node.cost:
        return state, fail(FailureReason.INSUFFICIENT_POINTS)

    active = ActiveResearch(node_id=node_id, progress=0.0, started_at=now)
    research = replace(research, points=research.points - node.cost, active=active)
    logger.info("Research started: %s (%d points)", node_id, node.cost)
    return replace(state, research=research), ok(node_id)


def cancel_research(state: GameState, ctx: SimContext) -> Tuple[GameState, Result[str, FailureReason]]:
    """Clear the active node; spent points are not refunded."""
    active = state.research.active
    if active is None:
        return state, fail(FailureReason.NO_ACTIVE_RESEARCH)
    logger.info("Research cancelled: %s at %.0f%%", active.node_id, active.progress)
    return replace(state, research=replace(state.research, active=None)), ok(active.node_id)


def progress_research(state: GameState, ctx: SimContext, amount: float = 1.0) -> GameState:
    """Research tick: advance the active node by ``amount`` ticks of work.

    A node needs ``time_required`` ticks at amount 1.0 to reach 100.
    """
    active = state.research.active
    if active is None or amount <= 0:
        return state
    node = ctx.catalog.research.get(active.node_id)
    if node is None:
        # Node vanished from the catalog; drop the slot
        return replace(state, research=replace(state.research, active=None))

    step = amount * PROGRESS_COMPLETE / max(1, node.time_required)
    progress = min(PROGRESS_COMPLETE, active.progress + step)
    if progress < PROGRESS_COMPLETE:
        return replace(state, research=replace(state.research, active=replace(active, progress=progress)))

    research = replace(
        state.research,
        active=None,
        completed=state.research.completed + (node.id,),
    )
    logger.info("Research completed: %s", node.id)
    ctx.emit(ResearchCompletedEvent(node_id=node.id))
    return replace(state, research=research)
