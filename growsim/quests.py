"""Starter quests: progress bookkeeping and reward claims."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Tuple

from growsim.catalog.types import Currency, QuestType
from growsim.context import SimContext
from growsim.exceptions import SimulationError
from growsim.result import FailureReason, Result, fail, ok
from growsim.state import GameState

logger = logging.getLogger(__name__)


def record_quest_progress(state: GameState, ctx: SimContext, quest_type: QuestType, amount: int) -> GameState:
    """Advance every unclaimed quest of ``quest_type`` by ``amount`` (capped at its goal)."""
    if amount <= 0:
        return state
    templates = {quest.id: quest for quest in ctx.catalog.quests}
    changed = False
    updated = []
    for progress in state.quests:
        template = templates.get(progress.quest_id)
        if template is None or template.type is not quest_type or progress.claimed:
            updated.append(progress)
            continue
        new_value = min(template.goal, progress.progress + amount)
        if new_value != progress.progress:
            changed = True
        updated.append(replace(progress, progress=new_value))
    if not changed:
        return state
    return replace(state, quests=tuple(updated))


def claim_quest(state: GameState, ctx: SimContext, quest_id: str) -> Tuple[GameState, Result[int, FailureReason]]:
    """Pay out a completed quest exactly once."""
    templates = {quest.id: quest for quest in ctx.catalog.quests}
    template = templates.get(quest_id)
    index = next((i for i, q in enumerate(state.quests) if q.quest_id == quest_id), None)
    if template is None or index is None:
        return state, fail(FailureReason.UNKNOWN_QUEST)
    progress = state.quests[index]
    if progress.claimed:
        return state, fail(FailureReason.ALREADY_CLAIMED)
    if progress.progress < template.goal:
        return state, fail(FailureReason.QUEST_INCOMPLETE)

    quests = list(state.quests)
    quests[index] = replace(progress, claimed=True)
    state = replace(state, quests=tuple(quests))
    if template.reward_currency is Currency.NUGS:
        state = replace(state, nugs=state.nugs + template.reward)
    elif template.reward_currency is Currency.BUDS:
        state = replace(state, buds=state.buds + template.reward)
    else:
        raise SimulationError(f"Unhandled reward currency: {template.reward_currency}")
    logger.info("Quest %s claimed: +%d %s", quest_id, template.reward, template.reward_currency.value)
    return state, ok(template.reward)
