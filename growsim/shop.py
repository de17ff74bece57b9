"""Shop purchases: leveled upgrades and one-time environment gear."""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Tuple

from growsim.catalog.shop import UPGRADE_PRICE_GROWTH
from growsim.catalog.types import Upgrade, UpgradeEffect
from growsim.context import SimContext
from growsim.result import FailureReason, Result, fail, ok
from growsim.state import AutomationState, GameState

logger = logging.getLogger(__name__)


def upgrade_price(upgrade: Upgrade, level: int) -> int:
    """Price of the next level when ``level`` levels are already owned."""
    return int(math.floor(upgrade.base_price * UPGRADE_PRICE_GROWTH ** level))


def buy_upgrade(
    state: GameState, ctx: SimContext, upgrade_id: str
) -> Tuple[GameState, Result[int, FailureReason]]:
    """Buy the next level of an upgrade. Returns the new level.

    Each slot-upgrade level adds one empty plant slot.
    """
    upgrade = ctx.catalog.upgrades.get(upgrade_id)
    if upgrade is None:
        return state, fail(FailureReason.UNKNOWN_UPGRADE)
    level = state.upgrade_level(upgrade_id)
    if level >= upgrade.max_level:
        return state, fail(FailureReason.MAX_LEVEL)
    price = upgrade_price(upgrade, level)
    if state.nugs < price:
        return state, fail(FailureReason.INSUFFICIENT_FUNDS)

    upgrades = dict(state.upgrades)
    upgrades[upgrade_id] = level + 1
    state = replace(state, nugs=state.nugs - price, upgrades=upgrades)
    if upgrade.effect is UpgradeEffect.SLOT:
        state = replace(
            state,
            slots=state.slots + (None,),
            automation=state.automation + (AutomationState(),),
        )
    logger.debug("Bought %s level %d for %d nugs", upgrade_id, level + 1, price)
    return state, ok(level + 1)


def buy_env_upgrade(
    state: GameState, ctx: SimContext, upgrade_id: str
) -> Tuple[GameState, Result[str, FailureReason]]:
    upgrade = ctx.catalog.env_upgrades.get(upgrade_id)
    if upgrade is None:
        return state, fail(FailureReason.UNKNOWN_UPGRADE)
    if upgrade_id in state.env_upgrades:
        return state, fail(FailureReason.ALREADY_OWNED)
    if state.nugs < upgrade.price:
        return state, fail(FailureReason.INSUFFICIENT_FUNDS)
    state = replace(state, nugs=state.nugs - upgrade.price, env_upgrades=state.env_upgrades + (upgrade_id,))
    return state, ok(upgrade_id)
