"""Market tick: supply decay, demand walk, competitors and conditions."""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Dict

from growsim.catalog.types import Trend
from growsim.config import market as market_constants
from growsim.context import SimContext
from growsim.market.pricing import compute_price
from growsim.state import ActiveCondition, GameState, MarketData, MarketState, PricePoint
from growsim.util.math_utils import clamp
from growsim.util.rng import require_rng

logger = logging.getLogger(__name__)


def classify_trend(demand: int, supply: int) -> Trend:
    if demand > market_constants.TREND_RISING_DEMAND and supply < market_constants.TREND_RISING_SUPPLY:
        return Trend.RISING
    if demand < market_constants.TREND_FALLING_DEMAND or supply > market_constants.TREND_FALLING_SUPPLY:
        return Trend.FALLING
    return Trend.STABLE


def _clamp_demand(demand: float) -> int:
    return int(clamp(demand, market_constants.DEMAND_MIN, market_constants.DEMAND_MAX))


def _tick_conditions(market: MarketState, ctx: SimContext) -> MarketState:
    """Count active conditions down and occasionally start a new one."""
    rng = require_rng(ctx, "market_tick.conditions")
    active = tuple(
        replace(c, remaining=c.remaining - 1) for c in market.conditions if c.remaining - 1 > 0
    )
    strains = dict(market.strains)
    if len(active) < market_constants.MAX_ACTIVE_CONDITIONS and rng.random() < ctx.config.market.condition_spawn_chance:
        running = {c.condition_id for c in active}
        candidates = [c for c in ctx.catalog.market_conditions.values() if c.id not in running]
        if candidates:
            condition = candidates[rng.randrange(len(candidates))]
            active = active + (ActiveCondition(condition_id=condition.id, remaining=condition.duration),)
            for strain_id, data in strains.items():
                if condition.affects(strain_id):
                    strains[strain_id] = replace(data, demand=_clamp_demand(data.demand + condition.demand_change))
            logger.info("Market condition started: %s", condition.id)
    return replace(market, strains=strains, conditions=active)


def update_market_data(state: GameState, ctx: SimContext, now: float = 0.0) -> GameState:
    """Market tick over every strain with market data.

    Order per tick: supply decays, demand random-walks, competitors add
    supply (and demand when reputable), the trend label is recomputed,
    conditions advance, and the current price is refreshed into history.
    """
    rng = require_rng(ctx, "market_tick.update_market_data")
    strains: Dict[str, MarketData] = {}
    for strain_id, data in state.market.strains.items():
        supply = int(math.floor(data.supply * market_constants.SUPPLY_DECAY))
        demand = _clamp_demand(data.demand + math.floor((rng.random() - 0.5) * market_constants.DEMAND_WALK))
        strains[strain_id] = replace(data, supply=supply, demand=demand)

    for competitor in ctx.catalog.competitors:
        for strain_id in competitor.preferred_strains:
            data = strains.get(strain_id)
            if data is None:
                continue
            added = int(math.floor(rng.random() * competitor.aggressiveness * market_constants.COMPETITOR_SUPPLY_SCALE))
            demand = data.demand
            if competitor.reputation > market_constants.COMPETITOR_REPUTABLE:
                demand = _clamp_demand(demand + market_constants.COMPETITOR_DEMAND_NUDGE)
            strains[strain_id] = replace(data, supply=data.supply + added, demand=demand)

    for strain_id, data in strains.items():
        strains[strain_id] = replace(data, trend=classify_trend(data.demand, data.supply))

    market = _tick_conditions(replace(state.market, strains=strains), ctx)

    refreshed: Dict[str, MarketData] = {}
    for strain_id, data in market.strains.items():
        price = compute_price(data, ctx.catalog, market.conditions, 50.0, None, rng.random())
        history = (data.price_history + (PricePoint(timestamp=now, price=price),))[
            -market_constants.PRICE_HISTORY_LIMIT:
        ]
        refreshed[strain_id] = replace(data, current_price=price, price_history=history)
    return replace(state, market=replace(market, strains=refreshed))
