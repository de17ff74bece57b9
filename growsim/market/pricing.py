"""Dynamic per-strain market pricing.

    price = base
            x clamp(ratio / 5, 0.5, 2.0)         demand vs supply
            x (0.5 + quality / 100)              quality 0-100
            x (1 + min(0.5, terpenes / 400))     aggregate terpene bonus
            x product(active condition multipliers)
            x (1 + (noise - 0.5) x volatility)   bounded volatility

rounded to cents and never below one cent.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from growsim.catalog import Catalog
from growsim.config import market as market_constants
from growsim.context import SimContext
from growsim.plants.terpenes import terpene_total
from growsim.state import ActiveCondition, GameState, MarketData
from growsim.util.math_utils import clamp
from growsim.util.rng import require_rng


def supply_demand_factor(demand: int, supply: int) -> float:
    if supply > 0:
        ratio = demand / supply
    else:
        ratio = demand / market_constants.ZERO_SUPPLY_DIVISOR
    return clamp(
        ratio / market_constants.RATIO_DIVISOR,
        market_constants.RATIO_FACTOR_MIN,
        market_constants.RATIO_FACTOR_MAX,
    )


def terpene_bonus(profile: Optional[Mapping[str, float]]) -> float:
    if not profile:
        return 0.0
    return min(market_constants.TERPENE_BONUS_CAP, terpene_total(profile) / market_constants.TERPENE_BONUS_DIVISOR)


def condition_multiplier(strain_id: str, conditions: Iterable[ActiveCondition], catalog: Catalog) -> float:
    multiplier = 1.0
    for active in conditions:
        condition = catalog.market_conditions.get(active.condition_id)
        if condition is not None and condition.affects(strain_id):
            multiplier *= condition.price_multiplier
    return multiplier


def compute_price(
    data: MarketData,
    catalog: Catalog,
    conditions: Iterable[ActiveCondition],
    quality: float,
    terpenes: Optional[Mapping[str, float]],
    noise: float,
) -> float:
    """Evaluate the pricing formula with an explicit noise draw in [0, 1)."""
    quality_factor = 0.5 + clamp(quality, 0.0, 100.0) / 100.0
    price = data.base_price
    price *= supply_demand_factor(data.demand, data.supply)
    price *= quality_factor
    price *= 1.0 + terpene_bonus(terpenes)
    price *= condition_multiplier(data.strain_id, conditions, catalog)
    price *= 1.0 + (noise - 0.5) * data.volatility
    return max(market_constants.PRICE_FLOOR, round(price, 2))


def get_market_price(
    state: GameState,
    ctx: SimContext,
    strain_id: str,
    terpenes: Optional[Mapping[str, float]] = None,
    quality: float = 50.0,
) -> Optional[float]:
    """Current price per bud for ``strain_id``; None for strains without market data."""
    data = state.market.strains.get(strain_id)
    if data is None:
        return None
    noise = require_rng(ctx, "pricing.get_market_price").random()
    return compute_price(data, ctx.catalog, state.market.conditions, quality, terpenes, noise)
