"""Greedy inventory consumption shared by every sell surface.

Sales draw from the highest-multiplier batches first so each sold unit
realises the best available price. Buds outside any batch (starting
stock, quest rewards) are only used after tracked batches and sell at the
flat multiplier.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Callable, Dict, Optional, Tuple

from growsim.catalog.types import QualityTier, QuestType, Trend
from growsim.config import market as market_constants
from growsim.context import SimContext
from growsim.quests import record_quest_progress
from growsim.state import GameState, InventoryBatch, MarketState


@dataclass(frozen=True)
class SaleResult:
    """Outcome of drawing ``quantity`` buds out of inventory.

    Attributes:
        revenue: Nugs earned, floored per batch
        inventory: Remaining batches (empty ones removed)
        sold_by_strain: Units sold per strain id (None for untracked buds)
    """

    revenue: int
    inventory: Tuple[InventoryBatch, ...]
    sold_by_strain: Dict[Optional[str], int]


def eligible_quantity(inventory: Tuple[InventoryBatch, ...], minimum: QualityTier) -> int:
    """Buds held in batches at or above ``minimum``."""
    return sum(batch.quantity for batch in inventory if batch.tier.meets(minimum))


def consume_inventory(
    inventory: Tuple[InventoryBatch, ...],
    quantity: int,
    unit_price: float,
    eligible: Callable[[InventoryBatch], bool] = lambda batch: True,
    premium: Callable[[InventoryBatch], float] = lambda batch: 1.0,
    untracked_available: int = 0,
) -> Optional[SaleResult]:
    """Sell ``quantity`` buds greedily; None when there is not enough stock.

    Args:
        inventory: Current inventory batches
        quantity: Buds to sell
        unit_price: Price per bud before the batch multiplier
        eligible: Which batches this buyer accepts
        premium: Extra per-batch price factor (e.g. preferred strain)
        untracked_available: Untracked buds this buyer accepts
    """
    if quantity <= 0:
        return None
    candidates = sorted(
        (batch for batch in inventory if eligible(batch) and batch.quantity > 0),
        key=lambda batch: batch.price_multiplier,
        reverse=True,
    )
    if sum(batch.quantity for batch in candidates) + untracked_available < quantity:
        return None

    remaining = quantity
    revenue = 0
    taken: Dict[str, int] = {}
    sold_by_strain: Dict[Optional[str], int] = {}
    for batch in candidates:
        if remaining <= 0:
            break
        sell = min(batch.quantity, remaining)
        revenue += int(math.floor(sell * unit_price * batch.price_multiplier * premium(batch)))
        taken[batch.id] = sell
        sold_by_strain[batch.strain_id] = sold_by_strain.get(batch.strain_id, 0) + sell
        remaining -= sell
    if remaining > 0:
        revenue += int(math.floor(remaining * unit_price * market_constants.FLAT_QUALITY_MULTIPLIER))
        sold_by_strain[None] = sold_by_strain.get(None, 0) + remaining

    updated = []
    for batch in inventory:
        sell = taken.get(batch.id, 0)
        left = batch.quantity - sell
        if left > 0:
            updated.append(replace(batch, quantity=left) if sell else batch)
    return SaleResult(revenue=revenue, inventory=tuple(updated), sold_by_strain=sold_by_strain)


def record_market_sale(market: MarketState, sold_by_strain: Dict[Optional[str], int]) -> MarketState:
    """Push sold units into each strain's market supply."""
    strains = dict(market.strains)
    for strain_id, sold in sold_by_strain.items():
        data = strains.get(strain_id) if strain_id is not None else None
        if data is None or sold <= 0:
            continue
        trend = Trend.FALLING if sold > market_constants.LARGE_SALE_QUANTITY else data.trend
        strains[strain_id] = replace(data, supply=data.supply + sold, trend=trend)
    return replace(market, strains=strains)


def apply_sale(
    state: GameState,
    ctx: SimContext,
    quantity: int,
    sale: SaleResult,
    count_trade: bool,
) -> GameState:
    """Book a completed sale: balances, inventory, market supply, stats, quests."""
    stats = state.stats
    state = replace(
        state,
        buds=state.buds - quantity,
        nugs=state.nugs + sale.revenue,
        inventory=sale.inventory,
        market=record_market_sale(state.market, sale.sold_by_strain),
        trade=replace(state.trade, total_revenue=state.trade.total_revenue + sale.revenue),
        stats=replace(
            stats,
            total_nugs_earned=stats.total_nugs_earned + sale.revenue,
            total_buds_sold=stats.total_buds_sold + quantity,
            total_trades=stats.total_trades + (1 if count_trade else 0),
        ),
    )
    return record_quest_progress(state, ctx, QuestType.SELL, quantity)
