"""Dealer network: reputation-gated buyers with quality floors and hours.

A dealer pays ``base price x (multiplier + loyalty)`` per bud, times the
batch's tier multiplier. Relationships level up every few deals and grow
the loyalty bonus; from level 3 a dealer also signs weekly contracts at a
premium.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from growsim.catalog.types import Dealer, QualityTier
from growsim.config import market as market_constants
from growsim.context import SimContext
from growsim.events import TradeCompletedEvent
from growsim.market.inventory import SaleResult, apply_sale, consume_inventory, eligible_quantity
from growsim.research.progression import add_research_points, trade_research_points
from growsim.result import FailureReason, Result, fail, ok
from growsim.state import DealerRelationship, GameState, InventoryBatch, TradeContract
from growsim.util.rng import require_rng

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DealReceipt:
    dealer_id: str
    quantity: int
    revenue: int
    bonus: bool
    reputation_gain: int
    research_points: int


def current_hour(now: float) -> int:
    return int(now // 3600) % 24


def dealer_available(dealer: Dealer, hour: int) -> bool:
    """Whether ``hour`` falls inside the dealer's window (both ends inclusive).

    Windows whose start is after their end wrap past midnight.
    """
    start, end = dealer.available_from, dealer.available_until
    if start <= end:
        return start <= hour <= end
    return hour >= start or hour <= end


def relationship_for(state: GameState, dealer_id: str) -> DealerRelationship:
    rel = state.trade.relationships.get(dealer_id)
    return rel if rel is not None else DealerRelationship(dealer_id=dealer_id)


def effective_multiplier(dealer: Dealer, relationship: DealerRelationship) -> float:
    return dealer.price_multiplier + relationship.loyalty_bonus


def advance_relationship(relationship: DealerRelationship, now: float) -> DealerRelationship:
    deals = relationship.total_deals + 1
    level = min(market_constants.RELATIONSHIP_LEVEL_MAX, deals // market_constants.DEALS_PER_RELATIONSHIP_LEVEL)
    return replace(
        relationship,
        level=level,
        total_deals=deals,
        last_deal_at=now,
        loyalty_bonus=min(market_constants.LOYALTY_CAP, level * market_constants.LOYALTY_PER_LEVEL),
    )


def _sell_to_dealer(
    state: GameState, dealer: Dealer, quantity: int, unit_price: float
) -> Tuple[Optional[SaleResult], Optional[FailureReason]]:
    """Pick the stock a dealer accepts, best batches first."""
    if state.buds < quantity:
        return None, FailureReason.INSUFFICIENT_BUDS

    def preferred(batch: InventoryBatch) -> float:
        if batch.strain_id is not None and batch.strain_id in dealer.preferred_strains:
            return market_constants.PREFERRED_STRAIN_PREMIUM
        return 1.0

    if state.inventory:
        if eligible_quantity(state.inventory, dealer.quality_requirement) < quantity:
            return None, FailureReason.INSUFFICIENT_QUALITY
        sale = consume_inventory(
            state.inventory,
            quantity,
            unit_price,
            eligible=lambda batch: batch.tier.meets(dealer.quality_requirement),
            premium=preferred,
        )
        return sale, None

    # Untracked stock has no known tier, so only the lowest floor takes it.
    if dealer.quality_requirement is not QualityTier.C:
        return None, FailureReason.INSUFFICIENT_QUALITY
    return consume_inventory((), quantity, unit_price, untracked_available=state.buds), None


def trade_with_dealer(
    state: GameState,
    ctx: SimContext,
    dealer_id: str,
    quantity: int,
    now: float,
    hour: Optional[int] = None,
) -> Tuple[GameState, Result[DealReceipt, FailureReason]]:
    """Sell ``quantity`` buds to a dealer.

    Checks run in a fixed order: known dealer, reputation unlock, opening
    hours, quantity band, stock and quality floor, then one incident roll
    that may bust the deal or pay a small bonus.
    """
    dealer = ctx.catalog.dealers.get(dealer_id)
    if dealer is None:
        return state, fail(FailureReason.UNKNOWN_DEALER)
    if state.trade.reputation < dealer.unlock_reputation:
        return state, fail(FailureReason.DEALER_LOCKED)
    if not dealer_available(dealer, current_hour(now) if hour is None else hour):
        return state, fail(FailureReason.DEALER_UNAVAILABLE)
    if quantity < dealer.min_quantity or quantity > dealer.max_quantity:
        return state, fail(FailureReason.QUANTITY_OUT_OF_RANGE)

    relationship = relationship_for(state, dealer_id)
    unit_price = ctx.config.market.dealer_base_price * effective_multiplier(dealer, relationship)
    sale, reason = _sell_to_dealer(state, dealer, quantity, unit_price)
    if sale is None:
        logger.debug("Trade with %s rejected: %s", dealer_id, reason)
        return state, fail(reason or FailureReason.INSUFFICIENT_BUDS)

    bonus = False
    if ctx.config.market.dealer_incidents:
        roll = require_rng(ctx, "dealers.trade_with_dealer").random() * 100.0
        if roll < dealer.risk_level * market_constants.DEALER_RISK_SCALE:
            logger.info("Deal with %s busted (roll %.1f)", dealer_id, roll)
            return state, fail(FailureReason.DEAL_BUSTED)
        if roll > market_constants.DEALER_BONUS_ROLL:
            bonus = True
            sale = replace(sale, revenue=int(math.floor(sale.revenue * market_constants.DEALER_BONUS_FACTOR)))

    new_state = apply_sale(state, ctx, quantity, sale, count_trade=True)
    reputation_gain = quantity // 10 + sale.revenue // 100
    relationships = dict(new_state.trade.relationships)
    relationships[dealer_id] = advance_relationship(relationship, now)
    new_state = replace(
        new_state,
        trade=replace(
            new_state.trade,
            reputation=min(market_constants.REPUTATION_CAP, new_state.trade.reputation + reputation_gain),
            relationships=relationships,
        ),
    )
    points = trade_research_points(quantity, ctx.config.research)
    new_state = add_research_points(new_state, points)

    ctx.emit(TradeCompletedEvent(channel="dealer", counterparty=dealer_id, quantity=quantity, revenue=sale.revenue))
    logger.debug("Sold %d buds to %s for %d nugs", quantity, dealer_id, sale.revenue)
    return new_state, ok(
        DealReceipt(
            dealer_id=dealer_id,
            quantity=quantity,
            revenue=sale.revenue,
            bonus=bonus,
            reputation_gain=reputation_gain,
            research_points=points,
        )
    )


def create_contract(
    state: GameState,
    ctx: SimContext,
    dealer_id: str,
    quantity: int,
    weeks: int,
    now: float,
    strain_id: Optional[str] = None,
) -> Tuple[GameState, Result[TradeContract, FailureReason]]:
    """Sign a weekly delivery contract at a premium price.

    Only the agreement is recorded here; deliveries are driven by the
    caller's scheduler.
    """
    dealer = ctx.catalog.dealers.get(dealer_id)
    if dealer is None:
        return state, fail(FailureReason.UNKNOWN_DEALER)
    if state.trade.reputation < dealer.unlock_reputation:
        return state, fail(FailureReason.DEALER_LOCKED)
    if weeks <= 0:
        return state, fail(FailureReason.INVALID_ARGUMENT)
    if quantity < dealer.min_quantity or quantity > dealer.max_quantity:
        return state, fail(FailureReason.QUANTITY_OUT_OF_RANGE)
    relationship = relationship_for(state, dealer_id)
    if relationship.level < market_constants.CONTRACT_MIN_LEVEL:
        return state, fail(FailureReason.RELATIONSHIP_TOO_LOW)

    price = (
        ctx.config.market.dealer_base_price
        * effective_multiplier(dealer, relationship)
        * market_constants.CONTRACT_PREMIUM
    )
    state, contract_id = state.allocate_id("contract")
    contract = TradeContract(
        id=contract_id,
        dealer_id=dealer_id,
        quantity=quantity,
        price_per_bud=round(price, 2),
        weeks=weeks,
        started_at=now,
        next_delivery_at=now + market_constants.CONTRACT_INTERVAL,
        total_deliveries=weeks,
        strain_id=strain_id,
    )
    state = replace(state, trade=replace(state.trade, contracts=state.trade.contracts + (contract,)))
    logger.info("Contract %s signed with %s: %d buds x %d weeks", contract_id, dealer_id, quantity, weeks)
    return state, ok(contract)
