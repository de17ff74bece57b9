"""Anonymous buyer offers.

Three offers are generated per refresh. Their quantity and price bands
widen with the grower's stage (one stage per five harvests) and are scaled
by the active global event. Haggling can raise a price by 20% but the
buyer walks away when it fails.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import List, Optional, Tuple

from growsim.config import market as market_constants
from growsim.context import SimContext
from growsim.events import TradeCompletedEvent
from growsim.market.inventory import apply_sale, consume_inventory
from growsim.result import FailureReason, Result, fail, ok
from growsim.state import GameState, TradeOffer
from growsim.util.math_utils import clamp
from growsim.util.rng import require_rng
from growsim.world_events import active_event_preset

logger = logging.getLogger(__name__)


def offer_stage(state: GameState) -> int:
    return state.stats.total_harvests // market_constants.OFFER_STAGE_HARVESTS


def generate_offers(state: GameState, ctx: SimContext, now: float) -> GameState:
    """Replace the current offers with a fresh set and restart the refresh cooldown."""
    rng = require_rng(ctx, "offers.generate_offers")
    stage = offer_stage(state)
    event = active_event_preset(state, ctx.catalog)
    quantity_multiplier = event.quantity_multiplier if event is not None else 1.0
    price_multiplier = event.price_multiplier if event is not None else 1.0

    min_base = min(
        market_constants.OFFER_MIN_QTY_CAP,
        market_constants.OFFER_MIN_QTY_BASE + stage * market_constants.OFFER_MIN_QTY_PER_STAGE,
    )
    max_base = min(
        market_constants.OFFER_MAX_QTY_CAP,
        market_constants.OFFER_MAX_QTY_BASE + stage * market_constants.OFFER_MAX_QTY_PER_STAGE,
    )
    min_qty = int(math.floor(min_base * quantity_multiplier))
    max_qty = int(math.floor(max_base * quantity_multiplier))

    offers: List[TradeOffer] = []
    for _ in range(ctx.config.market.offer_count):
        span = max(1, max_qty - min_qty + 1)
        quantity = max(min_qty, int(math.floor(min_qty + rng.random() * span)))
        base_price = 1.0 + rng.random() * market_constants.OFFER_PRICE_SPREAD
        price = clamp(
            (base_price + stage * market_constants.OFFER_PRICE_PER_STAGE) * price_multiplier,
            market_constants.OFFER_PRICE_MIN,
            market_constants.OFFER_PRICE_MAX,
        )
        state, offer_id = state.allocate_id("offer")
        offers.append(TradeOffer(id=offer_id, quantity=quantity, price_per_bud=round(price, 1)))

    trade = replace(
        state.trade,
        offers=tuple(offers),
        next_offer_refresh_at=now + ctx.config.market.offer_refresh_cooldown,
    )
    logger.debug("Generated %d offers at stage %d", len(offers), stage)
    return replace(state, trade=trade)


def refresh_offers(
    state: GameState, ctx: SimContext, now: float
) -> Tuple[GameState, Result[int, FailureReason]]:
    """Player-requested refresh, gated by the refresh cooldown."""
    if now < state.trade.next_offer_refresh_at:
        return state, fail(FailureReason.COOLDOWN)
    state = generate_offers(state, ctx, now)
    return state, ok(len(state.trade.offers))


def _find_offer(state: GameState, offer_id: str) -> Optional[TradeOffer]:
    for offer in state.trade.offers:
        if offer.id == offer_id:
            return offer
    return None


def accept_offer(
    state: GameState, ctx: SimContext, offer_id: str
) -> Tuple[GameState, Result[int, FailureReason]]:
    """Sell the offer's quantity, best batches first. Returns the revenue."""
    offer = _find_offer(state, offer_id)
    if offer is None:
        return state, fail(FailureReason.UNKNOWN_OFFER)
    if state.buds < offer.quantity:
        return state, fail(FailureReason.INSUFFICIENT_BUDS)

    sale = consume_inventory(
        state.inventory,
        offer.quantity,
        offer.price_per_bud,
        untracked_available=state.untracked_buds(),
    )
    if sale is None:
        return state, fail(FailureReason.INSUFFICIENT_BUDS)

    new_state = apply_sale(state, ctx, offer.quantity, sale, count_trade=True)
    new_state = replace(
        new_state,
        trade=replace(new_state.trade, offers=tuple(o for o in new_state.trade.offers if o.id != offer_id)),
    )
    ctx.emit(
        TradeCompletedEvent(channel="offer", counterparty=offer_id, quantity=offer.quantity, revenue=sale.revenue)
    )
    logger.debug("Offer %s accepted: %d buds for %d nugs", offer_id, offer.quantity, sale.revenue)
    return new_state, ok(sale.revenue)


def haggle_offer(
    state: GameState, ctx: SimContext, offer_id: str
) -> Tuple[GameState, Result[Optional[float], FailureReason]]:
    """Try to raise an offer's price.

    Returns Ok(new_price) on success and Ok(None) when the buyer walked
    away, in which case the offer is gone.
    """
    offer = _find_offer(state, offer_id)
    if offer is None:
        return state, fail(FailureReason.UNKNOWN_OFFER)

    rng = require_rng(ctx, "offers.haggle_offer")
    if rng.random() < ctx.config.market.haggle_success_chance:
        price = min(
            market_constants.HAGGLE_PRICE_CAP,
            round(offer.price_per_bud * market_constants.HAGGLE_PRICE_FACTOR, 1),
        )
        offers = tuple(replace(o, price_per_bud=price) if o.id == offer_id else o for o in state.trade.offers)
        return replace(state, trade=replace(state.trade, offers=offers)), ok(price)

    offers = tuple(o for o in state.trade.offers if o.id != offer_id)
    logger.debug("Buyer for %s walked away", offer_id)
    return replace(state, trade=replace(state.trade, offers=offers)), ok(None)
