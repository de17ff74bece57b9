"""Sell surfaces (offers, dealers) and the dynamic strain market."""

from growsim.market.dealers import (
    DealReceipt,
    create_contract,
    dealer_available,
    effective_multiplier,
    trade_with_dealer,
)
from growsim.market.inventory import SaleResult, consume_inventory, eligible_quantity
from growsim.market.market_tick import classify_trend, update_market_data
from growsim.market.offers import accept_offer, generate_offers, haggle_offer, refresh_offers
from growsim.market.pricing import compute_price, get_market_price

__all__ = [
    "DealReceipt",
    "SaleResult",
    "accept_offer",
    "classify_trend",
    "compute_price",
    "consume_inventory",
    "create_contract",
    "dealer_available",
    "effective_multiplier",
    "eligible_quantity",
    "generate_offers",
    "get_market_price",
    "haggle_offer",
    "refresh_offers",
    "trade_with_dealer",
    "update_market_data",
]
