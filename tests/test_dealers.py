"""Dealer trades, relationships and contracts."""

import math
from dataclasses import replace

import pytest

from growsim.catalog.types import QualityTier
from growsim.events import TradeCompletedEvent
from growsim.market import create_contract, dealer_available, trade_with_dealer
from growsim.market.dealers import advance_relationship, current_hour
from growsim.result import FailureReason
from growsim.state import DealerRelationship, InventoryBatch

MIKE = "dealer-street-mike"


def _with_reputation(state, reputation):
    return replace(state, trade=replace(state.trade, reputation=reputation))


def test_trade_with_street_dealer(scripted_ctx, fresh_state, recorded):
    events = recorded(TradeCompletedEvent)
    ctx = scripted_ctx(0.5)

    state, result = trade_with_dealer(fresh_state, ctx, MIKE, 20, now=0.0, hour=12)

    receipt = result.value
    assert receipt.revenue == 54  # 20 x 3 x 0.9
    assert receipt.bonus is False
    assert receipt.reputation_gain == 2
    assert receipt.research_points == 1
    assert state.nugs == fresh_state.nugs + 54
    assert state.buds == fresh_state.buds - 20
    assert state.trade.reputation == 2
    assert state.trade.total_revenue == 54
    assert state.research.points == 1
    assert state.trade.relationships[MIKE].total_deals == 1
    assert events == [TradeCompletedEvent("dealer", MIKE, 20, 54)]


def test_deal_busted_changes_nothing(scripted_ctx, fresh_state):
    state, result = trade_with_dealer(fresh_state, scripted_ctx(0.01), MIKE, 20, now=0.0, hour=12)
    assert result.error is FailureReason.DEAL_BUSTED
    assert state is fresh_state


def test_lucky_roll_pays_bonus(scripted_ctx, fresh_state):
    _, result = trade_with_dealer(fresh_state, scripted_ctx(0.99), MIKE, 20, now=0.0, hour=12)
    assert result.value.bonus is True
    assert result.value.revenue == 59


@pytest.mark.parametrize(
    "dealer_id,quantity,hour,reputation,reason",
    [
        ("dealer-unknown", 20, 12, 0, FailureReason.UNKNOWN_DEALER),
        ("dealer-street-lisa", 20, 22, 0, FailureReason.DEALER_LOCKED),
        ("dealer-mid-carlos", 60, 5, 150, FailureReason.DEALER_UNAVAILABLE),
        (MIKE, 60, 12, 0, FailureReason.QUANTITY_OUT_OF_RANGE),
        (MIKE, 5, 12, 0, FailureReason.QUANTITY_OUT_OF_RANGE),
    ],
)
def test_trade_gates(ctx, fresh_state, dealer_id, quantity, hour, reputation, reason):
    state = _with_reputation(fresh_state, reputation)
    new_state, result = trade_with_dealer(state, ctx, dealer_id, quantity, now=0.0, hour=hour)
    assert result.error is reason
    assert new_state is state


def test_quality_floor_rejects_low_batches(ctx, fresh_state):
    inventory = (InventoryBatch("batch-1", 100, QualityTier.C, 0.85, 0.9),)
    state = _with_reputation(replace(fresh_state, buds=100, inventory=inventory), 60)
    _, result = trade_with_dealer(state, ctx, "dealer-street-lisa", 30, now=0.0, hour=22)
    assert result.error is FailureReason.INSUFFICIENT_QUALITY


def test_untracked_stock_only_sells_to_lowest_floor(ctx, fresh_state):
    state = _with_reputation(fresh_state, 60)
    _, result = trade_with_dealer(state, ctx, "dealer-street-lisa", 30, now=0.0, hour=22)
    assert result.error is FailureReason.INSUFFICIENT_QUALITY


def test_not_enough_buds(ctx, fresh_state):
    state = replace(fresh_state, buds=5)
    _, result = trade_with_dealer(state, ctx, MIKE, 20, now=0.0, hour=12)
    assert result.error is FailureReason.INSUFFICIENT_BUDS


def test_preferred_strain_premium(scripted_ctx, fresh_state):
    def sell(strain_id):
        inventory = (InventoryBatch("batch-1", 100, QualityTier.S, 1.5, 1.3, strain_id),)
        state = _with_reputation(replace(fresh_state, buds=100, inventory=inventory), 400)
        _, result = trade_with_dealer(state, scripted_ctx(0.5), "dealer-vip-dimitri", 100, now=0.0, hour=20)
        return result.value.revenue

    assert sell("green-gelato") == math.floor(100 * (3.0 * (1.8 + 0.0)) * 1.5 * 1.1)
    assert sell("honey-cream") == math.floor(100 * (3.0 * (1.8 + 0.0)) * 1.5)


def test_hour_defaults_to_clock(ctx, fresh_state):
    assert current_hour(0.0) == 0
    assert current_hour(3600.0 * 25) == 1
    # Carlos trades 10:00-22:00, so 03:00 on the clock is closed
    state = _with_reputation(fresh_state, 150)
    _, result = trade_with_dealer(state, ctx, "dealer-mid-carlos", 60, now=3 * 3600.0)
    assert result.error is FailureReason.DEALER_UNAVAILABLE


def test_dealer_window_wraps_past_midnight(catalog):
    lisa = catalog.dealers["dealer-street-lisa"]
    assert dealer_available(lisa, 20)
    assert dealer_available(lisa, 3)
    assert dealer_available(lisa, 6)
    assert not dealer_available(lisa, 12)


def test_relationship_levels_every_three_deals(ctx, fresh_state):
    ctx.config.market.dealer_incidents = False
    state = fresh_state
    for _ in range(3):
        state, result = trade_with_dealer(state, ctx, MIKE, 10, now=0.0, hour=1)
        assert result.is_ok()

    relationship = state.trade.relationships[MIKE]
    assert relationship.level == 1
    assert relationship.loyalty_bonus == pytest.approx(0.03)

    # Loyalty lifts the unit price to 3 x 0.93
    _, result = trade_with_dealer(state, ctx, MIKE, 10, now=0.0, hour=1)
    assert result.value.revenue == math.floor(10 * (3.0 * (0.9 + 0.03)))


def test_relationship_caps():
    relationship = DealerRelationship(MIKE, level=10, total_deals=40, loyalty_bonus=0.3)
    advanced = advance_relationship(relationship, now=5.0)
    assert advanced.level == 10
    assert advanced.loyalty_bonus == pytest.approx(0.3)
    assert advanced.last_deal_at == 5.0


def test_contract_requires_relationship_level(ctx, fresh_state):
    _, result = create_contract(fresh_state, ctx, MIKE, 20, 4, now=0.0)
    assert result.error is FailureReason.RELATIONSHIP_TOO_LOW


def test_create_contract(ctx, fresh_state):
    relationship = DealerRelationship(MIKE, level=3, total_deals=9, loyalty_bonus=0.09)
    state = replace(fresh_state, trade=replace(fresh_state.trade, relationships={MIKE: relationship}))

    state, result = create_contract(state, ctx, MIKE, 20, 4, now=100.0, strain_id="green-gelato")

    contract = result.value
    assert contract.price_per_bud == pytest.approx(3.27)
    assert contract.total_deliveries == 4
    assert contract.next_delivery_at == 100.0 + 7 * 24 * 3600
    assert state.trade.contracts == (contract,)

    _, result = create_contract(state, ctx, MIKE, 20, 0, now=100.0)
    assert result.error is FailureReason.INVALID_ARGUMENT
    _, result = create_contract(state, ctx, MIKE, 500, 2, now=100.0)
    assert result.error is FailureReason.QUANTITY_OUT_OF_RANGE
