"""Yield, harvest, curing and quality tiers."""

from dataclasses import replace

import pytest

from growsim.catalog.types import QualityTier
from growsim.events import CuringCompletedEvent, PlantHarvestedEvent
from growsim.harvest import curing_duration, harvest, process_curing_tick, rush_curing, tier_for_score
from growsim.harvest.curing import start_curing
from growsim.result import FailureReason
from growsim.state import ActiveEvent, PestInfestation, TrainingRecord


def _ready(state, grow, ctx, **modifiers):
    terminal = ctx.catalog.terminal_phase
    return grow(state, phase=terminal, elapsed=100.0, **modifiers)


def test_harvest_moves_yield_into_curing(ctx, fresh_state, grow, recorded):
    events = recorded(PlantHarvestedEvent)
    state = _ready(fresh_state, grow, ctx)

    state, result = harvest(state, ctx, 0, now=50.0, variance=1.0)

    receipt = result.value
    assert receipt.quantity == 80
    assert receipt.quality_score == pytest.approx(1.0)
    assert receipt.research_points == 10
    assert state.plant_at(0) is None
    assert len(state.curing) == 1
    batch = state.curing[0]
    assert batch.id == receipt.batch_id
    assert batch.quantity == 80
    assert batch.started_at == 50.0
    assert batch.strain_id == "green-gelato"
    assert state.buds == fresh_state.buds
    assert state.stats.total_harvests == 1
    assert state.research.points == 10
    assert events[0].quantity == 80


def test_yield_formula_multiplies_every_factor(ctx, fresh_state, grow):
    state = _ready(
        fresh_state,
        grow,
        ctx,
        strain_id="blue-zushi",
        quality=1.2,
        water_stacks=3,
        training=(TrainingRecord("lst", 0.5, 0.0),),
        enhancers=("density-booster",),
    )
    _, result = harvest(state, ctx, 0, variance=0.95)

    breakdown = result.value.breakdown
    assert breakdown.rarity == pytest.approx(1.3)
    assert breakdown.water == pytest.approx(1.15)
    assert breakdown.training == pytest.approx(1.1)
    assert breakdown.enhancers == pytest.approx(1.4)
    # 120 x 1.3 x 1.2 x 1.15 x 1.1 x 1.4 x 0.95 = 314.95
    assert result.value.quantity == 314


def test_harvest_variance_stays_within_ten_percent(ctx, fresh_state, grow):
    state = _ready(fresh_state, grow, ctx, quality=1.3)
    _, result = harvest(state, ctx, 0)

    breakdown = result.value.breakdown
    assert breakdown.pre_variance == pytest.approx(104)
    assert 93 <= result.value.quantity <= 114
    assert result.value.quantity == breakdown.total


def test_harvest_refusals(ctx, fresh_state, grow):
    _, result = harvest(fresh_state, ctx, 0)
    assert result.error is FailureReason.EMPTY_SLOT

    growing = grow(fresh_state, phase=3)
    new_state, result = harvest(growing, ctx, 0)
    assert result.error is FailureReason.NOT_READY
    assert new_state is growing


def test_harvest_clears_infestations_of_the_plant(ctx, fresh_state, grow):
    state = _ready(fresh_state, grow, ctx)
    plant_id = state.plant_at(0).id
    state = replace(
        state,
        infestations=(PestInfestation("inf-1", "spider-mites", 0, plant_id, 20.0, 0.0),),
    )
    state, _ = harvest(state, ctx, 0, variance=1.0)
    assert state.infestations == ()


def test_curing_completes_with_natural_bonus(ctx, fresh_state, recorded):
    events = recorded(CuringCompletedEvent)
    state, batch = start_curing(fresh_state, ctx, 40, 1.2, now=0.0, strain_id="green-gelato")

    assert process_curing_tick(state, ctx, now=59.0) is state

    state = process_curing_tick(state, ctx, now=60.0)
    assert state.curing == ()
    item = state.inventory[0]
    assert item.id == batch.id
    assert item.quantity == 40
    assert item.quality_score == pytest.approx(1.26)
    assert item.tier is QualityTier.S
    assert item.price_multiplier == pytest.approx(1.5)
    assert state.buds == fresh_state.buds + 40
    assert state.stats.total_buds_cured == 40
    assert events[0].spoiled is False


def test_curing_spoils_after_grace_period(ctx, fresh_state):
    state, _ = start_curing(fresh_state, ctx, 10, 1.2, now=0.0)
    state = process_curing_tick(state, ctx, now=60.0 + 31.0)

    item = state.inventory[0]
    assert item.quality_score == pytest.approx(1.15)
    assert item.tier is QualityTier.A


def test_curing_bonus_is_capped(ctx, fresh_state):
    state, _ = start_curing(fresh_state, ctx, 10, 1.58, now=0.0)
    state = process_curing_tick(state, ctx, now=60.0)
    assert state.inventory[0].quality_score == pytest.approx(1.6)


def test_natural_curing_never_lowers_quality(ctx, fresh_state):
    state, _ = start_curing(fresh_state, ctx, 10, 1.7, now=0.0)
    state = process_curing_tick(state, ctx, now=60.0)
    assert state.inventory[0].quality_score == pytest.approx(1.7)


def test_spoiling_and_rushing_never_raise_quality(ctx, fresh_state):
    state, _ = start_curing(fresh_state, ctx, 10, 0.3, now=0.0)
    state = process_curing_tick(state, ctx, now=60.0 + 31.0)
    assert state.inventory[0].quality_score == pytest.approx(0.3)

    state, batch = start_curing(fresh_state, ctx, 10, 0.4, now=0.0)
    _, result = rush_curing(state, ctx, batch.id)
    assert result.value.quality_score == pytest.approx(0.4)


@pytest.mark.parametrize("score", [0.2, 0.52, 1.0, 1.58, 1.7])
def test_spoiled_batch_never_beats_fresh_one(ctx, fresh_state, score):
    state, _ = start_curing(fresh_state, ctx, 10, score, now=0.0)
    fresh = process_curing_tick(state, ctx, now=60.0).inventory[0]
    spoiled = process_curing_tick(state, ctx, now=60.0 + 31.0).inventory[0]
    assert spoiled.quality_score <= fresh.quality_score


def test_rush_curing_penalty(ctx, fresh_state, recorded):
    events = recorded(CuringCompletedEvent)
    state, batch = start_curing(fresh_state, ctx, 25, 1.0, now=0.0)

    state, result = rush_curing(state, ctx, batch.id)

    item = result.value
    assert item.quality_score == pytest.approx(0.9)
    assert item.tier is QualityTier.C
    assert state.curing == ()
    assert state.buds == fresh_state.buds + 25
    assert events[0].rushed is True

    _, missing = rush_curing(state, ctx, batch.id)
    assert missing.error is FailureReason.UNKNOWN_BATCH


def test_curing_duration_climate_control_and_floor(ctx, fresh_state):
    assert curing_duration(fresh_state, ctx) == pytest.approx(60.0)
    upgraded = replace(fresh_state, upgrades={"climate-control": 3})
    assert curing_duration(upgraded, ctx) == pytest.approx(60.0 * (1 - 3 * 0.08))

    ctx.config.curing.min_duration = 50.0
    assert curing_duration(upgraded, ctx) == pytest.approx(50.0)


def test_curing_duration_scaled_by_event(ctx, fresh_state):
    foggy = replace(fresh_state, event=ActiveEvent("mystic-fog", 0.0, 60.0))
    assert curing_duration(foggy, ctx) == pytest.approx(72.0)


@pytest.mark.parametrize(
    "score,tier,multiplier",
    [
        (2.4, QualityTier.S, 1.5),
        (1.25, QualityTier.S, 1.5),
        (1.2, QualityTier.A, 1.25),
        (1.0, QualityTier.B, 1.0),
        (0.9, QualityTier.C, 0.85),
        (0.1, QualityTier.C, 0.85),
    ],
)
def test_tier_table(score, tier, multiplier):
    assert tier_for_score(score) == (tier, multiplier)
