"""Water, fertilize, training and enhancer actions."""

from dataclasses import replace

import pytest

from growsim.plants import CareAction, apply_enhancer, apply_training, fertilize, remaining_cooldown, water
from growsim.result import FailureReason


def test_water_outside_recommended_phase_costs_quality(ctx, fresh_state, grow):
    state = grow(fresh_state, phase=0)
    state, result = water(state, ctx, 0, now=100.0)

    assert result.is_ok()
    assert result.unwrap().quality_delta == pytest.approx(-0.05)
    plant = state.plant_at(0)
    assert plant.modifiers.quality == pytest.approx(0.95)
    assert plant.modifiers.water_stacks == 1
    assert plant.modifiers.last_water_at == 100.0
    assert state.nugs == fresh_state.nugs - 5
    assert state.stats.total_waterings == 1


def test_water_in_recommended_phase_adds_quality_and_skill(ctx, fresh_state, grow):
    state = grow(fresh_state, phase=1)
    state, result = water(state, ctx, 0, skill_bonus=0.2, now=0.0)
    assert result.value.quality == pytest.approx(1.0 + 0.10 + 0.2)


def test_water_cooldown_blocks_second_watering(ctx, fresh_state, grow):
    state = grow(fresh_state, phase=1)
    state, _ = water(state, ctx, 0, now=0.0)

    assert remaining_cooldown(state, ctx, 0, CareAction.WATER, 5.0) == pytest.approx(10.0)
    blocked, result = water(state, ctx, 0, now=5.0)
    assert result.error is FailureReason.COOLDOWN
    assert blocked is state


def test_perfect_timing_bonus_inside_window(ctx, fresh_state, grow):
    state = grow(fresh_state, phase=1)
    state, _ = water(state, ctx, 0, now=0.0)
    state, result = water(state, ctx, 0, now=16.0)

    assert result.value.perfect is True
    assert result.value.quality_delta == pytest.approx(0.10 + 0.05)
    assert state.stats.perfect_waterings == 1
    assert state.stats.water_chain == 1


def test_late_watering_is_not_perfect_and_resets_chain(ctx, fresh_state, grow):
    state = grow(fresh_state, phase=1)
    state = replace(state, stats=replace(state.stats, water_chain=4, best_water_chain=4))
    state, _ = water(state, ctx, 0, now=0.0)
    state, result = water(state, ctx, 0, now=40.0)

    assert result.value.perfect is False
    assert state.stats.water_chain == 0
    assert state.stats.best_water_chain == 4


def test_water_stack_cap(ctx, fresh_state, grow):
    state = grow(fresh_state, water_stacks=5)
    new_state, result = water(state, ctx, 0, now=0.0)
    assert result.error is FailureReason.MAX_WATER
    assert new_state is state


def test_water_requires_plant_and_funds(ctx, fresh_state, grow):
    _, result = water(fresh_state, ctx, 0)
    assert result.error is FailureReason.EMPTY_SLOT
    with pytest.raises(ValueError):
        result.unwrap()

    broke = replace(grow(fresh_state), nugs=4)
    _, result = water(broke, ctx, 0)
    assert result.error is FailureReason.INSUFFICIENT_FUNDS


def test_quality_never_exceeds_cap(ctx, fresh_state, grow):
    state = grow(fresh_state, phase=1, quality=2.98)
    state, result = water(state, ctx, 0, skill_bonus=0.5)

    assert result.value.quality == pytest.approx(ctx.config.growth.quality_max)
    assert result.value.quality_delta == pytest.approx(0.02)


def test_fertilize_in_recommended_phase(scripted_ctx, fresh_state, grow):
    ctx = scripted_ctx(0.99)
    state = grow(fresh_state, phase=2)
    state, result = fertilize(state, ctx, 0, now=0.0)

    assert result.value.quality_delta == pytest.approx(0.15)
    assert state.plant_at(0).modifiers.fertilizer_applied is True
    assert state.nugs == fresh_state.nugs - 15


def test_fertilize_burn_roll(scripted_ctx, fresh_state, grow):
    # green-gelato has nutrient sensitivity 0.3
    ctx = scripted_ctx(0.1)
    state = grow(fresh_state, phase=2)
    state, result = fertilize(state, ctx, 0)
    assert result.value.quality_delta == pytest.approx(-0.10)


def test_fertilizer_safety_upgrade_prevents_burn(scripted_ctx, fresh_state, grow):
    ctx = scripted_ctx(0.1)
    state = replace(grow(fresh_state, phase=2), upgrades={"premium-nutrients": 2})
    state, result = fertilize(state, ctx, 0)
    assert result.value.quality_delta == pytest.approx(0.15)


def test_fertilize_wrong_phase_and_one_shot(ctx, fresh_state, grow):
    state = grow(fresh_state, phase=0)
    state, result = fertilize(state, ctx, 0, now=0.0)
    assert result.value.quality_delta == pytest.approx(-0.05)

    _, again = fertilize(state, ctx, 0, now=100.0)
    assert again.error is FailureReason.ALREADY_APPLIED


def test_training_full_success_never_stresses(scripted_ctx, fresh_state, grow):
    ctx = scripted_ctx(0.0)
    state = grow(fresh_state, phase=2)
    state, result = apply_training(state, ctx, 0, "topping", 1.0, now=5.0)

    assert result.value.quality_delta == pytest.approx(0.1)
    record = state.plant_at(0).modifiers.training[-1]
    assert record.technique_id == "topping"
    assert record.success_level == 1.0
    assert state.nugs == fresh_state.nugs - 30

    _, again = apply_training(state, ctx, 0, "topping", 1.0, now=50.0)
    assert again.error is FailureReason.ALREADY_APPLIED


def test_training_stress_roll_at_low_success(scripted_ctx, fresh_state, grow):
    # stress chance = 0.25 x (1 - 0.2) = 0.2
    ctx = scripted_ctx(0.1)
    state = grow(fresh_state, phase=3)
    _, result = apply_training(state, ctx, 0, "defoliation", 0.2)
    assert result.value.quality_delta == pytest.approx(-0.03)


def test_training_gates(ctx, fresh_state, grow):
    state = grow(fresh_state, phase=0)
    _, result = apply_training(state, ctx, 0, "lst", 1.0)
    assert result.error is FailureReason.WRONG_PHASE

    _, result = apply_training(state, ctx, 0, "helicopter", 1.0)
    assert result.error is FailureReason.UNKNOWN_TECHNIQUE


def test_repeatable_training_respects_cooldown(scripted_ctx, fresh_state, grow):
    ctx = scripted_ctx(0.99, 0.99)
    state = grow(fresh_state, phase=2)
    state, _ = apply_training(state, ctx, 0, "lst", 1.0, now=0.0)

    _, early = apply_training(state, ctx, 0, "lst", 1.0, now=10.0)
    assert early.error is FailureReason.COOLDOWN
    _, later = apply_training(state, ctx, 0, "lst", 1.0, now=30.0)
    assert later.is_ok()


def test_enhancer_applies_penalty_once(ctx, fresh_state, grow):
    state = grow(fresh_state)
    state, result = apply_enhancer(state, ctx, 0, "sugar-water")

    assert result.value.quality == pytest.approx(0.9)
    assert state.plant_at(0).modifiers.enhancers == ("sugar-water",)
    assert state.nugs == fresh_state.nugs - 30

    _, again = apply_enhancer(state, ctx, 0, "sugar-water")
    assert again.error is FailureReason.ALREADY_APPLIED
    _, unknown = apply_enhancer(state, ctx, 0, "snake-oil")
    assert unknown.error is FailureReason.UNKNOWN_ENHANCER


def test_research_discounts_water_and_fertilizer(scripted_ctx, fresh_state, grow):
    ctx = scripted_ctx(0.99)
    state = grow(fresh_state, phase=2)
    state = replace(state, research=replace(state.research, completed=("drip-irrigation", "living-soil")))

    state, _ = water(state, ctx, 0, now=0.0)
    assert state.nugs == fresh_state.nugs - 4
    state, _ = fertilize(state, ctx, 0, now=0.0)
    assert state.nugs == fresh_state.nugs - 4 - 11

    broke = replace(grow(fresh_state, phase=2), nugs=4)
    broke = replace(broke, research=replace(broke.research, completed=("drip-irrigation",)))
    _, result = water(broke, ctx, 0)
    assert result.is_ok()


@pytest.mark.parametrize(
    "action,phase,quality,roll,expected",
    [
        (lambda s, c: fertilize(s, c, 0), 2, 2.95, 0.99, 3.0),
        (lambda s, c: fertilize(s, c, 0), 2, 0.35, 0.1, 0.3),
        (lambda s, c: apply_training(s, c, 0, "topping", 1.0), 2, 2.98, 0.0, 3.0),
        (lambda s, c: apply_training(s, c, 0, "defoliation", 0.2), 3, 0.31, 0.1, 0.3),
        (lambda s, c: apply_enhancer(s, c, 0, "pgr-paclobutrazol"), 2, 0.4, 0.5, 0.3),
    ],
    ids=["fertilize-cap", "burn-floor", "topping-cap", "stress-floor", "enhancer-floor"],
)
def test_care_actions_keep_quality_in_bounds(scripted_ctx, fresh_state, grow, action, phase, quality, roll, expected):
    ctx = scripted_ctx(roll)
    state = grow(fresh_state, phase=phase, quality=quality)
    state, result = action(state, ctx)

    assert result.value.quality == pytest.approx(expected)
    assert result.value.quality_delta == pytest.approx(expected - quality)
    assert state.plant_at(0).modifiers.quality == pytest.approx(expected)
