"""Planting and the phase state machine."""

from dataclasses import replace

import pytest

from growsim.catalog.types import SoilType
from growsim.events import PhaseAdvancedEvent
from growsim.plants import advance_plant_phases, is_harvest_ready, plant_seed
from growsim.plants.modifiers import phase_threshold, time_multiplier
from growsim.result import FailureReason
from growsim.state import ActiveEvent


def test_plant_seed_charges_seed_and_soil(ctx, fresh_state):
    state, result = plant_seed(fresh_state, ctx, 0, "green-gelato", SoilType.LIGHT_MIX, now=12.0)

    assert result.is_ok()
    plant = state.plant_at(0)
    assert plant.id == result.value
    assert plant.strain_id == "green-gelato"
    assert plant.phase == 0
    assert plant.planted_at == 12.0
    assert plant.modifiers.soil is SoilType.LIGHT_MIX
    assert state.nugs == fresh_state.nugs - 50 - 20


def test_plant_seed_derives_terpenes_from_strain(ctx, fresh_state):
    state, _ = plant_seed(fresh_state, ctx, 0, "blue-zushi")

    terpenes = state.plant_at(0).modifiers.terpenes
    assert set(terpenes) == {"linalool", "terpinolene", "pinene"}


def test_plant_seed_discovers_new_strain(ctx, fresh_state):
    assert "blue-zushi" not in fresh_state.discovered_strains
    state, _ = plant_seed(fresh_state, ctx, 0, "blue-zushi")
    assert "blue-zushi" in state.discovered_strains


@pytest.mark.parametrize(
    "slot,strain_id,nugs,reason",
    [
        (9, "green-gelato", 1000, FailureReason.UNKNOWN_SLOT),
        (0, "no-such-strain", 1000, FailureReason.UNKNOWN_STRAIN),
        (0, "black-muffin", 100, FailureReason.INSUFFICIENT_FUNDS),
    ],
)
def test_plant_seed_refusals_leave_state_untouched(ctx, fresh_state, slot, strain_id, nugs, reason):
    state = replace(fresh_state, nugs=nugs)
    new_state, result = plant_seed(state, ctx, slot, strain_id)

    assert result.is_err()
    assert result.error is reason
    assert new_state is state


def test_plant_seed_rejects_occupied_slot(ctx, fresh_state, grow):
    state = grow(fresh_state, slot=0)
    new_state, result = plant_seed(state, ctx, 0, "green-gelato")
    assert result.error is FailureReason.SLOT_OCCUPIED
    assert new_state is state


def test_phase_advances_after_threshold(ctx, fresh_state, grow, recorded):
    events = recorded(PhaseAdvancedEvent)
    state = grow(fresh_state, slot=0)

    state = advance_plant_phases(state, ctx, tick_size=6.0)
    assert state.plant_at(0).phase == 0
    assert state.plant_at(0).elapsed == pytest.approx(6.0)

    state = advance_plant_phases(state, ctx, tick_size=6.0)
    plant = state.plant_at(0)
    assert plant.phase == 1
    assert plant.elapsed == 0.0
    assert events == [PhaseAdvancedEvent(slot=0, plant_id=plant.id, phase=1)]


def test_plant_advances_at_most_one_phase_per_tick(ctx, fresh_state, grow):
    state = grow(fresh_state, slot=0)
    state = advance_plant_phases(state, ctx, tick_size=1000.0)
    assert state.plant_at(0).phase == 1


def test_terminal_phase_caps_elapsed_and_becomes_ready(ctx, fresh_state, grow):
    terminal = ctx.catalog.terminal_phase
    state = grow(fresh_state, slot=0, phase=terminal)
    assert not is_harvest_ready(state, ctx, 0)

    state = advance_plant_phases(state, ctx, tick_size=100.0)
    plant = state.plant_at(0)
    assert plant.phase == terminal
    assert plant.elapsed == pytest.approx(phase_threshold(state, ctx, plant, ctx.catalog.strains["green-gelato"]))
    assert is_harvest_ready(state, ctx, 0)


def test_non_positive_tick_is_a_no_op(ctx, fresh_state, grow):
    state = grow(fresh_state, slot=0)
    assert advance_plant_phases(state, ctx, tick_size=0.0) is state


def test_time_multiplier_is_clamped(ctx, fresh_state, grow):
    state = grow(fresh_state, slot=0)
    state = replace(state, upgrades={"led-panel": 3, "climate-control": 3, "oscillating-fan": 2})
    plant = state.plant_at(0)
    strain = ctx.catalog.strains["gelato-auto"]

    assert time_multiplier(state, ctx, plant, strain) == pytest.approx(ctx.config.growth.time_multiplier_min)


def test_global_event_slows_growth(ctx, fresh_state, grow):
    state = grow(fresh_state, slot=0)
    plant = state.plant_at(0)
    strain = ctx.catalog.strains["green-gelato"]
    foggy = replace(state, event=ActiveEvent("mystic-fog", started_at=0.0, ends_at=60.0))

    assert time_multiplier(foggy, ctx, plant, strain) == pytest.approx(1.2)
    assert time_multiplier(state, ctx, plant, strain) == pytest.approx(1.0)
