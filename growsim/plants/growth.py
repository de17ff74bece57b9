"""Plant growth state machine: planting and phase progression.

A plant walks through the catalog phases in order. Every growth tick adds
``tick_size`` to the time spent in the current phase; once that reaches
the phase threshold the plant moves to the next phase with elapsed reset
to zero. The last phase is terminal: the plant stays there, accumulating
time up to its threshold, until it is harvested.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Tuple

from growsim.catalog.types import SoilType, Specialization, Strain
from growsim.context import SimContext
from growsim.events import PhaseAdvancedEvent
from growsim.plants.modifiers import clamp_quality, phase_threshold, plant_phenotype
from growsim.plants.terpenes import derive_terpene_profile
from growsim.research.bonuses import research_bonuses
from growsim.result import FailureReason, Result, fail, ok
from growsim.state import Environment, GameState, Plant, PlantModifiers, resolve_strain
from growsim.util.rng import require_rng

logger = logging.getLogger(__name__)


def seed_environment(ctx: SimContext) -> Environment:
    """Micro-environment for a fresh plant, scattered around the defaults."""
    rng = require_rng(ctx, "growth.seed_environment")
    return Environment(
        ph=round(6.0 + rng.uniform(-0.2, 0.2), 2),
        ec=round(1.2 + rng.uniform(-0.2, 0.2), 2),
        humidity=round(60.0 + rng.uniform(-5.0, 5.0), 1),
        temperature=round(24.0 + rng.uniform(-1.0, 1.0), 1),
    )


def place_plant(
    state: GameState,
    ctx: SimContext,
    slot: int,
    strain: Strain,
    soil: SoilType,
    now: float,
    phenotype_id: Optional[str] = None,
) -> Tuple[GameState, Plant]:
    """Put a new plant into an empty slot without charging for it."""
    state, plant_id = state.allocate_id("plant")
    environment = seed_environment(ctx)
    terpenes = derive_terpene_profile(
        strain.terpenes,
        environment.temperature,
        environment.humidity,
        state.environment.light_cycle,
        research_bonuses(state, ctx).terpene_boost,
    )
    plant = Plant(
        id=plant_id,
        strain_id=strain.id,
        planted_at=now,
        modifiers=PlantModifiers(soil=soil, terpenes=terpenes, phenotype_id=phenotype_id),
        environment=environment,
    )
    phenotype = plant_phenotype(plant, ctx.catalog)
    if phenotype is not None and phenotype.quality_bonus:
        quality = clamp_quality(1.0 + phenotype.quality_bonus, ctx.config.growth)
        plant = replace(plant, modifiers=replace(plant.modifiers, quality=quality))
    if strain.id not in state.discovered_strains:
        state = replace(state, discovered_strains=state.discovered_strains + (strain.id,))
    return state.with_plant(slot, plant), plant


def plant_seed(
    state: GameState,
    ctx: SimContext,
    slot: int,
    strain_id: str,
    soil: SoilType = SoilType.BASIC,
    now: float = 0.0,
) -> Tuple[GameState, Result[str, FailureReason]]:
    """Buy a seed plus soil and plant it into an empty slot.

    Returns:
        (new_state, Ok(plant_id)) or (state, Err(reason))
    """
    if not state.has_slot(slot):
        return state, fail(FailureReason.UNKNOWN_SLOT)
    if state.plant_at(slot) is not None:
        return state, fail(FailureReason.SLOT_OCCUPIED)
    strain = resolve_strain(state, ctx.catalog, strain_id)
    if strain is None:
        logger.debug("plant_seed: unknown strain %s", strain_id)
        return state, fail(FailureReason.UNKNOWN_STRAIN)
    cost = strain.seed_price + ctx.catalog.soil(soil).cost
    if state.nugs < cost:
        return state, fail(FailureReason.INSUFFICIENT_FUNDS)

    state = replace(state, nugs=state.nugs - cost)
    state, plant = place_plant(state, ctx, slot, strain, soil, now)
    logger.debug("Planted %s (%s) in slot %d for %d nugs", plant.id, strain.id, slot, cost)
    return state, ok(plant.id)


def is_harvest_ready(state: GameState, ctx: SimContext, slot: int) -> bool:
    """True when the slot's plant sits in the terminal phase with its time served."""
    plant = state.plant_at(slot)
    if plant is None or plant.phase < ctx.catalog.terminal_phase:
        return False
    strain = resolve_strain(state, ctx.catalog, plant.strain_id)
    if strain is None:
        return True
    return plant.elapsed >= phase_threshold(state, ctx, plant, strain)


def _automation_refertilizes(state: GameState, ctx: SimContext, slot: int) -> bool:
    if slot >= len(state.automation):
        return False
    automation = state.automation[slot]
    if not automation.enabled or automation.employee_id is None:
        return False
    employee = ctx.catalog.employees.get(automation.employee_id)
    return employee is not None and employee.specialization.covers(Specialization.FERTILIZING)


def advance_plant_phases(state: GameState, ctx: SimContext, tick_size: float = 1.0) -> GameState:
    """Growth tick: add ``tick_size`` seconds to every plant and advance phases.

    A plant advances at most one phase per tick. When an automated slot
    enters a new phase, its one-shot fertilizer flag is reset so the
    assigned employee can feed again.
    """
    if tick_size <= 0:
        return state
    terminal = ctx.catalog.terminal_phase
    slots = list(state.slots)
    advanced = []
    for slot, plant in enumerate(slots):
        if plant is None:
            continue
        strain = resolve_strain(state, ctx.catalog, plant.strain_id)
        if strain is None:
            continue
        threshold = phase_threshold(state, ctx, plant, strain)
        elapsed = plant.elapsed + tick_size
        if plant.phase >= terminal:
            slots[slot] = replace(plant, elapsed=min(elapsed, threshold))
            continue
        if elapsed >= threshold:
            modifiers = plant.modifiers
            if _automation_refertilizes(state, ctx, slot):
                modifiers = replace(modifiers, fertilizer_applied=False)
            slots[slot] = replace(plant, phase=plant.phase + 1, elapsed=0.0, modifiers=modifiers)
            advanced.append((slot, plant.id, plant.phase + 1))
        else:
            slots[slot] = replace(plant, elapsed=elapsed)

    new_state = replace(state, slots=tuple(slots))
    for slot, plant_id, phase in advanced:
        logger.debug("Plant %s in slot %d advanced to phase %d", plant_id, slot, phase)
        ctx.emit(PhaseAdvancedEvent(slot=slot, plant_id=plant_id, phase=phase))
    return new_state
