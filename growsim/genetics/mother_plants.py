"""Mother plants: keep a strain (and phenotype) around for cheap clones."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Tuple

from growsim.catalog.types import SoilType
from growsim.context import SimContext
from growsim.plants.growth import place_plant
from growsim.research.bonuses import research_bonuses
from growsim.result import FailureReason, Result, fail, ok
from growsim.state import GameState, MotherPlant, resolve_strain

logger = logging.getLogger(__name__)


def create_mother_plant(
    state: GameState,
    ctx: SimContext,
    strain_id: str,
    phenotype_id: Optional[str] = None,
    now: float = 0.0,
) -> Tuple[GameState, Result[MotherPlant, FailureReason]]:
    if resolve_strain(state, ctx.catalog, strain_id) is None:
        return state, fail(FailureReason.UNKNOWN_STRAIN)
    if phenotype_id is not None and phenotype_id not in ctx.catalog.phenotypes:
        return state, fail(FailureReason.UNKNOWN_PHENOTYPE)
    cost = research_bonuses(state, ctx).discounted("mother_plants", ctx.config.breeding.mother_plant_cost)
    if state.nugs < cost:
        return state, fail(FailureReason.INSUFFICIENT_FUNDS)

    state, mother_id = state.allocate_id("mother")
    mother = MotherPlant(
        id=mother_id,
        strain_id=strain_id,
        acquired_at=now,
        max_clones=ctx.config.breeding.max_clones,
        phenotype_id=phenotype_id,
    )
    state = replace(state, nugs=state.nugs - cost, mother_plants=state.mother_plants + (mother,))
    logger.debug("Mother plant %s created for %s", mother_id, strain_id)
    return state, ok(mother)


def take_clone(
    state: GameState,
    ctx: SimContext,
    mother_id: str,
    slot: int,
    soil: SoilType = SoilType.BASIC,
    now: float = 0.0,
) -> Tuple[GameState, Result[str, FailureReason]]:
    """Plant a clone of a mother plant into an empty slot. Returns the plant id."""
    mother = next((m for m in state.mother_plants if m.id == mother_id), None)
    if mother is None:
        return state, fail(FailureReason.UNKNOWN_MOTHER)
    if mother.clones_remaining <= 0:
        return state, fail(FailureReason.CLONE_LIMIT)
    if not state.has_slot(slot):
        return state, fail(FailureReason.UNKNOWN_SLOT)
    if state.plant_at(slot) is not None:
        return state, fail(FailureReason.SLOT_OCCUPIED)
    strain = resolve_strain(state, ctx.catalog, mother.strain_id)
    if strain is None:
        return state, fail(FailureReason.UNKNOWN_STRAIN)
    clone_cost = research_bonuses(state, ctx).discounted("mother_plants", ctx.config.breeding.clone_cost)
    cost = clone_cost + ctx.catalog.soil(soil).cost
    if state.nugs < cost:
        return state, fail(FailureReason.INSUFFICIENT_FUNDS)

    mothers = tuple(
        replace(m, clones_taken=m.clones_taken + 1) if m.id == mother_id else m for m in state.mother_plants
    )
    state = replace(state, nugs=state.nugs - cost, mother_plants=mothers)
    state, plant = place_plant(state, ctx, slot, strain, soil, now, phenotype_id=mother.phenotype_id)
    return state, ok(plant.id)
