"""Pest outbreaks: probabilistic infestation, progression and treatment."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, List, Tuple

from growsim.config import growth as growth_constants
from growsim.context import SimContext
from growsim.events import PestOutbreakEvent
from growsim.plants.modifiers import clamp_quality, pest_protection, plant_phenotype
from growsim.result import FailureReason, Result, fail, ok
from growsim.state import GameState, PestInfestation, Plant
from growsim.util.rng import require_rng

logger = logging.getLogger(__name__)


def infestation_chance(state: GameState, ctx: SimContext, plant: Plant, pest_id: str) -> float:
    """Per-check probability that ``pest_id`` settles on ``plant``."""
    pest = ctx.catalog.pests[pest_id]
    chance = pest.base_chance * (1.0 - pest_protection(state, ctx.catalog)) * state.settings.pest_frequency
    phenotype = plant_phenotype(plant, ctx.catalog)
    if phenotype is not None:
        chance *= 1.0 - phenotype.resistance_bonus
    return max(0.0, chance)


def _sync_plant_links(state: GameState, infestations: Tuple[PestInfestation, ...]) -> GameState:
    """Rewrite every plant's infestation id list from the global table."""
    by_plant: Dict[str, List[str]] = {}
    for infestation in infestations:
        by_plant.setdefault(infestation.plant_id, []).append(infestation.id)
    slots = []
    for plant in state.slots:
        if plant is None:
            slots.append(None)
            continue
        linked = tuple(by_plant.get(plant.id, ()))
        if linked != plant.modifiers.infestations:
            plant = replace(plant, modifiers=replace(plant.modifiers, infestations=linked))
        slots.append(plant)
    return replace(state, slots=tuple(slots), infestations=infestations)


def _progress_infestations(state: GameState, ctx: SimContext) -> GameState:
    rng = require_rng(ctx, "pests.progress")
    slots = list(state.slots)
    remaining = []
    for infestation in state.infestations:
        plant = slots[infestation.slot] if infestation.slot < len(slots) else None
        if plant is None or plant.id != infestation.plant_id:
            continue
        if infestation.treated:
            severity = infestation.severity * 0.5
        elif rng.random() < growth_constants.PEST_SELF_RESOLVE_CHANCE:
            logger.debug("Infestation %s resolved on its own", infestation.id)
            continue
        else:
            pest = ctx.catalog.pests.get(infestation.pest_id)
            spread = pest.spread_rate if pest is not None else 0.0
            damage = pest.damage_per_tick if pest is not None else 0.0
            severity = min(100.0, infestation.severity + spread * growth_constants.PEST_SPREAD_SCALE)
            loss = damage * severity / 100.0 * growth_constants.PEST_DAMAGE_SCALE
            quality = clamp_quality(plant.modifiers.quality - loss, ctx.config.growth)
            plant = replace(plant, modifiers=replace(plant.modifiers, quality=quality))
            slots[infestation.slot] = plant
        if severity < growth_constants.PEST_RESOLVED_SEVERITY:
            continue
        remaining.append(replace(infestation, severity=severity))
    state = replace(state, slots=tuple(slots))
    return _sync_plant_links(state, tuple(remaining))


def check_for_pests(state: GameState, ctx: SimContext, now: float = 0.0) -> GameState:
    """Slow tick: progress existing infestations, then roll new ones.

    Each planted slot rolls once per pest type it does not already carry.
    """
    state = _progress_infestations(state, ctx)
    rng = require_rng(ctx, "pests.check_for_pests")
    infestations = list(state.infestations)
    outbreaks = []
    for slot, plant in enumerate(state.slots):
        if plant is None:
            continue
        present = {i.pest_id for i in infestations if i.plant_id == plant.id}
        for pest_id in ctx.catalog.pests:
            if pest_id in present:
                continue
            if rng.random() >= infestation_chance(state, ctx, plant, pest_id):
                continue
            severity = rng.random() * growth_constants.PEST_SEVERITY_SPREAD + growth_constants.PEST_SEVERITY_MIN
            state, infestation_id = state.allocate_id("infestation")
            infestation = PestInfestation(
                id=infestation_id,
                pest_id=pest_id,
                slot=slot,
                plant_id=plant.id,
                severity=round(severity, 2),
                detected_at=now,
            )
            infestations.append(infestation)
            outbreaks.append(infestation)
    if not outbreaks:
        return state
    state = _sync_plant_links(state, tuple(infestations))
    for infestation in outbreaks:
        logger.info("Pest outbreak: %s on slot %d", infestation.pest_id, infestation.slot)
        ctx.emit(
            PestOutbreakEvent(
                infestation_id=infestation.id,
                pest_id=infestation.pest_id,
                slot=infestation.slot,
                severity=infestation.severity,
            )
        )
    return state


def treat_infestation(
    state: GameState,
    ctx: SimContext,
    infestation_id: str,
    treatment_id: str,
) -> Tuple[GameState, Result[bool, FailureReason]]:
    """Apply a treatment; Ok(True) when it wiped the infestation out.

    A failed roll still halves the severity and marks the infestation
    treated, so it keeps shrinking on later pest checks.
    """
    infestation = next((i for i in state.infestations if i.id == infestation_id), None)
    if infestation is None:
        return state, fail(FailureReason.UNKNOWN_INFESTATION)
    treatment = ctx.catalog.treatments.get(treatment_id)
    if treatment is None:
        return state, fail(FailureReason.UNKNOWN_TREATMENT)
    if not treatment.treats(infestation.pest_id):
        return state, fail(FailureReason.INEFFECTIVE_TREATMENT)
    if state.nugs < treatment.price:
        return state, fail(FailureReason.INSUFFICIENT_FUNDS)

    rng = require_rng(ctx, "pests.treat_infestation")
    cured = rng.random() < treatment.effectiveness
    others = tuple(i for i in state.infestations if i.id != infestation_id)
    if cured:
        infestations = others
    else:
        updated = replace(infestation, severity=infestation.severity * 0.5, treated=True)
        infestations = others + (updated,)
    state = replace(state, nugs=state.nugs - treatment.price)
    state = _sync_plant_links(state, infestations)
    logger.debug("Treatment %s on %s: cured=%s", treatment_id, infestation_id, cured)
    return state, ok(cured)
