"""Derived multipliers that feed the growth and care formulas.

These read upgrades, research, phenotype, mutation and the active global
event; every composite is clamped before it is returned.
"""

from __future__ import annotations

from typing import Optional

from growsim.catalog import Catalog
from growsim.catalog.types import Phenotype, SoilType, Strain, UpgradeEffect
from growsim.config import GrowthConfig
from growsim.config import growth as growth_constants
from growsim.research.bonuses import research_bonuses
from growsim.state import GameState, Plant
from growsim.util.math_utils import clamp
from growsim.world_events import active_event_preset


def clamp_quality(value: float, config: GrowthConfig) -> float:
    return clamp(value, config.quality_min, config.quality_max)


def plant_phenotype(plant: Plant, catalog: Catalog) -> Optional[Phenotype]:
    if plant.modifiers.phenotype_id is None:
        return None
    return catalog.phenotypes.get(plant.modifiers.phenotype_id)


def soil_time_multiplier(catalog: Catalog, soil: SoilType) -> float:
    return catalog.soil(soil).time_multiplier


def time_reduction(state: GameState, ctx) -> float:
    """Permanent growth-time reduction from upgrades plus research."""
    upgrades = ctx.catalog.upgrade_effect_total(state.upgrades, UpgradeEffect.TIME_REDUCTION)
    return upgrades + research_bonuses(state, ctx).time_reduction


def time_multiplier(state: GameState, ctx, plant: Plant, strain: Strain) -> float:
    """Composite growth-time multiplier for one plant (lower grows faster)."""
    multiplier = strain.time_multiplier
    if strain.mutation is not None:
        multiplier *= strain.mutation.time_multiplier()
    phenotype = plant_phenotype(plant, ctx.catalog)
    if phenotype is not None:
        multiplier *= 1.0 - phenotype.speed_bonus
    multiplier *= max(0.0, 1.0 - time_reduction(state, ctx))
    event = active_event_preset(state, ctx.catalog)
    if event is not None:
        multiplier *= event.growth_multiplier
    growth = ctx.config.growth
    return clamp(multiplier, growth.time_multiplier_min, growth.time_multiplier_max)


def phase_threshold(state: GameState, ctx, plant: Plant, strain: Strain) -> float:
    """Seconds the plant must spend in its current phase before advancing."""
    phase = ctx.catalog.phase(plant.phase)
    return (
        phase.duration
        * time_multiplier(state, ctx, plant, strain)
        * soil_time_multiplier(ctx.catalog, plant.modifiers.soil)
    )


def water_bonus(state: GameState, catalog: Catalog) -> float:
    return catalog.upgrade_effect_total(state.upgrades, UpgradeEffect.WATER_BONUS)


def fertilizer_safety(state: GameState, catalog: Catalog) -> float:
    return clamp(catalog.upgrade_effect_total(state.upgrades, UpgradeEffect.FERTILIZER_SAFETY), 0.0, 1.0)


def pest_protection(state: GameState, catalog: Catalog) -> float:
    total = catalog.upgrade_effect_total(state.upgrades, UpgradeEffect.PEST_PROTECTION)
    return min(growth_constants.PEST_PROTECTION_CAP, total)


def perfect_window(state: GameState, ctx) -> float:
    """Length of the perfect-timing window, overridden by an active event."""
    event = active_event_preset(state, ctx.catalog)
    if event is not None and event.perfect_window is not None:
        return event.perfect_window
    return ctx.config.growth.perfect_window
