"""Grow-room environment: targets, per-plant drift and light cycle."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, Optional, Tuple, Union

from growsim.catalog.types import EnvParameter, LightCycle
from growsim.config import growth as growth_constants
from growsim.context import SimContext
from growsim.exceptions import SimulationError
from growsim.plants.terpenes import derive_terpene_profile
from growsim.research.bonuses import research_bonuses
from growsim.result import FailureReason, Result, fail, ok
from growsim.state import Environment, GameState, Plant, resolve_strain
from growsim.util.math_utils import clamp
from growsim.util.rng import require_rng

logger = logging.getLogger(__name__)

# (min, max) bounds per parameter
PARAMETER_BOUNDS: Dict[EnvParameter, Tuple[float, float]] = {
    EnvParameter.PH: (4.0, 8.0),
    EnvParameter.EC: (0.5, 3.0),
    EnvParameter.HUMIDITY: (30.0, 80.0),
    EnvParameter.TEMPERATURE: (15.0, 35.0),
    EnvParameter.CO2: (300.0, 1500.0),
}

DRIFT_STEP: Dict[EnvParameter, float] = {
    EnvParameter.PH: growth_constants.PH_DRIFT,
    EnvParameter.EC: growth_constants.EC_DRIFT,
    EnvParameter.HUMIDITY: growth_constants.HUMIDITY_DRIFT,
    EnvParameter.TEMPERATURE: growth_constants.TEMPERATURE_DRIFT,
}

# Attribute name on Environment / GlobalEnvironment
_FIELD = {
    EnvParameter.PH: "ph",
    EnvParameter.EC: "ec",
    EnvParameter.HUMIDITY: "humidity",
    EnvParameter.TEMPERATURE: "temperature",
    EnvParameter.CO2: "co2",
}

# Optimal ranges per phase name: parameter -> (min, max)
PHASE_OPTIMAL_ENV: Dict[str, Dict[EnvParameter, Tuple[float, float]]] = {
    "germination": {EnvParameter.PH: (6.0, 6.5), EnvParameter.EC: (0.4, 0.8),
                    EnvParameter.HUMIDITY: (70, 90), EnvParameter.TEMPERATURE: (22, 26)},
    "seedling": {EnvParameter.PH: (5.8, 6.3), EnvParameter.EC: (0.6, 1.0),
                 EnvParameter.HUMIDITY: (65, 80), EnvParameter.TEMPERATURE: (20, 25)},
    "veg": {EnvParameter.PH: (5.8, 6.5), EnvParameter.EC: (1.2, 2.0),
            EnvParameter.HUMIDITY: (50, 70), EnvParameter.TEMPERATURE: (22, 28)},
    "preflower": {EnvParameter.PH: (6.0, 6.5), EnvParameter.EC: (1.4, 2.2),
                  EnvParameter.HUMIDITY: (45, 60), EnvParameter.TEMPERATURE: (20, 26)},
    "flower": {EnvParameter.PH: (6.0, 6.5), EnvParameter.EC: (1.6, 2.4),
               EnvParameter.HUMIDITY: (40, 50), EnvParameter.TEMPERATURE: (20, 26)},
    "harvest": {EnvParameter.PH: (6.0, 6.5), EnvParameter.EC: (0.4, 0.8),
                EnvParameter.HUMIDITY: (45, 55), EnvParameter.TEMPERATURE: (18, 24)},
}


def parse_parameter(param: Union[EnvParameter, str]) -> Optional[EnvParameter]:
    if isinstance(param, EnvParameter):
        return param
    aliases = {"co2_level": EnvParameter.CO2, "co2Level": EnvParameter.CO2}
    if param in aliases:
        return aliases[param]
    try:
        return EnvParameter(param)
    except ValueError:
        return None


def stabilization(state: GameState, ctx: SimContext, param: EnvParameter) -> float:
    """Drift reduction from owned environment upgrades for one parameter."""
    best = 0.0
    for upgrade_id in state.env_upgrades:
        upgrade = ctx.catalog.env_upgrades.get(upgrade_id)
        if upgrade is not None and upgrade.parameter is param:
            best = max(best, upgrade.stabilization)
    return best


def optimal_report(plant: Plant, ctx: SimContext) -> Dict[str, bool]:
    """Which of the plant's parameters sit inside the optimal band of its phase."""
    ranges = PHASE_OPTIMAL_ENV.get(ctx.catalog.phase(plant.phase).name, {})
    report = {}
    for param, (low, high) in ranges.items():
        value = getattr(plant.environment, _FIELD[param])
        report[param.value] = low <= value <= high
    return report


def refresh_plant_terpenes(state: GameState, ctx: SimContext) -> GameState:
    """Recompute every plant's derived terpene profile from its environment."""
    boost = research_bonuses(state, ctx).terpene_boost
    slots = []
    for plant in state.slots:
        if plant is None:
            slots.append(None)
            continue
        strain = resolve_strain(state, ctx.catalog, plant.strain_id)
        if strain is None:
            slots.append(plant)
            continue
        profile = derive_terpene_profile(
            strain.terpenes,
            plant.environment.temperature,
            plant.environment.humidity,
            state.environment.light_cycle,
            boost,
        )
        slots.append(replace(plant, modifiers=replace(plant.modifiers, terpenes=profile)))
    return replace(state, slots=tuple(slots))


def adjust_environment(
    state: GameState,
    ctx: SimContext,
    param: Union[EnvParameter, str],
    value: float,
) -> Tuple[GameState, Result[float, FailureReason]]:
    """Set a global target and pull every plant's value most of the way to it."""
    parameter = parse_parameter(param)
    if parameter is None:
        return state, fail(FailureReason.UNKNOWN_PARAMETER)
    low, high = PARAMETER_BOUNDS[parameter]
    target = clamp(float(value), low, high)
    field_name = _FIELD[parameter]
    state = replace(state, environment=replace(state.environment, **{field_name: target}))

    if parameter in DRIFT_STEP:
        rng = require_rng(ctx, "environment.adjust_environment")
        slots = []
        for plant in state.slots:
            if plant is None:
                slots.append(None)
                continue
            current = getattr(plant.environment, field_name)
            moved = current + (target - current) * growth_constants.ENV_ADJUST_RATE
            moved += (rng.random() - 0.5) * growth_constants.ENV_ADJUST_NOISE
            environment = replace(plant.environment, **{field_name: round(clamp(moved, low, high), 3)})
            slots.append(replace(plant, environment=environment))
        state = refresh_plant_terpenes(replace(state, slots=tuple(slots)), ctx)
    logger.debug("Environment %s set to %.2f", parameter.value, target)
    return state, ok(target)


def toggle_light_cycle(state: GameState, ctx: SimContext) -> Tuple[GameState, Result[LightCycle, FailureReason]]:
    """Switch between the vegetative and flowering light schedules."""
    current = state.environment.light_cycle
    if current is LightCycle.VEG:
        cycle = LightCycle.FLOWER
    elif current is LightCycle.FLOWER:
        cycle = LightCycle.VEG
    else:
        raise SimulationError(f"Unhandled light cycle: {current}")
    state = replace(state, environment=replace(state.environment, light_cycle=cycle))
    return refresh_plant_terpenes(state, ctx), ok(cycle)


def _drift_environment(environment: Environment, state: GameState, ctx: SimContext) -> Environment:
    rng = require_rng(ctx, "environment.drift")
    values = {}
    for parameter, step in DRIFT_STEP.items():
        field_name = _FIELD[parameter]
        low, high = PARAMETER_BOUNDS[parameter]
        scale = 1.0 - stabilization(state, ctx, parameter)
        delta = (rng.random() - 0.5) * 2.0 * step * scale
        values[field_name] = round(clamp(getattr(environment, field_name) + delta, low, high), 3)
    return replace(environment, **values)


def drift_environment_values(state: GameState, ctx: SimContext) -> GameState:
    """Environment tick: bounded random walk per plant, then terpene refresh."""
    slots = []
    for plant in state.slots:
        if plant is None:
            slots.append(None)
        else:
            slots.append(replace(plant, environment=_drift_environment(plant.environment, state, ctx)))
    return refresh_plant_terpenes(replace(state, slots=tuple(slots)), ctx)
