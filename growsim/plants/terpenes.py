"""Terpene profile derivation."""

from __future__ import annotations

from typing import Dict, Mapping

from growsim.catalog.types import LightCycle
from growsim.util.math_utils import clamp

# Light intensity per cycle; flowering lamps run hotter
_LIGHT_INTENSITY = {LightCycle.VEG: 60.0, LightCycle.FLOWER: 80.0}


def _temperature_factor(temperature: float) -> float:
    if 20 <= temperature <= 25:
        return 1.1
    if temperature < 15 or temperature > 30:
        return 0.8
    return 0.95


def _light_factor(intensity: float) -> float:
    if intensity >= 70:
        return 1.2
    if intensity < 50:
        return 0.9
    return 1.0


def derive_terpene_profile(
    base: Mapping[str, float],
    temperature: float,
    humidity: float,
    light_cycle: LightCycle,
    terpene_boost: float = 0.0,
) -> Dict[str, float]:
    """Shape a strain's base profile by the plant's environment.

    Args:
        base: Strain terpene profile (0-100 per compound)
        temperature: Plant temperature in Celsius
        humidity: Relative humidity in percent
        light_cycle: Current light cycle
        terpene_boost: Research terpene boost in percentage points

    Returns:
        New profile with every value clamped to [0, 100]
    """
    factor = _temperature_factor(temperature) * _light_factor(_LIGHT_INTENSITY[light_cycle])
    factor *= 1.0 + terpene_boost / 100.0
    profile: Dict[str, float] = {}
    for terpene_id, value in base.items():
        shaped = value * factor
        if terpene_id == "myrcene" and humidity > 60:
            shaped *= 1.15
        elif terpene_id == "limonene" and humidity < 50:
            shaped *= 1.1
        profile[terpene_id] = round(clamp(shaped, 0.0, 100.0), 2)
    return profile


def terpene_total(profile: Mapping[str, float]) -> float:
    return sum(profile.values())
