"""Plant state machine, care actions, pests and environment."""

from growsim.plants.care import (
    CareAction,
    CareOutcome,
    apply_enhancer,
    apply_training,
    fertilize,
    remaining_cooldown,
    water,
)
from growsim.plants.environment import adjust_environment, drift_environment_values, toggle_light_cycle
from growsim.plants.growth import advance_plant_phases, is_harvest_ready, plant_seed
from growsim.plants.pests import check_for_pests, treat_infestation

__all__ = [
    "CareAction",
    "CareOutcome",
    "adjust_environment",
    "advance_plant_phases",
    "apply_enhancer",
    "apply_training",
    "check_for_pests",
    "drift_environment_values",
    "fertilize",
    "is_harvest_ready",
    "plant_seed",
    "remaining_cooldown",
    "toggle_light_cycle",
    "treat_infestation",
    "water",
]
