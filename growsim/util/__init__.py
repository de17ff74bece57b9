"""Small shared helpers for the simulation core."""

from growsim.util.math_utils import clamp
from growsim.util.rng import MissingRNGError, require_rng_param

__all__ = ["MissingRNGError", "clamp", "require_rng_param"]
