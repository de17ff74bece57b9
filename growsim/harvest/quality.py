"""Quality score to sale tier mapping.

The single place scores become tiers; natural curing and rushing both
go through ``tier_for_score``.
"""

from __future__ import annotations

from typing import Tuple

from growsim.catalog.types import QualityTier
from growsim.config import harvest as harvest_constants
from growsim.util.math_utils import clamp


def tier_for_score(score: float) -> Tuple[QualityTier, float]:
    """Map a quality score to ``(tier, price_multiplier)``.

    The score is clamped into the tier band first, then matched against
    the ascending threshold table from the top down.
    """
    clamped = clamp(score, harvest_constants.TIER_SCORE_MIN, harvest_constants.TIER_SCORE_MAX)
    for letter, minimum, multiplier in harvest_constants.TIER_TABLE:
        if clamped >= minimum:
            return QualityTier(letter), multiplier
    letter, _, multiplier = harvest_constants.TIER_TABLE[-1]
    return QualityTier(letter), multiplier
