"""Procedural strain names from weighted word pools."""

from __future__ import annotations

import random
from typing import Collection

from growsim.catalog import genetics_data
from growsim.config import breeding as breeding_constants
from growsim.util.rng import weighted_choice

# Pools in the order they join a name
_POOLS = (
    genetics_data.NAME_PREFIXES,
    genetics_data.NAME_CORES,
    genetics_data.NAME_DESCRIPTORS,
    genetics_data.NAME_SUFFIXES,
)


def name_parts(generation: int) -> int:
    extra = max(0, generation) // breeding_constants.NAME_GENERATIONS_PER_PART
    return min(breeding_constants.NAME_MAX_PARTS, breeding_constants.NAME_MIN_PARTS + extra)


def generate_strain_name(rng: random.Random, generation: int, taken: Collection[str] = ()) -> str:
    """Build a name with more words at higher generations.

    A numeric suffix keeps the name distinct from ``taken``.
    """
    words = []
    for pool in _POOLS[: name_parts(generation)]:
        words.append(weighted_choice(rng, (w for w, _ in pool), (weight for _, weight in pool)))
    name = " ".join(words)
    if name not in taken:
        return name
    n = 2
    while f"{name} #{n}" in taken:
        n += 1
    return f"{name} #{n}"
