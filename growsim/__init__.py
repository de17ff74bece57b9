"""Grow simulation & economy core.

The package is organised around one immutable ``GameState`` snapshot that
every command and tick function receives and replaces:

- ``growsim.catalog``: static reference tables (strains, dealers, pests, ...)
- ``growsim.plants``: growth state machine, care actions, pests, environment
- ``growsim.harvest``: yield formula, curing pipeline, quality tiers
- ``growsim.market``: anonymous offers, dealers, dynamic strain pricing
- ``growsim.genetics``: breeding, mutations, mother plants
- ``growsim.automation``: employee-driven care passes
- ``growsim.research``: single-slot tech tree
- ``growsim.persistence``: versioned snapshot codec

Commands return ``(new_state, result)`` where ``result`` is an ``Ok``/``Err``
from ``growsim.result``; the state is never mutated in place.
"""

from growsim.context import SimContext
from growsim.result import Err, Ok, Result
from growsim.state import GameState, initial_state

__all__ = [
    "Err",
    "GameState",
    "Ok",
    "Result",
    "SimContext",
    "initial_state",
]
