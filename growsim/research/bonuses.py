"""Accumulated effects of completed research nodes."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Mapping, Optional

from growsim.catalog import Catalog
from growsim.catalog.types import EffectType
from growsim.config import ResearchConfig
from growsim.config import research as research_constants
from growsim.exceptions import SimulationError


@dataclass(frozen=True)
class ResearchBonuses:
    """Permanent bonuses granted by the completed-research set.

    Attributes:
        yield_multiplier: Product of all yield multipliers, capped
        time_reduction: Sum of growth-time reductions, capped
        quality_boost: Sum of quality boosts (percentage points)
        terpene_boost: Sum of terpene boosts (percentage points)
        cost_reductions: Summed cost reductions keyed by target
        unlocked_features: Opaque capability names
    """

    yield_multiplier: float = 1.0
    time_reduction: float = 0.0
    quality_boost: float = 0.0
    terpene_boost: float = 0.0
    cost_reductions: Mapping[str, float] = field(default_factory=dict)
    unlocked_features: FrozenSet[str] = frozenset()

    def has_feature(self, name: str) -> bool:
        return name in self.unlocked_features

    def discounted(self, target: str, price: int) -> int:
        """``price`` after the cost reductions for ``target`` (and 'all'), capped."""
        reduction = self.cost_reductions.get(target, 0.0) + self.cost_reductions.get("all", 0.0)
        reduction = min(research_constants.RESEARCH_COST_REDUCTION_CAP, reduction)
        return int(math.floor(round(price * (1.0 - reduction), 6)))


def compute_research_bonuses(
    completed: Iterable[str],
    catalog: Catalog,
    config: Optional[ResearchConfig] = None,
) -> ResearchBonuses:
    """Fold the effects of every completed node into one bonus record.

    Yield multipliers compound; every other numeric effect adds up. Unknown
    node ids (e.g. from an old save) are skipped.
    """
    config = config or ResearchConfig()
    yield_multiplier = 1.0
    time_reduction = 0.0
    quality_boost = 0.0
    terpene_boost = 0.0
    cost_reductions: Dict[str, float] = {}
    features = set()

    for node_id in completed:
        node = catalog.research.get(node_id)
        if node is None:
            continue
        for effect in node.effects:
            kind = effect.type
            if kind is EffectType.YIELD_MULTIPLIER:
                yield_multiplier *= effect.value
            elif kind is EffectType.TIME_REDUCTION:
                time_reduction += effect.value
            elif kind is EffectType.QUALITY_BOOST:
                quality_boost += effect.value
            elif kind is EffectType.TERPENE_BOOST:
                terpene_boost += effect.value
            elif kind is EffectType.COST_REDUCTION:
                target = effect.target or "all"
                cost_reductions[target] = cost_reductions.get(target, 0.0) + effect.value
            elif kind is EffectType.UNLOCK_FEATURE:
                if effect.target:
                    features.add(effect.target)
            else:
                raise SimulationError(f"Unhandled research effect type: {kind}")

    return ResearchBonuses(
        yield_multiplier=min(config.yield_cap, yield_multiplier),
        time_reduction=min(config.time_reduction_cap, time_reduction),
        quality_boost=quality_boost,
        terpene_boost=terpene_boost,
        cost_reductions=cost_reductions,
        unlocked_features=frozenset(features),
    )


def research_bonuses(state, ctx) -> ResearchBonuses:
    """Bonuses for the current state's completed research."""
    return compute_research_bonuses(state.research.completed, ctx.catalog, ctx.config.research)
