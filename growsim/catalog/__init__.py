"""Static, immutable reference tables for the simulation.

``default_catalog()`` assembles the built-in tables into one ``Catalog``
value that travels on the ``SimContext``. Lookups return ``None`` for
unknown ids so commands can short-circuit into a no-op.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Iterable, Tuple, TypeVar

from growsim.catalog import dealers as _dealers
from growsim.catalog import genetics_data as _genetics
from growsim.catalog import market_data as _market
from growsim.catalog import pests as _pests
from growsim.catalog import quests as _quests
from growsim.catalog import research_tree as _research
from growsim.catalog import shop as _shop
from growsim.catalog import strains as _strains
from growsim.catalog.types import (
    Competitor,
    Dealer,
    Employee,
    Enhancer,
    EnvUpgrade,
    GlobalEventPreset,
    MarketCondition,
    MarketSeed,
    Mutation,
    Pest,
    Phase,
    Phenotype,
    QuestTemplate,
    ResearchNode,
    SoilTier,
    SoilType,
    Strain,
    Terpene,
    TrainingTechnique,
    Treatment,
    Upgrade,
)
from growsim.exceptions import CatalogError

T = TypeVar("T")


def _index(items: Iterable[T], kind: str) -> Dict[str, T]:
    indexed: Dict[str, T] = {}
    for item in items:
        key = item.id
        if key in indexed:
            raise CatalogError(f"Duplicate {kind} id: {key}")
        indexed[key] = item
    return indexed


@dataclass(frozen=True)
class Catalog:
    """All static game data, keyed by id."""

    phases: Tuple[Phase, ...]
    soils: Dict[SoilType, SoilTier]
    strains: Dict[str, Strain]
    terpenes: Dict[str, Terpene]
    dealers: Dict[str, Dealer]
    pests: Dict[str, Pest]
    treatments: Dict[str, Treatment]
    upgrades: Dict[str, Upgrade]
    env_upgrades: Dict[str, EnvUpgrade]
    employees: Dict[str, Employee]
    training: Dict[str, TrainingTechnique]
    enhancers: Dict[str, Enhancer]
    research: Dict[str, ResearchNode]
    market_seeds: Dict[str, MarketSeed]
    market_conditions: Dict[str, MarketCondition]
    competitors: Tuple[Competitor, ...]
    global_events: Dict[str, GlobalEventPreset]
    phenotypes: Dict[str, Phenotype]
    mutations: Tuple[Mutation, ...]
    quests: Tuple[QuestTemplate, ...]
    starter_strains: Tuple[str, ...]

    @property
    def terminal_phase(self) -> int:
        return len(self.phases) - 1

    def phase(self, index: int) -> Phase:
        return self.phases[max(0, min(index, self.terminal_phase))]

    def soil(self, soil: SoilType) -> SoilTier:
        return self.soils[soil]

    def upgrade_effect_total(self, levels: Dict[str, int], effect) -> float:
        """Sum of ``effect_per_level x level`` over owned upgrades of one effect kind."""
        total = 0.0
        for upgrade_id, level in levels.items():
            upgrade = self.upgrades.get(upgrade_id)
            if upgrade is not None and upgrade.effect is effect:
                total += upgrade.effect_per_level * level
        return total

    def validate(self) -> None:
        """Check cross-table references, raising CatalogError on dangling ids."""
        for node in self.research.values():
            for prereq in node.prerequisites:
                if prereq not in self.research:
                    raise CatalogError(f"Research node {node.id} requires unknown {prereq}")
        for seed in self.market_seeds.values():
            if seed.strain_id not in self.strains:
                raise CatalogError(f"Market seed for unknown strain {seed.strain_id}")
        for strain_id in self.starter_strains:
            if strain_id not in self.strains:
                raise CatalogError(f"Unknown starter strain {strain_id}")
        for treatment in self.treatments.values():
            for target in treatment.targets:
                if target != "all" and target not in self.pests:
                    raise CatalogError(f"Treatment {treatment.id} targets unknown pest {target}")


def build_catalog() -> Catalog:
    catalog = Catalog(
        phases=_strains.PHASES,
        soils={tier.soil: tier for tier in _strains.SOIL_TIERS},
        strains=_index(_strains.STRAINS, "strain"),
        terpenes=_index(_strains.TERPENES, "terpene"),
        dealers=_index(_dealers.DEALERS, "dealer"),
        pests=_index(_pests.PESTS, "pest"),
        treatments=_index(_pests.TREATMENTS, "treatment"),
        upgrades=_index(_shop.UPGRADES, "upgrade"),
        env_upgrades=_index(_shop.ENV_UPGRADES, "env upgrade"),
        employees=_index(_shop.EMPLOYEES, "employee"),
        training=_index(_shop.TRAINING_TECHNIQUES, "training technique"),
        enhancers=_index(_shop.ENHANCERS, "enhancer"),
        research=_index(_research.RESEARCH_TREE, "research node"),
        market_seeds={seed.strain_id: seed for seed in _market.MARKET_SEEDS},
        market_conditions=_index(_market.MARKET_CONDITIONS, "market condition"),
        competitors=_market.COMPETITORS,
        global_events=_index(_market.GLOBAL_EVENTS, "global event"),
        phenotypes=_index(_genetics.PHENOTYPES, "phenotype"),
        mutations=_genetics.MUTATIONS,
        quests=_quests.QUESTS,
        starter_strains=_strains.STARTER_STRAINS,
    )
    catalog.validate()
    return catalog


@lru_cache(maxsize=1)
def default_catalog() -> Catalog:
    """The built-in catalog, built once per process."""
    return build_catalog()
