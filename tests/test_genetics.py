"""Breeding, mutations, strain names and mother plants."""

from dataclasses import replace

import pytest

from growsim.catalog.types import Mutation, MutationType, Rarity
from growsim.config import BreedingConfig
from growsim.events import StrainBredEvent
from growsim.genetics import (
    breed,
    cap_mutation,
    create_mother_plant,
    generate_strain_name,
    legendary_odds,
    mutation_chance,
    name_parts,
    offspring_seed_price,
    roll_mutation,
    take_clone,
)
from growsim.genetics.breeding import offspring_rarity
from growsim.genetics.mutation import draw_mutation_tier
from growsim.harvest import compute_yield
from growsim.result import FailureReason


def _mutation(kind, bonus, rarity=Rarity.RARE):
    return Mutation(f"test-{kind.value}", "Test", kind, bonus, rarity)


class TestMutationOdds:
    def test_mutation_chance_grows_and_caps(self):
        config = BreedingConfig()
        chances = [mutation_chance(g, config) for g in range(0, 20)]
        assert chances[1] == pytest.approx(0.07)
        assert chances == sorted(chances)
        assert max(chances) == pytest.approx(0.25)

    def test_legendary_odds(self):
        assert legendary_odds(0) == pytest.approx(0.05)
        assert legendary_odds(5) == pytest.approx(0.10)
        assert legendary_odds(50) == pytest.approx(0.15)

    @pytest.mark.parametrize(
        "roll,tier",
        [(0.01, Rarity.LEGENDARY), (0.2, Rarity.EPIC), (0.5, Rarity.RARE)],
    )
    def test_tier_draw(self, scripted, roll, tier):
        assert draw_mutation_tier(scripted([roll]), 1) is tier

    def test_roll_miss(self, scripted, catalog):
        assert roll_mutation(scripted([0.9]), 1, catalog.mutations, BreedingConfig()) is None

    def test_roll_hit_picks_from_drawn_tier(self, scripted, catalog):
        mutation = roll_mutation(scripted([0.0, 0.01, 0.3]), 1, catalog.mutations, BreedingConfig())
        assert mutation is not None
        assert mutation.rarity is Rarity.LEGENDARY

    def test_roll_falls_back_to_whole_pool(self, scripted):
        pool = (_mutation(MutationType.YIELD, 1.2, Rarity.RARE),)
        mutation = roll_mutation(scripted([0.0, 0.01, 0.0]), 1, pool, BreedingConfig())
        assert mutation == pool[0]

    def test_empty_pool(self, scripted):
        assert roll_mutation(scripted([0.0]), 1, (), BreedingConfig()) is None


@pytest.mark.parametrize(
    "kind,bonus,capped",
    [
        (MutationType.YIELD, 4.0, 3.0),
        (MutationType.QUALITY, 3.0, 2.5),
        (MutationType.SPEED, 0.1, 0.3),
        (MutationType.SUPER, 2.5, 2.0),
        (MutationType.YIELD, 1.3, 1.3),
    ],
)
def test_cap_mutation(kind, bonus, capped):
    assert cap_mutation(_mutation(kind, bonus)).bonus == pytest.approx(capped)


def test_mutation_bonuses_apply_by_type():
    super_mutation = _mutation(MutationType.SUPER, 1.5)
    assert super_mutation.yield_multiplier() == pytest.approx(1.5)
    assert super_mutation.time_multiplier() == pytest.approx(1 / 1.5)
    assert super_mutation.quality_multiplier() == 1.0

    speed = _mutation(MutationType.SPEED, 0.6)
    assert speed.time_multiplier() == pytest.approx(0.6)
    assert speed.yield_multiplier() == 1.0

    quality = _mutation(MutationType.QUALITY, 1.5)
    assert quality.quality_multiplier() == pytest.approx(1.5)


def test_offspring_seed_price(catalog):
    gelato, honey = catalog.strains["green-gelato"], catalog.strains["honey-cream"]
    config = BreedingConfig()
    assert offspring_seed_price(gelato, honey, None, config) == 44
    assert offspring_seed_price(gelato, honey, _mutation(MutationType.YIELD, 2.0, Rarity.LEGENDARY), config) == 66
    assert offspring_seed_price(gelato, honey, _mutation(MutationType.YIELD, 1.3, Rarity.RARE), config) == 46

    cheap = replace(gelato, seed_price=5)
    assert offspring_seed_price(cheap, cheap, None, config) == 10


def test_offspring_rarity(scripted, catalog):
    common = catalog.strains["green-gelato"]
    legendary = replace(common, rarity=Rarity.LEGENDARY)

    assert offspring_rarity(scripted([0.5]), common, common, None) is Rarity.COMMON
    assert offspring_rarity(scripted([0.1]), common, common, None) is Rarity.RARE
    assert offspring_rarity(scripted([0.1]), legendary, common, None) is Rarity.EPIC
    titan = _mutation(MutationType.YIELD, 2.0, Rarity.LEGENDARY)
    assert offspring_rarity(scripted([0.5]), common, common, titan) is Rarity.LEGENDARY


def test_breed_registers_offspring(ctx, fresh_state, recorded):
    events = recorded(StrainBredEvent)

    state, result = breed(fresh_state, ctx, "green-gelato", "honey-cream")

    strain = result.value
    assert strain.id.startswith("custom-gen1-")
    assert strain.generation == 1
    assert strain.parents == ("green-gelato", "honey-cream")
    assert 67.0 <= strain.base_yield <= 83.0
    assert 0.9 <= strain.time_multiplier <= 1.0
    assert set(strain.terpenes) <= {"limonene", "caryophyllene", "myrcene", "ocimene"}
    assert state.custom_strains[strain.id] == strain
    assert strain.id in state.discovered_strains
    market = state.market.strains[strain.id]
    assert market.base_price == pytest.approx(8.25)
    assert market.demand == 60
    assert market.supply == 0
    assert state.stats.strains_bred == 1
    assert events[0].strain_id == strain.id


def test_breed_next_generation_from_bred_strain(ctx, fresh_state):
    state, first = breed(fresh_state, ctx, "green-gelato", "honey-cream")
    state, second = breed(state, ctx, first.value.id, "blue-zushi")

    assert second.value.generation == 2
    assert second.value.id.startswith("custom-gen2-")
    assert second.value.name != first.value.name


def test_breed_unknown_parent(ctx, fresh_state):
    state, result = breed(fresh_state, ctx, "green-gelato", "ghost-kush")
    assert result.error is FailureReason.UNKNOWN_STRAIN
    assert state is fresh_state


def test_mutated_strain_yield_applies_at_harvest(ctx, fresh_state, grow):
    base = ctx.catalog.strains["green-gelato"]
    titan = replace(
        base,
        id="custom-gen1-9",
        generation=1,
        parents=("green-gelato", "green-gelato"),
        mutation=_mutation(MutationType.YIELD, 2.0, Rarity.LEGENDARY),
    )
    state = replace(fresh_state, custom_strains={titan.id: titan})
    state = grow(state, strain_id=titan.id)

    breakdown = compute_yield(state, ctx, state.plant_at(0), titan, variance=1.0)
    assert breakdown.mutation == pytest.approx(2.0)
    assert breakdown.total == 160


@pytest.mark.parametrize("generation,parts", [(0, 2), (1, 2), (2, 3), (4, 4), (12, 4)])
def test_name_parts(generation, parts):
    assert name_parts(generation) == parts


def test_generated_names_avoid_collisions(scripted):
    assert generate_strain_name(scripted([0.0, 0.0]), 1) == "Purple Haze"
    assert generate_strain_name(scripted([0.0, 0.0]), 1, {"Purple Haze"}) == "Purple Haze #2"
    taken = {"Purple Haze", "Purple Haze #2"}
    assert generate_strain_name(scripted([0.0, 0.0]), 1, taken) == "Purple Haze #3"


def test_mother_plant_and_clone(ctx, fresh_state):
    state, result = create_mother_plant(fresh_state, ctx, "green-gelato", "purple-pheno", now=3.0)
    mother = result.value
    assert state.nugs == fresh_state.nugs - 200
    assert mother.max_clones == 10
    assert mother.clones_remaining == 10

    state, result = take_clone(state, ctx, mother.id, 1, now=4.0)
    plant = state.plant_at(1)
    assert plant.id == result.value
    assert plant.modifiers.phenotype_id == "purple-pheno"
    assert plant.modifiers.quality == pytest.approx(1.15)
    assert state.mother_plants[0].clones_taken == 1
    assert state.nugs == fresh_state.nugs - 200 - 30

    _, result = take_clone(state, ctx, mother.id, 1)
    assert result.error is FailureReason.SLOT_OCCUPIED


def test_mother_plant_refusals(ctx, fresh_state):
    _, result = create_mother_plant(fresh_state, ctx, "ghost-kush")
    assert result.error is FailureReason.UNKNOWN_STRAIN
    _, result = create_mother_plant(fresh_state, ctx, "green-gelato", "three-headed")
    assert result.error is FailureReason.UNKNOWN_PHENOTYPE
    _, result = create_mother_plant(replace(fresh_state, nugs=100), ctx, "green-gelato")
    assert result.error is FailureReason.INSUFFICIENT_FUNDS


def test_tissue_culture_discounts_mothers_and_clones(ctx, fresh_state):
    researched = replace(fresh_state, research=replace(fresh_state.research, completed=("tissue-culture",)))
    state, result = create_mother_plant(researched, ctx, "green-gelato")
    assert state.nugs == fresh_state.nugs - 140

    state, _ = take_clone(state, ctx, result.value.id, 0)
    assert state.nugs == fresh_state.nugs - 140 - 21


def test_clone_limit(ctx, fresh_state):
    state, result = create_mother_plant(fresh_state, ctx, "green-gelato")
    spent = replace(result.value, clones_taken=10)
    state = replace(state, mother_plants=(spent,))

    _, result = take_clone(state, ctx, spent.id, 0)
    assert result.error is FailureReason.CLONE_LIMIT
    _, result = take_clone(state, ctx, "mother-404", 0)
    assert result.error is FailureReason.UNKNOWN_MOTHER
