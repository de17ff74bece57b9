"""Breeding, mutations, strain naming and mother plants."""

from growsim.genetics.breeding import breed, cross_strains, offspring_seed_price
from growsim.genetics.mother_plants import create_mother_plant, take_clone
from growsim.genetics.mutation import cap_mutation, legendary_odds, mutation_chance, roll_mutation
from growsim.genetics.naming import generate_strain_name, name_parts

__all__ = [
    "breed",
    "cap_mutation",
    "create_mother_plant",
    "cross_strains",
    "generate_strain_name",
    "legendary_odds",
    "mutation_chance",
    "name_parts",
    "offspring_seed_price",
    "roll_mutation",
    "take_clone",
]
