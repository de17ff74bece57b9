"""Phenotypes, the mutation pool and the strain-name word pools."""

from growsim.catalog.types import Mutation, MutationType, Phenotype, Rarity

PHENOTYPES = (
    Phenotype("purple-pheno", "Purple Pheno", Rarity.RARE, quality_bonus=0.15),
    Phenotype("beast-mode", "Beast Mode", Rarity.RARE, yield_bonus=0.25),
    Phenotype("speed-demon", "Speed Demon", Rarity.COMMON, speed_bonus=0.2),
    Phenotype("iron-genetics", "Iron Genetics", Rarity.COMMON, resistance_bonus=0.3),
    Phenotype(
        "unicorn", "Unicorn Cut", Rarity.LEGENDARY,
        yield_bonus=0.2, quality_bonus=0.2, speed_bonus=0.15,
    ),
)

MUTATIONS = (
    Mutation("golden-genome", "Golden Genome", MutationType.SUPER, 1.5, Rarity.LEGENDARY),
    Mutation("titan-strain", "Titan Strain", MutationType.YIELD, 2.0, Rarity.LEGENDARY),
    Mutation("hyper-bloom", "Hyper Bloom", MutationType.SPEED, 0.6, Rarity.EPIC),
    Mutation("crystal-trichomes", "Crystal Trichomes", MutationType.QUALITY, 1.5, Rarity.EPIC),
    Mutation("vigorous-roots", "Vigorous Roots", MutationType.YIELD, 1.3, Rarity.RARE),
    Mutation("quick-cycle", "Quick Cycle", MutationType.SPEED, 0.8, Rarity.RARE),
    Mutation("resin-rich", "Resin Rich", MutationType.QUALITY, 1.25, Rarity.RARE),
)

# (word, weight) pools; later pools unlock at higher generations
NAME_PREFIXES = (
    ("Purple", 5), ("Golden", 4), ("Cosmic", 3), ("Frosty", 4), ("Lemon", 5),
    ("Midnight", 3), ("Royal", 2), ("Electric", 2), ("Ancient", 1),
)
NAME_CORES = (
    ("Haze", 5), ("Kush", 5), ("Dream", 4), ("Diesel", 3), ("Cookies", 4),
    ("Gelato", 4), ("Zushi", 2), ("Muffin", 2), ("Nebula", 1),
)
NAME_DESCRIPTORS = (
    ("Cream", 4), ("Glue", 3), ("Breath", 3), ("Punch", 3), ("Fire", 2), ("Velvet", 1),
)
NAME_SUFFIXES = (
    ("OG", 5), ("Auto", 3), ("Elite", 2), ("Reserve", 1), ("Supreme", 1),
)
