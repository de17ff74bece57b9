"""Pests and treatments."""

from growsim.catalog.types import Pest, Treatment

PESTS = (
    Pest("fungus-gnats", "Fungus Gnats", base_chance=0.15, damage_per_tick=0.01, spread_rate=5),
    Pest("spider-mites", "Spider Mites", base_chance=0.08, damage_per_tick=0.03, spread_rate=12),
    Pest("aphids", "Aphids", base_chance=0.12, damage_per_tick=0.02, spread_rate=8),
    Pest("powdery-mildew", "Powdery Mildew", base_chance=0.10, damage_per_tick=0.025, spread_rate=10),
    Pest("root-rot", "Root Rot", base_chance=0.05, damage_per_tick=0.04, spread_rate=6),
)

TREATMENTS = (
    Treatment("neem-oil", "Neem Oil", 50, 0.7, ("fungus-gnats", "aphids", "spider-mites")),
    Treatment("predatory-mites", "Predatory Mites", 120, 0.9, ("spider-mites",)),
    Treatment("sulfur-spray", "Sulfur Spray", 80, 0.85, ("powdery-mildew",)),
    Treatment("hydrogen-peroxide", "Hydrogen Peroxide", 60, 0.75, ("root-rot",)),
    Treatment("universal-treatment", "Universal Bio Spray", 150, 0.65, ("all",)),
)
