"""Base strains, growth phases, soil tiers and terpenes."""

from growsim.catalog.types import Phase, Rarity, SoilTier, SoilType, Strain, Terpene

PHASES = (
    Phase(0, "germination", 10.0),
    Phase(1, "seedling", 20.0, water_recommended=True),
    Phase(2, "veg", 30.0, water_recommended=True, fertilizer_recommended=True),
    Phase(3, "preflower", 30.0, fertilizer_recommended=True),
    Phase(4, "flower", 25.0, water_recommended=True, fertilizer_recommended=True),
    Phase(5, "harvest", 5.0),
)

TERMINAL_PHASE = len(PHASES) - 1

SOIL_TIERS = (
    SoilTier(SoilType.BASIC, cost=0, yield_bonus=1.0, time_multiplier=1.0),
    SoilTier(SoilType.LIGHT_MIX, cost=20, yield_bonus=1.05, time_multiplier=0.9),
    SoilTier(SoilType.ALL_MIX, cost=50, yield_bonus=1.15, time_multiplier=1.0),
)

STRAINS = (
    Strain(
        id="green-gelato",
        name="Green Gelato",
        rarity=Rarity.COMMON,
        base_yield=80,
        time_multiplier=1.0,
        water_tolerance=0.8,
        nutrient_sensitivity=0.3,
        seed_price=50,
        terpenes={"limonene": 35.0, "caryophyllene": 25.0, "myrcene": 15.0},
    ),
    Strain(
        id="blue-zushi",
        name="Blue Zushi",
        rarity=Rarity.RARE,
        base_yield=120,
        time_multiplier=1.1,
        water_tolerance=0.6,
        nutrient_sensitivity=0.5,
        seed_price=200,
        terpenes={"linalool": 30.0, "terpinolene": 25.0, "pinene": 20.0},
    ),
    Strain(
        id="honey-cream",
        name="Honey Cream",
        rarity=Rarity.COMMON,
        base_yield=70,
        time_multiplier=0.9,
        water_tolerance=0.9,
        nutrient_sensitivity=0.2,
        seed_price=60,
        terpenes={"myrcene": 40.0, "ocimene": 20.0, "limonene": 10.0},
    ),
    Strain(
        id="black-muffin",
        name="Black Muffin F1",
        rarity=Rarity.EPIC,
        base_yield=180,
        time_multiplier=1.2,
        water_tolerance=0.5,
        nutrient_sensitivity=0.7,
        seed_price=350,
        terpenes={"caryophyllene": 35.0, "humulene": 30.0, "linalool": 20.0},
    ),
    Strain(
        id="gelato-auto",
        name="Gelato Auto",
        rarity=Rarity.COMMON,
        base_yield=90,
        time_multiplier=0.85,
        water_tolerance=0.7,
        nutrient_sensitivity=0.4,
        seed_price=75,
        terpenes={"limonene": 25.0, "ocimene": 20.0, "pinene": 15.0},
    ),
)

# Strains the player can plant from a fresh save
STARTER_STRAINS = ("green-gelato", "honey-cream", "gelato-auto")

TERPENES = (
    Terpene("myrcene", "Myrcene", 1.0),
    Terpene("limonene", "Limonene", 1.2),
    Terpene("caryophyllene", "Caryophyllene", 1.3),
    Terpene("pinene", "Pinene", 1.1),
    Terpene("linalool", "Linalool", 1.4),
    Terpene("humulene", "Humulene", 1.25),
    Terpene("terpinolene", "Terpinolene", 1.35),
    Terpene("ocimene", "Ocimene", 1.15),
)
