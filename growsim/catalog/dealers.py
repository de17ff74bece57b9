"""Dealer network reference table."""

from growsim.catalog.types import Dealer, DealerType, QualityTier

DEALERS = (
    Dealer(
        id="dealer-street-mike",
        name='Mike "Quick"',
        type=DealerType.STREET,
        quality_requirement=QualityTier.C,
        price_multiplier=0.9,
        min_quantity=10,
        max_quantity=50,
        available_from=0,
        available_until=23,
        risk_level=15,
        unlock_reputation=0,
        preferred_terpenes=("myrcene", "pinene"),
    ),
    Dealer(
        id="dealer-street-lisa",
        name='Lisa "Night"',
        type=DealerType.STREET,
        quality_requirement=QualityTier.B,
        price_multiplier=1.0,
        min_quantity=20,
        max_quantity=80,
        available_from=20,
        available_until=6,
        risk_level=25,
        unlock_reputation=50,
        preferred_terpenes=("limonene", "caryophyllene"),
    ),
    Dealer(
        id="dealer-mid-carlos",
        name='Carlos "The Bridge"',
        type=DealerType.MIDDLEMAN,
        quality_requirement=QualityTier.B,
        price_multiplier=1.2,
        min_quantity=50,
        max_quantity=200,
        available_from=10,
        available_until=22,
        risk_level=30,
        unlock_reputation=100,
        preferred_terpenes=("pinene", "humulene"),
    ),
    Dealer(
        id="dealer-mid-yasmin",
        name='Yasmin "Connect"',
        type=DealerType.MIDDLEMAN,
        quality_requirement=QualityTier.A,
        price_multiplier=1.3,
        min_quantity=80,
        max_quantity=250,
        available_from=14,
        available_until=2,
        risk_level=20,
        unlock_reputation=200,
        preferred_terpenes=("linalool", "terpinolene"),
    ),
    Dealer(
        id="dealer-vip-dimitri",
        name='Dimitri "Gold"',
        type=DealerType.VIP,
        quality_requirement=QualityTier.A,
        price_multiplier=1.8,
        min_quantity=100,
        max_quantity=300,
        available_from=18,
        available_until=23,
        risk_level=5,
        unlock_reputation=400,
        preferred_strains=("green-gelato",),
        preferred_terpenes=("limonene", "caryophyllene", "linalool"),
    ),
    Dealer(
        id="dealer-vip-sophia",
        name='Sophia "Velvet"',
        type=DealerType.VIP,
        quality_requirement=QualityTier.S,
        price_multiplier=2.2,
        min_quantity=50,
        max_quantity=200,
        available_from=19,
        available_until=1,
        risk_level=2,
        unlock_reputation=600,
        preferred_terpenes=("linalool", "terpinolene", "ocimene"),
    ),
    Dealer(
        id="dealer-whole-johann",
        name='Johann "Bulk"',
        type=DealerType.WHOLESALE,
        quality_requirement=QualityTier.B,
        price_multiplier=1.1,
        min_quantity=300,
        max_quantity=1000,
        available_from=9,
        available_until=18,
        risk_level=40,
        unlock_reputation=300,
        preferred_terpenes=("myrcene", "pinene"),
    ),
    Dealer(
        id="dealer-tourist-group",
        name="Tourist Group",
        type=DealerType.TOURIST,
        quality_requirement=QualityTier.A,
        price_multiplier=2.0,
        min_quantity=20,
        max_quantity=100,
        available_from=10,
        available_until=20,
        risk_level=10,
        unlock_reputation=250,
        preferred_strains=("honey-cream", "gelato-auto"),
        preferred_terpenes=("limonene", "ocimene"),
    ),
    Dealer(
        id="dealer-disp-green",
        name="Green Valley Dispensary",
        type=DealerType.DISPENSARY,
        quality_requirement=QualityTier.A,
        price_multiplier=1.4,
        min_quantity=100,
        max_quantity=500,
        available_from=8,
        available_until=20,
        risk_level=0,
        unlock_reputation=500,
        preferred_terpenes=("caryophyllene", "linalool", "humulene"),
    ),
)
