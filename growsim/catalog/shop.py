"""Purchasable items: upgrades, environment gear, staff, training, enhancers."""

from growsim.catalog.types import (
    Employee,
    Enhancer,
    EnvParameter,
    EnvUpgrade,
    Specialization,
    TrainingTechnique,
    Upgrade,
    UpgradeEffect,
)

UPGRADE_PRICE_GROWTH = 1.5  # Price multiplier per owned level

UPGRADES = (
    Upgrade("precision-water", "Precision Watering", 150, 4, 0.05, UpgradeEffect.WATER_BONUS),
    Upgrade("premium-nutrients", "Premium Nutrients", 250, 2, 0.5, UpgradeEffect.FERTILIZER_SAFETY),
    Upgrade("led-panel", "LED Panel Pro", 300, 3, 0.1, UpgradeEffect.TIME_REDUCTION),
    Upgrade("tent-slot", "Smart Tent Slot", 400, 4, 1, UpgradeEffect.SLOT),
    Upgrade("sticky-traps", "Sticky Traps", 200, 1, 0.3, UpgradeEffect.PEST_PROTECTION),
    Upgrade("auto-drip", "Auto-Drip System", 220, 3, 0.04, UpgradeEffect.WATER_BONUS),
    Upgrade("climate-control", "Climate Control", 350, 3, 0.08, UpgradeEffect.TIME_REDUCTION),
    Upgrade("bio-shield", "Bio Shield", 280, 2, 0.25, UpgradeEffect.PEST_PROTECTION),
    Upgrade("smart-nutrients", "Smart Nutrients", 300, 2, 0.5, UpgradeEffect.FERTILIZER_SAFETY),
    Upgrade("oscillating-fan", "Oscillating Fan", 80, 2, 0.03, UpgradeEffect.TIME_REDUCTION),
    Upgrade("watering-can-pro", "Watering Can Pro", 90, 2, 0.02, UpgradeEffect.WATER_BONUS),
)

# Upgrade whose level shortens curing
CURING_UPGRADE_ID = "climate-control"

ENV_UPGRADES = (
    EnvUpgrade("ph-controller", "pH Auto-Controller", 400, EnvParameter.PH, 0.8),
    EnvUpgrade("ec-meter-pro", "EC Meter Pro", 350, EnvParameter.EC, 0.7),
    EnvUpgrade("dehumidifier", "Dehumidifier Pro", 450, EnvParameter.HUMIDITY, 0.85),
    EnvUpgrade("climate-master", "Climate Master System", 500, EnvParameter.TEMPERATURE, 0.9),
    EnvUpgrade("co2-generator", "CO2 Generator", 600, EnvParameter.CO2, 0.75),
)

EMPLOYEES = (
    Employee("gardener-tom", "Gardener Tom", Specialization.WATERING, 500, 0.8),
    Employee("botanist-lisa", "Botanist Lisa", Specialization.FERTILIZING, 750, 0.9),
    Employee("harvester-mike", "Harvester Mike", Specialization.HARVESTING, 1000, 1.0),
    Employee("master-sarah", "Master Sarah", Specialization.ALL, 2000, 1.2),
    Employee("expert-carlos", "Expert Carlos", Specialization.ALL, 3500, 1.5),
)

TRAINING_TECHNIQUES = (
    TrainingTechnique(
        "lst", "Low Stress Training", cost=20, yield_bonus=1.2, quality_impact=0.05,
        stress_risk=0.1, available_phases=(2, 3), cooldown=25.0,
    ),
    TrainingTechnique(
        "topping", "Topping", cost=30, yield_bonus=1.25, quality_impact=0.1,
        stress_risk=0.2, available_phases=(2,), one_time_only=True,
    ),
    TrainingTechnique(
        "fim", "FIM", cost=25, yield_bonus=1.2, quality_impact=0.08,
        stress_risk=0.15, available_phases=(2,), one_time_only=True,
    ),
    TrainingTechnique(
        "defoliation", "Defoliation", cost=15, yield_bonus=1.12, quality_impact=0.03,
        stress_risk=0.25, available_phases=(2, 3, 4), cooldown=30.0,
    ),
)

ENHANCERS = (
    Enhancer("pgr-paclobutrazol", "PGR (Paclobutrazol)", 80, 1.8, 0.4, banned=True),
    Enhancer("terpen-spray", "Terpene Spray", 60, 1.0, 0.15),
    Enhancer("density-booster", "Density Booster", 100, 1.4, 0.25),
    Enhancer("rapid-bulk", "Rapid Bulk", 70, 1.3, 0.2),
    Enhancer("sugar-water", "Sugar Water", 30, 1.15, 0.1),
)
