"""Research tree: 20 nodes across five categories."""

from growsim.catalog.types import EffectType, ResearchCategory, ResearchEffect, ResearchNode


def _node(node_id, name, category, cost, time_required, prerequisites, *effects):
    return ResearchNode(
        id=node_id,
        name=name,
        category=category,
        cost=cost,
        time_required=time_required,
        prerequisites=tuple(prerequisites),
        effects=tuple(ResearchEffect(kind, value, target) for kind, value, target in effects),
    )


_Y = EffectType.YIELD_MULTIPLIER
_T = EffectType.TIME_REDUCTION
_Q = EffectType.QUALITY_BOOST
_TB = EffectType.TERPENE_BOOST
_C = EffectType.COST_REDUCTION
_U = EffectType.UNLOCK_FEATURE

_LIGHT = ResearchCategory.LIGHTING
_NUTR = ResearchCategory.NUTRIENTS
_ENV = ResearchCategory.ENVIRONMENT
_GEN = ResearchCategory.GENETICS
_AUTO = ResearchCategory.AUTOMATION

RESEARCH_TREE = (
    # Lighting
    _node("basic-led", "LED Basics", _LIGHT, 100, 20, [],
          (_Y, 1.1, None), (_C, 0.15, "electricity")),
    _node("advanced-spectrum", "Spectrum Tuning", _LIGHT, 250, 35, ["basic-led"],
          (_Y, 1.2, None), (_TB, 15, None)),
    _node("uv-supplementation", "UV Supplementation", _LIGHT, 200, 30, ["basic-led"],
          (_TB, 25, None), (_Q, 10, None)),
    _node("full-spectrum-control", "Full Spectrum Control", _LIGHT, 400, 50,
          ["advanced-spectrum", "uv-supplementation"],
          (_Y, 1.35, None), (_TB, 30, None), (_Q, 15, None)),
    # Nutrients
    _node("organic-nutrients", "Organic Nutrients", _NUTR, 150, 25, [],
          (_Q, 12, None), (_TB, 20, None)),
    _node("microbial-inoculants", "Microbial Inoculants", _NUTR, 200, 30, ["organic-nutrients"],
          (_Y, 1.15, None), (_Q, 8, None)),
    _node("custom-feeding", "Custom Feeding", _NUTR, 250, 35, ["organic-nutrients"],
          (_Y, 1.2, None), (_T, 0.05, None)),
    _node("living-soil", "Living Soil", _NUTR, 450, 55, ["microbial-inoculants", "custom-feeding"],
          (_Y, 1.3, None), (_Q, 20, None), (_C, 0.25, "nutrients")),
    # Environment
    _node("climate-control", "Climate Control", _ENV, 175, 28, [],
          (_Q, 10, None), (_Y, 1.1, None)),
    _node("co2-injection", "CO2 Injection", _ENV, 300, 40, ["climate-control"],
          (_Y, 1.25, None), (_T, 0.1, None)),
    _node("vpd-optimization", "VPD Optimization", _ENV, 280, 38, ["climate-control"],
          (_Y, 1.2, None), (_Q, 15, None)),
    _node("sealed-environment", "Sealed Environment", _ENV, 500, 60,
          ["co2-injection", "vpd-optimization"],
          (_Y, 1.4, None), (_Q, 25, None), (_TB, 20, None)),
    # Genetics
    _node("pheno-hunting", "Pheno Hunting", _GEN, 200, 30, [],
          (_U, 1, "pheno_selection"), (_Q, 10, None)),
    _node("tissue-culture", "Tissue Culture", _GEN, 350, 45, ["pheno-hunting"],
          (_U, 1, "tissue_culture"), (_C, 0.3, "mother_plants")),
    _node("selective-breeding", "Selective Breeding", _GEN, 300, 40, ["pheno-hunting"],
          (_U, 1, "advanced_breeding"), (_Y, 1.15, None)),
    _node("genetic-modification", "Genetic Modification", _GEN, 600, 70,
          ["tissue-culture", "selective-breeding"],
          (_U, 1, "gene_editing"), (_Y, 1.5, None), (_Q, 30, None)),
    # Automation
    _node("auto-watering", "Auto Watering", _AUTO, 150, 25, [],
          (_U, 1, "auto_water")),
    _node("smart-monitoring", "Smart Monitoring", _AUTO, 250, 35, ["auto-watering"],
          (_U, 1, "smart_alerts"), (_Q, 12, None)),
    _node("drip-irrigation", "Drip Irrigation", _AUTO, 200, 30, ["auto-watering"],
          (_Y, 1.15, None), (_C, 0.2, "water")),
    _node("full-automation", "Full Automation", _AUTO, 500, 60,
          ["smart-monitoring", "drip-irrigation"],
          (_U, 1, "full_auto"), (_T, 0.15, None)),
)
