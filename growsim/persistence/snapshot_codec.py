"""GameState <-> plain dict conversion with field-by-field default fill.

Encoding is lossless. Decoding never rejects a snapshot for missing or
malformed fields: every value is checked and, when unusable, replaced by
the matching value of the canonical initial state. Records that cannot be
identified (no id) are dropped.
"""

from __future__ import annotations

import dataclasses
import logging
import math
import re
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, TypeVar

from growsim.catalog import Catalog, default_catalog
from growsim.catalog.types import (
    LightCycle,
    Mutation,
    MutationType,
    QualityTier,
    Rarity,
    SoilType,
    Strain,
    Trend,
)
from growsim.config import breeding as breeding_constants
from growsim.config import growth as growth_constants
from growsim.genetics.mutation import cap_mutation
from growsim.persistence.migrations import SCHEMA_VERSION, migrate
from growsim.state import (
    ActiveCondition,
    ActiveEvent,
    ActiveResearch,
    AutomationState,
    CuringBatch,
    DealerRelationship,
    Environment,
    GameState,
    GlobalEnvironment,
    InventoryBatch,
    MarketData,
    MarketState,
    MotherPlant,
    PestInfestation,
    Plant,
    PlantModifiers,
    PricePoint,
    QuestProgress,
    ResearchState,
    Settings,
    Stats,
    TradeContract,
    TradeOffer,
    TradeState,
    TrainingRecord,
    initial_state,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


# ----------------------------------------------------------------------
# Encoding
# ----------------------------------------------------------------------


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Mapping):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def snapshot_to_dict(state: GameState) -> Dict[str, Any]:
    """Serializable dict of the whole state, tagged with the schema version."""
    data = _plain(dataclasses.asdict(state))
    data["schema_version"] = SCHEMA_VERSION
    return data


# ----------------------------------------------------------------------
# Field readers: return ``default`` for anything unusable
# ----------------------------------------------------------------------


def _num(value: Any, default: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return float(value)


def _int(value: Any, default: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return int(value)


def _opt_num(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _bool(value: Any, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def _str(value: Any, default: Optional[str]) -> Optional[str]:
    return value if isinstance(value, str) else default


def _enum(enum_cls: Type[E], value: Any, default: E) -> E:
    try:
        return enum_cls(value)
    except (TypeError, ValueError):
        return default


def _str_tuple(value: Any, default: Tuple[str, ...] = ()) -> Tuple[str, ...]:
    if not isinstance(value, list):
        return default
    return tuple(v for v in value if isinstance(v, str))


def _float_map(value: Any) -> Dict[str, float]:
    if not isinstance(value, Mapping):
        return {}
    return {k: float(v) for k, v in value.items() if isinstance(k, str) and _opt_num(v) is not None}


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _items(value: Any) -> List[Mapping[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, Mapping)]


def _fill(cls, data: Any, default: Any, **readers):
    """Build ``cls`` by reading each named field, falling back to ``default``'s value."""
    data = _mapping(data)
    values = {}
    for name, reader in readers.items():
        values[name] = reader(data.get(name), getattr(default, name))
    return cls(**values)


# ----------------------------------------------------------------------
# Record decoders
# ----------------------------------------------------------------------


def _environment(data: Any) -> Environment:
    d = Environment()
    return _fill(Environment, data, d, ph=_num, ec=_num, humidity=_num, temperature=_num)


def _global_environment(data: Any) -> GlobalEnvironment:
    d = GlobalEnvironment()
    return _fill(
        GlobalEnvironment,
        data,
        d,
        ph=_num,
        ec=_num,
        humidity=_num,
        temperature=_num,
        light_cycle=lambda v, default: _enum(LightCycle, v, default),
        co2=_num,
    )


def _training(value: Any, default: Tuple[TrainingRecord, ...]) -> Tuple[TrainingRecord, ...]:
    records = []
    for item in _items(value):
        technique_id = _str(item.get("technique_id"), None)
        if technique_id is None:
            continue
        records.append(
            TrainingRecord(
                technique_id=technique_id,
                success_level=_num(item.get("success_level"), 1.0),
                applied_at=_num(item.get("applied_at"), 0.0),
            )
        )
    return tuple(records)


def _modifiers(data: Any) -> PlantModifiers:
    d = PlantModifiers()
    modifiers = _fill(
        PlantModifiers,
        data,
        d,
        water_stacks=_int,
        fertilizer_applied=_bool,
        soil=lambda v, default: _enum(SoilType, v, default),
        last_water_at=lambda v, default: _opt_num(v),
        last_fertilize_at=lambda v, default: _opt_num(v),
        quality=_num,
        training=_training,
        enhancers=_str_tuple,
        infestations=_str_tuple,
        terpenes=lambda v, default: _float_map(v),
        phenotype_id=_str,
    )
    quality = min(growth_constants.QUALITY_MAX, max(growth_constants.QUALITY_MIN, modifiers.quality))
    stacks = min(growth_constants.WATER_MAX_STACKS, max(0, modifiers.water_stacks))
    return dataclasses.replace(modifiers, quality=quality, water_stacks=stacks)


def _plant(data: Any, terminal_phase: int) -> Optional[Plant]:
    if not isinstance(data, Mapping):
        return None
    plant_id = _str(data.get("id"), None)
    strain_id = _str(data.get("strain_id"), None)
    if plant_id is None or strain_id is None:
        return None
    return Plant(
        id=plant_id,
        strain_id=strain_id,
        planted_at=_num(data.get("planted_at"), 0.0),
        phase=min(terminal_phase, max(0, _int(data.get("phase"), 0))),
        elapsed=max(0.0, _num(data.get("elapsed"), 0.0)),
        modifiers=_modifiers(data.get("modifiers")),
        environment=_environment(data.get("environment")),
    )


def _automation(data: Any) -> AutomationState:
    d = AutomationState()
    return _fill(AutomationState, data, d, enabled=_bool, employee_id=_str, replant_strain_id=_str)


def _mutation(data: Any) -> Optional[Mutation]:
    if not isinstance(data, Mapping) or _str(data.get("id"), None) is None:
        return None
    try:
        kind = MutationType(data.get("type"))
    except ValueError:
        return None
    bonus = _num(data.get("bonus"), 1.0)
    # A multiplier must be finite and positive; anything else drops the mutation
    if not math.isfinite(bonus) or bonus <= 0:
        return None
    return cap_mutation(
        Mutation(
            id=data["id"],
            name=_str(data.get("name"), data["id"]),
            type=kind,
            bonus=bonus,
            rarity=_enum(Rarity, data.get("rarity"), Rarity.RARE),
        )
    )


def _strain(data: Mapping[str, Any]) -> Optional[Strain]:
    strain_id = _str(data.get("id"), None)
    if strain_id is None:
        return None
    parents = data.get("parents")
    if isinstance(parents, list) and len(parents) == 2 and all(isinstance(p, str) for p in parents):
        parent_pair: Optional[Tuple[str, str]] = (parents[0], parents[1])
    else:
        parent_pair = None
    return Strain(
        id=strain_id,
        name=_str(data.get("name"), strain_id),
        rarity=_enum(Rarity, data.get("rarity"), Rarity.COMMON),
        base_yield=_num(data.get("base_yield"), 80.0),
        time_multiplier=_num(data.get("time_multiplier"), 1.0),
        water_tolerance=_num(data.get("water_tolerance"), 0.5),
        nutrient_sensitivity=_num(data.get("nutrient_sensitivity"), 0.5),
        seed_price=_int(data.get("seed_price"), 10),
        terpenes=_float_map(data.get("terpenes")),
        generation=max(0, _int(data.get("generation"), 1)),
        parents=parent_pair,
        mutation=_mutation(data.get("mutation")),
    )


def _curing(value: Any) -> Tuple[CuringBatch, ...]:
    batches = []
    for item in _items(value):
        batch_id = _str(item.get("id"), None)
        if batch_id is None:
            continue
        batches.append(
            CuringBatch(
                id=batch_id,
                quantity=max(0, _int(item.get("quantity"), 0)),
                started_at=_num(item.get("started_at"), 0.0),
                duration=_num(item.get("duration"), 60.0),
                quality_score=_num(item.get("quality_score"), 1.0),
                strain_id=_str(item.get("strain_id"), None),
            )
        )
    return tuple(batches)


def _inventory(value: Any) -> Tuple[InventoryBatch, ...]:
    batches = []
    for item in _items(value):
        batch_id = _str(item.get("id"), None)
        quantity = max(0, _int(item.get("quantity"), 0))
        if batch_id is None or quantity == 0:
            continue
        batches.append(
            InventoryBatch(
                id=batch_id,
                quantity=quantity,
                tier=_enum(QualityTier, item.get("tier"), QualityTier.C),
                price_multiplier=_num(item.get("price_multiplier"), 1.0),
                quality_score=_num(item.get("quality_score"), 1.0),
                strain_id=_str(item.get("strain_id"), None),
            )
        )
    return tuple(batches)


def _infestations(value: Any) -> Tuple[PestInfestation, ...]:
    result = []
    for item in _items(value):
        infestation_id = _str(item.get("id"), None)
        pest_id = _str(item.get("pest_id"), None)
        if infestation_id is None or pest_id is None:
            continue
        result.append(
            PestInfestation(
                id=infestation_id,
                pest_id=pest_id,
                slot=_int(item.get("slot"), -1),
                plant_id=_str(item.get("plant_id"), "") or "",
                severity=_num(item.get("severity"), 0.0),
                detected_at=_num(item.get("detected_at"), 0.0),
                treated=_bool(item.get("treated"), False),
            )
        )
    return tuple(result)


def _mother_plants(value: Any, max_clones: int) -> Tuple[MotherPlant, ...]:
    result = []
    for item in _items(value):
        mother_id = _str(item.get("id"), None)
        strain_id = _str(item.get("strain_id"), None)
        if mother_id is None or strain_id is None:
            continue
        result.append(
            MotherPlant(
                id=mother_id,
                strain_id=strain_id,
                acquired_at=_num(item.get("acquired_at"), 0.0),
                max_clones=_int(item.get("max_clones"), max_clones),
                phenotype_id=_str(item.get("phenotype_id"), None),
                clones_taken=max(0, _int(item.get("clones_taken"), 0)),
            )
        )
    return tuple(result)


def _trade(data: Any) -> TradeState:
    data = _mapping(data)
    default = TradeState()
    relationships = {}
    for dealer_id, item in _mapping(data.get("relationships")).items():
        if not isinstance(item, Mapping):
            continue
        relationships[dealer_id] = DealerRelationship(
            dealer_id=dealer_id,
            level=_int(item.get("level"), 0),
            total_deals=_int(item.get("total_deals"), 0),
            last_deal_at=_opt_num(item.get("last_deal_at")),
            loyalty_bonus=_num(item.get("loyalty_bonus"), 0.0),
        )
    contracts = []
    for item in _items(data.get("contracts")):
        contract_id = _str(item.get("id"), None)
        dealer_id = _str(item.get("dealer_id"), None)
        if contract_id is None or dealer_id is None:
            continue
        weeks = _int(item.get("weeks"), 1)
        contracts.append(
            TradeContract(
                id=contract_id,
                dealer_id=dealer_id,
                quantity=_int(item.get("quantity"), 0),
                price_per_bud=_num(item.get("price_per_bud"), 0.0),
                weeks=weeks,
                started_at=_num(item.get("started_at"), 0.0),
                next_delivery_at=_num(item.get("next_delivery_at"), 0.0),
                total_deliveries=_int(item.get("total_deliveries"), weeks),
                completed_deliveries=_int(item.get("completed_deliveries"), 0),
                strain_id=_str(item.get("strain_id"), None),
            )
        )
    offers = []
    for item in _items(data.get("offers")):
        offer_id = _str(item.get("id"), None)
        if offer_id is None:
            continue
        offers.append(
            TradeOffer(
                id=offer_id,
                quantity=_int(item.get("quantity"), 0),
                price_per_bud=_num(item.get("price_per_bud"), 1.0),
            )
        )
    return TradeState(
        reputation=_int(data.get("reputation"), default.reputation),
        total_revenue=_int(data.get("total_revenue"), default.total_revenue),
        relationships=relationships,
        contracts=tuple(contracts),
        offers=tuple(offers),
        next_offer_refresh_at=_num(data.get("next_offer_refresh_at"), default.next_offer_refresh_at),
    )


def _market(data: Any, default: MarketState) -> MarketState:
    data = _mapping(data)
    strains = dict(default.strains)
    for strain_id, item in _mapping(data.get("strains")).items():
        if not isinstance(item, Mapping):
            continue
        base = strains.get(strain_id)
        base_price = _num(item.get("base_price"), base.base_price if base is not None else 3.0)
        history = tuple(
            PricePoint(timestamp=_num(p.get("timestamp"), 0.0), price=_num(p.get("price"), base_price))
            for p in _items(item.get("price_history"))
        )
        strains[strain_id] = MarketData(
            strain_id=strain_id,
            base_price=base_price,
            current_price=_num(item.get("current_price"), base_price),
            demand=_int(item.get("demand"), base.demand if base is not None else 50),
            supply=max(0, _int(item.get("supply"), base.supply if base is not None else 0)),
            volatility=_num(item.get("volatility"), base.volatility if base is not None else 0.2),
            trend=_enum(Trend, item.get("trend"), Trend.STABLE),
            price_history=history,
        )
    conditions = []
    for item in _items(data.get("conditions")):
        condition_id = _str(item.get("condition_id"), None)
        remaining = _int(item.get("remaining"), 0)
        if condition_id is not None and remaining > 0:
            conditions.append(ActiveCondition(condition_id=condition_id, remaining=remaining))
    return MarketState(strains=strains, conditions=tuple(conditions))


def _research(data: Any) -> ResearchState:
    data = _mapping(data)
    active = None
    raw = data.get("active")
    if isinstance(raw, Mapping) and _str(raw.get("node_id"), None) is not None:
        active = ActiveResearch(
            node_id=raw["node_id"],
            progress=_num(raw.get("progress"), 0.0),
            started_at=_num(raw.get("started_at"), 0.0),
        )
    return ResearchState(
        points=max(0, _int(data.get("points"), 0)),
        completed=_str_tuple(data.get("completed")),
        active=active,
    )


def _event(data: Any) -> Optional[ActiveEvent]:
    if not isinstance(data, Mapping) or _str(data.get("event_id"), None) is None:
        return None
    return ActiveEvent(
        event_id=data["event_id"],
        started_at=_num(data.get("started_at"), 0.0),
        ends_at=_num(data.get("ends_at"), 0.0),
    )


def _stats(data: Any) -> Stats:
    d = Stats()
    readers = {f.name: _int for f in dataclasses.fields(Stats)}
    return _fill(Stats, data, d, **readers)


def _quests(value: Any, default: Tuple[QuestProgress, ...]) -> Tuple[QuestProgress, ...]:
    saved = {}
    for item in _items(value):
        quest_id = _str(item.get("quest_id"), None)
        if quest_id is not None:
            saved[quest_id] = item
    quests = []
    for quest in default:
        item = saved.get(quest.quest_id)
        if item is None:
            quests.append(quest)
            continue
        quests.append(
            QuestProgress(
                quest_id=quest.quest_id,
                progress=max(0, _int(item.get("progress"), 0)),
                claimed=_bool(item.get("claimed"), False),
            )
        )
    return tuple(quests)


def _settings(data: Any) -> Settings:
    d = Settings()
    return _fill(Settings, data, d, random_events_enabled=_bool, pest_frequency=_num)


_ID_SUFFIX = re.compile(r"-(\d+)$")


def _highest_id_suffix(state: GameState) -> int:
    """Largest numeric suffix among the ids handed out by ``allocate_id``."""
    ids: List[str] = [plant.id for plant in state.slots if plant is not None]
    ids.extend(batch.id for batch in state.curing)
    ids.extend(batch.id for batch in state.inventory)
    ids.extend(infestation.id for infestation in state.infestations)
    ids.extend(mother.id for mother in state.mother_plants)
    ids.extend(contract.id for contract in state.trade.contracts)
    ids.extend(offer.id for offer in state.trade.offers)
    ids.extend(state.custom_strains)
    highest = 0
    for record_id in ids:
        match = _ID_SUFFIX.search(record_id)
        if match:
            highest = max(highest, int(match.group(1)))
    return highest


# ----------------------------------------------------------------------
# Top level
# ----------------------------------------------------------------------


def snapshot_from_dict(data: Any, catalog: Optional[Catalog] = None) -> GameState:
    """Load a snapshot of any known schema version into a canonical GameState.

    Raises:
        PersistenceError: Only when ``data`` is not a mapping
    """
    catalog = catalog or default_catalog()
    data = migrate(data)
    default = initial_state(catalog)

    raw_slots = data.get("slots")
    if isinstance(raw_slots, list) and raw_slots:
        slots = tuple(_plant(p, catalog.terminal_phase) for p in raw_slots)
    else:
        slots = default.slots
    raw_automation = data.get("automation") if isinstance(data.get("automation"), list) else []
    automation = tuple(
        _automation(raw_automation[i]) if i < len(raw_automation) else AutomationState()
        for i in range(len(slots))
    )

    custom_strains = {}
    for item in _mapping(data.get("custom_strains")).values():
        if isinstance(item, Mapping):
            strain = _strain(item)
            if strain is not None:
                custom_strains[strain.id] = strain

    upgrades = {
        key: level
        for key, level in _mapping(data.get("upgrades")).items()
        if isinstance(level, int) and not isinstance(level, bool) and level > 0
    }

    state = GameState(
        nugs=_int(data.get("nugs"), default.nugs),
        buds=max(0, _int(data.get("buds"), default.buds)),
        slots=slots,
        automation=automation,
        custom_strains=custom_strains,
        discovered_strains=_str_tuple(data.get("discovered_strains"), default.discovered_strains),
        curing=_curing(data.get("curing")),
        inventory=_inventory(data.get("inventory")),
        infestations=_infestations(data.get("infestations")),
        mother_plants=_mother_plants(data.get("mother_plants"), breeding_constants.MAX_CLONES),
        trade=_trade(data.get("trade")),
        market=_market(data.get("market"), default.market),
        research=_research(data.get("research")),
        employees=_str_tuple(data.get("employees")),
        upgrades=upgrades,
        env_upgrades=_str_tuple(data.get("env_upgrades")),
        environment=_global_environment(data.get("environment")),
        event=_event(data.get("event")),
        stats=_stats(data.get("stats")),
        quests=_quests(data.get("quests"), default.quests),
        settings=_settings(data.get("settings")),
        next_id=max(1, _int(data.get("next_id"), default.next_id)),
    )
    # The id counter must stay ahead of every loaded id.
    next_id = max(state.next_id, _highest_id_suffix(state) + 1)
    if next_id != state.next_id:
        state = dataclasses.replace(state, next_id=next_id)
    # Buds must cover every tracked batch.
    if state.buds < state.tracked_buds():
        state = dataclasses.replace(state, buds=state.tracked_buds())
    logger.debug("Loaded snapshot: %d slots, %d custom strains", len(slots), len(custom_strains))
    return state
