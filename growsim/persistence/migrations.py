"""Snapshot schema migrations.

Each step takes the plain dict of one schema version and returns the dict
of the next. Version 1 is the legacy browser save layout: camelCase keys,
millisecond timestamps and a few differently nested collections.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Dict, List, Mapping, Optional

from growsim.exceptions import PersistenceError

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 2

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")

# Legacy quest ids and their catalog counterparts
LEGACY_QUEST_IDS = {
    "q-h-1": "harvest-3",
    "q-s-1": "sell-100",
    "q-w-1": "water-10",
}

# Legacy events lasted one minute and stored only their end time
LEGACY_EVENT_DURATION = 60.0


def snake_case(key: str) -> str:
    return _CAMEL_BOUNDARY.sub(r"_\1", key).lower()


def snake_keys(value: Any) -> Any:
    """Recursively rename camelCase mapping keys to snake_case."""
    if isinstance(value, Mapping):
        return {snake_case(k) if isinstance(k, str) else k: snake_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [snake_keys(v) for v in value]
    return value


def ms_to_seconds(value: Any) -> Optional[float]:
    """Convert a millisecond timestamp; 0 and garbage mean "never"."""
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        return None
    return value / 1000.0


def _rename(record: Dict[str, Any], renames: Mapping[str, str]) -> Dict[str, Any]:
    for old, new in renames.items():
        if old in record and new not in record:
            record[new] = record.pop(old)
    return record


def _records(value: Any) -> List[Dict[str, Any]]:
    """A list of mappings, from a list or a ``{"batches": [...]}`` wrapper."""
    if isinstance(value, Mapping):
        value = value.get("batches", [])
    if not isinstance(value, list):
        return []
    return [dict(item) for item in value if isinstance(item, Mapping)]


def _migrate_plant(plant: Any) -> Any:
    if not isinstance(plant, Mapping):
        return None
    plant = _rename(dict(plant), {"phase_index": "phase", "elapsed_in_phase": "elapsed"})
    plant["planted_at"] = ms_to_seconds(plant.get("planted_at")) or 0.0
    modifiers = plant.get("modifiers")
    if isinstance(modifiers, Mapping):
        modifiers = _rename(
            dict(modifiers),
            {
                "soil_type": "soil",
                "last_water_time": "last_water_at",
                "last_fertilizer_time": "last_fertilize_at",
                "quality_multiplier": "quality",
                "pest_infestation_ids": "infestations",
                "applied_enhancers": "enhancers",
                "applied_trainings": "training",
                "terpene_profile": "terpenes",
            },
        )
        modifiers["last_water_at"] = ms_to_seconds(modifiers.get("last_water_at"))
        modifiers["last_fertilize_at"] = ms_to_seconds(modifiers.get("last_fertilize_at"))
        training = []
        for record in _records(modifiers.get("training")):
            record["applied_at"] = ms_to_seconds(record.get("applied_at")) or 0.0
            training.append(record)
        modifiers["training"] = training
        plant["modifiers"] = modifiers
    return plant


def _migrate_trade(trade: Any) -> Dict[str, Any]:
    if not isinstance(trade, Mapping):
        return {}
    trade = _rename(dict(trade), {"next_refresh_at": "next_offer_refresh_at", "active_contracts": "contracts"})
    trade["next_offer_refresh_at"] = ms_to_seconds(trade.get("next_offer_refresh_at")) or 0.0
    relationships = {}
    for rel in _records(trade.pop("dealer_relationships", [])):
        rel = _rename(rel, {"relationship_level": "level"})
        rel["last_deal_at"] = ms_to_seconds(rel.get("last_deal_at"))
        if isinstance(rel.get("dealer_id"), str):
            relationships[rel["dealer_id"]] = rel
    trade["relationships"] = relationships
    contracts = []
    for contract in _records(trade.get("contracts")):
        contract = _rename(contract, {"duration": "weeks"})
        contract["started_at"] = ms_to_seconds(contract.get("started_at")) or 0.0
        contract["next_delivery_at"] = ms_to_seconds(contract.get("next_delivery_at")) or 0.0
        contracts.append(contract)
    trade["contracts"] = contracts
    return trade


def _migrate_market(market: Any) -> Dict[str, Any]:
    if not isinstance(market, Mapping):
        return {}
    strains = {}
    data = market.get("data", {})
    if isinstance(data, Mapping):
        for strain_id, entry in data.items():
            if not isinstance(entry, Mapping):
                continue
            entry = dict(entry)
            entry.setdefault("strain_id", strain_id)
            history = []
            for point in _records(entry.get("price_history")):
                point["timestamp"] = ms_to_seconds(point.get("timestamp")) or 0.0
                history.append(point)
            entry["price_history"] = history
            strains[strain_id] = entry
    # Legacy conditions carried no remaining-tick counter; they are dropped.
    return {"strains": strains, "conditions": []}


def _v1_to_v2(data: Dict[str, Any]) -> Dict[str, Any]:
    data = snake_keys(data)
    slots = data.get("slots")
    slots = [_migrate_plant(p) for p in slots] if isinstance(slots, list) else []
    data["slots"] = slots

    curing = []
    for batch in _records(data.get("curing")):
        batch["started_at"] = ms_to_seconds(batch.get("started_at")) or 0.0
        duration_ms = batch.pop("duration_ms", None)
        if isinstance(duration_ms, (int, float)):
            batch["duration"] = duration_ms / 1000.0
        curing.append(batch)
    data["curing"] = curing
    data["inventory"] = [
        _rename(batch, {"quality_tier": "tier", "quality_multiplier": "price_multiplier"})
        for batch in _records(data.get("inventory"))
    ]

    breeding = data.pop("breeding", None)
    if isinstance(breeding, Mapping):
        custom = {}
        for strain in _records(breeding.get("custom_strains")):
            strain = _rename(strain, {"base_time_multiplier": "time_multiplier", "terpene_profile": "terpenes"})
            if isinstance(strain.get("id"), str):
                custom[strain["id"]] = strain
        data["custom_strains"] = custom
        mothers = []
        for mother in _records(breeding.get("mother_plants")):
            mother["acquired_at"] = ms_to_seconds(mother.get("acquired_at")) or 0.0
            mothers.append(mother)
        data["mother_plants"] = mothers
        if isinstance(breeding.get("discovered_strains"), list):
            data["discovered_strains"] = breeding["discovered_strains"]

    pests = data.pop("pests", None)
    infestations = []
    for infestation in _records(pests.get("infestations") if isinstance(pests, Mapping) else None):
        infestation = _rename(infestation, {"slot_index": "slot", "started_at": "detected_at"})
        infestation["detected_at"] = ms_to_seconds(infestation.get("detected_at")) or 0.0
        slot = infestation.get("slot")
        if isinstance(slot, int) and 0 <= slot < len(slots) and isinstance(slots[slot], Mapping):
            infestation.setdefault("plant_id", slots[slot].get("id"))
        infestations.append(infestation)
    data["infestations"] = infestations

    env_upgrades = data.get("env_upgrades")
    if isinstance(env_upgrades, Mapping):
        data["env_upgrades"] = [key for key, level in env_upgrades.items() if level]

    data["trade"] = _migrate_trade(data.get("trade"))
    data["market"] = _migrate_market(data.get("market"))

    research = data.get("research")
    if isinstance(research, Mapping):
        research = _rename(dict(research), {"completed_research": "completed", "active_research": "active"})
        active = research.get("active")
        if isinstance(active, Mapping):
            active = dict(active)
            active["started_at"] = ms_to_seconds(active.get("started_at")) or 0.0
            research["active"] = active
        data["research"] = research

    event = data.get("event")
    if isinstance(event, Mapping):
        ends_at = ms_to_seconds(event.get("ends_at")) or 0.0
        data["event"] = {
            "event_id": event.get("id"),
            "started_at": max(0.0, ends_at - LEGACY_EVENT_DURATION),
            "ends_at": ends_at,
        }

    quests = []
    for quest in _records(data.get("quests")):
        quest_id = quest.get("id")
        quests.append(
            {
                "quest_id": LEGACY_QUEST_IDS.get(quest_id, quest_id),
                "progress": quest.get("progress", 0),
                "claimed": quest.get("claimed", False),
            }
        )
    data["quests"] = quests
    return data


MIGRATIONS: Dict[int, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
    1: _v1_to_v2,
}


def detect_version(data: Mapping[str, Any]) -> int:
    version = data.get("schema_version", 1)
    if isinstance(version, bool) or not isinstance(version, int):
        return 1
    return version


def migrate(data: Any) -> Dict[str, Any]:
    """Bring a snapshot dict up to ``SCHEMA_VERSION``.

    Raises:
        PersistenceError: If ``data`` is not a mapping
    """
    if not isinstance(data, Mapping):
        raise PersistenceError(f"Snapshot must be a mapping, got {type(data).__name__}")
    migrated = dict(data)
    version = detect_version(migrated)
    if version > SCHEMA_VERSION:
        logger.warning("Snapshot schema %d is newer than %d; loading best-effort", version, SCHEMA_VERSION)
        return migrated
    while version < SCHEMA_VERSION:
        step = MIGRATIONS.get(version)
        if step is None:
            logger.warning("No migration from schema %d; loading best-effort", version)
            break
        logger.info("Migrating snapshot schema %d -> %d", version, version + 1)
        migrated = step(migrated)
        version += 1
    migrated["schema_version"] = SCHEMA_VERSION
    return migrated
