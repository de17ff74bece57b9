"""Game API endpoints.

Every command endpoint runs one simulation command through the session and
answers ``{"ok": true, "value": ...}``; gameplay refusals answer HTTP 409
with the failure reason in ``error``.
"""

import asyncio
import dataclasses
import logging
from pathlib import Path
from typing import Any, Callable

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse

from backend.game_persistence import list_snapshots, load_game, resolve_snapshot, save_game
from backend.game_session import GameSession, to_jsonable
from backend.models import (
    ActivityResponse,
    AutomationRequest,
    BreedRequest,
    CloneRequest,
    CommandResponse,
    ContractRequest,
    EnhancerRequest,
    EnvironmentRequest,
    LoadRequest,
    MotherPlantRequest,
    PlantRequest,
    ResearchStartRequest,
    SaveResponse,
    TradeRequest,
    TrainingRequest,
    TreatRequest,
    WaterRequest,
)
from backend.tick_scheduler import TICKS, TickScheduler
from growsim import Result
from growsim.automation import hire_employee, set_slot_automation
from growsim.catalog.types import SoilType
from growsim.exceptions import PersistenceError
from growsim.genetics import breed, create_mother_plant, take_clone
from growsim.harvest import harvest, rush_curing
from growsim.market import (
    accept_offer,
    create_contract,
    get_market_price,
    haggle_offer,
    refresh_offers,
    trade_with_dealer,
)
from growsim.persistence import snapshot_to_dict
from growsim.plants import (
    adjust_environment,
    apply_enhancer,
    apply_training,
    fertilize,
    plant_seed,
    toggle_light_cycle,
    treat_infestation,
    water,
)
from growsim.quests import claim_quest
from growsim.research import cancel_research, research_bonuses, start_research
from growsim.shop import buy_env_upgrade, buy_upgrade

logger = logging.getLogger(__name__)


def _payload(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return to_jsonable(dataclasses.asdict(value))
    return to_jsonable(value)


def _respond(result: Result) -> JSONResponse:
    if result.is_err():
        body = CommandResponse(ok=False, error=result.error.value)
        return JSONResponse(body.model_dump(), status_code=409)
    body = CommandResponse(ok=True, value=_payload(result.value))
    return JSONResponse(body.model_dump())


def _soil(value: str) -> SoilType:
    try:
        return SoilType(value)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=f"Unknown soil type: {value}") from exc


def setup_router(
    session: GameSession,
    tick_scheduler: TickScheduler,
    data_dir: Path,
) -> APIRouter:
    """Create the game router bound to one session."""
    router = APIRouter(prefix="/api/game", tags=["game"])

    async def run(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> JSONResponse:
        return _respond(await session.apply(fn, *args, **kwargs))

    @router.get("/state")
    async def get_state() -> JSONResponse:
        return JSONResponse(snapshot_to_dict(session.state))

    @router.get("/activity", response_model=ActivityResponse)
    async def get_activity() -> ActivityResponse:
        return ActivityResponse(events=session.activity())

    @router.get("/market/{strain_id}/price")
    async def get_price(strain_id: str) -> JSONResponse:
        price = get_market_price(session.state, session.ctx, strain_id)
        if price is None:
            return JSONResponse({"error": "unknown_strain"}, status_code=404)
        return JSONResponse({"strain_id": strain_id, "price": price})

    @router.get("/research/bonuses")
    async def get_research_bonuses() -> JSONResponse:
        bonuses = research_bonuses(session.state, session.ctx)
        payload = dataclasses.asdict(bonuses)
        payload["cost_reductions"] = dict(bonuses.cost_reductions)
        payload["unlocked_features"] = sorted(bonuses.unlocked_features)
        return JSONResponse(payload)

    # Grow slots

    @router.post("/slots/{slot}/plant")
    async def plant(slot: int, request: PlantRequest) -> JSONResponse:
        return await run(plant_seed, slot, request.strain_id, _soil(request.soil), now=session.now())

    @router.post("/slots/{slot}/water")
    async def water_slot(slot: int, request: WaterRequest) -> JSONResponse:
        return await run(water, slot, request.skill_bonus, now=session.now())

    @router.post("/slots/{slot}/fertilize")
    async def fertilize_slot(slot: int) -> JSONResponse:
        return await run(fertilize, slot, now=session.now())

    @router.post("/slots/{slot}/harvest")
    async def harvest_slot(slot: int) -> JSONResponse:
        return await run(harvest, slot, now=session.now())

    @router.post("/slots/{slot}/training")
    async def train_slot(slot: int, request: TrainingRequest) -> JSONResponse:
        return await run(
            apply_training, slot, request.technique_id, request.success_level, now=session.now()
        )

    @router.post("/slots/{slot}/enhancer")
    async def enhance_slot(slot: int, request: EnhancerRequest) -> JSONResponse:
        return await run(apply_enhancer, slot, request.enhancer_id)

    @router.post("/slots/{slot}/automation")
    async def automate_slot(slot: int, request: AutomationRequest) -> JSONResponse:
        return await run(
            set_slot_automation, slot, request.employee_id, request.enabled, request.replant_strain_id
        )

    # Genetics

    @router.post("/breed")
    async def breed_strains(request: BreedRequest) -> JSONResponse:
        return await run(breed, request.parent1, request.parent2)

    @router.post("/mother-plants")
    async def new_mother_plant(request: MotherPlantRequest) -> JSONResponse:
        return await run(create_mother_plant, request.strain_id, request.phenotype_id, now=session.now())

    @router.post("/mother-plants/{mother_id}/clone")
    async def clone(mother_id: str, request: CloneRequest) -> JSONResponse:
        return await run(take_clone, mother_id, request.slot, _soil(request.soil), now=session.now())

    # Market

    @router.post("/dealers/{dealer_id}/trade")
    async def trade(dealer_id: str, request: TradeRequest) -> JSONResponse:
        return await run(trade_with_dealer, dealer_id, request.quantity, session.now(), hour=request.hour)

    @router.post("/dealers/{dealer_id}/contracts")
    async def contract(dealer_id: str, request: ContractRequest) -> JSONResponse:
        return await run(
            create_contract,
            dealer_id,
            request.quantity,
            request.weeks,
            session.now(),
            strain_id=request.strain_id,
        )

    @router.post("/offers/refresh")
    async def refresh() -> JSONResponse:
        return await run(refresh_offers, session.now())

    @router.post("/offers/{offer_id}/accept")
    async def accept(offer_id: str) -> JSONResponse:
        return await run(accept_offer, offer_id)

    @router.post("/offers/{offer_id}/haggle")
    async def haggle(offer_id: str) -> JSONResponse:
        return await run(haggle_offer, offer_id)

    @router.post("/curing/{batch_id}/rush")
    async def rush(batch_id: str) -> JSONResponse:
        return await run(rush_curing, batch_id)

    # Progression and shop

    @router.post("/research/start")
    async def research_start(request: ResearchStartRequest) -> JSONResponse:
        return await run(start_research, request.node_id, now=session.now())

    @router.post("/research/cancel")
    async def research_cancel() -> JSONResponse:
        return await run(cancel_research)

    @router.post("/upgrades/{upgrade_id}")
    async def upgrade(upgrade_id: str) -> JSONResponse:
        return await run(buy_upgrade, upgrade_id)

    @router.post("/env-upgrades/{upgrade_id}")
    async def env_upgrade(upgrade_id: str) -> JSONResponse:
        return await run(buy_env_upgrade, upgrade_id)

    @router.post("/employees/{employee_id}/hire")
    async def hire(employee_id: str) -> JSONResponse:
        return await run(hire_employee, employee_id)

    @router.post("/quests/{quest_id}/claim")
    async def claim(quest_id: str) -> JSONResponse:
        return await run(claim_quest, quest_id)

    # Environment and pests

    @router.post("/infestations/{infestation_id}/treat")
    async def treat(infestation_id: str, request: TreatRequest) -> JSONResponse:
        return await run(treat_infestation, infestation_id, request.treatment_id)

    @router.post("/environment")
    async def environment(request: EnvironmentRequest) -> JSONResponse:
        return await run(adjust_environment, request.parameter, request.value)

    @router.post("/environment/light-cycle")
    async def light_cycle() -> JSONResponse:
        return await run(toggle_light_cycle)

    # Ticks and persistence

    @router.post("/tick/{name}")
    async def tick(name: str) -> JSONResponse:
        if name not in TICKS:
            return JSONResponse({"error": f"Unknown tick: {name}"}, status_code=404)
        await tick_scheduler.run_tick(name)
        return JSONResponse({"ok": True, "tick": name})

    @router.get("/snapshots")
    async def snapshots() -> JSONResponse:
        return JSONResponse({"snapshots": [path.name for path in list_snapshots(data_dir)]})

    @router.post("/save", response_model=SaveResponse)
    async def save() -> SaveResponse:
        loop = asyncio.get_running_loop()
        path = await loop.run_in_executor(None, save_game, session.state, data_dir)
        return SaveResponse(path=path.name)

    @router.post("/load")
    async def load(request: LoadRequest) -> JSONResponse:
        path = resolve_snapshot(data_dir, request.filename)
        if path is None:
            return JSONResponse({"error": "Snapshot not found"}, status_code=404)
        try:
            state = load_game(path, session.ctx.catalog)
        except PersistenceError as exc:
            logger.error("Failed to load %s: %s", path.name, exc)
            return JSONResponse({"error": str(exc)}, status_code=400)
        await session.replace_state(state)
        return JSONResponse({"ok": True, "snapshot": path.name})

    return router
