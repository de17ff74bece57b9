"""Session, tick scheduler, auto-save and snapshot files."""

import asyncio
from dataclasses import replace

import pytest
from fastapi.testclient import TestClient

from backend.app_factory import AppContext, create_app
from backend.auto_save_service import AutoSaveService
from backend.game_persistence import cleanup_old_snapshots, list_snapshots, load_game, save_game
from backend.game_session import GameSession
from backend.tick_scheduler import TICKS, TickScheduler
from growsim.exceptions import PersistenceError
from growsim.plants import plant_seed
from growsim.result import FailureReason


@pytest.fixture
def session():
    return GameSession(seed=11, clock=lambda: 50.0)


@pytest.mark.asyncio
async def test_apply_keeps_new_state_and_returns_result(session):
    result = await session.apply(plant_seed, 0, "green-gelato")
    assert result.is_ok()
    assert session.state.plant_at(0).id == result.value

    before = session.state
    result = await session.apply(plant_seed, 0, "green-gelato")
    assert result.error is FailureReason.SLOT_OCCUPIED
    assert session.state is before


@pytest.mark.asyncio
async def test_run_tick_uses_configured_interval(session):
    await session.apply(plant_seed, 0, "green-gelato")
    scheduler = TickScheduler(session)

    await scheduler.run_tick("phases")
    assert session.state.plant_at(0).elapsed == pytest.approx(scheduler.interval("phases"))

    await scheduler.run_tick("phases", interval=2.5)
    assert session.state.plant_at(0).elapsed == pytest.approx(scheduler.interval("phases") + 2.5)

    with pytest.raises(KeyError):
        await scheduler.run_tick("moonrise")


@pytest.mark.asyncio
async def test_every_registered_tick_runs_on_fresh_game(session):
    scheduler = TickScheduler(session)
    for name in TICKS:
        await scheduler.run_tick(name)
    assert session.state.nugs == 1000


@pytest.mark.asyncio
async def test_scheduler_start_stop(session):
    scheduler = TickScheduler(session)
    await scheduler.start()
    assert scheduler.running
    await asyncio.sleep(0)
    await scheduler.stop()
    assert not scheduler.running


@pytest.mark.asyncio
async def test_auto_save_writes_and_prunes(session, tmp_path):
    saves = tmp_path / "saves"
    saves.mkdir()
    for i in range(3):
        (saves / f"snapshot_20200101_00000{i}_000000.json").write_text("{}")

    service = AutoSaveService(session, tmp_path, interval=60.0, keep=2)
    path = await service.save_now()

    assert path is not None
    assert [p.name for p in list_snapshots(tmp_path)] == [path.name, "snapshot_20200101_000002_000000.json"]


@pytest.mark.asyncio
async def test_auto_save_start_stop(session, tmp_path):
    service = AutoSaveService(session, tmp_path, interval=3600.0)
    await service.start()
    assert service.running
    await service.stop()
    assert not service.running
    assert list_snapshots(tmp_path) == []


def test_cleanup_keeps_newest(tmp_path):
    saves = tmp_path / "saves"
    saves.mkdir()
    names = [f"snapshot_2021010{i}_000000_000000.json" for i in range(1, 6)]
    for name in names:
        (saves / name).write_text("{}")

    assert cleanup_old_snapshots(tmp_path, keep=2) == 3
    assert [p.name for p in list_snapshots(tmp_path)] == names[:-3:-1]


def test_save_and_load_file(session, tmp_path):
    state = replace(session.state, nugs=321)
    path = save_game(state, tmp_path)
    assert path.parent == tmp_path / "saves"
    assert load_game(path, session.ctx.catalog) == state


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(PersistenceError):
        load_game(tmp_path / "absent.json")


def test_startup_resumes_newest_snapshot(tmp_path, session):
    save_game(replace(session.state, nugs=42), tmp_path)
    context = AppContext(data_dir=tmp_path, resume=True, session=session)
    app = create_app(context=context, start_background=False)

    with TestClient(app):
        assert session.state.nugs == 42


def test_startup_without_snapshots_keeps_new_game(tmp_path, session):
    context = AppContext(data_dir=tmp_path, resume=True, session=session)
    app = create_app(context=context, start_background=False)

    with TestClient(app):
        assert session.state.nugs == 1000
