"""Application factory and context for the grow simulation API.

The FastAPI app is built by ``create_app`` rather than at import time;
all runtime objects live on an ``AppContext`` attached as
``app.state.context`` so each test can build an isolated app.

Usage:
------
    # For production (settings from environment)
    app = create_app()

    # For testing (no background tasks, fixed seed)
    app = create_app(context=AppContext(seed=7), start_background=False)
"""

import logging
import os
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend import __version__
from backend.auto_save_service import AutoSaveService
from backend.game_persistence import load_game, resolve_snapshot
from backend.game_session import GameSession
from backend.logging_config import configure_logging
from backend.routers import game
from backend.tick_scheduler import TickScheduler
from growsim.exceptions import PersistenceError

DEFAULT_API_PORT = 8000
DEFAULT_AUTOSAVE_INTERVAL = 60.0


def _env_seed() -> Optional[int]:
    raw = os.getenv("GROW_SEED")
    return int(raw) if raw else None


@dataclass
class AppContext:
    """Runtime context holding all application state."""

    # Configuration
    api_port: int = field(default_factory=lambda: int(os.getenv("GROW_API_PORT", str(DEFAULT_API_PORT))))
    seed: Optional[int] = field(default_factory=_env_seed)
    data_dir: Path = field(default_factory=lambda: Path(os.getenv("GROW_DATA_DIR", "data")))
    autosave_interval: float = field(
        default_factory=lambda: float(os.getenv("GROW_AUTOSAVE_INTERVAL", str(DEFAULT_AUTOSAVE_INTERVAL)))
    )
    production_mode: bool = field(
        default_factory=lambda: os.getenv("PRODUCTION", "false").lower() == "true"
    )
    allowed_origins: List[str] = field(
        default_factory=lambda: os.getenv("ALLOWED_ORIGINS", "*").split(",")
    )
    # Resume from the newest snapshot on startup
    resume: bool = field(default_factory=lambda: os.getenv("GROW_RESUME", "true").lower() == "true")

    # Runtime state
    session: Optional[GameSession] = None
    tick_scheduler: Optional[TickScheduler] = None
    auto_save_service: Optional[AutoSaveService] = None

    # Logging
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("backend"))

    def ensure_session(self) -> GameSession:
        if self.session is None:
            self.session = GameSession(seed=self.seed)
        if self.tick_scheduler is None:
            self.tick_scheduler = TickScheduler(self.session)
        if self.auto_save_service is None:
            self.auto_save_service = AutoSaveService(self.session, self.data_dir, self.autosave_interval)
        return self.session


async def _resume_latest(ctx: AppContext) -> None:
    session = ctx.ensure_session()
    path = resolve_snapshot(ctx.data_dir)
    if path is None:
        ctx.logger.info("No snapshot to resume; starting a new game")
        return
    try:
        state = load_game(path, session.ctx.catalog)
    except PersistenceError as e:
        ctx.logger.warning("Could not resume from %s: %s", path.name, e)
        return
    await session.replace_state(state)
    ctx.logger.info("Resumed game from %s", path.name)


def create_app(
    *,
    context: Optional[AppContext] = None,
    start_background: Optional[bool] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        context: Pre-configured AppContext (for testing). If None, creates a new one.
        start_background: Run tick loops and auto-save during the lifespan
            (default: True unless GROW_BACKGROUND=false)

    Returns:
        Configured FastAPI application with context attached as app.state.context
    """
    logger = configure_logging()

    if context is None:
        context = AppContext()
    if start_background is None:
        start_background = os.getenv("GROW_BACKGROUND", "true").lower() == "true"

    context.logger = logger
    session = context.ensure_session()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        ctx: AppContext = app.state.context
        try:
            if ctx.resume:
                await _resume_latest(ctx)
            if start_background:
                await ctx.tick_scheduler.start()
                await ctx.auto_save_service.start()
            ctx.logger.info("LIFESPAN: Startup complete - yielding control to app")
            yield
            ctx.logger.info("LIFESPAN: Received shutdown signal")
        except Exception as e:
            ctx.logger.error(f"Exception in lifespan startup: {e}", exc_info=True)
            raise
        finally:
            await ctx.tick_scheduler.stop()
            if ctx.auto_save_service.running:
                await ctx.auto_save_service.stop()
                await ctx.auto_save_service.save_now()

    app = FastAPI(
        title="Grow Simulation API",
        version=__version__,
        lifespan=lifespan,
        docs_url=None if context.production_mode else "/docs",
        redoc_url=None if context.production_mode else "/redoc",
    )

    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=context.allowed_origins if context.production_mode else ["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(game.setup_router(session, context.tick_scheduler, context.data_dir))

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok", "version": __version__}

    return app
