"""Auto-save service for periodic game persistence."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

from backend.game_persistence import DEFAULT_KEEP, cleanup_old_snapshots, save_game
from backend.game_session import GameSession

logger = logging.getLogger(__name__)


class AutoSaveService:
    """Background task that saves the session every ``interval`` seconds."""

    def __init__(self, session: GameSession, data_dir: Path, interval: float, keep: int = DEFAULT_KEEP):
        self._session = session
        self._data_dir = Path(data_dir)
        self._interval = interval
        self._keep = keep
        self._task: Optional[asyncio.Task] = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        if self._running:
            logger.warning("Auto-save service already running")
            return
        self._running = True
        self._task = asyncio.create_task(self._autosave_loop(), name="autosave")
        logger.info("Auto-save service started (interval: %ss)", self._interval)

    async def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("Auto-save service stopped")

    async def save_now(self) -> Optional[Path]:
        """Save immediately; returns the snapshot path or None on failure."""
        loop = asyncio.get_running_loop()
        # Snapshot reference is immutable, so it can be written outside the lock.
        state = self._session.state
        try:
            path = await loop.run_in_executor(None, save_game, state, self._data_dir)
            await loop.run_in_executor(None, cleanup_old_snapshots, self._data_dir, self._keep)
            return path
        except OSError as e:
            logger.error("Save failed: %s", e, exc_info=True)
            return None

    async def _autosave_loop(self) -> None:
        try:
            while self._running:
                await asyncio.sleep(self._interval)
                path = await self.save_now()
                if path is not None:
                    logger.debug("Auto-saved to %s", path.name)
        except asyncio.CancelledError:
            logger.debug("Auto-save loop cancelled")
            raise
