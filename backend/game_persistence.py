"""Game snapshot files on disk.

Snapshots are written as JSON with ``orjson`` under ``<data_dir>/saves``.
File names embed a UTC timestamp, so lexical order is age order.

Schema Versioning:
    The payload carries ``schema_version``; older payloads (including the
    legacy camelCase browser saves) are migrated on load by
    ``growsim.persistence``.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import orjson

from growsim import GameState
from growsim.catalog import Catalog
from growsim.exceptions import PersistenceError
from growsim.persistence import snapshot_from_dict, snapshot_to_dict

logger = logging.getLogger(__name__)

SNAPSHOT_PREFIX = "snapshot_"
DEFAULT_KEEP = 10


def saves_directory(data_dir: Path) -> Path:
    saves = Path(data_dir) / "saves"
    saves.mkdir(parents=True, exist_ok=True)
    return saves


def save_game(state: GameState, data_dir: Path) -> Path:
    """Write ``state`` to a new snapshot file and return its path."""
    payload: Dict[str, Any] = snapshot_to_dict(state)
    saved_at = datetime.now(timezone.utc)
    payload["saved_at"] = saved_at.isoformat()
    path = saves_directory(data_dir) / f"{SNAPSHOT_PREFIX}{saved_at.strftime('%Y%m%d_%H%M%S_%f')}.json"
    path.write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2))
    logger.info("Saved game to %s", path.name)
    return path


def list_snapshots(data_dir: Path) -> List[Path]:
    """Snapshot files, newest first."""
    saves = saves_directory(data_dir)
    return sorted(saves.glob(f"{SNAPSHOT_PREFIX}*.json"), reverse=True)


def resolve_snapshot(data_dir: Path, filename: Optional[str] = None) -> Optional[Path]:
    """Find a snapshot by file name (newest when omitted).

    Names that escape the saves directory are rejected.
    """
    if filename is None:
        snapshots = list_snapshots(data_dir)
        return snapshots[0] if snapshots else None
    saves = saves_directory(data_dir).resolve()
    candidate = (saves / filename).resolve()
    if not candidate.is_relative_to(saves):
        logger.error("Rejected snapshot outside saves directory: %s", candidate)
        return None
    return candidate if candidate.is_file() else None


def load_game(path: Path, catalog: Optional[Catalog] = None) -> GameState:
    """Read and migrate one snapshot file.

    Raises:
        PersistenceError: If the file is unreadable or not a JSON object
    """
    try:
        data = orjson.loads(Path(path).read_bytes())
    except (OSError, orjson.JSONDecodeError) as e:
        raise PersistenceError(f"Cannot read snapshot {path}: {e}") from e
    state = snapshot_from_dict(data, catalog)
    logger.info("Loaded game from %s", Path(path).name)
    return state


def cleanup_old_snapshots(data_dir: Path, keep: int = DEFAULT_KEEP) -> int:
    """Delete the oldest snapshots beyond ``keep``; returns how many were removed."""
    deleted = 0
    for path in list_snapshots(data_dir)[keep:]:
        try:
            path.unlink()
            deleted += 1
        except OSError as e:
            logger.warning("Could not delete %s: %s", path.name, e)
    if deleted:
        logger.debug("Cleaned up %d old snapshots", deleted)
    return deleted
