"""Local filesystem key-value store — one JSON file per slot.

Storage layout:
    <store_dir>/<SLOT_NAME>.json

Writes go to a temporary sibling file first and are moved into place, so a
crash never leaves a half-written slot behind.
"""

import logging
import os
import re
from pathlib import Path

from app.application.interfaces import KeyValueStore
from app.domain.exceptions import RepositoryError

logger = logging.getLogger(__name__)


def _sanitise(name: str, max_len: int = 80) -> str:
    """Replace non-word characters with underscores and truncate."""
    return re.sub(r"[^\w\-]", "_", name)[:max_len].strip("_") or "unnamed"


class JsonFileKeyValueStore(KeyValueStore):
    """Infrastructure adapter for durable slot storage on local disk."""

    def __init__(self, store_dir: str | Path):
        self._store_dir = Path(store_dir)
        self._store_dir.mkdir(parents=True, exist_ok=True)

    def _path_for(self, key: str) -> Path:
        return self._store_dir / f"{_sanitise(key)}.json"

    def get(self, key: str) -> str | None:
        path = self._path_for(key)
        try:
            return path.read_text("utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise RepositoryError("local", f"Cannot read slot {key}: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        path = self._path_for(key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            tmp_path.write_text(value, "utf-8")
            os.replace(tmp_path, path)
        except OSError as exc:
            raise RepositoryError("local", f"Cannot write slot {key}: {exc}") from exc

        logger.debug("Stored slot %s (%d bytes)", key, len(value))

    def remove(self, key: str) -> None:
        try:
            self._path_for(key).unlink(missing_ok=True)
        except OSError as exc:
            raise RepositoryError("local", f"Cannot remove slot {key}: {exc}") from exc


class InMemoryKeyValueStore(KeyValueStore):
    """Volatile store — same contract, nothing touches disk."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._slots: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._slots.get(key)

    def set(self, key: str, value: str) -> None:
        self._slots[key] = value

    def remove(self, key: str) -> None:
        self._slots.pop(key, None)
