"""Notes Store: one JSON record under a fixed key, last write wins.

The record maps node labels to note text, but the store keeps whatever JSON
object it is given without interpreting it.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from graphnav.models.notes_models import NotesStoreConfig

logger = logging.getLogger(__name__)

_DEFAULT_PATH = Path.home() / ".graphnav" / "notes.json"


class NotesStorageError(Exception):
    """Reading or writing the backing file failed."""


def _config_from_env() -> NotesStoreConfig:
    return NotesStoreConfig(
        path=os.environ.get("GRAPHNAV_NOTES_PATH", str(_DEFAULT_PATH)),
    )


class NotesStore:
    def __init__(self, path: str | Path, record_key: str = "nodes"):
        self._path = Path(path)
        self._record_key = record_key

    @classmethod
    def from_config(cls, config: NotesStoreConfig | None = None) -> NotesStore:
        config = config or _config_from_env()
        return cls(config.path, record_key=config.record_key)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise NotesStorageError(f"cannot read {self._path}: {e}") from e
        if not isinstance(data, dict):
            raise NotesStorageError(f"{self._path} does not hold a JSON object")
        return data

    def get(self) -> dict[str, Any]:
        """The stored record, or an empty dict if nothing was saved yet."""
        record = self._read_all().get(self._record_key)
        return record if isinstance(record, dict) else {}

    def put(self, record: dict[str, Any]) -> None:
        """Replace the stored record with ``record`` verbatim."""
        data = self._read_all()
        data[self._record_key] = record
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
            tmp.replace(self._path)
        except (OSError, TypeError, ValueError) as e:
            raise NotesStorageError(f"cannot write {self._path}: {e}") from e
        logger.info("Saved notes record (%d entries) to %s", len(record), self._path)


def get_notes_store() -> NotesStore:
    """FastAPI dependency: a store built from the current environment."""
    return NotesStore.from_config()
