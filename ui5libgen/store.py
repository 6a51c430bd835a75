"""Persistent key-value record kept in every generated library.

The record lives at ``<destination>/.ui5libgen-rc.json``.  It is written once
prompting has finished and updated when generation completes, so a later run
(or a human) can tell how a library was created and whether setup finished.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ui5libgen.config import STORE_FILENAME
from ui5libgen.utils import load_json, save_json

SETUP_COMPLETED = "setupCompleted"


class ConfigStore:
    """JSON-backed key-value store.

    Values are kept in memory and flushed to disk on every change.  An
    existing record at *path* is loaded on construction; a corrupted one is
    replaced.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._data: dict[str, Any] = {}
        if self.path.exists():
            try:
                self._data = load_json(self.path)
            except (OSError, ValueError):
                # Corrupted record -- start fresh.
                self._data = {}

    @classmethod
    def for_destination(cls, destination: str | Path) -> "ConfigStore":
        return cls(Path(destination) / STORE_FILENAME)

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def get_all(self) -> dict[str, Any]:
        return dict(self._data)

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        await save_json(self._data, self.path)

    async def update(self, values: dict[str, Any]) -> None:
        self._data.update(values)
        await save_json(self._data, self.path)

    @property
    def setup_completed(self) -> bool:
        return bool(self._data.get(SETUP_COMPLETED, False))
