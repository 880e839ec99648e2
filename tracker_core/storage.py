"""Persistence utilities for the expense tracker core services."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Type

from .exceptions import PersistenceError
from .log import get_logger

logger = get_logger(__name__)


class JSONStorage:
    """Simple file-based JSON storage with crash-safe writes."""

    def __init__(self, base_path: Path) -> None:
        self._base_path = Path(base_path)
        try:
            self._base_path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise PersistenceError(f"Unable to create data directory {base_path}") from exc

    def exists(self, resource: str) -> bool:
        return (self._base_path / resource).exists()

    def load(self, resource: str, expected: Type = list) -> Any:
        path = self._base_path / resource
        if not path.exists():
            return expected()
        try:
            with path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except json.JSONDecodeError as exc:
            raise PersistenceError(f"Corrupted JSON data in {path}") from exc
        except OSError as exc:
            raise PersistenceError(f"Unable to read from {path}") from exc

        if not isinstance(payload, expected):
            raise PersistenceError(f"Expected {expected.__name__} payload in {path}")
        return payload

    def save(self, resource: str, payload: Any) -> None:
        path = self._base_path / resource
        temp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            with temp_path.open("w", encoding="utf-8") as handle:
                json.dump(payload, handle, indent=2)
                handle.flush()
            temp_path.replace(path)
        except OSError as exc:
            raise PersistenceError(f"Unable to write to {path}") from exc
        logger.debug("Wrote %s", path)

    @property
    def base_path(self) -> Path:
        return self._base_path
