"""Key-value storage for entries and settings.

The engine never touches storage.  Route handlers get a
``CycleTrackRepository`` injected, load a snapshot, and hand plain records to
the engine.

Two stores ship with the app:

- ``JsonFileStore`` — one JSON document per key under a data directory.
  Writes go to a temp file and are renamed into place.
- ``MemoryStore`` — process-local, used by tests.

Storage keys match the original browser app (``ct_entries_v1``,
``ct_settings_v1``) so exported localStorage data can be dropped in as-is.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from cycletrack.config import Settings, get_settings
from cycletrack.engine.base import CycleSettings, Entry
from cycletrack.engine.config_loader import get_engine_config

logger = logging.getLogger("cycletrack.storage")

ENTRIES_KEY = "ct_entries_v1"
SETTINGS_KEY = "ct_settings_v1"


class StorageError(RuntimeError):
    """Raised when a stored document cannot be read back."""


class KeyValueStore(ABC):
    """Load/save opaque JSON-compatible values by key."""

    @abstractmethod
    def load(self, key: str) -> Any | None:
        """Return the value stored under ``key``, or None if absent."""

    @abstractmethod
    def save(self, key: str, value: Any) -> None:
        """Replace the value stored under ``key``."""


class MemoryStore(KeyValueStore):
    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(initial or {})
        self._lock = threading.Lock()

    def load(self, key: str) -> Any | None:
        with self._lock:
            return copy.deepcopy(self._data.get(key))

    def save(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = copy.deepcopy(value)


class JsonFileStore(KeyValueStore):
    """One ``<key>.json`` file per key under ``root``."""

    def __init__(self, root: Path) -> None:
        self._root = Path(root)
        self._lock = threading.Lock()

    @property
    def root(self) -> Path:
        return self._root

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self._root / f"{key}.json"

    def load(self, key: str) -> Any | None:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            with path.open("r", encoding="utf-8") as fh:
                return json.load(fh)
        except json.JSONDecodeError as exc:
            raise StorageError(f"Corrupt JSON in {path}: {exc}") from exc

    def save(self, key: str, value: Any) -> None:
        path = self._path(key)
        with self._lock:
            self._root.mkdir(parents=True, exist_ok=True)
            tmp = path.with_suffix(".json.tmp")
            with tmp.open("w", encoding="utf-8") as fh:
                json.dump(value, fh, ensure_ascii=False, indent=2)
            os.replace(tmp, path)
        logger.debug("Saved %s (%s)", key, path)


class CycleTrackRepository:
    """Entries and settings on top of a ``KeyValueStore``.

    Usage::

        repo = CycleTrackRepository(JsonFileStore(Path("data")))
        settings = repo.get_settings()
        entries = repo.list_entries()
    """

    def __init__(self, store: KeyValueStore, default_cycle_length: int = 28) -> None:
        self._store = store
        self._default_cycle_length = default_cycle_length
        self._write_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def get_settings(self) -> CycleSettings:
        """Return the stored settings, or defaults when none are saved.

        Raises:
            StorageError: If the stored document is malformed.
        """
        raw = self._store.load(SETTINGS_KEY)
        if raw is not None and not isinstance(raw, dict):
            raise StorageError(f"'{SETTINGS_KEY}' must be an object, got {type(raw).__name__}")
        try:
            return CycleSettings.from_record(raw, self._default_cycle_length)
        except ValueError as exc:
            raise StorageError(f"Invalid stored settings: {exc}") from exc

    def save_settings(self, settings: CycleSettings) -> None:
        self._store.save(SETTINGS_KEY, settings.to_record())
        logger.info(
            "Settings saved (period_start=%s, cycle_length=%d)",
            settings.period_start,
            settings.cycle_length,
        )

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------

    def _load_entry_records(self) -> list[dict]:
        raw = self._store.load(ENTRIES_KEY)
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise StorageError(f"'{ENTRIES_KEY}' must be a list, got {type(raw).__name__}")
        return raw

    def list_entries(self) -> list[Entry]:
        """All entries in the order they were logged.

        Raises:
            StorageError: If any stored entry is malformed.
        """
        entries: list[Entry] = []
        for index, record in enumerate(self._load_entry_records()):
            if not isinstance(record, dict):
                raise StorageError(f"Entry #{index} is not an object")
            try:
                entries.append(Entry.from_record(record))
            except ValueError as exc:
                raise StorageError(f"Entry #{index} is invalid: {exc}") from exc
        return entries

    def append_entry(self, entry: Entry) -> Entry:
        """Append one entry.  Entries are never updated or deleted."""
        with self._write_lock:
            records = self._load_entry_records()
            records.append(entry.to_record())
            self._store.save(ENTRIES_KEY, records)
        logger.info("Logged entry for %s (%d total)", entry.date, len(records))
        return entry


# ---------------------------------------------------------------------------
# Module-level repository, initialized once at app startup
# ---------------------------------------------------------------------------

_repository: CycleTrackRepository | None = None


def init_repository(settings: Settings | None = None) -> CycleTrackRepository:
    """Create the JSON-file backed repository.  Call once at app startup."""
    global _repository
    s = settings or get_settings()
    store = JsonFileStore(s.data_dir)
    _repository = CycleTrackRepository(
        store, default_cycle_length=get_engine_config().default_cycle_length
    )
    logger.info("Storage initialized at %s", store.root.resolve())
    return _repository


def close_repository() -> None:
    global _repository
    if _repository:
        _repository = None
        logger.info("Storage closed")


def get_repository() -> CycleTrackRepository:
    if _repository is None:
        raise RuntimeError("Storage not initialized — call init_repository() first")
    return _repository
