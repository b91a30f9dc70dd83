"""
Persistence for the user profile and exposure history.

Records are JSON documents kept under two keys of a key-value store. The
scoring code never touches a concrete store: anything with get/put/delete
works, an in-memory dict for tests or a SQLite file for the API server.
"""

import json
import logging
import sqlite3
from contextlib import contextmanager
from typing import Dict, Generator, List, Optional, Protocol

from .errors import ExternalLookupError
from .models import ExposureActivity, UserProfile

logger = logging.getLogger(__name__)

PROFILE_KEY = "healthProfile"
HISTORY_KEY = "exposureHistory"


class StorageError(ExternalLookupError):
    """The backing store could not be written."""


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def put(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class InMemoryKeyValueStore:
    """Dict-backed store."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def put(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class SqliteKeyValueStore:
    """
    SQLite-backed store with a single kv_store table.
    Opens a short-lived connection per operation.
    """

    def __init__(self, db_path: str):
        self.db_path = db_path
        with self._connect() as conn:
            conn.execute(
                "CREATE TABLE IF NOT EXISTS kv_store (key TEXT PRIMARY KEY, value TEXT NOT NULL)"
            )

    @contextmanager
    def _connect(self) -> Generator[sqlite3.Connection, None, None]:
        conn = sqlite3.connect(self.db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        finally:
            conn.close()

    def get(self, key: str) -> Optional[str]:
        with self._connect() as conn:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        return row["value"] if row else None

    def put(self, key: str, value: str) -> None:
        with self._connect() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO kv_store (key, value) VALUES (?, ?)",
                (key, value),
            )

    def delete(self, key: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))


class HealthRecordStore:
    """
    Profile and exposure history on top of a KeyValueStore.

    Reads never fail: a missing or malformed record is logged and treated
    as absent. Writes raise StorageError if the store rejects them.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store

    def _read_json(self, key: str):
        try:
            raw = self.store.get(key)
        except Exception as e:
            logger.error(f"[STORE] Failed to read {key}: {e}")
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"[STORE] Malformed JSON under {key}: {e}")
            return None

    def _write_json(self, key: str, value) -> None:
        try:
            self.store.put(key, json.dumps(value, sort_keys=True))
        except Exception as e:
            logger.error(f"[STORE] Failed to save {key}: {e}")
            raise StorageError(f"Could not save {key}: {e}") from e

    def load_profile(self) -> Optional[UserProfile]:
        data = self._read_json(PROFILE_KEY)
        if data is None:
            return None
        try:
            return UserProfile.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"[STORE] Ignoring unreadable profile: {e}")
            return None

    def save_profile(self, profile: UserProfile) -> None:
        """Replace the stored profile."""
        self._write_json(PROFILE_KEY, profile.to_dict())
        logger.info(f"[STORE] Saved profile {profile.id} ({profile.vulnerability_level.value})")

    def load_history(self) -> List[ExposureActivity]:
        data = self._read_json(HISTORY_KEY)
        if data is None:
            return []
        if not isinstance(data, list):
            logger.error(f"[STORE] Expected a list under {HISTORY_KEY}, got {type(data).__name__}")
            return []

        history = []
        for entry in data:
            try:
                history.append(ExposureActivity.from_dict(entry))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"[STORE] Skipping unreadable exposure entry: {e}")
        return history

    def append_exposure(self, activity: ExposureActivity) -> List[ExposureActivity]:
        """Append one activity and return the updated history."""
        history = self.load_history()
        history.append(activity)
        self._write_json(HISTORY_KEY, [a.to_dict() for a in history])
        logger.info(f"[STORE] Logged exposure {activity.id} at {activity.location}")
        return history

    def reset(self) -> None:
        """Remove the profile and the exposure history."""
        try:
            self.store.delete(PROFILE_KEY)
            self.store.delete(HISTORY_KEY)
        except Exception as e:
            logger.error(f"[STORE] Failed to reset records: {e}")
            raise StorageError(f"Could not reset records: {e}") from e
        logger.info("[STORE] Profile and exposure history removed")
