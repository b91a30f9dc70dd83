"""SQLite-backed record store for the user profile and exposure history."""
import logging
from functools import lru_cache

from exposure_risk.storage import HealthRecordStore, SqliteKeyValueStore

from .config import get_settings

log = logging.getLogger(__name__)


@lru_cache
def get_record_store() -> HealthRecordStore:
    """
    Shared record store, created on first use.

    Routes take this as a dependency so tests can override it with an
    in-memory store.
    """
    settings = get_settings()
    log.info(f"[STORE] Opening record store at {settings.store_db_path}")
    return HealthRecordStore(SqliteKeyValueStore(settings.store_db_path))
