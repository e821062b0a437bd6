"""
repositories/local_repo.py
--------------------------
Persistence providers backed by LocalStorage.
Each collection lives in one JSON document and is rewritten in full on
every change.
"""

from typing import Optional, Type

from db.local_storage import LocalStorage
from models.settings import Settings
from repositories.base import CollectionRepository, SettingsRepository, new_id
from utils.exceptions import PersistenceError
from utils.logger import get_logger

logger = get_logger(__name__)


class LocalCollectionRepository(CollectionRepository):
    """
    Stores a list of domain objects under a single LocalStorage key.

    Args:
        storage: The LocalStorage instance to read and write.
        key: Document key, e.g. 'ledgerwise-transactions'.
        model: Dataclass exposing `to_record()` and `from_record()`.
    """

    def __init__(self, storage: LocalStorage, key: str, model: Type):
        self.storage = storage
        self.key = key
        self.model = model

    def _read_records(self) -> list[dict]:
        records = self.storage.get_item(self.key)
        if records is None:
            return []
        if not isinstance(records, list):
            raise PersistenceError(f"'{self.key}' does not hold a list of records")
        return records

    def _write_records(self, records: list[dict]) -> None:
        self.storage.set_item(self.key, records)

    # ── READ ──────────────────────────────────────────────

    def load_all(self) -> list:
        try:
            return [self.model.from_record(r) for r in self._read_records()]
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Corrupt record in '{self.key}': {e}")
            raise PersistenceError(f"Corrupt record in '{self.key}': {e}") from e

    # ── CREATE ────────────────────────────────────────────

    def create(self, item):
        if item.id is None:
            item.id = new_id()
        records = self._read_records()
        records.insert(0, item.to_record())
        self._write_records(records)
        logger.info(f"Stored {self.model.__name__} #{item.id} in '{self.key}'")
        return item

    # ── UPDATE ────────────────────────────────────────────

    def update(self, item_id: str, changes: dict) -> bool:
        records = self._read_records()
        for index, record in enumerate(records):
            if record.get("id") != item_id:
                continue
            item = self.model.from_record(record)
            for attr, value in changes.items():
                if not hasattr(item, attr) or attr == "id":
                    raise ValueError(f"Unknown or immutable field '{attr}'")
                setattr(item, attr, value)
            records[index] = item.to_record()
            self._write_records(records)
            return True
        return False

    # ── DELETE ────────────────────────────────────────────

    def delete(self, item_id: str) -> bool:
        records = self._read_records()
        remaining = [r for r in records if r.get("id") != item_id]
        if len(remaining) == len(records):
            return False
        self._write_records(remaining)
        logger.info(f"Deleted {self.model.__name__} #{item_id} from '{self.key}'")
        return True

    def clear(self) -> None:
        self.storage.remove_item(self.key)


class LocalSettingsRepository(SettingsRepository):
    """Settings stored as one JSON object under a LocalStorage key."""

    def __init__(self, storage: LocalStorage, key: str):
        self.storage = storage
        self.key = key

    def load(self) -> Optional[Settings]:
        record = self.storage.get_item(self.key)
        if record is None:
            return None
        if not isinstance(record, dict):
            raise PersistenceError(f"'{self.key}' does not hold a settings object")
        return Settings.from_record(record)

    def save(self, settings: Settings) -> None:
        self.storage.set_item(self.key, settings.to_record())

    def clear(self) -> None:
        self.storage.remove_item(self.key)
