"""
repositories/base.py
--------------------
The persistence-provider contract every collection repository implements.
"""

import uuid
from abc import ABC, abstractmethod
from typing import Any, Optional

from models.settings import Settings


def new_id() -> str:
    """Generate a storage identifier for a new record."""
    return uuid.uuid4().hex


class CollectionRepository(ABC):
    """
    Persistence provider for one collection (transactions, budgets, ...).

    Implementations only need read-your-writes consistency once a call
    returns; there are no multi-record transactions.
    """

    @abstractmethod
    def load_all(self) -> list:
        """Return every stored record as a domain object."""

    @abstractmethod
    def create(self, item: Any) -> Any:
        """Persist a new record, assigning `item.id` when it is missing."""

    @abstractmethod
    def update(self, item_id: str, changes: dict) -> bool:
        """
        Apply a partial update. Keys of `changes` are model attribute names.

        Returns:
            True if a record was updated, False if `item_id` is unknown.
        """

    @abstractmethod
    def delete(self, item_id: str) -> bool:
        """Delete a record. Returns False if `item_id` is unknown."""

    @abstractmethod
    def clear(self) -> None:
        """Delete every record in the collection."""


class SettingsRepository(ABC):
    """Persistence provider for the single settings record."""

    @abstractmethod
    def load(self) -> Optional[Settings]:
        """Return the stored settings, or None on first run."""

    @abstractmethod
    def save(self, settings: Settings) -> None:
        """Overwrite the stored settings."""

    @abstractmethod
    def clear(self) -> None:
        """Forget the stored settings."""
