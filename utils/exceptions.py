"""
utils/exceptions.py
-------------------
Error taxonomy for the ledger.

    ValidationError  -> bad user input, raised before any state change.
    NotFoundError    -> an id that is not in its collection.
    PersistenceError -> the storage backend failed to read or write.
"""

from typing import Optional


class LedgerError(Exception):
    """Base class for all recoverable ledger errors."""


class ValidationError(LedgerError):
    """
    Raised when form input is malformed or out of contract.

    Attributes:
        field: Name of the offending input field, if known.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class NotFoundError(LedgerError):
    """Raised when an operation references an id absent from its collection."""

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} '{entity_id}' not found")
        self.entity = entity
        self.entity_id = entity_id


class PersistenceError(LedgerError):
    """Raised when the storage provider fails to read or write."""
