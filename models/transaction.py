"""
models/transaction.py
---------------------
Domain model for financial transactions (expenses and income).
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from utils.dates import parse_timestamp, to_iso


@dataclass
class Transaction:
    """
    Represents a single financial transaction.

    Attributes:
        description: Free-text note entered by the user.
        category: Spending category (e.g. 'Food & Dining').
        amount: Signed amount; negative for expenses, positive for income.
        date: When the transaction happened.
        id: Storage identifier (None until created).
        created_at: Timestamp when the record was created.
    """
    description: str
    category: str
    amount: float
    date: datetime
    id: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def type(self) -> str:
        """'expense' for negative amounts, 'income' otherwise."""
        return "expense" if self.amount < 0 else "income"

    def is_expense(self) -> bool:
        """Returns True if this is an expense transaction."""
        return self.amount < 0

    def is_income(self) -> bool:
        """Returns True if this is an income transaction."""
        return self.amount > 0

    def copy(self) -> "Transaction":
        return replace(self)

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "description": self.description,
            "category": self.category,
            "amount": self.amount,
            "date": to_iso(self.date),
            "createdAt": to_iso(self.created_at),
        }

    @classmethod
    def from_record(cls, record: dict) -> "Transaction":
        created_at = record.get("createdAt")
        return cls(
            id=record.get("id"),
            description=record.get("description", ""),
            category=record.get("category") or "Other",
            amount=float(record["amount"]),
            date=parse_timestamp(record["date"]),
            created_at=parse_timestamp(created_at) if created_at else None,
        )

    def __str__(self) -> str:
        sign = "-" if self.is_expense() else "+"
        return f"{sign}{abs(self.amount):.2f} | {self.category} | {self.date:%Y-%m-%d}"
