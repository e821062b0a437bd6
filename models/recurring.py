"""
models/recurring.py
-------------------
Domain model for recurring (scheduled) expenses.
"""

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional

from utils.dates import parse_date, parse_timestamp, to_iso


@dataclass
class RecurringExpense:
    """
    Represents a recurring expense (subscription, bill, etc.).

    Attributes:
        name: Friendly name of the payment (e.g., 'Netflix', 'Rent').
        category: Spending category.
        amount: Positive payment amount.
        frequency: How often ('weekly', 'monthly', 'yearly').
        next_due_date: The next upcoming payment date.
        status: 'active' or 'inactive'.
        id: Storage identifier (None until created).
        created_at: Timestamp when the record was created.
    """
    name: str
    category: str
    amount: float
    frequency: str  # 'weekly' | 'monthly' | 'yearly'
    next_due_date: date
    status: str = "active"
    id: Optional[str] = None
    created_at: Optional[datetime] = None

    def is_active(self) -> bool:
        return self.status == "active"

    def copy(self) -> "RecurringExpense":
        return replace(self)

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "amount": self.amount,
            "frequency": self.frequency,
            "nextDueDate": to_iso(self.next_due_date),
            "status": self.status,
            "createdAt": to_iso(self.created_at),
        }

    @classmethod
    def from_record(cls, record: dict) -> "RecurringExpense":
        created_at = record.get("createdAt")
        return cls(
            id=record.get("id"),
            name=record["name"],
            category=record.get("category", ""),
            amount=float(record["amount"]),
            frequency=record["frequency"],
            next_due_date=parse_date(record["nextDueDate"]),
            status=record.get("status", "active"),
            created_at=parse_timestamp(created_at) if created_at else None,
        )

    def __str__(self) -> str:
        status = "✅" if self.is_active() else "❌"
        return f"{status} {self.name}: {self.amount:.2f} ({self.frequency}) - Next: {self.next_due_date}"
