"""
models/goal.py
--------------
Domain model for savings goals.
"""

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional

from utils.dates import parse_date, parse_timestamp, to_iso


@dataclass
class Goal:
    """
    Represents a savings goal.

    Attributes:
        name: What the user is saving for.
        target_amount: Amount to reach (> 0).
        current_amount: Amount saved so far; may exceed the target.
        deadline: Target date.
        id: Storage identifier (None until created).
        created_at: Timestamp when the record was created.
        is_current: Persisted marker of the current goal.
    """
    name: str
    target_amount: float
    deadline: date
    current_amount: float = 0.0
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    is_current: bool = False

    @property
    def remaining(self) -> float:
        return max(self.target_amount - self.current_amount, 0.0)

    def copy(self) -> "Goal":
        return replace(self)

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "targetAmount": self.target_amount,
            "currentAmount": self.current_amount,
            "deadline": to_iso(self.deadline),
            "createdAt": to_iso(self.created_at),
            "isCurrent": self.is_current,
        }

    @classmethod
    def from_record(cls, record: dict) -> "Goal":
        created_at = record.get("createdAt")
        return cls(
            id=record.get("id"),
            name=record["name"],
            target_amount=float(record["targetAmount"]),
            current_amount=float(record.get("currentAmount") or 0),
            deadline=parse_date(record["deadline"]),
            created_at=parse_timestamp(created_at) if created_at else None,
            is_current=bool(record.get("isCurrent", False)),
        )
