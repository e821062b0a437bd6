"""
models/budget.py
----------------
Domain model for monthly budgets split into percentage categories.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional

from utils.dates import parse_timestamp, to_iso


@dataclass
class BudgetCategory:
    """A named share of a budget's monthly limit."""
    name: str
    percentage: float

    def allocated(self, limit: float) -> float:
        """Amount of `limit` assigned to this category."""
        return limit * self.percentage / 100

    def to_record(self) -> dict:
        return {"name": self.name, "percentage": self.percentage}

    @classmethod
    def from_record(cls, record: dict) -> "BudgetCategory":
        return cls(name=record["name"], percentage=float(record["percentage"]))


@dataclass
class Budget:
    """
    Represents a monthly budget.

    Attributes:
        limit: Total monthly amount.
        categories: Ordered category allocations; percentages sum to 100.
        month: The period the budget nominally covers.
        id: Storage identifier (None until created).
        created_at: Timestamp when the record was created.
        is_active: Persisted marker of the current budget.
    """
    limit: float
    categories: list[BudgetCategory] = field(default_factory=list)
    month: datetime = field(default_factory=datetime.now)
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    is_active: bool = False

    def category(self, name: str) -> Optional[BudgetCategory]:
        """Look up a category by name, case-insensitively."""
        wanted = name.strip().lower()
        for cat in self.categories:
            if cat.name.strip().lower() == wanted:
                return cat
        return None

    def copy(self) -> "Budget":
        return replace(self, categories=[replace(c) for c in self.categories])

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "limit": self.limit,
            "categories": [c.to_record() for c in self.categories],
            "month": to_iso(self.month),
            "createdAt": to_iso(self.created_at),
            "isActive": self.is_active,
        }

    @classmethod
    def from_record(cls, record: dict) -> "Budget":
        created_at = record.get("createdAt")
        return cls(
            id=record.get("id"),
            limit=float(record["limit"]),
            categories=[BudgetCategory.from_record(c) for c in record.get("categories", [])],
            month=parse_timestamp(record["month"]) if record.get("month") else datetime.now(),
            created_at=parse_timestamp(created_at) if created_at else None,
            is_active=bool(record.get("isActive", False)),
        )

    def __str__(self) -> str:
        return f"Budget {self.limit:,.2f} ({self.month:%B %Y}, {len(self.categories)} categories)"
