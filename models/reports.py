"""
models/reports.py
-----------------
Derived figures returned by the ledger aggregator. Never persisted.
"""

from dataclasses import dataclass, field
from typing import Optional

from models.recurring import RecurringExpense
from models.transaction import Transaction


@dataclass
class CategoryProgress:
    """Spend-vs-budget figures for one budget category."""
    name: str
    percentage: float
    budgeted: float
    spent: float
    remaining: float
    status: str  # 'good' | 'warning' | 'over'


@dataclass
class BudgetProgress:
    """Aggregate progress of a budget across all its categories."""
    budget_id: Optional[str] = None
    categories: list[CategoryProgress] = field(default_factory=list)
    total_spent: float = 0.0
    total_budget: float = 0.0
    overall_progress: float = 0.0


@dataclass
class RecurringSummary:
    total_monthly: float = 0.0
    total_yearly: float = 0.0
    active_count: int = 0


@dataclass
class Dashboard:
    """Everything the dashboard page shows, computed in one pass."""
    total_balance: float
    total_income: float
    total_expenses: float
    upcoming_bills: list[RecurringExpense]
    recent_transactions: list[Transaction]
    budget_progress: Optional[BudgetProgress] = None
