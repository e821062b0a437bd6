"""
services/ledger.py
------------------
The ledger aggregator: pure functions that turn the in-memory collections
into the figures the dashboard, budget and goal pages display.

Every function takes the collections it needs explicitly, recomputes from
scratch and has no side effects. Functions that depend on the calendar take
an optional `now` (defaults to the current system time).
"""

import math
from datetime import datetime
from typing import Iterable, Optional

from models.budget import Budget
from models.goal import Goal
from models.recurring import RecurringExpense
from models.reports import BudgetProgress, CategoryProgress, RecurringSummary
from models.transaction import Transaction
from utils.constants import (
    BUDGET_WARNING_RATIO,
    RECENT_TRANSACTIONS_LIMIT,
    SAVINGS_EPSILON,
    UPCOMING_BILLS_LIMIT,
    UPCOMING_BILLS_WINDOW_DAYS,
)
from utils.dates import days_until, month_bounds

# Annualization factors for recurring expenses.
_YEARLY_MULTIPLIER = {"weekly": 52, "monthly": 12, "yearly": 1}


def _now(now: Optional[datetime]) -> datetime:
    return now if now is not None else datetime.now()


# ── Balances ──────────────────────────────────────────────

def get_total_balance(transactions: Iterable[Transaction]) -> float:
    """Sum of every transaction amount, over the whole history."""
    return sum((t.amount for t in transactions), 0.0)


def get_current_month_transactions(
    transactions: Iterable[Transaction], now: Optional[datetime] = None
) -> list[Transaction]:
    """Transactions dated within the calendar month containing `now` (inclusive)."""
    start, end = month_bounds(_now(now))
    return [t for t in transactions if start <= t.date <= end]


def get_total_income(
    transactions: Iterable[Transaction], now: Optional[datetime] = None
) -> float:
    """Sum of positive amounts in the current month."""
    return sum(
        (t.amount for t in get_current_month_transactions(transactions, now) if t.amount > 0),
        0.0,
    )


def get_total_expenses(
    transactions: Iterable[Transaction], now: Optional[datetime] = None
) -> float:
    """Absolute sum of negative amounts in the current month."""
    return abs(sum(
        (t.amount for t in get_current_month_transactions(transactions, now) if t.amount < 0),
        0.0,
    ))


def get_monthly_net_balance(
    transactions: Iterable[Transaction], now: Optional[datetime] = None
) -> float:
    """Current-month income minus current-month expenses."""
    transactions = list(transactions)
    return get_total_income(transactions, now) - get_total_expenses(transactions, now)


# ── Lists ─────────────────────────────────────────────────

def get_upcoming_bills(
    recurring_expenses: Iterable[RecurringExpense], now: Optional[datetime] = None
) -> list[RecurringExpense]:
    """
    Active recurring expenses due between today and 30 days from today
    (inclusive, by calendar day), soonest first, at most 5.
    """
    today = _now(now).date()
    due = [
        e for e in recurring_expenses
        if e.is_active()
        and 0 <= days_until(e.next_due_date, today) <= UPCOMING_BILLS_WINDOW_DAYS
    ]
    due.sort(key=lambda e: e.next_due_date)
    return due[:UPCOMING_BILLS_LIMIT]


def get_recent_transactions(transactions: Iterable[Transaction]) -> list[Transaction]:
    """The most recently created transactions, newest first."""
    ordered = sorted(
        transactions,
        key=lambda t: t.created_at or t.date,
        reverse=True,
    )
    return ordered[:RECENT_TRANSACTIONS_LIMIT]


# ── Budgets ───────────────────────────────────────────────

def get_budget_category_spending(
    transactions: Iterable[Transaction], category_name: str
) -> float:
    """
    Total spent in `category_name` across the whole transaction history.

    Not scoped to any budget's month. Callers that want a month-scoped
    figure should filter `transactions` first.
    """
    return sum(
        (abs(t.amount) for t in transactions if t.amount < 0 and t.category == category_name),
        0.0,
    )


def _category_status(spent: float, budgeted: float) -> str:
    if spent > budgeted:
        return "over"
    if spent > BUDGET_WARNING_RATIO * budgeted:
        return "warning"
    return "good"


def get_budget_progress(
    budget: Optional[Budget], transactions: Iterable[Transaction]
) -> BudgetProgress:
    """
    Spend-vs-budget for every category of `budget`.

    A missing budget, or one without categories, yields a zeroed result.
    """
    if budget is None or not budget.categories:
        return BudgetProgress(budget_id=budget.id if budget else None)

    transactions = list(transactions)
    categories = []
    for cat in budget.categories:
        budgeted = cat.allocated(budget.limit)
        spent = get_budget_category_spending(transactions, cat.name)
        categories.append(CategoryProgress(
            name=cat.name,
            percentage=cat.percentage,
            budgeted=budgeted,
            spent=spent,
            remaining=max(0.0, budgeted - spent),
            status=_category_status(spent, budgeted),
        ))

    total_spent = sum(c.spent for c in categories)
    overall = min(total_spent / budget.limit * 100, 100.0) if budget.limit > 0 else 0.0
    return BudgetProgress(
        budget_id=budget.id,
        categories=categories,
        total_spent=total_spent,
        total_budget=budget.limit,
        overall_progress=overall,
    )


# ── Goals ─────────────────────────────────────────────────

def get_goal_progress(goal: Goal) -> float:
    """Percentage of the target reached, clamped to [0, 100]."""
    if goal.target_amount <= 0:
        return 0.0
    return max(0.0, min(goal.current_amount / goal.target_amount * 100, 100.0))


def estimate_months_to_goal(goal: Goal, monthly_net: float) -> Optional[int]:
    """
    Months of saving at `monthly_net` per month needed to reach the goal.

    Returns:
        0 when the goal is already reached, None when the monthly net
        balance is not positive (no projection possible).
    """
    if goal.remaining <= 0:
        return 0
    if monthly_net <= 0:
        return None
    return math.ceil(goal.remaining / max(monthly_net, SAVINGS_EPSILON))


# ── Recurring summary & listings ──────────────────────────

def summarize_recurring(recurring_expenses: Iterable[RecurringExpense]) -> RecurringSummary:
    """Monthly commitments, annualized total and number of active items."""
    summary = RecurringSummary()
    for e in recurring_expenses:
        if e.frequency == "monthly":
            summary.total_monthly += e.amount
        summary.total_yearly += e.amount * _YEARLY_MULTIPLIER.get(e.frequency, 1)
        if e.is_active():
            summary.active_count += 1
    return summary


def list_categories(items: Iterable) -> list[str]:
    """Distinct non-empty `category` values in first-seen order."""
    seen: dict[str, None] = {}
    for item in items:
        if item.category:
            seen.setdefault(item.category, None)
    return list(seen)


def filter_transactions(
    transactions: Iterable[Transaction],
    search: str = "",
    category: str = "all",
    tx_type: str = "all",
    sort_by: str = "date",
) -> list[Transaction]:
    """
    Search, filter and sort transactions the way the transactions page does.

    Args:
        search: Case-insensitive substring of description or category.
        category: Exact category, or 'all'.
        tx_type: 'income' (amount >= 0), 'expense' (amount < 0) or 'all'.
        sort_by: 'date' (newest first) or 'amount' (largest absolute first).
    """
    needle = search.strip().lower()
    result = []
    for t in transactions:
        if needle and needle not in t.description.lower() and needle not in t.category.lower():
            continue
        if category != "all" and t.category != category:
            continue
        if tx_type == "income" and t.amount < 0:
            continue
        if tx_type == "expense" and t.amount >= 0:
            continue
        result.append(t)

    if sort_by == "date":
        result.sort(key=lambda t: t.date, reverse=True)
    elif sort_by == "amount":
        result.sort(key=lambda t: abs(t.amount), reverse=True)
    return result


def filter_recurring_expenses(
    recurring_expenses: Iterable[RecurringExpense],
    search: str = "",
    category: str = "all",
    frequency: str = "all",
    sort_by: str = "next_due_date",
) -> list[RecurringExpense]:
    """Search by name, filter by category/frequency, sort by due date, amount or name."""
    needle = search.strip().lower()
    result = [
        e for e in recurring_expenses
        if (not needle or needle in e.name.lower())
        and (category == "all" or e.category == category)
        and (frequency == "all" or e.frequency == frequency)
    ]
    if sort_by == "next_due_date":
        result.sort(key=lambda e: e.next_due_date)
    elif sort_by == "amount":
        result.sort(key=lambda e: e.amount, reverse=True)
    elif sort_by == "name":
        result.sort(key=lambda e: e.name.lower())
    return result
