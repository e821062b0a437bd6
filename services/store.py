"""
services/store.py
-----------------
The single top-level store. It owns the transactions, budgets, recurring
expenses, goals and settings, tracks the current budget and goal, and
mirrors every committed mutation to its persistence providers.

Write policy is optimistic: input is validated first (nothing changes on a
ValidationError), then the in-memory collections are updated, then the
write is attempted. A failed write is logged and re-raised as
PersistenceError; the in-memory change is kept.
"""

import threading
from datetime import datetime
from functools import wraps
from typing import Any, Callable, Iterable, Optional

from models.budget import Budget
from models.goal import Goal
from models.recurring import RecurringExpense
from models.reports import BudgetProgress, Dashboard, RecurringSummary
from models.settings import Settings
from models.transaction import Transaction
from repositories.base import new_id
from repositories.factory import Repositories
from services import ledger
from services.validation import (
    parse_goal_progress,
    validate_budget_input,
    validate_goal_input,
    validate_recurring_input,
    validate_settings_changes,
    validate_status,
    validate_transaction_input,
)
from utils.exceptions import NotFoundError, PersistenceError, ValidationError
from utils.logger import get_logger

logger = get_logger(__name__)


def _locked(func: Callable):
    """Run the method while holding the store lock."""
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return func(self, *args, **kwargs)
    return wrapper


def _copies(items: Iterable) -> list:
    return [item.copy() for item in items]


def _most_recent(items: list) -> Optional[Any]:
    """The item with the latest `created_at` (None for an empty list)."""
    if not items:
        return None
    return max(items, key=lambda i: i.created_at or datetime.min)


class LedgerStore:
    """
    In-memory ledger backed by a set of persistence providers.

    Construct once per process, call `load()`, then use the mutation
    methods and the aggregate getters. All public methods are serialized
    by one re-entrant lock. Accessors, getters and mutations hand out
    copies; the stored entities never leave the store.
    """

    def __init__(self, repositories: Repositories):
        self.repos = repositories
        self._lock = threading.RLock()
        self._transactions: list[Transaction] = []
        self._budgets: list[Budget] = []
        self._recurring: list[RecurringExpense] = []
        self._goals: list[Goal] = []
        self._settings: Settings = Settings.defaults()
        self._current_budget_id: Optional[str] = None
        self._current_goal_id: Optional[str] = None

    # ── LOADING ───────────────────────────────────────────

    @_locked
    def load(self) -> None:
        """
        Seed every collection from storage.

        The most recent budget/goal carrying the persisted current marker
        becomes current; if none carries it, the most recent one is used.
        Settings are initialized (and stored) with defaults on first run.
        """
        self._transactions = self.repos.transactions.load_all()
        self._transactions.sort(key=lambda t: t.created_at or t.date, reverse=True)
        self._budgets = self.repos.budgets.load_all()
        self._recurring = self.repos.recurring_expenses.load_all()
        self._goals = self.repos.goals.load_all()

        active = _most_recent([b for b in self._budgets if b.is_active]) or _most_recent(self._budgets)
        self._current_budget_id = active.id if active else None
        current = _most_recent([g for g in self._goals if g.is_current]) or _most_recent(self._goals)
        self._current_goal_id = current.id if current else None

        stored = self.repos.settings.load()
        if stored is None:
            self._settings = Settings.defaults()
            self.repos.settings.save(self._settings)
        else:
            self._settings = stored

        logger.info(
            f"Loaded {len(self._transactions)} transactions, {len(self._budgets)} budgets, "
            f"{len(self._recurring)} recurring expenses, {len(self._goals)} goals."
        )

    # ── HELPERS ───────────────────────────────────────────

    def _persist(self, action: str, func: Callable, *args) -> Any:
        try:
            return func(*args)
        except PersistenceError as e:
            logger.error(f"Failed to {action}: {e}")
            raise

    def _persist_all(self, action: str, calls: Iterable[tuple]) -> None:
        """Attempt every write; re-raise the first failure once all were tried."""
        first_error: Optional[PersistenceError] = None
        for func, *args in calls:
            try:
                func(*args)
            except PersistenceError as e:
                logger.error(f"Failed to {action}: {e}")
                first_error = first_error or e
        if first_error is not None:
            raise first_error

    @staticmethod
    def _find(items: list, item_id: str, entity: str) -> Any:
        for item in items:
            if item.id == item_id:
                return item
        raise NotFoundError(entity, item_id)

    # ── READ ACCESSORS ────────────────────────────────────

    @property
    @_locked
    def transactions(self) -> list[Transaction]:
        return _copies(self._transactions)

    @property
    @_locked
    def budgets(self) -> list[Budget]:
        return _copies(self._budgets)

    @property
    @_locked
    def recurring_expenses(self) -> list[RecurringExpense]:
        return _copies(self._recurring)

    @property
    @_locked
    def goals(self) -> list[Goal]:
        return _copies(self._goals)

    @property
    @_locked
    def settings(self) -> Settings:
        return self._settings.copy()

    @property
    @_locked
    def current_budget(self) -> Optional[Budget]:
        if self._current_budget_id is None:
            return None
        return self._find(self._budgets, self._current_budget_id, "Budget").copy()

    @property
    @_locked
    def current_goal(self) -> Optional[Goal]:
        if self._current_goal_id is None:
            return None
        return self._find(self._goals, self._current_goal_id, "Goal").copy()

    # ── TRANSACTIONS ──────────────────────────────────────

    @_locked
    def add_transaction(
        self,
        description: Any,
        amount: Any,
        category: Any,
        tx_type: str = "expense",
        date: Any = None,
    ) -> Transaction:
        """
        Validate the form input and record a new transaction.

        Raises:
            ValidationError: On bad input (nothing is recorded).
            PersistenceError: If the write fails (the transaction stays in memory).
        """
        data = validate_transaction_input(description, amount, category, tx_type, date)
        transaction = Transaction(id=new_id(), created_at=datetime.now(), **data)
        self._transactions.insert(0, transaction)
        logger.info(f"Added {transaction.type} #{transaction.id}: {transaction}")
        self._persist("add transaction", self.repos.transactions.create, transaction)
        return transaction.copy()

    @_locked
    def update_transaction(self, transaction_id: str, **fields) -> Transaction:
        """
        Update description, amount, category, tx_type and/or date of a transaction.

        Unspecified fields keep their current values; the merged result is
        validated like a new transaction.
        """
        unknown = set(fields) - {"description", "amount", "category", "tx_type", "date"}
        if unknown:
            raise ValidationError(f"cannot update field(s): {', '.join(sorted(unknown))}")
        transaction = self._find(self._transactions, transaction_id, "Transaction")
        data = validate_transaction_input(
            fields.get("description", transaction.description),
            fields.get("amount", abs(transaction.amount)),
            fields.get("category", transaction.category),
            fields.get("tx_type", transaction.type),
            fields.get("date", transaction.date),
            date_required=True,
        )
        changes = {k: v for k, v in data.items() if getattr(transaction, k) != v}
        if not changes:
            return transaction.copy()
        for attr, value in changes.items():
            setattr(transaction, attr, value)
        logger.info(f"Updated transaction #{transaction_id}: {', '.join(changes)}")
        self._persist("update transaction", self.repos.transactions.update, transaction_id, changes)
        return transaction.copy()

    @_locked
    def delete_transaction(self, transaction_id: str) -> None:
        transaction = self._find(self._transactions, transaction_id, "Transaction")
        self._transactions.remove(transaction)
        logger.info(f"Deleted transaction #{transaction_id}")
        self._persist("delete transaction", self.repos.transactions.delete, transaction_id)

    @_locked
    def delete_transactions(self, transaction_ids: Iterable[str]) -> None:
        """Bulk delete. Every id is checked before anything is removed."""
        ids = list(dict.fromkeys(transaction_ids))
        for transaction_id in ids:
            self._find(self._transactions, transaction_id, "Transaction")
        self._transactions = [t for t in self._transactions if t.id not in ids]
        logger.info(f"Deleted {len(ids)} transactions")
        self._persist_all(
            "delete transaction",
            [(self.repos.transactions.delete, tid) for tid in ids],
        )

    # ── BUDGETS ───────────────────────────────────────────

    @_locked
    def create_budget(self, limit: Any, categories: Any, month: Any = None) -> Budget:
        """
        Validate and create a budget; it becomes the current budget.

        Previously active budgets are unmarked one by one (best effort).
        """
        data = validate_budget_input(limit, categories, month)
        now = datetime.now()
        data.setdefault("month", now)
        budget = Budget(id=new_id(), created_at=now, is_active=True, **data)
        previously_active = [b for b in self._budgets if b.is_active]
        for b in previously_active:
            b.is_active = False
        self._budgets.insert(0, budget)
        self._current_budget_id = budget.id
        logger.info(f"Created budget #{budget.id}: {budget}")

        self._persist_all(
            "create budget",
            [(self.repos.budgets.create, budget)]
            + [(self.repos.budgets.update, b.id, {"is_active": False}) for b in previously_active],
        )
        return budget.copy()

    @_locked
    def update_budget(self, budget_id: str, limit: Any, categories: Any) -> Budget:
        """Replace the limit and categories of a budget; its month is kept."""
        budget = self._find(self._budgets, budget_id, "Budget")
        data = validate_budget_input(limit, categories)
        budget.limit = data["limit"]
        budget.categories = data["categories"]
        logger.info(f"Updated budget #{budget_id}: {budget}")
        self._persist("update budget", self.repos.budgets.update, budget_id, dict(data))
        return budget.copy()

    @_locked
    def select_budget(self, budget_id: str) -> Budget:
        """Make `budget_id` the current budget."""
        budget = self._find(self._budgets, budget_id, "Budget")
        if budget.id != self._current_budget_id:
            self._activate_budget(budget)
        return budget.copy()

    def _activate_budget(self, budget: Optional[Budget]) -> None:
        calls = []
        for b in self._budgets:
            if b.is_active and b is not budget:
                b.is_active = False
                calls.append((self.repos.budgets.update, b.id, {"is_active": False}))
        if budget is not None and not budget.is_active:
            budget.is_active = True
            calls.append((self.repos.budgets.update, budget.id, {"is_active": True}))
        self._current_budget_id = budget.id if budget else None
        logger.info(f"Current budget is now {budget.id if budget else 'none'}")
        self._persist_all("select budget", calls)

    @_locked
    def delete_budget(self, budget_id: str) -> Optional[Budget]:
        """
        Delete a budget. Deleting the current one selects the most recent
        remaining budget, or none if the collection is now empty.

        Returns:
            The current budget after the deletion.
        """
        budget = self._find(self._budgets, budget_id, "Budget")
        self._budgets.remove(budget)
        logger.info(f"Deleted budget #{budget_id}")
        try:
            self._persist("delete budget", self.repos.budgets.delete, budget_id)
        finally:
            if budget_id == self._current_budget_id:
                self._activate_budget(_most_recent(self._budgets))
        return self.current_budget

    # ── RECURRING EXPENSES ────────────────────────────────

    @_locked
    def add_recurring_expense(
        self,
        name: Any,
        category: Any,
        amount: Any,
        frequency: Any,
        next_due_date: Any,
    ) -> RecurringExpense:
        """Validate and record a recurring expense; it starts active."""
        data = validate_recurring_input(name, category, amount, frequency, next_due_date)
        expense = RecurringExpense(id=new_id(), created_at=datetime.now(), status="active", **data)
        self._recurring.append(expense)
        logger.info(f"Added recurring expense '{expense.name}' #{expense.id}")
        self._persist("add recurring expense", self.repos.recurring_expenses.create, expense)
        return expense.copy()

    @_locked
    def set_recurring_status(self, expense_id: str, status: Any) -> RecurringExpense:
        """Switch a recurring expense between 'active' and 'inactive'."""
        expense = self._find(self._recurring, expense_id, "RecurringExpense")
        new_status = validate_status(status)
        if expense.status != new_status:
            expense.status = new_status
            logger.info(f"Recurring expense #{expense_id} is now {new_status}")
            self._persist(
                "update recurring expense",
                self.repos.recurring_expenses.update, expense_id, {"status": new_status},
            )
        return expense.copy()

    @_locked
    def delete_recurring_expense(self, expense_id: str) -> None:
        expense = self._find(self._recurring, expense_id, "RecurringExpense")
        self._recurring.remove(expense)
        logger.info(f"Deleted recurring expense #{expense_id}")
        self._persist("delete recurring expense", self.repos.recurring_expenses.delete, expense_id)

    @_locked
    def delete_recurring_expenses(self, expense_ids: Iterable[str]) -> None:
        """Bulk delete. Every id is checked before anything is removed."""
        ids = list(dict.fromkeys(expense_ids))
        for expense_id in ids:
            self._find(self._recurring, expense_id, "RecurringExpense")
        self._recurring = [e for e in self._recurring if e.id not in ids]
        logger.info(f"Deleted {len(ids)} recurring expenses")
        self._persist_all(
            "delete recurring expense",
            [(self.repos.recurring_expenses.delete, eid) for eid in ids],
        )

    # ── GOALS ─────────────────────────────────────────────

    @_locked
    def add_goal(
        self, name: Any, target_amount: Any, deadline: Any, current_amount: Any = None
    ) -> Goal:
        """Validate and create a goal; it becomes the current goal."""
        data = validate_goal_input(name, target_amount, deadline, current_amount)
        goal = Goal(id=new_id(), created_at=datetime.now(), is_current=True, **data)
        previous = [g for g in self._goals if g.is_current]
        for g in previous:
            g.is_current = False
        self._goals.insert(0, goal)
        self._current_goal_id = goal.id
        logger.info(f"Added goal '{goal.name}' #{goal.id}")
        self._persist_all(
            "add goal",
            [(self.repos.goals.create, goal)]
            + [(self.repos.goals.update, g.id, {"is_current": False}) for g in previous],
        )
        return goal.copy()

    @_locked
    def update_goal_progress(self, goal_id: str, current_amount: Any) -> Goal:
        """Record a new saved amount for a goal."""
        goal = self._find(self._goals, goal_id, "Goal")
        goal.current_amount = parse_goal_progress(current_amount)
        logger.info(f"Goal #{goal_id} progress: {goal.current_amount:.2f}/{goal.target_amount:.2f}")
        self._persist(
            "update goal", self.repos.goals.update, goal_id, {"current_amount": goal.current_amount}
        )
        return goal.copy()

    @_locked
    def select_goal(self, goal_id: str) -> Goal:
        goal = self._find(self._goals, goal_id, "Goal")
        if goal.id != self._current_goal_id:
            self._activate_goal(goal)
        return goal.copy()

    def _activate_goal(self, goal: Optional[Goal]) -> None:
        calls = []
        for g in self._goals:
            if g.is_current and g is not goal:
                g.is_current = False
                calls.append((self.repos.goals.update, g.id, {"is_current": False}))
        if goal is not None and not goal.is_current:
            goal.is_current = True
            calls.append((self.repos.goals.update, goal.id, {"is_current": True}))
        self._current_goal_id = goal.id if goal else None
        logger.info(f"Current goal is now {goal.id if goal else 'none'}")
        self._persist_all("select goal", calls)

    @_locked
    def delete_goal(self, goal_id: str) -> Optional[Goal]:
        """Delete a goal, reselecting like `delete_budget`. Returns the current goal."""
        goal = self._find(self._goals, goal_id, "Goal")
        self._goals.remove(goal)
        logger.info(f"Deleted goal #{goal_id}")
        try:
            self._persist("delete goal", self.repos.goals.delete, goal_id)
        finally:
            if goal_id == self._current_goal_id:
                self._activate_goal(_most_recent(self._goals))
        return self.current_goal

    # ── SETTINGS ──────────────────────────────────────────

    @_locked
    def update_settings(self, **changes) -> Settings:
        """
        Apply a partial settings update, e.g. ``update_settings(theme="dark")``
        or ``update_settings(personal_details={"email": "a@b.c"})``.
        """
        data = validate_settings_changes(changes, self._settings.personal_details)
        updated = self._settings.copy()
        for attr, value in data.items():
            setattr(updated, attr, value)
        self._settings = updated
        logger.info(f"Updated settings: {', '.join(data) or 'nothing'}")
        self._persist("save settings", self.repos.settings.save, updated)
        return updated.copy()

    @_locked
    def reset_settings(self) -> Settings:
        """Restore the default settings exactly."""
        self._settings = Settings.defaults()
        logger.info("Settings reset to defaults.")
        self._persist("save settings", self.repos.settings.save, self._settings)
        return self._settings.copy()

    @_locked
    def clear_all_data(self) -> None:
        """
        Delete every transaction, budget, recurring expense and goal, and reset
        settings. On the local backend the whole storage directory is wiped.
        """
        self._transactions = []
        self._budgets = []
        self._recurring = []
        self._goals = []
        self._current_budget_id = None
        self._current_goal_id = None
        self._settings = Settings.defaults()
        logger.info("Cleared all data.")
        if self.repos.storage is not None:
            self._persist("clear data", self.repos.storage.clear)
            return
        self._persist_all("clear data", [
            (self.repos.transactions.clear,),
            (self.repos.budgets.clear,),
            (self.repos.recurring_expenses.clear,),
            (self.repos.goals.clear,),
            (self.repos.settings.clear,),
        ])

    # ── AGGREGATES ────────────────────────────────────────

    @_locked
    def get_current_month_transactions(self, now: Optional[datetime] = None) -> list[Transaction]:
        return _copies(ledger.get_current_month_transactions(self._transactions, now))

    @_locked
    def get_total_balance(self) -> float:
        return ledger.get_total_balance(self._transactions)

    @_locked
    def get_total_income(self, now: Optional[datetime] = None) -> float:
        return ledger.get_total_income(self._transactions, now)

    @_locked
    def get_total_expenses(self, now: Optional[datetime] = None) -> float:
        return ledger.get_total_expenses(self._transactions, now)

    @_locked
    def get_monthly_net_balance(self, now: Optional[datetime] = None) -> float:
        return ledger.get_monthly_net_balance(self._transactions, now)

    @_locked
    def get_upcoming_bills(self, now: Optional[datetime] = None) -> list[RecurringExpense]:
        return _copies(ledger.get_upcoming_bills(self._recurring, now))

    @_locked
    def get_recent_transactions(self) -> list[Transaction]:
        return _copies(ledger.get_recent_transactions(self._transactions))

    @_locked
    def get_budget_category_spending(self, budget_id: Optional[str], category_name: str) -> float:
        """
        Spend in `category_name` over the whole history.

        `budget_id` is accepted so callers address a budget's category, but
        the figure is not scoped to that budget or its month.
        """
        return ledger.get_budget_category_spending(self._transactions, category_name)

    @_locked
    def get_budget_progress(self, budget_id: Optional[str] = None) -> BudgetProgress:
        """Progress of `budget_id` (default: the current budget); zeroed if unknown."""
        budget_id = budget_id or self._current_budget_id
        budget = next((b for b in self._budgets if b.id == budget_id), None)
        return ledger.get_budget_progress(budget, self._transactions)

    @_locked
    def get_goal_progress(self, goal_id: str) -> float:
        return ledger.get_goal_progress(self._find(self._goals, goal_id, "Goal"))

    @_locked
    def get_months_to_goal(self, goal_id: str, now: Optional[datetime] = None) -> Optional[int]:
        """Projected months to reach a goal at this month's net savings rate."""
        goal = self._find(self._goals, goal_id, "Goal")
        return ledger.estimate_months_to_goal(goal, self.get_monthly_net_balance(now))

    @_locked
    def get_recurring_summary(self) -> RecurringSummary:
        return ledger.summarize_recurring(self._recurring)

    @_locked
    def get_dashboard(self, now: Optional[datetime] = None) -> Dashboard:
        return Dashboard(
            total_balance=self.get_total_balance(),
            total_income=self.get_total_income(now),
            total_expenses=self.get_total_expenses(now),
            upcoming_bills=self.get_upcoming_bills(now),
            recent_transactions=self.get_recent_transactions(),
            budget_progress=self.get_budget_progress() if self._current_budget_id else None,
        )
