"""
repositories/recurring_repo.py
------------------------------
Data access layer for recurring expenses.
All SQL queries related to the `recurring_expenses` table live here.
"""

from models.recurring import RecurringExpense
from repositories.base import new_id
from repositories.postgres import PostgresRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class RecurringRepository(PostgresRepository):
    """Repository for CRUD operations on the recurring_expenses table."""

    table = "recurring_expenses"
    columns = {
        "name": "name",
        "category": "category",
        "amount": "amount",
        "frequency": "frequency",
        "next_due_date": "next_due_date",
        "status": "status",
    }

    # ── CREATE ────────────────────────────────────────────

    def create(self, expense: RecurringExpense) -> RecurringExpense:
        """
        Insert a new recurring expense.

        Returns:
            The same object with its `id` and `created_at` populated.
        """
        if expense.id is None:
            expense.id = new_id()
        sql = """
            INSERT INTO recurring_expenses
                (id, name, category, amount, frequency, next_due_date, status, created_at)
            VALUES (%s, %s, %s, %s, %s, %s, %s, COALESCE(%s, NOW()))
            RETURNING created_at;
        """
        rows = self._execute(sql, (
            expense.id, expense.name, expense.category, expense.amount,
            expense.frequency, expense.next_due_date, expense.status,
            expense.created_at,
        ), fetch=True)
        expense.created_at = rows[0][0]
        logger.info(f"Added recurring expense '{expense.name}' #{expense.id}")
        return expense

    # ── READ ──────────────────────────────────────────────

    def load_all(self) -> list[RecurringExpense]:
        """Get all recurring expenses ordered by next due date."""
        sql = """
            SELECT id, name, category, amount, frequency, next_due_date, status, created_at
            FROM recurring_expenses ORDER BY next_due_date ASC;
        """
        return [self._row_to_expense(r) for r in self._execute(sql, fetch=True)]

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_expense(row: tuple) -> RecurringExpense:
        """Convert a database row tuple to a RecurringExpense domain object."""
        return RecurringExpense(
            id=row[0],
            name=row[1],
            category=row[2],
            amount=float(row[3]),
            frequency=row[4],
            next_due_date=row[5],
            status=row[6],
            created_at=row[7],
        )
