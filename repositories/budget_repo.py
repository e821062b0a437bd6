"""
repositories/budget_repo.py
---------------------------
Data access layer for budgets.
"""

from typing import Any

from psycopg2 import extras

from models.budget import Budget, BudgetCategory
from repositories.base import new_id
from repositories.postgres import PostgresRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class BudgetRepository(PostgresRepository):
    """Repository for CRUD operations on the budgets table."""

    table = "budgets"
    columns = {
        "limit": "limit_amount",
        "categories": "categories",
        "month": "month",
        "is_active": "is_active",
    }

    def _adapt(self, attr: str, value: Any) -> Any:
        if attr == "categories":
            return extras.Json([c.to_record() for c in value])
        return value

    def create(self, budget: Budget) -> Budget:
        """Insert a new budget and return it with `id` and `created_at` set."""
        if budget.id is None:
            budget.id = new_id()
        sql = """
            INSERT INTO budgets (id, limit_amount, categories, month, is_active, created_at)
            VALUES (%s, %s, %s, %s, %s, COALESCE(%s, NOW()))
            RETURNING created_at;
        """
        rows = self._execute(sql, (
            budget.id, budget.limit, self._adapt("categories", budget.categories),
            budget.month, budget.is_active, budget.created_at,
        ), fetch=True)
        budget.created_at = rows[0][0]
        logger.info(f"Added budget #{budget.id} ({budget.limit:.2f})")
        return budget

    def load_all(self) -> list[Budget]:
        """Get all budgets, most recent first."""
        sql = """
            SELECT id, limit_amount, categories, month, is_active, created_at
            FROM budgets ORDER BY created_at DESC;
        """
        return [self._row_to_budget(r) for r in self._execute(sql, fetch=True)]

    @staticmethod
    def _row_to_budget(row: tuple) -> Budget:
        """Convert a database row tuple to a Budget domain object."""
        return Budget(
            id=row[0],
            limit=float(row[1]),
            categories=[BudgetCategory.from_record(c) for c in (row[2] or [])],
            month=row[3],
            is_active=row[4],
            created_at=row[5],
        )
