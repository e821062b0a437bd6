"""
repositories/goal_repo.py
-------------------------
Data access layer for savings goals.
"""

from models.goal import Goal
from repositories.base import new_id
from repositories.postgres import PostgresRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class GoalRepository(PostgresRepository):
    """Repository for CRUD operations on the goals table."""

    table = "goals"
    columns = {
        "name": "name",
        "target_amount": "target_amount",
        "current_amount": "current_amount",
        "deadline": "deadline",
        "is_current": "is_current",
    }

    def create(self, goal: Goal) -> Goal:
        if goal.id is None:
            goal.id = new_id()
        sql = """
            INSERT INTO goals (id, name, target_amount, current_amount, deadline, is_current, created_at)
            VALUES (%s, %s, %s, %s, %s, %s, COALESCE(%s, NOW()))
            RETURNING created_at;
        """
        rows = self._execute(sql, (
            goal.id, goal.name, goal.target_amount, goal.current_amount,
            goal.deadline, goal.is_current, goal.created_at,
        ), fetch=True)
        goal.created_at = rows[0][0]
        logger.info(f"Added goal '{goal.name}' #{goal.id}")
        return goal

    def load_all(self) -> list[Goal]:
        """Get all goals, most recent first."""
        sql = """
            SELECT id, name, target_amount, current_amount, deadline, is_current, created_at
            FROM goals ORDER BY created_at DESC;
        """
        return [self._row_to_goal(r) for r in self._execute(sql, fetch=True)]

    @staticmethod
    def _row_to_goal(row: tuple) -> Goal:
        return Goal(
            id=row[0],
            name=row[1],
            target_amount=float(row[2]),
            current_amount=float(row[3]),
            deadline=row[4],
            is_current=row[5],
            created_at=row[6],
        )
