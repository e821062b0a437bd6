"""
repositories/transaction_repo.py
--------------------------------
Data access layer for transactions.
All SQL queries related to the `transactions` table live here.
"""

from models.transaction import Transaction
from repositories.base import new_id
from repositories.postgres import PostgresRepository
from utils.logger import get_logger

logger = get_logger(__name__)

_SELECT = "SELECT id, description, category, amount, date, created_at FROM transactions"


class TransactionRepository(PostgresRepository):
    """Repository for CRUD operations on the transactions table."""

    table = "transactions"
    columns = {
        "description": "description",
        "category": "category",
        "amount": "amount",
        "date": "date",
    }

    # ── CREATE ────────────────────────────────────────────

    def create(self, transaction: Transaction) -> Transaction:
        """
        Insert a new transaction.

        Returns:
            The same Transaction with `id` and `created_at` populated.
        """
        if transaction.id is None:
            transaction.id = new_id()
        sql = """
            INSERT INTO transactions (id, description, category, amount, date, created_at)
            VALUES (%s, %s, %s, %s, %s, COALESCE(%s, NOW()))
            RETURNING created_at;
        """
        rows = self._execute(sql, (
            transaction.id, transaction.description, transaction.category,
            transaction.amount, transaction.date, transaction.created_at,
        ), fetch=True)
        transaction.created_at = rows[0][0]
        logger.info(f"Added {transaction.type} #{transaction.id}")
        return transaction

    # ── READ ──────────────────────────────────────────────

    def load_all(self) -> list[Transaction]:
        """Fetch all transactions, newest first."""
        rows = self._execute(f"{_SELECT} ORDER BY created_at DESC, date DESC;", fetch=True)
        return [self._row_to_transaction(r) for r in rows]

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_transaction(row: tuple) -> Transaction:
        """Convert a database row tuple to a Transaction domain object."""
        return Transaction(
            id=row[0],
            description=row[1],
            category=row[2],
            amount=float(row[3]),
            date=row[4],
            created_at=row[5],
        )
