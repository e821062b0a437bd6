"""
repositories/factory.py
-----------------------
Builds the set of persistence providers for the configured backend.
"""

from dataclasses import dataclass
from typing import Optional

from config import LOCAL_STORAGE_DIR, STORAGE_BACKEND
from db.local_storage import LocalStorage
from models.budget import Budget
from models.goal import Goal
from models.recurring import RecurringExpense
from models.transaction import Transaction
from repositories.base import CollectionRepository, SettingsRepository
from repositories.local_repo import LocalCollectionRepository, LocalSettingsRepository
from utils.constants import STORAGE_KEYS
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class Repositories:
    """
    One provider per collection plus the settings provider. `storage` is
    the shared LocalStorage on the local backend, None otherwise.
    """
    transactions: CollectionRepository
    budgets: CollectionRepository
    recurring_expenses: CollectionRepository
    goals: CollectionRepository
    settings: SettingsRepository
    storage: Optional[LocalStorage] = None


def build_local_repositories(directory: str) -> Repositories:
    storage = LocalStorage(directory)
    return Repositories(
        transactions=LocalCollectionRepository(storage, STORAGE_KEYS["transactions"], Transaction),
        budgets=LocalCollectionRepository(storage, STORAGE_KEYS["budgets"], Budget),
        recurring_expenses=LocalCollectionRepository(
            storage, STORAGE_KEYS["recurring_expenses"], RecurringExpense
        ),
        goals=LocalCollectionRepository(storage, STORAGE_KEYS["goals"], Goal),
        settings=LocalSettingsRepository(storage, STORAGE_KEYS["settings"]),
        storage=storage,
    )


def build_postgres_repositories() -> Repositories:
    """Open the connection pool, ensure the schema exists and build the repositories."""
    from db.connection import init_pool
    from db.init_db import create_tables
    from repositories.budget_repo import BudgetRepository
    from repositories.goal_repo import GoalRepository
    from repositories.recurring_repo import RecurringRepository
    from repositories.settings_repo import PostgresSettingsRepository
    from repositories.transaction_repo import TransactionRepository

    init_pool()
    create_tables()
    return Repositories(
        transactions=TransactionRepository(),
        budgets=BudgetRepository(),
        recurring_expenses=RecurringRepository(),
        goals=GoalRepository(),
        settings=PostgresSettingsRepository(),
    )


def build_repositories(
    backend: Optional[str] = None, directory: Optional[str] = None
) -> Repositories:
    """
    Build the providers for `backend` ('local' or 'postgres').

    Args:
        backend: Defaults to STORAGE_BACKEND from config.
        directory: Local storage directory; defaults to LOCAL_STORAGE_DIR.

    Raises:
        ValueError: For an unknown backend name.
    """
    backend = (backend or STORAGE_BACKEND).lower()
    logger.info(f"Using '{backend}' storage backend.")
    if backend == "local":
        return build_local_repositories(directory or LOCAL_STORAGE_DIR)
    if backend == "postgres":
        return build_postgres_repositories()
    raise ValueError(f"Unknown storage backend '{backend}' (expected 'local' or 'postgres')")
