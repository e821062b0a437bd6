"""
main.py
-------
Entry point for LedgerWise.

Responsibilities:
    - Build the persistence providers for the configured backend.
    - Construct the single LedgerStore and seed it from storage.
    - Log a dashboard summary (balance, month totals, budget, bills, goal).
"""

from typing import Optional

from db.connection import close_pool
from repositories.factory import build_repositories
from services.store import LedgerStore
from utils.formatting import format_currency, format_duration, progress_bar
from utils.logger import get_logger

logger = get_logger(__name__)


def create_store(backend: Optional[str] = None, directory: Optional[str] = None) -> LedgerStore:
    """Build and load the process-wide store."""
    store = LedgerStore(build_repositories(backend, directory))
    store.load()
    return store


def log_dashboard(store: LedgerStore) -> None:
    """Write the dashboard figures to the log."""
    currency = store.settings.currency
    dashboard = store.get_dashboard()

    logger.info(f"Total balance:  {format_currency(dashboard.total_balance, currency)}")
    logger.info(f"Month income:   {format_currency(dashboard.total_income, currency)}")
    logger.info(f"Month expenses: {format_currency(dashboard.total_expenses, currency)}")

    progress = dashboard.budget_progress
    if progress is not None:
        logger.info(
            f"Budget: {format_currency(progress.total_spent, currency)} / "
            f"{format_currency(progress.total_budget, currency)} "
            f"{progress_bar(progress.overall_progress)} {progress.overall_progress:.0f}%"
        )
        for cat in progress.categories:
            logger.info(
                f"  {cat.name}: {format_currency(cat.spent, currency)} / "
                f"{format_currency(cat.budgeted, currency)} [{cat.status}]"
            )

    for bill in dashboard.upcoming_bills:
        logger.info(f"Upcoming: {bill.name} {format_currency(bill.amount, currency)} on {bill.next_due_date}")

    goal = store.current_goal
    if goal is not None:
        logger.info(
            f"Goal '{goal.name}': {store.get_goal_progress(goal.id):.0f}% "
            f"(time to goal: {format_duration(store.get_months_to_goal(goal.id))})"
        )


def main() -> None:
    """Initialize the store and print the dashboard."""
    logger.info("Starting LedgerWise...")
    try:
        store = create_store()
        log_dashboard(store)
        logger.info("LedgerWise ready.")
    finally:
        close_pool()


if __name__ == "__main__":
    main()
