from datetime import datetime, timedelta

import pytest

from models.recurring import RecurringExpense
from models.transaction import Transaction
from repositories.factory import build_local_repositories
from services.store import LedgerStore

NOW = datetime(2026, 10, 17, 12, 0, 0)


def make_tx(amount, category="Food & Dining", when=NOW, created=None, description="item", id=None):
    return Transaction(
        id=id,
        description=description,
        category=category,
        amount=amount,
        date=when,
        created_at=created or when,
    )


def make_bill(name, days_ahead, amount=10.0, status="active", frequency="monthly", category="Utilities"):
    return RecurringExpense(
        name=name,
        category=category,
        amount=amount,
        frequency=frequency,
        next_due_date=NOW.date() + timedelta(days=days_ahead),
        status=status,
    )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def repos(tmp_path):
    return build_local_repositories(str(tmp_path / "storage"))


@pytest.fixture
def store(repos):
    s = LedgerStore(repos)
    s.load()
    return s
