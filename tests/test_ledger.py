from datetime import datetime, timedelta

from conftest import NOW, make_bill, make_tx
from models.budget import Budget, BudgetCategory
from models.goal import Goal
from services import ledger


def make_budget(limit=2000.0, categories=(("Rent", 50), ("Food & Dining", 50))):
    return Budget(
        id="b1",
        limit=limit,
        categories=[BudgetCategory(name, pct) for name, pct in categories],
        month=NOW,
        created_at=NOW,
    )


# ── balances ──────────────────────────────────────────────

def test_total_balance_sums_all_history():
    transactions = [
        make_tx(1000, "Salary", when=datetime(2025, 1, 5)),
        make_tx(-250.5, when=NOW),
        make_tx(-49.5, "Transportation", when=datetime(2020, 3, 1)),
    ]
    assert ledger.get_total_balance(transactions) == 700.0


def test_total_balance_is_order_independent():
    transactions = [make_tx(a) for a in (-4.5, 100, -20.25, 3)]
    assert ledger.get_total_balance(transactions) == ledger.get_total_balance(reversed(transactions))


def test_total_balance_empty_is_zero():
    assert ledger.get_total_balance([]) == 0


def test_month_totals_include_month_boundaries_only():
    transactions = [
        make_tx(100, "Salary", when=datetime(2026, 10, 1, 0, 0, 0)),
        make_tx(-40, when=datetime(2026, 10, 31, 23, 59, 59)),
        make_tx(500, "Salary", when=datetime(2026, 9, 30, 23, 59, 59)),
        make_tx(-70, when=datetime(2026, 11, 1, 0, 0, 0)),
    ]
    assert ledger.get_total_income(transactions, NOW) == 100
    assert ledger.get_total_expenses(transactions, NOW) == 40
    assert ledger.get_monthly_net_balance(transactions, NOW) == 60


def test_month_totals_empty_window():
    transactions = [make_tx(-10, when=datetime(2024, 1, 1))]
    assert ledger.get_total_income(transactions, NOW) == 0
    assert ledger.get_total_expenses(transactions, NOW) == 0


def test_zero_amount_is_neither_income_nor_expense():
    transactions = [make_tx(0), make_tx(10, "Salary"), make_tx(-5)]
    assert ledger.get_total_income(transactions, NOW) == 10
    assert ledger.get_total_expenses(transactions, NOW) == 5


# ── upcoming bills ────────────────────────────────────────

def test_upcoming_bills_window_is_inclusive_of_30_days():
    bills = [make_bill("in30", 30), make_bill("in31", 31), make_bill("today", 0), make_bill("past", -1)]
    names = [b.name for b in ledger.get_upcoming_bills(bills, NOW)]
    assert names == ["today", "in30"]


def test_upcoming_bills_skip_inactive():
    bills = [make_bill("off", 3, status="inactive"), make_bill("on", 4)]
    assert [b.name for b in ledger.get_upcoming_bills(bills, NOW)] == ["on"]


def test_upcoming_bills_sorted_and_capped_at_five():
    bills = [make_bill(f"bill{d}", d) for d in (20, 2, 9, 15, 1, 7, 28)]
    result = ledger.get_upcoming_bills(bills, NOW)
    assert len(result) == 5
    assert [b.name for b in result] == ["bill1", "bill2", "bill7", "bill9", "bill15"]


def test_upcoming_bills_empty_is_list():
    assert ledger.get_upcoming_bills([], NOW) == []


# ── recent transactions ───────────────────────────────────

def test_recent_transactions_newest_created_first():
    transactions = [
        make_tx(-i, created=NOW - timedelta(hours=i), description=f"t{i}") for i in range(1, 8)
    ]
    recent = ledger.get_recent_transactions(list(reversed(transactions)))
    assert [t.description for t in recent] == ["t1", "t2", "t3", "t4", "t5"]


def test_recent_transactions_shorter_collection():
    assert len(ledger.get_recent_transactions([make_tx(-1), make_tx(-2)])) == 2


# ── budgets ───────────────────────────────────────────────

def test_category_spending_is_unscoped_by_date():
    transactions = [
        make_tx(-100, "Rent", when=datetime(2019, 1, 1)),
        make_tx(-50, "Rent", when=NOW),
        make_tx(300, "Rent", when=NOW),
        make_tx(-20, "Groceries", when=NOW),
    ]
    assert ledger.get_budget_category_spending(transactions, "Rent") == 150


def test_budget_progress_splits_limit_by_percentage():
    progress = ledger.get_budget_progress(make_budget(), [])
    assert progress.total_budget == 2000
    assert [c.budgeted for c in progress.categories] == [1000, 1000]
    assert all(c.status == "good" for c in progress.categories)
    assert progress.overall_progress == 0


def test_budget_progress_statuses():
    budget = make_budget(1000, (("Rent", 50), ("Food & Dining", 30), ("Travel", 20)))
    transactions = [
        make_tx(-600, "Rent"),           # 600 > 500 -> over
        make_tx(-250, "Food & Dining"),  # 250 > 240 -> warning
        make_tx(-160, "Travel"),         # 160 == 0.8 * 200 -> good
    ]
    progress = ledger.get_budget_progress(budget, transactions)
    by_name = {c.name: c for c in progress.categories}
    assert by_name["Rent"].status == "over"
    assert by_name["Rent"].remaining == 0
    assert by_name["Food & Dining"].status == "warning"
    assert by_name["Food & Dining"].remaining == 50
    assert by_name["Travel"].status == "good"
    assert progress.total_spent == 1010
    assert progress.overall_progress == 100


def test_budget_progress_missing_budget_is_zeroed():
    progress = ledger.get_budget_progress(None, [make_tx(-5)])
    assert progress.categories == []
    assert progress.total_spent == 0
    assert progress.total_budget == 0
    assert progress.overall_progress == 0


def test_budget_progress_without_categories_is_zeroed():
    budget = make_budget(categories=())
    progress = ledger.get_budget_progress(budget, [make_tx(-5, "Rent")])
    assert progress.budget_id == "b1"
    assert progress.categories == []
    assert progress.overall_progress == 0


def test_budget_progress_is_idempotent():
    budget = make_budget()
    transactions = [make_tx(-120, "Rent"), make_tx(-80, "Food & Dining")]
    assert ledger.get_budget_progress(budget, transactions) == ledger.get_budget_progress(budget, transactions)


# ── goals ─────────────────────────────────────────────────

def test_goal_progress_clamped_to_100():
    goal = Goal(name="Bike", target_amount=1000, current_amount=1200, deadline=NOW.date())
    assert ledger.get_goal_progress(goal) == 100


def test_goal_progress_partial():
    goal = Goal(name="Bike", target_amount=1000, current_amount=250, deadline=NOW.date())
    assert ledger.get_goal_progress(goal) == 25


def test_months_to_goal_rounds_up():
    goal = Goal(name="Car", target_amount=1000, current_amount=100, deadline=NOW.date())
    assert ledger.estimate_months_to_goal(goal, 200) == 5


def test_months_to_goal_not_computable_without_savings():
    goal = Goal(name="Car", target_amount=1000, current_amount=100, deadline=NOW.date())
    assert ledger.estimate_months_to_goal(goal, 0) is None
    assert ledger.estimate_months_to_goal(goal, -50) is None


def test_months_to_goal_already_reached():
    goal = Goal(name="Car", target_amount=1000, current_amount=1000, deadline=NOW.date())
    assert ledger.estimate_months_to_goal(goal, -50) == 0


# ── recurring summary & listings ──────────────────────────

def test_summarize_recurring():
    bills = [
        make_bill("rent", 3, amount=1000, frequency="monthly"),
        make_bill("gym", 3, amount=10, frequency="weekly", status="inactive"),
        make_bill("domain", 3, amount=15, frequency="yearly"),
    ]
    summary = ledger.summarize_recurring(bills)
    assert summary.total_monthly == 1000
    assert summary.total_yearly == 1000 * 12 + 10 * 52 + 15
    assert summary.active_count == 2


def test_filter_transactions():
    transactions = [
        make_tx(-5, "Food & Dining", when=datetime(2026, 10, 1), description="Coffee"),
        make_tx(2000, "Salary", when=datetime(2026, 10, 2), description="Paycheck"),
        make_tx(-60, "Groceries", when=datetime(2026, 10, 3), description="Weekly shop"),
    ]
    assert [t.description for t in ledger.filter_transactions(transactions)] == [
        "Weekly shop", "Paycheck", "Coffee",
    ]
    assert [t.description for t in ledger.filter_transactions(transactions, tx_type="expense", sort_by="amount")] == [
        "Weekly shop", "Coffee",
    ]
    assert [t.description for t in ledger.filter_transactions(transactions, search="coff")] == ["Coffee"]
    assert [t.description for t in ledger.filter_transactions(transactions, category="Salary")] == ["Paycheck"]


def test_filter_recurring_expenses():
    bills = [
        make_bill("Netflix", 10, amount=15, category="Entertainment"),
        make_bill("Rent", 2, amount=900, category="Housing"),
        make_bill("Gym", 5, amount=30, frequency="weekly", category="Healthcare"),
    ]
    assert [b.name for b in ledger.filter_recurring_expenses(bills)] == ["Rent", "Gym", "Netflix"]
    assert [b.name for b in ledger.filter_recurring_expenses(bills, sort_by="amount")] == ["Rent", "Gym", "Netflix"]
    assert [b.name for b in ledger.filter_recurring_expenses(bills, sort_by="name")] == ["Gym", "Netflix", "Rent"]
    assert [b.name for b in ledger.filter_recurring_expenses(bills, frequency="weekly")] == ["Gym"]
    assert [b.name for b in ledger.filter_recurring_expenses(bills, search="flix")] == ["Netflix"]


def test_list_categories_first_seen_order():
    transactions = [make_tx(-1, "Travel"), make_tx(-1, "Groceries"), make_tx(-1, "Travel")]
    assert ledger.list_categories(transactions) == ["Travel", "Groceries"]
