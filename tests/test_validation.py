from datetime import date, datetime

import pytest

from models.settings import PersonalDetails
from services import validation
from utils.exceptions import ValidationError


# ── amounts ───────────────────────────────────────────────

@pytest.mark.parametrize("raw, expected", [
    ("12.5", 12.5),
    (" 7 ", 7.0),
    ("1,200.75", 1200.75),
    ("-12,000", -12000.0),
    ("1,234,567", 1234567.0),
    (3, 3.0),
])
def test_parse_amount_accepts_numbers(raw, expected):
    assert validation.parse_amount(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", None, "abc", "nan", "inf", True, "1,5", "12,34,567", "1,2345", ",100"])
def test_parse_amount_rejects_bad_input(raw):
    with pytest.raises(ValidationError):
        validation.parse_amount(raw)


# ── transactions ──────────────────────────────────────────

def test_expense_amount_is_stored_negative():
    data = validation.validate_transaction_input("Coffee", "4.50", "Food & Dining", "expense")
    assert data["amount"] == -4.5
    assert data["description"] == "Coffee"
    assert isinstance(data["date"], datetime)


def test_income_amount_is_stored_positive():
    data = validation.validate_transaction_input("Salary", "-2500", "Salary", "income", "2026-10-01T09:00:00Z")
    assert data["amount"] == 2500
    assert data["date"] == datetime(2026, 10, 1, 9, 0)


def test_blank_date_defaults_to_now_unless_required():
    data = validation.validate_transaction_input("Coffee", "4.50", "Food & Dining", "expense", "")
    assert isinstance(data["date"], datetime)
    with pytest.raises(ValidationError) as exc:
        validation.validate_transaction_input(
            "Coffee", "4.50", "Food & Dining", "expense", "", date_required=True
        )
    assert exc.value.field == "date"


def test_zero_amount_rejected():
    with pytest.raises(ValidationError) as exc:
        validation.validate_transaction_input("Nothing", "0", "Other")
    assert exc.value.field == "amount"


@pytest.mark.parametrize("description, amount, category, tx_type", [
    ("", "5", "Other", "expense"),
    ("Lunch", "", "Other", "expense"),
    ("Lunch", "five", "Other", "expense"),
    ("Lunch", "5", "", "expense"),
    ("Lunch", "5", "Not A Category", "expense"),
    ("Lunch", "5", "Other", "transfer"),
])
def test_transaction_input_rejections(description, amount, category, tx_type):
    with pytest.raises(ValidationError):
        validation.validate_transaction_input(description, amount, category, tx_type)


# ── budgets ───────────────────────────────────────────────

def test_budget_input_parses_strings():
    data = validation.validate_budget_input(
        "2000", [{"name": " Rent ", "percentage": "50"}, {"name": "Food", "percentage": 50}]
    )
    assert data["limit"] == 2000
    assert [(c.name, c.percentage) for c in data["categories"]] == [("Rent", 50), ("Food", 50)]


def test_budget_input_month_is_optional():
    split = [{"name": "Everything", "percentage": 100}]
    assert "month" not in validation.validate_budget_input(1000, split)
    assert "month" not in validation.validate_budget_input(1000, split, "")
    data = validation.validate_budget_input(1000, split, "2026-11-01")
    assert data["month"] == datetime(2026, 11, 1)


def test_budget_input_rejects_malformed_month():
    with pytest.raises(ValidationError) as exc:
        validation.validate_budget_input(1000, [{"name": "A", "percentage": 100}], "not-a-date")
    assert exc.value.field == "month"


def test_budget_percentage_within_tolerance_accepted():
    data = validation.validate_budget_input(1000, [{"name": "Everything", "percentage": 99.85}])
    assert data["categories"][0].percentage == 99.85


@pytest.mark.parametrize("percentages", [[89.9], [45, 50], [60, 50]])
def test_budget_percentage_outside_tolerance_rejected(percentages):
    categories = [{"name": f"c{i}", "percentage": p} for i, p in enumerate(percentages)]
    with pytest.raises(ValidationError) as exc:
        validation.validate_budget_input(1000, categories)
    assert exc.value.field == "categories"


def test_budget_duplicate_names_rejected_case_insensitively():
    with pytest.raises(ValidationError):
        validation.validate_budget_input(1000, [
            {"name": "Food", "percentage": 50},
            {"name": "food ", "percentage": 50},
        ])


@pytest.mark.parametrize("limit, categories", [
    ("", [{"name": "A", "percentage": 100}]),
    ("0", [{"name": "A", "percentage": 100}]),
    ("-10", [{"name": "A", "percentage": 100}]),
    ("1000", []),
    ("1000", None),
    ("1000", [{"name": "", "percentage": 100}]),
    ("1000", [{"name": "A", "percentage": 120}, {"name": "B", "percentage": -20}]),
    ("1000", [{"name": "A", "percentage": "lots"}]),
    ("1000", ["A"]),
])
def test_budget_input_rejections(limit, categories):
    with pytest.raises(ValidationError):
        validation.validate_budget_input(limit, categories)


# ── recurring ─────────────────────────────────────────────

def test_recurring_input():
    data = validation.validate_recurring_input("Netflix", "Entertainment", "15.99", "Monthly", "2026-11-01")
    assert data == {
        "name": "Netflix",
        "category": "Entertainment",
        "amount": 15.99,
        "frequency": "monthly",
        "next_due_date": date(2026, 11, 1),
    }


@pytest.mark.parametrize("name, amount, frequency, due", [
    ("", "10", "monthly", "2026-11-01"),
    ("Gym", "0", "monthly", "2026-11-01"),
    ("Gym", "10", "daily", "2026-11-01"),
    ("Gym", "10", "monthly", ""),
    ("Gym", "10", "monthly", "next tuesday"),
])
def test_recurring_input_rejections(name, amount, frequency, due):
    with pytest.raises(ValidationError):
        validation.validate_recurring_input(name, "Health", amount, frequency, due)


# ── goals ─────────────────────────────────────────────────

def test_goal_input_defaults_current_amount_to_zero():
    data = validation.validate_goal_input("Vacation", "3000", "2027-06-30", "")
    assert data["current_amount"] == 0
    assert data["deadline"] == date(2027, 6, 30)


@pytest.mark.parametrize("name, target, deadline, current", [
    ("Vacation", "3000", "", "0"),
    ("", "3000", "2027-06-30", "0"),
    ("Vacation", "0", "2027-06-30", "0"),
    ("Vacation", "3000", "2027-06-30", "-5"),
])
def test_goal_input_rejections(name, target, deadline, current):
    with pytest.raises(ValidationError):
        validation.validate_goal_input(name, target, deadline, current)


# ── settings ──────────────────────────────────────────────

def test_settings_changes_normalize_currency():
    data = validation.validate_settings_changes({"currency": "eur", "theme": "dark"}, PersonalDetails())
    assert data == {"currency": "EUR", "theme": "dark"}


def test_settings_personal_details_merge():
    data = validation.validate_settings_changes(
        {"personal_details": {"first_name": "Ada"}}, PersonalDetails()
    )
    details = data["personal_details"]
    assert details.first_name == "Ada"
    assert details.last_name == "Doe"


@pytest.mark.parametrize("changes", [
    {"theme": "blue"},
    {"currency": "BTC"},
    {"personal_details": {"email": "not-an-email"}},
    {"personal_details": {"nickname": "x"}},
    {"font": "large"},
])
def test_settings_changes_rejections(changes):
    with pytest.raises(ValidationError):
        validation.validate_settings_changes(changes, PersonalDetails())
