"""
services/validation.py
----------------------
Turns raw form input (usually strings) into typed, in-contract values.
Every function raises ValidationError before anything is mutated.
"""

import math
import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Optional

from models.budget import BudgetCategory
from models.settings import PersonalDetails
from utils.constants import (
    FREQUENCIES,
    PERCENTAGE_TOLERANCE,
    RECURRING_STATUSES,
    SUPPORTED_CURRENCIES,
    THEMES,
    TRANSACTION_CATEGORIES,
    TRANSACTION_TYPES,
)
from utils.dates import parse_date, parse_timestamp
from utils.exceptions import ValidationError

# Digits grouped by commas in threes, e.g. "1,200.75" or "-12,000".
_THOUSANDS = re.compile(r"^[+-]?\d{1,3}(,\d{3})+(\.\d+)?$")


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require_text(value: Any, field: str) -> str:
    """Return the stripped text, rejecting missing or blank values."""
    if _is_blank(value):
        raise ValidationError(f"{field} is required", field)
    return str(value).strip()


def _strip_thousands(text: str, field: str) -> str:
    if "," not in text:
        return text
    if not _THOUSANDS.match(text):
        raise ValidationError(f"{field} has misplaced thousands separators", field)
    return text.replace(",", "")


def parse_amount(value: Any, field: str = "amount") -> float:
    """
    Parse a numeric form value.

    Accepts numbers and numeric strings. Commas are only allowed as
    thousands separators ("1,200.75"); "1,5" is rejected.

    Raises:
        ValidationError: If the value is missing, non-numeric or not finite.
    """
    if _is_blank(value):
        raise ValidationError(f"{field} is required", field)
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number", field)
    try:
        amount = float(_strip_thousands(str(value).strip(), field))
    except ValueError:
        raise ValidationError(f"{field} must be a number", field) from None
    if not math.isfinite(amount):
        raise ValidationError(f"{field} must be a finite number", field)
    return amount


def parse_positive_amount(value: Any, field: str = "amount") -> float:
    amount = parse_amount(value, field)
    if amount <= 0:
        raise ValidationError(f"{field} must be greater than zero", field)
    return amount


def _parse_timestamp_field(value: Any, field: str) -> datetime:
    try:
        return parse_timestamp(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"{field} must be an ISO-8601 date", field) from None


def _parse_date_field(value: Any, field: str) -> date:
    if _is_blank(value):
        raise ValidationError(f"{field} is required", field)
    try:
        return parse_date(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"{field} must be an ISO-8601 date", field) from None


# ── Transactions ──────────────────────────────────────────

def validate_category(value: Any) -> str:
    category = require_text(value, "category")
    if category not in TRANSACTION_CATEGORIES:
        raise ValidationError(f"Unknown category '{category}'", "category")
    return category


def validate_transaction_input(
    description: Any,
    amount: Any,
    category: Any,
    tx_type: Any = "expense",
    when: Any = None,
    date_required: bool = False,
) -> dict:
    """
    Validate the add-transaction form.

    The sign of the stored amount follows `tx_type`: expenses are stored
    negative and income positive, whatever sign the user typed. A blank
    `when` means now, unless `date_required` is set.

    Returns:
        Dict with 'description', 'amount', 'category' and 'date'.
    """
    description = require_text(description, "description")
    value = parse_amount(amount)
    if value == 0:
        raise ValidationError("amount must not be zero", "amount")
    category = validate_category(category)
    if tx_type not in TRANSACTION_TYPES:
        raise ValidationError(f"type must be one of {', '.join(TRANSACTION_TYPES)}", "type")
    signed = -abs(value) if tx_type == "expense" else abs(value)
    if _is_blank(when):
        if date_required:
            raise ValidationError("date is required", "date")
        occurred = datetime.now()
    else:
        occurred = _parse_timestamp_field(when, "date")
    return {
        "description": description,
        "amount": signed,
        "category": category,
        "date": occurred,
    }


# ── Budgets ───────────────────────────────────────────────

def _category_field(cat: Any, key: str) -> Any:
    if isinstance(cat, BudgetCategory):
        return getattr(cat, key)
    if isinstance(cat, dict):
        return cat.get(key)
    raise ValidationError("each category must have a name and a percentage", "categories")


def validate_budget_categories(categories: Optional[Iterable[Any]]) -> list[BudgetCategory]:
    """
    Validate category allocations.

    Rules: at least one category; names non-empty and unique
    (case-insensitive); each percentage numeric in [0, 100]; the sum
    within PERCENTAGE_TOLERANCE of 100.
    """
    items = list(categories or [])
    if not items:
        raise ValidationError("a budget needs at least one category", "categories")

    parsed: list[BudgetCategory] = []
    seen: set[str] = set()
    for cat in items:
        name = _category_field(cat, "name")
        if _is_blank(name):
            raise ValidationError("category name must not be empty", "categories")
        name = str(name).strip()
        key = name.lower()
        if key in seen:
            raise ValidationError(f"duplicate category '{name}'", "categories")
        seen.add(key)

        pct = parse_amount(_category_field(cat, "percentage"), "percentage")
        if not 0 <= pct <= 100:
            raise ValidationError(f"percentage for '{name}' must be between 0 and 100", "categories")
        parsed.append(BudgetCategory(name=name, percentage=pct))

    total = percentage_total(parsed)
    if abs(total - 100) > Decimal(str(PERCENTAGE_TOLERANCE)):
        raise ValidationError(
            f"category percentages must add up to 100% (got {total}%)", "categories"
        )
    return parsed


def percentage_total(categories: Iterable[BudgetCategory]) -> Decimal:
    """Sum of category percentages at one-decimal display precision (half up)."""
    total = sum(c.percentage for c in categories)
    return Decimal(str(total)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)


def validate_budget_input(
    limit: Any, categories: Optional[Iterable[Any]], month: Any = None
) -> dict:
    """
    Validate the create/edit budget form. Returns 'limit' and 'categories',
    plus 'month' when one was given.
    """
    data = {
        "limit": parse_positive_amount(limit, "limit"),
        "categories": validate_budget_categories(categories),
    }
    if not _is_blank(month):
        data["month"] = _parse_timestamp_field(month, "month")
    return data


# ── Recurring expenses ────────────────────────────────────

def validate_frequency(value: Any) -> str:
    frequency = require_text(value, "frequency").lower()
    if frequency not in FREQUENCIES:
        raise ValidationError(f"frequency must be one of {', '.join(FREQUENCIES)}", "frequency")
    return frequency


def validate_status(value: Any) -> str:
    status = require_text(value, "status").lower()
    if status not in RECURRING_STATUSES:
        raise ValidationError(f"status must be one of {', '.join(RECURRING_STATUSES)}", "status")
    return status


def validate_recurring_input(
    name: Any, category: Any, amount: Any, frequency: Any, next_due_date: Any
) -> dict:
    """Validate the add-recurring-expense form."""
    return {
        "name": require_text(name, "name"),
        "category": require_text(category, "category"),
        "amount": parse_positive_amount(amount),
        "frequency": validate_frequency(frequency),
        "next_due_date": _parse_date_field(next_due_date, "next_due_date"),
    }


# ── Goals ─────────────────────────────────────────────────

def parse_goal_progress(value: Any) -> float:
    """Parse an updated current amount for a goal (must be >= 0)."""
    amount = parse_amount(value, "current_amount")
    if amount < 0:
        raise ValidationError("current_amount must not be negative", "current_amount")
    return amount


def validate_goal_input(
    name: Any, target_amount: Any, deadline: Any, current_amount: Any = None
) -> dict:
    """Validate the new-goal form. A blank current amount means 0."""
    return {
        "name": require_text(name, "name"),
        "target_amount": parse_positive_amount(target_amount, "target_amount"),
        "current_amount": 0.0 if _is_blank(current_amount) else parse_goal_progress(current_amount),
        "deadline": _parse_date_field(deadline, "deadline"),
    }


# ── Settings ──────────────────────────────────────────────

def validate_personal_details(details: Any, current: PersonalDetails) -> PersonalDetails:
    if not isinstance(details, dict):
        raise ValidationError("personal_details must be a mapping", "personal_details")
    unknown = set(details) - {"first_name", "last_name", "email"}
    if unknown:
        raise ValidationError(f"unknown personal detail(s): {', '.join(sorted(unknown))}", "personal_details")
    email = details.get("email", current.email)
    if email and "@" not in str(email):
        raise ValidationError("email must be a valid address", "email")
    return PersonalDetails(
        first_name=str(details.get("first_name", current.first_name)).strip(),
        last_name=str(details.get("last_name", current.last_name)).strip(),
        email=str(email).strip(),
    )


def validate_settings_changes(changes: dict, current_details: PersonalDetails) -> dict:
    """
    Validate a partial settings update.

    Keys: 'theme', 'currency', 'personal_details' (a partial mapping of
    first_name / last_name / email).
    """
    allowed = {"theme", "currency", "personal_details"}
    unknown = set(changes) - allowed
    if unknown:
        raise ValidationError(f"unknown setting(s): {', '.join(sorted(unknown))}", "settings")

    result: dict = {}
    if "theme" in changes:
        if changes["theme"] not in THEMES:
            raise ValidationError(f"theme must be one of {', '.join(THEMES)}", "theme")
        result["theme"] = changes["theme"]
    if "currency" in changes:
        currency = str(changes["currency"] or "").strip().upper()
        if currency not in SUPPORTED_CURRENCIES:
            raise ValidationError(f"unsupported currency '{changes['currency']}'", "currency")
        result["currency"] = currency
    if "personal_details" in changes:
        result["personal_details"] = validate_personal_details(
            changes["personal_details"], current_details
        )
    return result
