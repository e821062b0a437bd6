"""
utils/constants.py
------------------
Domain constants shared by models, validation and the ledger aggregator.
"""

TRANSACTION_CATEGORIES: list[str] = [
    "Food & Dining",
    "Groceries",
    "Transportation",
    "Housing",
    "Utilities",
    "Healthcare",
    "Entertainment",
    "Shopping",
    "Education",
    "Travel",
    "Salary",
    "Freelance",
    "Investments",
    "Other",
]

TRANSACTION_TYPES: tuple[str, ...] = ("expense", "income")

FREQUENCIES: tuple[str, ...] = ("weekly", "monthly", "yearly")
RECURRING_STATUSES: tuple[str, ...] = ("active", "inactive")

THEMES: tuple[str, ...] = ("light", "dark")

SUPPORTED_CURRENCIES: dict[str, str] = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CAD": "C$",
    "AUD": "A$",
}

# Allowed drift when category percentages are summed against 100.
PERCENTAGE_TOLERANCE: float = 0.1

# Spend ratio above which a budget category is flagged as "warning".
BUDGET_WARNING_RATIO: float = 0.8

UPCOMING_BILLS_WINDOW_DAYS: int = 30
UPCOMING_BILLS_LIMIT: int = 5
RECENT_TRANSACTIONS_LIMIT: int = 5

# Floor for the monthly savings rate used in goal projections.
SAVINGS_EPSILON: float = 1e-9

# Local storage keys, one JSON document per collection.
STORAGE_KEYS: dict[str, str] = {
    "transactions": "ledgerwise-transactions",
    "budgets": "ledgerwise-budgets",
    "recurring_expenses": "ledgerwise-recurring-expenses",
    "goals": "ledgerwise-goals",
    "settings": "ledgerwise-settings",
}
