"""
utils/formatting.py
-------------------
Display helpers: currency amounts, progress bars and goal durations.
"""

from typing import Optional

from utils.constants import SUPPORTED_CURRENCIES


def format_currency(amount: float, currency: str = "USD") -> str:
    """
    Format an amount with its currency symbol, e.g. ``-$1,234.50``.
    JPY is shown without decimals.
    """
    symbol = SUPPORTED_CURRENCIES.get(currency, f"{currency} ")
    decimals = 0 if currency == "JPY" else 2
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.{decimals}f}"


def progress_bar(pct: float, length: int = 15) -> str:
    """Generate a text progress bar."""
    filled = int(min(max(pct, 0), 100) / 100 * length)
    empty = length - filled
    if pct >= 100:
        return "█" * length + " ⚠️"
    elif pct >= 80:
        return "█" * filled + "░" * empty + " ⚡"
    else:
        return "█" * filled + "░" * empty


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'}"


def format_duration(months: Optional[int]) -> str:
    """
    Humanize a month count: ``"5 months"``, ``"1 year"``, ``"2 years 3 months"``.
    None means the projection could not be computed.
    """
    if months is None:
        return "N/A (negative balance)"
    if months < 12:
        return _plural(months, "month")
    years, remaining = divmod(months, 12)
    if remaining == 0:
        return _plural(years, "year")
    return f"{_plural(years, 'year')} {_plural(remaining, 'month')}"
