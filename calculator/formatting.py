"""Display formatting for currency, percentages and user-typed numbers."""

from __future__ import annotations
import math
from datetime import datetime

from .calculators.numeric import sanitize

# uk-UA groups thousands with a non-breaking space
GROUP_SEPARATOR = "\u00a0"
CURRENCY_SYMBOL = "₴"


def format_uah(value: float) -> str:
    """
    Format a hryvnia amount with no decimals.

    Examples:
        120000 -> '120\u00a0000\u00a0₴'
        -1500.6 -> '-1\u00a0501\u00a0₴'
        2.5 -> '3\u00a0₴'
    """
    number = sanitize(value)
    # halves round away from zero
    whole = math.floor(abs(number) + 0.5)
    grouped = f"{whole:,d}".replace(",", GROUP_SEPARATOR)
    sign = "-" if number < 0 and whole > 0 else ""
    return f"{sign}{grouped}{GROUP_SEPARATOR}{CURRENCY_SYMBOL}"


def format_pct(value01: float) -> str:
    """Format a fraction as percent: 1 decimal from 10% up, 2 below."""
    percent = sanitize(value01) * 100.0
    decimals = 1 if abs(percent) >= 10 else 2
    return f"{percent:.{decimals}f}%"


def parse_number(raw: str) -> float:
    """Parse user input, accepting a decimal comma. Garbage yields 0.0."""
    normalized = (raw or "").strip().replace(" ", "").replace(GROUP_SEPARATOR, "").replace(",", ".")
    if not normalized:
        return 0.0
    try:
        return sanitize(float(normalized))
    except ValueError:
        return 0.0


def format_date(iso_timestamp: str) -> str:
    """ISO timestamp -> 'DD.MM.YYYY'; empty string if unparsable."""
    try:
        parsed = datetime.fromisoformat((iso_timestamp or "").replace("Z", "+00:00"))
    except ValueError:
        return ""
    return parsed.strftime("%d.%m.%Y")
