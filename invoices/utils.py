"""
Formatting and pagination helpers for the dashboard pages.
"""

from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Union

GAP = "..."


def to_cents(amount: Decimal) -> int:
    """Dollars to whole cents, rounding half up (12.345 -> 1235)."""
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_cents(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(Decimal("0.01"))


def format_currency(cents: int) -> str:
    """Format an amount in cents as US dollars, e.g. 123456 -> "$1,234.56"."""
    dollars = from_cents(cents or 0)
    sign = "-" if dollars < 0 else ""
    return f"{sign}${abs(dollars):,.2f}"


def as_date(value: Union[date, datetime, str]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def format_date_to_local(value: Union[date, datetime, str]) -> str:
    """Render a stored date the way the tables show it, e.g. "Dec 6, 2022"."""
    day = as_date(value)
    return f"{day:%b} {day.day}, {day.year}"


def generate_pagination(current_page: int, total_pages: int) -> List[Union[int, str]]:
    """Page links for the listing footer, collapsing long runs into "..."."""
    if total_pages <= 7:
        return list(range(1, total_pages + 1))

    if current_page <= 3:
        return [1, 2, 3, GAP, total_pages - 1, total_pages]

    if current_page >= total_pages - 2:
        return [1, 2, GAP, total_pages - 2, total_pages - 1, total_pages]

    return [
        1,
        GAP,
        current_page - 1,
        current_page,
        current_page + 1,
        GAP,
        total_pages,
    ]
