"""Console rendering helpers: dates, month names, numbers and the expense table."""

from __future__ import annotations

import calendar
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Sequence, Union

from .models import Expense

DATE_WIDTH = 10
COLUMN_GAP = "  "


def format_date(when: Optional[Union[date, datetime]] = None) -> str:
    """Return the ISO calendar date (YYYY-MM-DD), defaulting to today."""
    if when is None:
        when = date.today()
    return when.strftime("%Y-%m-%d")


def month_name(month: int) -> str:
    """English month name; out-of-range numbers roll over like a calendar date."""
    return calendar.month_name[(month - 1) % 12 + 1]


def plain_number(value: Decimal) -> str:
    """Shortest plain rendering of an amount, e.g. ``25`` or ``20.5``."""
    if value == value.to_integral_value():
        return str(int(value))
    return format(value.normalize(), "f")


def money(value: Decimal) -> str:
    """Two-decimal rendering; ties round up."""
    return f"{value.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP):.2f}"


def render_expense_table(expenses: Sequence[Expense]) -> List[str]:
    """Lay out expenses as fixed-width text rows, header first."""
    id_width = max([2] + [len(str(e.id)) for e in expenses])
    category_width = max([8] + [len(e.category) for e in expenses])
    desc_width = max([11] + [len(e.description) for e in expenses])
    amount_width = max([6] + [len(plain_number(e.amount)) + 3 for e in expenses])

    lines = [
        COLUMN_GAP.join(
            [
                "ID".ljust(id_width),
                "Date".ljust(DATE_WIDTH),
                "Category".ljust(category_width),
                "Description".ljust(desc_width),
                "Amount".rjust(amount_width),
            ]
        )
    ]
    for expense in expenses:
        lines.append(
            COLUMN_GAP.join(
                [
                    str(expense.id).ljust(id_width),
                    expense.date.ljust(DATE_WIDTH),
                    expense.category.ljust(category_width),
                    expense.description.ljust(desc_width),
                    "$" + money(expense.amount).rjust(amount_width - 1),
                ]
            )
        )
    return lines
