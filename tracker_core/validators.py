"""Validation helpers shared across expense tracker services."""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional

from .exceptions import InvalidAmountError, ValidationError
from .models import DEFAULT_CATEGORY, Expense

# Best-effort: matches a tag-like run, including an unterminated trailing "<...".
TAG_PATTERN = re.compile(r"<[^>]*>?", re.MULTILINE)


def validate_amount(raw: object, field: str = "Amount") -> Decimal:
    """Convert raw input to a positive Decimal."""
    try:
        amount = Decimal(str(raw).strip())
    except (InvalidOperation, TypeError) as exc:  # type: ignore[arg-type]
        raise InvalidAmountError(f"{field} must be a positive number") from exc

    if not amount.is_finite() or amount <= 0:
        raise InvalidAmountError(f"{field} must be a positive number")
    return amount


def sanitize_description(text: str) -> str:
    """Remove HTML/script tags from a free-text description."""
    return TAG_PATTERN.sub("", text)


def validate_description(value: object) -> str:
    if not isinstance(value, str):
        raise ValidationError("Description must be a string")
    cleaned = sanitize_description(value).strip()
    if not cleaned:
        raise ValidationError("Description cannot be empty")
    return cleaned


def normalize_category(value: Optional[str]) -> str:
    if value is None or not value.strip():
        return DEFAULT_CATEGORY
    return value.strip()


def validate_record(expense: Expense) -> Expense:
    """Check the structural invariant every persisted expense must satisfy."""
    if not isinstance(expense.id, int) or expense.id <= 0:
        raise ValidationError("Invalid expense data: id must be a positive integer")
    if not expense.date:
        raise ValidationError(f"Invalid expense data: empty date for expense {expense.id}")
    if not expense.description:
        raise ValidationError(f"Invalid expense data: empty description for expense {expense.id}")
    if expense.amount is None or not expense.amount.is_finite() or expense.amount <= 0:
        raise ValidationError(f"Invalid expense data: amount must be positive for expense {expense.id}")
    return expense


def validate_records(expenses: Iterable[Expense]) -> None:
    for expense in expenses:
        validate_record(expense)
