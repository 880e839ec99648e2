"""Data models for the expense tracker domain."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Union

__all__ = ["CATEGORIES", "DEFAULT_CATEGORY", "Expense", "json_number"]

DEFAULT_CATEGORY = "Other"

# Advertised in help text only; any category string is accepted.
CATEGORIES = (
    "Food",
    "Transportation",
    "Housing",
    "Entertainment",
    "Utilities",
    "Healthcare",
    "Education",
    DEFAULT_CATEGORY,
)


def json_number(amount: Decimal) -> Union[int, float]:
    """Return the JSON-native form of an amount: int when integral, float otherwise."""
    if amount == amount.to_integral_value():
        return int(amount)
    return float(amount)


@dataclass(frozen=True)
class Expense:
    id: int
    date: str
    description: str
    amount: Decimal
    category: str = DEFAULT_CATEGORY

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the expense to JSON-friendly natives."""
        return {
            "id": self.id,
            "date": self.date,
            "description": self.description,
            "amount": json_number(self.amount),
            "category": self.category,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Expense":
        """Hydrate an Expense from JSON-native data."""
        return cls(
            id=int(data["id"]),
            date=str(data["date"]),
            description=str(data["description"]),
            amount=Decimal(str(data["amount"])),
            category=str(data.get("category") or DEFAULT_CATEGORY),
        )

    @property
    def month(self) -> int:
        """Month component of the ISO date string."""
        return int(self.date.split("-")[1])
