"""Core business logic package for the expense tracker."""

from .models import CATEGORIES, DEFAULT_CATEGORY, Expense
from .services import BudgetStore, ExpenseService, ExpenseStore, Summary
from .storage import JSONStorage
from .exceptions import (
    InvalidAmountError,
    PersistenceError,
    RecordNotFoundError,
    ValidationError,
)

__version__ = "1.0.0"

__all__ = [
    "CATEGORIES",
    "DEFAULT_CATEGORY",
    "Expense",
    "BudgetStore",
    "ExpenseService",
    "ExpenseStore",
    "Summary",
    "JSONStorage",
    "InvalidAmountError",
    "PersistenceError",
    "RecordNotFoundError",
    "ValidationError",
]
