"""Framework-agnostic business services for the expense tracker."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Union

from .config import BUDGETS_RESOURCE, EXPENSES_RESOURCE
from .exceptions import PersistenceError, RecordNotFoundError
from .formatting import format_date, plain_number
from .log import get_logger
from .models import DEFAULT_CATEGORY, Expense, json_number
from .storage import JSONStorage
from .validators import (
    normalize_category,
    validate_amount,
    validate_description,
    validate_records,
)

logger = get_logger(__name__)

CSV_HEADER = "ID,Date,Category,Description,Amount"


class ExpenseStore:
    """Reads and writes the full list of expenses as one JSON document."""

    def __init__(self, storage: JSONStorage, resource: str = EXPENSES_RESOURCE) -> None:
        self._storage = storage
        self._resource = resource
        if not storage.exists(resource):
            storage.save(resource, [])

    def read_all(self) -> List[Expense]:
        """Return every stored expense in storage order; empty on read failure."""
        try:
            raw_records = self._storage.load(self._resource, list)
            return [Expense.from_dict(payload) for payload in raw_records]
        except PersistenceError as exc:
            logger.error("Error reading expenses: %s", exc)
        except (KeyError, TypeError, ValueError, InvalidOperation) as exc:
            logger.error("Error reading expenses: malformed record (%r)", exc)
        return []

    def write_all(self, expenses: Iterable[Expense]) -> None:
        """Validate every record, then overwrite the document; nothing is written on failure."""
        records = list(expenses)
        validate_records(records)
        try:
            self._storage.save(self._resource, [expense.to_dict() for expense in records])
        except PersistenceError:
            raise
        except Exception as exc:  # pragma: no cover
            raise PersistenceError("Unexpected error while saving expenses") from exc

    @staticmethod
    def next_id(expenses: Iterable[Expense]) -> int:
        return max((expense.id for expense in expenses), default=0) + 1


class BudgetStore:
    """Reads and writes the month -> budget mapping as one JSON document."""

    def __init__(self, storage: JSONStorage, resource: str = BUDGETS_RESOURCE) -> None:
        self._storage = storage
        self._resource = resource

    def read_all(self) -> Dict[int, Decimal]:
        try:
            raw = self._storage.load(self._resource, dict)
            return {int(month): Decimal(str(amount)) for month, amount in raw.items()}
        except PersistenceError as exc:
            logger.error("Error reading budgets: %s", exc)
        except (TypeError, ValueError, InvalidOperation) as exc:
            logger.error("Error reading budgets: malformed entry (%r)", exc)
        return {}

    def write_all(self, budgets: Dict[int, Decimal]) -> None:
        payload = {str(month): json_number(budgets[month]) for month in sorted(budgets)}
        self._storage.save(self._resource, payload)


@dataclass(frozen=True)
class Summary:
    total: Decimal
    month: Optional[int] = None
    budget: Optional[Decimal] = None
    by_category: Optional[Dict[str, Decimal]] = None

    @property
    def over_budget(self) -> bool:
        return self.budget is not None and self.total >= self.budget

    @property
    def budget_delta(self) -> Optional[Decimal]:
        """Amount over (when exceeded) or remaining (otherwise) against the budget."""
        if self.budget is None:
            return None
        return abs(self.total - self.budget)


def _total(expenses: Iterable[Expense]) -> Decimal:
    return sum((expense.amount for expense in expenses), Decimal(0))


def _expense_month(expense: Expense) -> Optional[int]:
    try:
        return expense.month
    except (IndexError, ValueError):
        return None


def _matches_category(expense: Expense, category: str) -> bool:
    return (expense.category or DEFAULT_CATEGORY).lower() == category.lower()


def _csv_quote(text: str) -> str:
    return '"' + text + '"'


class ExpenseService:
    """Composes the stores to satisfy one user intent per call."""

    def __init__(
        self,
        expenses: ExpenseStore,
        budgets: BudgetStore,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._expenses = expenses
        self._budgets = budgets
        self._today = today

    @classmethod
    def from_data_dir(cls, data_dir: Path) -> "ExpenseService":
        storage = JSONStorage(data_dir)
        return cls(ExpenseStore(storage), BudgetStore(storage))

    # Public API -----------------------------------------------------------
    def add(self, description: str, amount: object, category: Optional[str] = None) -> Expense:
        expenses = self._expenses.read_all()
        expense = Expense(
            id=ExpenseStore.next_id(expenses),
            date=format_date(self._today()),
            description=validate_description(description),
            amount=validate_amount(amount),
            category=normalize_category(category),
        )
        expenses.append(expense)
        self._expenses.write_all(expenses)
        logger.info("Added expense %s (%s)", expense.id, plain_number(expense.amount))
        return expense

    def list(self, category: Optional[str] = None) -> List[Expense]:
        expenses = self._expenses.read_all()
        if category:
            expenses = [e for e in expenses if _matches_category(e, category)]
        return expenses

    def update(
        self,
        expense_id: int,
        *,
        description: Optional[str] = None,
        amount: Optional[object] = None,
        category: Optional[str] = None,
    ) -> Expense:
        """Overwrite only the supplied fields of one expense."""
        expenses = self._expenses.read_all()
        index = self._index_or_raise(expenses, expense_id)
        current = expenses[index]
        updated = Expense(
            id=current.id,
            date=current.date,
            description=validate_description(description) if description else current.description,
            amount=validate_amount(amount) if amount is not None else current.amount,
            category=normalize_category(category) if category else current.category,
        )
        expenses[index] = updated
        self._expenses.write_all(expenses)
        logger.info("Updated expense %s", expense_id)
        return updated

    def delete(self, expense_id: int) -> Expense:
        expenses = self._expenses.read_all()
        index = self._index_or_raise(expenses, expense_id)
        removed = expenses.pop(index)
        self._expenses.write_all(expenses)
        logger.info("Deleted expense %s", expense_id)
        return removed

    def set_budget(self, month: int, amount: object) -> Decimal:
        budget = validate_amount(amount)
        budgets = self._budgets.read_all()
        budgets[month] = budget
        self._budgets.write_all(budgets)
        logger.info("Budget for month %s set to %s", month, plain_number(budget))
        return budget

    def summarize(
        self,
        month: Optional[int] = None,
        category: Optional[str] = None,
        by_category: bool = False,
    ) -> Summary:
        """Totals for the filtered set.

        A month filter is applied to the full record set, so it takes
        precedence over (and discards) a category filter.
        """
        expenses = self._expenses.read_all()
        filtered = expenses
        if category:
            filtered = [e for e in filtered if _matches_category(e, category)]

        budget = None
        if month:
            filtered = [e for e in expenses if _expense_month(e) == month]
            # A zero or missing budget means no comparison.
            budget = self._budgets.read_all().get(month) or None

        breakdown = None
        if by_category:
            breakdown = {}
            for expense in filtered:
                key = expense.category or DEFAULT_CATEGORY
                breakdown[key] = breakdown.get(key, Decimal(0)) + expense.amount

        return Summary(
            total=_total(filtered),
            month=month or None,
            budget=budget,
            by_category=breakdown,
        )

    def export_csv(self, path: Union[str, Path]) -> int:
        """Write every expense to a CSV file; returns the number of data rows."""
        expenses = self._expenses.read_all()
        path = Path(path)
        lines = [CSV_HEADER]
        for expense in expenses:
            lines.append(
                ",".join(
                    [
                        str(expense.id),
                        expense.date,
                        expense.category or DEFAULT_CATEGORY,
                        _csv_quote(expense.description),
                        plain_number(expense.amount),
                    ]
                )
            )
        try:
            with path.open("w", encoding="utf-8", newline="") as handle:
                handle.write("\n".join(lines) + "\n")
        except OSError as exc:
            raise PersistenceError(f"Unable to write to {path}") from exc
        logger.info("Exported %d expenses to %s", len(expenses), path)
        return len(expenses)

    # Internal helpers -----------------------------------------------------
    @staticmethod
    def _index_or_raise(expenses: List[Expense], expense_id: int) -> int:
        for index, expense in enumerate(expenses):
            if expense.id == expense_id:
                return index
        raise RecordNotFoundError(expense_id)
