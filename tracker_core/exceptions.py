"""Domain-specific exceptions for the expense tracker core services."""

class ValidationError(ValueError):
    """Raised when provided data does not meet validation requirements."""


class InvalidAmountError(ValidationError):
    """Raised when an amount is not a positive number."""


class RecordNotFoundError(LookupError):
    """Raised when an expense record cannot be located."""

    def __init__(self, expense_id: int) -> None:
        super().__init__(f"Expense with ID {expense_id} not found")
        self.expense_id = expense_id


class PersistenceError(IOError):
    """Raised when the persistence layer encounters unrecoverable issues."""
