from datetime import date

import pytest

from tracker_core.log import get_logger
from tracker_core.services import BudgetStore, ExpenseService, ExpenseStore
from tracker_core.storage import JSONStorage

AUGUST_15 = date(2026, 8, 15)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    for name in (
        "EXPENSE_TRACKER_DATA_DIR",
        "EXPENSE_TRACKER_LOG_LEVEL",
        "EXPENSE_TRACKER_LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
    yield
    logger = get_logger()
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def data_dir(tmp_path):
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def storage(data_dir):
    return JSONStorage(data_dir)


@pytest.fixture
def expense_store(storage):
    return ExpenseStore(storage)


@pytest.fixture
def budget_store(storage):
    return BudgetStore(storage)


@pytest.fixture
def service(expense_store, budget_store):
    """Service whose clock is pinned to 15 August 2026."""
    return ExpenseService(expense_store, budget_store, today=lambda: AUGUST_15)
