"""Runtime settings resolved from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

EXPENSES_RESOURCE = "expenses.json"
BUDGETS_RESOURCE = "budgets.json"
DEFAULT_EXPORT_FILE = "expenses.csv"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = Path("data")
    log_level: str = "WARNING"
    log_file: Optional[Path] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        log_file = env.get("EXPENSE_TRACKER_LOG_FILE")
        return cls(
            data_dir=Path(env.get("EXPENSE_TRACKER_DATA_DIR") or "data"),
            log_level=(env.get("EXPENSE_TRACKER_LOG_LEVEL") or "WARNING").upper(),
            log_file=Path(log_file) if log_file else None,
        )
