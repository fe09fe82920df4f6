import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, Tuple, Union

from tracker.domain import Expense
from tracker.transforms import expense_from_dict, expense_to_dict

logger = logging.getLogger(__name__)


class JsonExpenseStore:
    """Whole-collection store backed by a single JSON array on disk."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> Tuple[Expense, ...]:
        if not self.path.exists():
            logger.info(f"No expense file at {self.path}, starting empty")
            return ()

        with open(self.path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                logger.error(f"Corrupt expense file {self.path}: {e}")
                raise ValueError(f"Cannot parse expense file {self.path}: {e}") from e

        if not isinstance(data, list):
            logger.error(f"Corrupt expense file {self.path}: expected a JSON array, got {type(data).__name__}")
            raise ValueError(f"Expense file {self.path} does not hold a JSON array")

        try:
            expenses = tuple(expense_from_dict(d) for d in data)
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Malformed expense record in {self.path}: {e!r}")
            raise ValueError(f"Malformed expense record in {self.path}: {e!r}") from e

        logger.info(f"Loaded {len(expenses)} expenses from {self.path}")
        return expenses

    def save(self, expenses: Iterable[Expense]) -> None:
        records = [expense_to_dict(e) for e in expenses]
        self.path.parent.mkdir(parents=True, exist_ok=True)

        # the live file is only ever replaced whole
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            os.unlink(tmp_path)
            raise
        logger.info(f"Saved {len(records)} expenses to {self.path}")
