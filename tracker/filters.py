from typing import Callable, Iterable, List, Union

from tracker.aggregate import month_key
from tracker.domain import Category, Expense

ALL = "all"


def by_category(category: Union[Category, str]):
    def _filter(e: Expense) -> bool:
        return category == ALL or e.category == category

    return _filter


def by_month(month: str):
    def _filter(e: Expense) -> bool:
        return month == ALL or month_key(e.date) == month

    return _filter


def filtered_expenses(
    expenses: Iterable[Expense],
    category: Union[Category, str] = ALL,
    month: str = ALL,
) -> List[Expense]:
    """Expenses matching both filters, newest first."""
    preds: List[Callable[[Expense], bool]] = [by_category(category), by_month(month)]
    selected = [e for e in expenses if all(p(e) for p in preds)]
    return sorted(selected, key=lambda e: e.date, reverse=True)


def available_months(expenses: Iterable[Expense]) -> List[str]:
    return sorted({month_key(e.date) for e in expenses}, reverse=True)
