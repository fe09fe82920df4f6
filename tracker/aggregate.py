from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Mapping

from tracker.domain import Category, Expense


def month_key(d: date) -> str:
    return f"{d.year}-{d.month:02d}"


def monthly_totals(expenses: Iterable[Expense]) -> Dict[str, float]:
    """Sum amounts per calendar month.

    Keys are YYYY-MM strings, one per month that has at least one expense.
    Values are not rounded.
    """
    totals: Dict[str, float] = defaultdict(float)
    for e in expenses:
        totals[month_key(e.date)] += e.amount
    return dict(totals)


def category_totals(expenses: Iterable[Expense]) -> Dict[Category, float]:
    totals: Dict[Category, float] = defaultdict(float)
    for e in expenses:
        totals[e.category] += e.amount
    return dict(totals)


def sorted_month_keys(totals: Mapping[str, float]) -> List[str]:
    # YYYY-MM sorts chronologically as a plain string
    return sorted(totals.keys())
