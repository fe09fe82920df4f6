import time
from dataclasses import replace
from datetime import date
from functools import reduce
from typing import Optional, Tuple

from tracker.aggregate import month_key
from tracker.domain import Category, Expense


def new_expense_id(now: Optional[float] = None) -> int:
    """Millisecond timestamp used as the id of a freshly created expense."""
    return int((time.time() if now is None else now) * 1000)


def expense_from_dict(data: dict) -> Expense:
    return Expense(
        id=int(data["id"]),
        amount=float(data["amount"]),
        category=Category(data["category"]),
        date=date.fromisoformat(data["date"]),
        description=data.get("description") or "",
    )


def expense_to_dict(e: Expense) -> dict:
    return {
        "id": e.id,
        "amount": e.amount,
        "category": e.category.value,
        "date": e.date.isoformat(),
        "description": e.description,
    }


def add_expense(
    expenses: Tuple[Expense, ...], e: Expense
) -> Tuple[Expense, ...]:
    return expenses + (e,)


def edit_expense(
    expenses: Tuple[Expense, ...], expense_id: int, new: Expense
) -> Tuple[Expense, ...]:
    # the replacement always takes over the id it replaces
    updated = replace(new, id=expense_id)
    return tuple(updated if e.id == expense_id else e for e in expenses)


def delete_expense(
    expenses: Tuple[Expense, ...], expense_id: int
) -> Tuple[Expense, ...]:
    return tuple(filter(lambda e: e.id != expense_id, expenses))


def total_spent(expenses: Tuple[Expense, ...]) -> float:
    return reduce(lambda acc, e: acc + e.amount, expenses, 0.0)


def month_total(expenses: Tuple[Expense, ...], today: Optional[date] = None) -> float:
    current = month_key(today or date.today())
    return reduce(
        lambda acc, e: acc + e.amount if month_key(e.date) == current else acc,
        expenses,
        0.0,
    )
