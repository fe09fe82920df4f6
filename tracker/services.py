from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence, Tuple

from tracker.aggregate import monthly_totals, sorted_month_keys
from tracker.domain import Expense
from tracker.forecast import next_month_key, predict_next
from tracker.transforms import month_total, total_spent


@dataclass(frozen=True)
class Statistics:
    total: float
    this_month: float
    prediction: float


@dataclass(frozen=True)
class TrendSeries:
    """Monthly totals in chronological order.

    When ``predicted`` is set, the last point is the forecast for the month
    following the last observed one.
    """
    months: Tuple[str, ...]
    amounts: Tuple[float, ...]
    predicted: bool = False


def compute_statistics(expenses: Sequence[Expense], today: Optional[date] = None) -> Statistics:
    expenses = tuple(expenses)
    return Statistics(
        total=total_spent(expenses),
        this_month=month_total(expenses, today),
        prediction=predict_next(expenses),
    )


def trend_series(expenses: Sequence[Expense]) -> TrendSeries:
    totals = monthly_totals(expenses)
    months = sorted_month_keys(totals)
    amounts = [totals[m] for m in months]

    prediction = predict_next(expenses)
    if prediction > 0 and months:
        return TrendSeries(
            months=tuple(months + [next_month_key(months[-1])]),
            amounts=tuple(amounts + [prediction]),
            predicted=True,
        )
    return TrendSeries(months=tuple(months), amounts=tuple(amounts))
