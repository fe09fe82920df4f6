from typing import Sequence, Tuple

import numpy as np

from tracker.aggregate import monthly_totals, sorted_month_keys
from tracker.domain import Expense


def fit_trend(values: Sequence[float]) -> Tuple[float, float]:
    """Least-squares line through ``values`` placed at x = 1, 2, ..., n.

    Returns (slope, intercept).
    """
    n = len(values)
    if n < 2:
        raise ValueError(f"need at least two points to fit a trend, got {n}")

    x = np.arange(1, n + 1, dtype=float)
    y = np.asarray(values, dtype=float)

    sum_x = x.sum()
    sum_y = y.sum()
    sum_xy = (x * y).sum()
    sum_xx = (x * x).sum()

    slope = (n * sum_xy - sum_x * sum_y) / (n * sum_xx - sum_x * sum_x)
    intercept = (sum_y - slope * sum_x) / n
    return float(slope), float(intercept)


def predict_next(expenses: Sequence[Expense]) -> float:
    """Forecast next month's total spend from the monthly history.

    Months without expenses are left out of the series rather than counted
    as zero, so x is the ordinal position among active months.
    """
    if len(expenses) < 2:
        return 0.0

    totals = monthly_totals(expenses)
    months = sorted_month_keys(totals)
    if len(months) < 2:
        return totals[months[0]]

    slope, intercept = fit_trend([totals[m] for m in months])
    prediction = slope * (len(months) + 1) + intercept

    # np.maximum keeps nan instead of turning it into 0
    return float(np.maximum(0.0, prediction))


def next_month_key(key: str) -> str:
    year, month = (int(part) for part in key.split("-"))
    if month == 12:
        return f"{year + 1}-01"
    return f"{year}-{month + 1:02d}"
