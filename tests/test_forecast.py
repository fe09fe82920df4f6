import math
from datetime import date

import pytest

from tracker.domain import Category, Expense
from tracker.forecast import fit_trend, next_month_key, predict_next


def make_expense(id, amount, day, category=Category.OTHER):
    return Expense(id=id, amount=amount, category=category, date=day)


def monthly(*amounts, year=2024):
    return tuple(
        make_expense(i, amount, date(year, i + 1, 15))
        for i, amount in enumerate(amounts)
    )


def test_predict_next_empty():
    assert predict_next(()) == 0


def test_predict_next_single_expense():
    assert predict_next((make_expense(1, 250.0, date(2024, 1, 1)),)) == 0


def test_predict_next_single_month_returns_its_total():
    trans = (
        make_expense(1, 30.0, date(2024, 5, 1)),
        make_expense(2, 45.0, date(2024, 5, 28)),
    )
    assert predict_next(trans) == 75.0


def test_predict_next_linear_growth():
    assert predict_next(monthly(100.0, 200.0, 300.0)) == pytest.approx(400.0)


def test_predict_next_flat():
    assert predict_next(monthly(100.0, 100.0, 100.0)) == pytest.approx(100.0)


def test_predict_next_declining_clamps_to_zero():
    assert predict_next(monthly(300.0, 200.0, 0.0)) == 0.0


def test_predict_next_never_negative():
    assert predict_next(monthly(1000.0, 10.0)) >= 0


def test_predict_next_compresses_empty_months():
    # January and June only: still treated as consecutive points x=1, x=2
    trans = (
        make_expense(1, 100.0, date(2024, 1, 10)),
        make_expense(2, 200.0, date(2024, 6, 10)),
    )
    assert predict_next(trans) == pytest.approx(300.0)


def test_predict_next_across_year_boundary():
    trans = (
        make_expense(1, 50.0, date(2023, 11, 2)),
        make_expense(2, 100.0, date(2023, 12, 2)),
        make_expense(3, 150.0, date(2024, 1, 2)),
    )
    assert predict_next(trans) == pytest.approx(200.0)


def test_predict_next_nan_propagates():
    trans = monthly(100.0, float("nan"), 300.0)
    assert math.isnan(predict_next(trans))


def test_fit_trend():
    slope, intercept = fit_trend([100.0, 200.0, 300.0])
    assert slope == pytest.approx(100.0)
    assert intercept == pytest.approx(0.0)


def test_fit_trend_requires_two_points():
    with pytest.raises(ValueError):
        fit_trend([42.0])


def test_next_month_key():
    assert next_month_key("2024-03") == "2024-04"
    assert next_month_key("2024-12") == "2025-01"


def test_predict_next_single_nan_month_stays_nan():
    trans = (
        make_expense(1, float("nan"), date(2024, 5, 1)),
        make_expense(2, 10.0, date(2024, 5, 2)),
    )
    assert math.isnan(predict_next(trans))
