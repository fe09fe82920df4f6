from datetime import date

from tracker.domain import Category, Expense
from tracker.transforms import (
    add_expense,
    delete_expense,
    edit_expense,
    expense_from_dict,
    expense_to_dict,
    month_total,
    new_expense_id,
    total_spent,
)


def make_sample():
    return (
        Expense(1, 10.0, Category.FOOD, date(2024, 5, 1), "Lunch"),
        Expense(2, 20.0, Category.BILLS, date(2024, 5, 3), "Phone"),
        Expense(3, 30.0, Category.SHOPPING, date(2024, 4, 30), ""),
    )


def test_add_expense():
    trans = make_sample()
    new = Expense(4, 5.0, Category.OTHER, date(2024, 5, 9))
    result = add_expense(trans, new)

    assert len(result) == 4
    assert result[-1] is new
    assert len(trans) == 3


def test_edit_expense_replaces_only_matching_record():
    trans = make_sample()
    replacement = Expense(2, 99.0, Category.HEALTHCARE, date(2024, 5, 4), "Doctor")
    result = edit_expense(trans, 2, replacement)

    assert result[1] == replacement
    assert result[0] is trans[0]
    assert result[2] is trans[2]
    assert trans[1].amount == 20.0


def test_edit_expense_keeps_original_id():
    trans = make_sample()
    replacement = Expense(777, 1.0, Category.FOOD, date(2024, 5, 1))
    result = edit_expense(trans, 1, replacement)

    assert result[0].id == 1
    assert result[0].amount == 1.0


def test_edit_expense_unknown_id_is_noop():
    trans = make_sample()
    result = edit_expense(trans, 42, Expense(42, 1.0, Category.FOOD, date(2024, 1, 1)))
    assert result == trans


def test_delete_expense():
    trans = make_sample()
    result = delete_expense(trans, 2)
    assert [e.id for e in result] == [1, 3]


def test_delete_expense_unknown_id_is_noop():
    trans = make_sample()
    assert delete_expense(trans, 42) == trans


def test_total_spent():
    assert total_spent(make_sample()) == 60.0
    assert total_spent(()) == 0


def test_month_total_uses_given_today():
    assert month_total(make_sample(), date(2024, 5, 20)) == 30.0
    assert month_total(make_sample(), date(2024, 4, 1)) == 30.0
    assert month_total(make_sample(), date(2025, 5, 1)) == 0


def test_new_expense_id_is_millisecond_timestamp():
    assert new_expense_id(1700000000.5) == 1700000000500


def test_dict_conversion():
    e = Expense(1712345678901, 12.34, Category.ENTERTAINMENT, date(2024, 4, 5), "Cinema")
    data = expense_to_dict(e)

    assert data == {
        "id": 1712345678901,
        "amount": 12.34,
        "category": "Entertainment",
        "date": "2024-04-05",
        "description": "Cinema",
    }
    assert expense_from_dict(data) == e


def test_from_dict_missing_description():
    e = expense_from_dict({"id": 1, "amount": 3, "category": "Food", "date": "2024-01-02"})
    assert e.description == ""
    assert e.amount == 3.0
    assert e.category is Category.FOOD
