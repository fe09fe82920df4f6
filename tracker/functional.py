import math
from abc import ABC, abstractmethod
from datetime import date
from typing import Callable, Generic, Iterable, Optional, TypeVar, Union

from tracker.domain import Category, Expense
from tracker.transforms import new_expense_id

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E')


class Maybe(Generic[T], ABC):
    """Result of a lookup by id: ``Some(expense)`` or ``Nothing()``."""

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_some(self) -> bool:
        pass

    def is_none(self) -> bool:
        return not self.is_some()


class Some(Maybe[T]):

    def __init__(self, value: T):
        self._value = value

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_some(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"Some({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Some) and self._value == other._value


class Nothing(Maybe[T]):

    def get_or_else(self, default: T) -> T:
        return default

    def is_some(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "Nothing()"

    def __eq__(self, other) -> bool:
        return isinstance(other, Nothing)


class Either(Generic[E, T], ABC):
    """Outcome of validating one form field: ``Right(value)`` or ``Left(error)``.

    ``bind`` chains field checks and stops at the first ``Left``.
    """

    @abstractmethod
    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_right(self) -> bool:
        pass

    @abstractmethod
    def get_error(self) -> E:
        pass

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return self.bind(lambda value: Right(f(value)))

    def is_left(self) -> bool:
        return not self.is_right()


class Right(Either[E, T]):

    def __init__(self, value: T):
        self._value = value

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return f(self._value)

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_right(self) -> bool:
        return True

    def get_error(self) -> E:
        raise ValueError("Cannot get error from Right")

    def __repr__(self) -> str:
        return f"Right({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Right) and self._value == other._value


class Left(Either[E, T]):

    def __init__(self, error: E):
        self._error = error

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return self

    def get_or_else(self, default: T) -> T:
        return default

    def is_right(self) -> bool:
        return False

    def get_error(self) -> E:
        return self._error

    def __repr__(self) -> str:
        return f"Left({self._error!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Left) and self._error == other._error


def find_expense(expenses: Iterable[Expense], expense_id: int) -> Maybe[Expense]:
    for e in expenses:
        if e.id == expense_id:
            return Some(e)
    return Nothing()


def _error(code: str, field: str, message: str) -> dict:
    return {"error": code, "field": field, "message": message}


def parse_amount(raw: Union[str, float, int, None]) -> Either[dict, float]:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return Left(_error("invalid_amount", "amount", f"Amount {raw!r} is not a number"))
    if not math.isfinite(value) or value < 0:
        return Left(_error("invalid_amount", "amount", f"Amount must be a non-negative number, got {raw!r}"))
    return Right(value)


def parse_category(raw: Union[Category, str, None]) -> Either[dict, Category]:
    try:
        return Right(Category(raw))
    except ValueError:
        return Left(_error("invalid_category", "category", f"Unknown category {raw!r}"))


def parse_date(raw: Union[date, str, None]) -> Either[dict, date]:
    if isinstance(raw, date):
        return Right(raw)
    try:
        return Right(date.fromisoformat(raw))
    except (TypeError, ValueError):
        return Left(_error("invalid_date", "date", f"Date {raw!r} is not in YYYY-MM-DD format"))


def parse_expense_input(
    amount: Union[str, float, int, None],
    category: Union[Category, str, None],
    when: Union[date, str, None],
    description: Optional[str] = "",
    expense_id: Optional[int] = None,
) -> Either[dict, Expense]:
    """Turn raw form values into an Expense, or a Left describing the first bad field."""
    return parse_amount(amount).bind(
        lambda value: parse_category(category).bind(
            lambda cat: parse_date(when).map(
                lambda day: Expense(
                    id=new_expense_id() if expense_id is None else expense_id,
                    amount=value,
                    category=cat,
                    date=day,
                    description=description or "",
                )
            )
        )
    )
