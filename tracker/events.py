import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, NamedTuple, Optional, Tuple, Union

from tracker.domain import Expense
from tracker.functional import find_expense
from tracker.transforms import add_expense, delete_expense, edit_expense

__all__ = [
    'EXPENSE_ADDED', 'EXPENSE_UPDATED', 'EXPENSE_DELETED',
    'Event', 'EventBus', 'AddExpense', 'EditExpense', 'DeleteExpense',
    'Intent', 'ExpenseTracker',
]

logger = logging.getLogger(__name__)

EXPENSE_ADDED = "EXPENSE_ADDED"
EXPENSE_UPDATED = "EXPENSE_UPDATED"
EXPENSE_DELETED = "EXPENSE_DELETED"


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


Handler = Callable[[Event, dict], dict]


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Handler]] = {}

    def subscribe(self, name: str, handler: Handler) -> None:
        self._subscribers.setdefault(name, []).append(handler)

    def publish(self, name: str, payload: dict) -> List[dict]:
        handlers = self._subscribers.get(name)
        if not handlers:
            return []

        event = Event(name=name, ts=datetime.now().isoformat(), payload=payload)
        return [handler(event, payload) for handler in handlers]

    def unsubscribe(self, name: str, handler: Handler) -> None:
        if handler in self._subscribers.get(name, []):
            self._subscribers[name].remove(handler)


@dataclass(frozen=True)
class AddExpense:
    expense: Expense


@dataclass(frozen=True)
class EditExpense:
    expense_id: int
    expense: Expense


@dataclass(frozen=True)
class DeleteExpense:
    expense_id: int


Intent = Union[AddExpense, EditExpense, DeleteExpense]


class ExpenseTracker:
    """Owns the expense collection and applies user intents to it.

    Every applied intent saves the whole collection through ``store`` and is
    then published on ``bus`` so display code can refresh. Edits and deletes
    aimed at an unknown id change nothing and publish nothing.
    """

    def __init__(self, store, bus: Optional[EventBus] = None):
        self.store = store
        self.bus = bus or EventBus()
        self._expenses: Tuple[Expense, ...] = tuple(store.load())

    @property
    def expenses(self) -> Tuple[Expense, ...]:
        return self._expenses

    def dispatch(self, intent: Intent) -> List[dict]:
        if isinstance(intent, AddExpense):
            updated = add_expense(self._expenses, intent.expense)
            return self._commit(updated, EXPENSE_ADDED, intent.expense.id,
                                "Expense added successfully!")

        if isinstance(intent, EditExpense):
            if find_expense(self._expenses, intent.expense_id).is_none():
                logger.debug(f"Edit ignored, no expense with id {intent.expense_id}")
                return []
            updated = edit_expense(self._expenses, intent.expense_id, intent.expense)
            return self._commit(updated, EXPENSE_UPDATED, intent.expense_id,
                                "Expense updated successfully!")

        if isinstance(intent, DeleteExpense):
            updated = delete_expense(self._expenses, intent.expense_id)
            if len(updated) == len(self._expenses):
                logger.debug(f"Delete ignored, no expense with id {intent.expense_id}")
                return []
            return self._commit(updated, EXPENSE_DELETED, intent.expense_id,
                                "Expense deleted successfully!")

        raise TypeError(f"Unsupported intent: {intent!r}")

    def _commit(self, updated: Tuple[Expense, ...], event_name: str,
                expense_id: int, message: str) -> List[dict]:
        # a failed save must leave the collection as it was
        self.store.save(updated)
        self._expenses = updated
        logger.info(f"{event_name} id={expense_id} ({len(updated)} expenses)")
        return self.bus.publish(event_name, {"expense_id": expense_id, "message": message})
