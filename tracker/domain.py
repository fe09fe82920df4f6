from dataclasses import dataclass
from datetime import date
from enum import Enum


class Category(str, Enum):
    FOOD = "Food"
    TRANSPORT = "Transport"
    SHOPPING = "Shopping"
    BILLS = "Bills"
    ENTERTAINMENT = "Entertainment"
    HEALTHCARE = "Healthcare"
    EDUCATION = "Education"
    OTHER = "Other"


@dataclass(frozen=True)
class Expense:
    id: int              # creation timestamp, ms
    amount: float        # non-negative
    category: Category
    date: date           # calendar date, no time
    description: str = ""
