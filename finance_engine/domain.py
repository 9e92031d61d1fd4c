import math
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple, Union

Number = Union[int, float, Decimal]
DayLike = Union[date, str, None]


def as_amount(value) -> Number:
    """Plain int or float for a money value; Decimal and numeric strings are converted.

    Raises ValueError or TypeError when the value is not a finite number.
    """
    if isinstance(value, bool):
        raise TypeError(f"amount must be a number, got {value!r}")
    if isinstance(value, (int, float)):
        result = value
    else:
        result = float(value)
    if not math.isfinite(result):
        raise ValueError(f"amount must be finite, got {value!r}")
    return result


def whole_percent(ratio: Number) -> int:
    """``ratio`` as a whole percentage, halves rounded up."""
    return int(math.floor(float(ratio) * 100 + 0.5))


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"


class AccountType(str, Enum):
    CASH = "cash"
    BANK = "bank"
    CARD = "card"
    INVESTMENT = "investment"


class PeriodUnit(str, Enum):
    WEEK = "week"
    MONTH = "month"


class Direction(str, Enum):
    """Which way a tracked total should move: stay under a limit or grow."""

    LIMIT = "limit"
    SAVE = "save"


@dataclass(frozen=True)
class Transaction:
    id: str
    amount: Number                      # always a positive magnitude
    type: TransactionType
    category: str = ""
    date: DayLike = None                # calendar day, "YYYY-MM-DD" accepted
    account_id: Optional[str] = None
    to_account_id: Optional[str] = None  # transfers only
    note: str = ""
    participants: Tuple[str, ...] = ()
    location: Optional[str] = None
    photos: Tuple[str, ...] = ()
    exclude_from_reports: bool = False

    def __post_init__(self):
        object.__setattr__(self, "amount", as_amount(self.amount))


@dataclass(frozen=True)
class Account:
    id: str
    name: str
    type: AccountType = AccountType.BANK
    currency: str = ""
    initial_balance: Number = 0
    exclude_from_total: bool = False
    is_archived: bool = False

    def __post_init__(self):
        object.__setattr__(self, "initial_balance", as_amount(self.initial_balance))


@dataclass(frozen=True)
class BudgetGoal:
    id: str
    name: str
    target: Optional[Number]
    period: PeriodUnit = PeriodUnit.MONTH
    category: Optional[str] = None  # None tracks net savings

    def __post_init__(self):
        # a missing target stays None and reads as 0%
        if self.target is not None:
            object.__setattr__(self, "target", as_amount(self.target))


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date

    def contains(self, day: Optional[date]) -> bool:
        return day is not None and self.start <= day <= self.end

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1


@dataclass(frozen=True)
class Period:
    key: str
    label: str
    unit: PeriodUnit
    start: date
    end: date

    def range(self) -> DateRange:
        return DateRange(self.start, self.end)


@dataclass(frozen=True)
class Snapshot:
    transactions: Tuple[Transaction, ...] = ()
    accounts: Tuple[Account, ...] = ()
    goals: Tuple[BudgetGoal, ...] = ()
    currency: str = "USD"


# --- summary values handed to presentation


@dataclass(frozen=True)
class PeriodSummary:
    income: Number = 0
    expense: Number = 0
    net: Number = 0
    opening_balance: Number = 0
    closing_balance: Number = 0


@dataclass(frozen=True)
class CategorySlice:
    label: str
    value: Number
    percentage: int
    is_other: bool = False


@dataclass(frozen=True)
class Breakdown:
    slices: Tuple[CategorySlice, ...] = ()
    rows: Tuple[CategorySlice, ...] = ()
    total: Number = 0


@dataclass(frozen=True)
class VisualState:
    prefix: str    # "+", "−" or ""
    variant: str   # "income", "expense" or "neutral"


@dataclass(frozen=True)
class TrendComparison:
    current: Number
    average: Number
    delta: Number
    direction: Direction
    favorable: bool


@dataclass(frozen=True)
class GoalProgress:
    label: str
    value: Number
    percentage: Number
    direction: Direction

    @property
    def completed(self) -> bool:
        return self.percentage >= 1

    @property
    def percent_label(self) -> str:
        shown = whole_percent(self.percentage)
        return f"{min(100, shown) if self.completed else min(99, shown)}%"


@dataclass(frozen=True)
class SeriesPoint:
    day: date
    label: str
    value: Number


@dataclass(frozen=True)
class WeeklySummary:
    range: DateRange
    label: str
    income: Number = 0
    expense: Number = 0
    net: Number = 0
    transaction_ids: Tuple[str, ...] = field(default=())
