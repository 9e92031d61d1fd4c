"""Trailing averages and period-over-period comparisons.

Whether a change is good depends on what is tracked: for spending a lower
total is favorable, for income and savings a higher one is.
"""

from typing import Callable, Sequence, Tuple

from finance_engine import config
from finance_engine.domain import Direction, Number, Period, TrendComparison, TransactionType

RangeTotal = Callable[..., Number]


def direction_for_type(t_type: TransactionType) -> Direction:
    if TransactionType(t_type) is TransactionType.EXPENSE:
        return Direction.LIMIT
    return Direction.SAVE


def is_favorable(direction: Direction, change: Number) -> bool:
    if Direction(direction) is Direction.LIMIT:
        return change <= 0
    return change >= 0


def trailing_periods(
    periods: Sequence[Period], period_index: int, window_size: int = config.TRAILING_WINDOW
) -> Tuple[Period, ...]:
    if window_size <= 0 or period_index <= 0:
        return ()
    return tuple(periods[max(0, period_index - window_size):period_index])


def trailing_average(
    periods: Sequence[Period],
    period_index: int,
    range_total_fn: RangeTotal,
    window_size: int = config.TRAILING_WINDOW,
) -> Number:
    """Mean total of up to ``window_size`` periods right before ``period_index``."""
    window = trailing_periods(periods, period_index, window_size)
    if not window:
        return 0
    totals = [range_total_fn(p.start, p.end) for p in window]
    return sum(totals, 0) / len(totals)


def compare_to_trailing(
    periods: Sequence[Period],
    period_index: int,
    range_total_fn: RangeTotal,
    direction: Direction,
    window_size: int = config.TRAILING_WINDOW,
) -> TrendComparison:
    current = periods[period_index]
    current_total = range_total_fn(current.start, current.end)
    average = trailing_average(periods, period_index, range_total_fn, window_size)
    change = current_total - average
    return TrendComparison(
        current=current_total,
        average=average,
        delta=change,
        direction=Direction(direction),
        favorable=is_favorable(direction, change),
    )


def compare_to_previous(current_total: Number, previous_total: Number, direction: Direction) -> TrendComparison:
    change = current_total - previous_total
    return TrendComparison(
        current=current_total,
        average=previous_total,
        delta=change,
        direction=Direction(direction),
        favorable=is_favorable(direction, change),
    )


def aligned_series(current: Sequence[Number], previous: Sequence[Number]) -> Tuple[Number, ...]:
    """``previous`` stretched or cut to ``len(current)``; short tails repeat the last value."""
    if not current:
        return ()
    last = previous[-1] if previous else 0
    return tuple(previous[i] if i < len(previous) else last for i in range(len(current)))
