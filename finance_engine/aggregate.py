"""Period totals, balances and chart series over a transaction snapshot.

Every function here drops transactions flagged ``exclude_from_reports`` and
scopes to the perspective account itself, so callers may pass the raw
snapshot. Transactions without a usable date never land in any range.
"""

from collections import defaultdict
from datetime import date
from functools import reduce
from typing import Callable, Collection, Iterable, Optional, Sequence, Tuple

from finance_engine.dates import iter_days, parse_day
from finance_engine.delta import delta
from finance_engine.domain import (
    Account,
    DateRange,
    Number,
    Period,
    PeriodSummary,
    SeriesPoint,
    Transaction,
    TransactionType,
    WeeklySummary,
)
from finance_engine.functional import pipe
from finance_engine.periods import weeks_in_range
from finance_engine.scope import (
    by_category,
    by_type,
    exclude_reported,
    in_range,
    iter_transactions,
    scope_by_account,
    visible_account_ids,
)

RangeTotal = Callable[[date, date], Number]


def reportable(
    trans: Iterable[Transaction],
    perspective_account_id: Optional[str] = None,
    allowed_account_ids: Optional[Collection[str]] = None,
) -> Tuple[Transaction, ...]:
    return pipe(
        trans,
        lambda ts: scope_by_account(ts, perspective_account_id, allowed_account_ids),
        exclude_reported,
    )


def summarize(
    trans: Iterable[Transaction],
    date_range: DateRange,
    perspective_account_id: Optional[str] = None,
    allowed_account_ids: Optional[Collection[str]] = None,
) -> PeriodSummary:
    """Income, expense, net and opening/closing balance for one range.

    Transactions before ``date_range.start`` only move the opening balance;
    those on or between the bounds feed the period totals.
    """
    income = expense = net = opening = 0
    for t in reportable(trans, perspective_account_id, allowed_account_ids):
        day = parse_day(t.date).get_or_else(None)
        if day is None or day > date_range.end:
            continue
        d = delta(t, perspective_account_id)
        if day < date_range.start:
            opening += d
            continue
        if t.type == TransactionType.INCOME:
            income += t.amount
        elif t.type == TransactionType.EXPENSE:
            expense += t.amount
        net += d
    return PeriodSummary(
        income=income,
        expense=expense,
        net=net,
        opening_balance=opening,
        closing_balance=opening + net,
    )


def sum_amounts(trans: Iterable[Transaction]) -> Number:
    return reduce(lambda acc, t: acc + t.amount, trans, 0)


def range_total(
    trans: Iterable[Transaction],
    t_type: TransactionType,
    category: Optional[str] = None,
    perspective_account_id: Optional[str] = None,
) -> RangeTotal:
    """A ``(start, end) -> total`` function over one type, optionally one category."""
    preds = [by_type(t_type)]
    if category is not None:
        preds.append(by_category(category, t_type))
    pool = tuple(iter_transactions(reportable(trans, perspective_account_id), *preds))

    def _total(start: date, end: date) -> Number:
        return sum_amounts(iter_transactions(pool, in_range(DateRange(start, end))))

    return _total


def daily_series(
    trans: Iterable[Transaction],
    date_range: DateRange,
    t_type: TransactionType = TransactionType.EXPENSE,
    perspective_account_id: Optional[str] = None,
) -> Tuple[SeriesPoint, ...]:
    """One point per calendar day of the range, zero-filled."""
    per_day = defaultdict(int)
    for t in iter_transactions(reportable(trans, perspective_account_id), by_type(t_type), in_range(date_range)):
        per_day[parse_day(t.date).get_or_else(None)] += t.amount
    return tuple(
        SeriesPoint(day=day, label=str(day.day), value=per_day.get(day, 0))
        for day in iter_days(date_range)
    )


def weekly_summaries(
    trans: Iterable[Transaction],
    date_range: DateRange,
    perspective_account_id: Optional[str] = None,
    allowed_account_ids: Optional[Collection[str]] = None,
) -> Tuple[WeeklySummary, ...]:
    """The range split into weeks, each with its income, expense and net."""
    pool = tuple(iter_transactions(
        reportable(trans, perspective_account_id, allowed_account_ids), in_range(date_range)
    ))
    weeks = []
    for week in weeks_in_range(date_range):
        inside = tuple(iter_transactions(pool, in_range(week)))
        income = sum_amounts(t for t in inside if t.type == TransactionType.INCOME)
        expense = sum_amounts(t for t in inside if t.type == TransactionType.EXPENSE)
        weeks.append(WeeklySummary(
            range=week,
            label=f"{week.start.day}–{week.end.day}",
            income=income,
            expense=expense,
            net=sum((delta(t, perspective_account_id) for t in inside), 0),
            transaction_ids=tuple(t.id for t in inside),
        ))
    return tuple(weeks)


def period_totals(
    trans: Iterable[Transaction],
    periods: Sequence[Period],
    t_type: TransactionType = TransactionType.EXPENSE,
    perspective_account_id: Optional[str] = None,
) -> Tuple[Tuple[Period, Number], ...]:
    total = range_total(trans, t_type, perspective_account_id=perspective_account_id)
    return tuple((p, total(p.start, p.end)) for p in periods)


def account_balance(account: Account, trans: Iterable[Transaction]) -> Number:
    """Initial balance plus every reportable delta touching the account."""
    return reduce(
        lambda acc, t: acc + delta(t, account.id),
        reportable(trans, account.id),
        account.initial_balance,
    )


def total_balance(accounts: Sequence[Account], trans: Iterable[Transaction], currency: str) -> Number:
    """Sum of balances of the accounts that count toward "all accounts"."""
    trans = tuple(trans)
    visible = set(visible_account_ids(accounts, currency))
    return sum((account_balance(a, trans) for a in accounts if a.id in visible), 0)
