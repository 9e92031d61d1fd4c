"""DataFrame views of engine results for chart and table layers."""

from typing import Iterable, Optional, Sequence, Tuple

import pandas as pd

from finance_engine.dates import parse_day
from finance_engine.delta import delta, resolve_category_label
from finance_engine.domain import Breakdown, Period, PeriodSummary, SeriesPoint, Transaction, WeeklySummary

TRANSACTION_COLUMNS = ["id", "date", "type", "category", "amount", "delta", "account_id", "to_account_id"]
SUMMARY_COLUMNS = ["key", "label", "start", "end", "income", "expense", "net", "opening_balance", "closing_balance"]
BREAKDOWN_COLUMNS = ["label", "value", "percentage", "is_other"]
SERIES_COLUMNS = ["day", "label", "value"]
WEEKLY_COLUMNS = ["start", "end", "label", "income", "expense", "net"]


def transactions_frame(trans: Iterable[Transaction], perspective_account_id: Optional[str] = None) -> pd.DataFrame:
    rows = [
        {
            "id": t.id,
            "date": parse_day(t.date).get_or_else(None),
            "type": getattr(t.type, "value", t.type),
            "category": resolve_category_label(t),
            "amount": t.amount,
            "delta": delta(t, perspective_account_id),
            "account_id": t.account_id,
            "to_account_id": t.to_account_id,
        }
        for t in trans
    ]
    df = pd.DataFrame(rows, columns=TRANSACTION_COLUMNS)
    df["date"] = pd.to_datetime(df["date"], errors="coerce")
    return df


def summary_frame(summaries: Sequence[Tuple[Period, PeriodSummary]]) -> pd.DataFrame:
    rows = [
        {
            "key": p.key,
            "label": p.label,
            "start": p.start,
            "end": p.end,
            "income": s.income,
            "expense": s.expense,
            "net": s.net,
            "opening_balance": s.opening_balance,
            "closing_balance": s.closing_balance,
        }
        for p, s in summaries
    ]
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def breakdown_frame(result: Breakdown, slices: bool = False) -> pd.DataFrame:
    """Rows of a breakdown; ``slices=True`` gives the chart slices with "Other"."""
    entries = result.slices if slices else result.rows
    rows = [
        {"label": e.label, "value": e.value, "percentage": e.percentage, "is_other": e.is_other}
        for e in entries
    ]
    return pd.DataFrame(rows, columns=BREAKDOWN_COLUMNS)


def series_frame(points: Iterable[SeriesPoint]) -> pd.DataFrame:
    df = pd.DataFrame(
        [{"day": p.day, "label": p.label, "value": p.value} for p in points],
        columns=SERIES_COLUMNS,
    )
    df["day"] = pd.to_datetime(df["day"])
    return df


def weekly_frame(weeks: Iterable[WeeklySummary]) -> pd.DataFrame:
    rows = [
        {
            "start": w.range.start,
            "end": w.range.end,
            "label": w.label,
            "income": w.income,
            "expense": w.expense,
            "net": w.net,
        }
        for w in weeks
    ]
    return pd.DataFrame(rows, columns=WEEKLY_COLUMNS)
