from typing import Dict, Iterable, Optional

from finance_engine import config
from finance_engine.aggregate import reportable, sum_amounts
from finance_engine.delta import resolve_category_label
from finance_engine.domain import (
    Breakdown,
    CategorySlice,
    DateRange,
    Number,
    Transaction,
    TransactionType,
    whole_percent,
)
from finance_engine.scope import by_category, by_type, in_range, iter_transactions


def percent(value: Number, total: Number) -> int:
    """Whole percentage of ``value`` in ``total``, halves rounded up."""
    if not total:
        return 0
    return whole_percent(float(value) / float(total))


def category_totals(
    trans: Iterable[Transaction],
    t_type: TransactionType,
    date_range: Optional[DateRange] = None,
    perspective_account_id: Optional[str] = None,
) -> Dict[str, Number]:
    """Amount per category label, in first-seen order."""
    preds = [by_type(t_type)]
    if date_range is not None:
        preds.append(in_range(date_range))
    totals: Dict[str, Number] = {}
    for t in iter_transactions(reportable(trans, perspective_account_id), *preds):
        label = resolve_category_label(t, t_type)
        totals[label] = totals.get(label, 0) + t.amount
    return totals


def breakdown(
    trans: Iterable[Transaction],
    t_type: TransactionType,
    top_n: int = config.DEFAULT_TOP_N,
    date_range: Optional[DateRange] = None,
    perspective_account_id: Optional[str] = None,
) -> Breakdown:
    """Per-category totals and percentages for one transaction type.

    ``rows`` lists every category, largest first. ``slices`` keeps the
    ``top_n`` largest and folds the rest into a single "Other" slice whose
    percentage never shows as 0 while it holds money.
    """
    totals = category_totals(trans, t_type, date_range, perspective_account_id)
    total = sum(totals.values(), 0)
    ordered = sorted(totals.items(), key=lambda item: item[1], reverse=True)

    rows = tuple(CategorySlice(label, value, percent(value, total)) for label, value in ordered)
    top_n = max(0, top_n)
    slices = list(rows[:top_n])
    remainder = sum((row.value for row in rows[top_n:]), 0)
    if remainder > 0:
        slices.append(CategorySlice(
            config.OTHER_LABEL, remainder, max(1, percent(remainder, total)), is_other=True
        ))
    return Breakdown(slices=tuple(slices), rows=rows, total=total)


def category_total(
    trans: Iterable[Transaction],
    t_type: TransactionType,
    category: str,
    date_range: Optional[DateRange] = None,
    perspective_account_id: Optional[str] = None,
) -> Number:
    preds = [by_type(t_type), by_category(category, t_type)]
    if date_range is not None:
        preds.append(in_range(date_range))
    return sum_amounts(iter_transactions(reportable(trans, perspective_account_id), *preds))


def daily_average(total: Number, date_range: DateRange) -> Number:
    return total / max(date_range.days, 1)
