"""Signed balance effect of a transaction from one account's point of view.

``delta`` is the only place that decides whether a transaction raises or
lowers the balance being viewed. Balances, net income and savings goals all
go through it.
"""

from typing import Optional

from finance_engine import config
from finance_engine.domain import Number, Transaction, TransactionType, VisualState

_FALLBACK_LABELS = {
    TransactionType.INCOME.value: "Uncategorized Income",
    TransactionType.EXPENSE.value: "Uncategorized Expense",
}


def delta(t: Transaction, perspective_account_id: Optional[str] = None) -> Number:
    if t.type == TransactionType.INCOME:
        return t.amount
    if t.type == TransactionType.EXPENSE:
        return -t.amount
    if t.type == TransactionType.TRANSFER and perspective_account_id:
        if t.account_id == perspective_account_id:
            return -t.amount
        if t.to_account_id == perspective_account_id:
            return t.amount
    return 0


def visual_state(t: Transaction, perspective_account_id: Optional[str] = None) -> VisualState:
    d = delta(t, perspective_account_id)
    if d > 0:
        return VisualState("+", "income")
    if d < 0:
        return VisualState("−", "expense")
    return VisualState("", "neutral")


def resolve_category_label(t: Transaction, t_type: Optional[TransactionType] = None) -> str:
    """The label a transaction is grouped under in every report."""
    if t.type == TransactionType.TRANSFER:
        return config.TRANSFER_LABEL
    label = (t.category or "").strip()
    if label:
        return label
    return fallback_label(t_type if t_type is not None else t.type)


def fallback_label(t_type: TransactionType) -> str:
    return _FALLBACK_LABELS.get(getattr(t_type, "value", t_type), "Uncategorized")
