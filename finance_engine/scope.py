from typing import Callable, Collection, Iterable, Iterator, Optional, Tuple

from finance_engine.dates import parse_day
from finance_engine.delta import resolve_category_label
from finance_engine.domain import Account, DateRange, Transaction, TransactionType

Predicate = Callable[[Transaction], bool]


def scope_by_account(
    trans: Iterable[Transaction],
    account_id: Optional[str] = None,
    allowed_account_ids: Optional[Collection[str]] = None,
) -> Tuple[Transaction, ...]:
    """Transactions relevant to one account, or to every allowed account.

    With ``account_id`` set, a transfer matches on either leg and anything
    else on its source account. Without it every transaction is kept unless
    a non-empty ``allowed_account_ids`` is given, in which case a transaction
    must touch at least one allowed account.
    """
    if account_id:
        return tuple(t for t in trans if _touches(t, account_id))
    if not allowed_account_ids:
        return tuple(trans)
    allowed = set(allowed_account_ids)
    return tuple(
        t for t in trans
        if t.account_id in allowed or (t.to_account_id is not None and t.to_account_id in allowed)
    )


def _touches(t: Transaction, account_id: str) -> bool:
    if t.type == TransactionType.TRANSFER:
        return t.account_id == account_id or t.to_account_id == account_id
    return t.account_id == account_id


def exclude_reported(trans: Iterable[Transaction]) -> Tuple[Transaction, ...]:
    return tuple(t for t in trans if not t.exclude_from_reports)


def visible_account_ids(accounts: Iterable[Account], currency: str) -> Tuple[str, ...]:
    """Accounts that count toward "all accounts" totals in ``currency``."""
    return tuple(
        a.id for a in accounts
        if not a.exclude_from_total and (a.currency or currency) == currency
    )


def selectable_accounts(accounts: Iterable[Account]) -> Tuple[Account, ...]:
    return tuple(a for a in accounts if not a.is_archived)


# --- predicate factories


def by_type(t_type: TransactionType) -> Predicate:
    wanted = TransactionType(t_type)

    def _filter(t: Transaction) -> bool:
        return t.type == wanted

    return _filter


def by_category(label: str, t_type: Optional[TransactionType] = None) -> Predicate:
    def _filter(t: Transaction) -> bool:
        return resolve_category_label(t, t_type) == label

    return _filter


def in_range(r: DateRange) -> Predicate:
    def _filter(t: Transaction) -> bool:
        return parse_day(t.date).map(r.contains).get_or_else(False)

    return _filter


def before(day) -> Predicate:
    def _filter(t: Transaction) -> bool:
        return parse_day(t.date).map(lambda d: d < day).get_or_else(False)

    return _filter


def iter_transactions(trans: Iterable[Transaction], *preds: Predicate) -> Iterator[Transaction]:
    for t in trans:
        if all(p(t) for p in preds):
            yield t
