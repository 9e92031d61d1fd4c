import json
import logging
from pathlib import Path
from typing import Any, Dict, Tuple, Union

from finance_engine import config
from finance_engine.dates import parse_day
from finance_engine.domain import (
    Account,
    AccountType,
    BudgetGoal,
    PeriodUnit,
    Snapshot,
    Transaction,
    TransactionType,
)

logger = logging.getLogger(__name__)


class SnapshotError(ValueError):
    """A snapshot record could not be turned into a domain object."""


def _transaction(raw: Dict[str, Any]) -> Transaction:
    t_type = TransactionType(raw["type"])
    category = raw.get("category") or ""
    if t_type is TransactionType.TRANSFER and not category:
        category = config.TRANSFER_LABEL
    return Transaction(
        id=str(raw["id"]),
        amount=raw["amount"],
        type=t_type,
        category=category,
        date=parse_day(raw.get("date")).get_or_else(raw.get("date")),
        account_id=raw.get("accountId"),
        to_account_id=raw.get("toAccountId"),
        note=raw.get("note", ""),
        participants=tuple(raw.get("participants") or ()),
        location=raw.get("location"),
        photos=tuple(raw.get("photos") or ()),
        exclude_from_reports=bool(raw.get("excludeFromReports", False)),
    )


def _account(raw: Dict[str, Any]) -> Account:
    return Account(
        id=str(raw["id"]),
        name=raw["name"],
        type=AccountType(raw.get("type", AccountType.BANK.value)),
        currency=raw.get("currency", ""),
        initial_balance=raw.get("initialBalance", 0),
        exclude_from_total=bool(raw.get("excludeFromTotal", False)),
        is_archived=bool(raw.get("isArchived", False)),
    )


def _goal(raw: Dict[str, Any]) -> BudgetGoal:
    return BudgetGoal(
        id=str(raw["id"]),
        name=raw["name"],
        target=raw["target"],
        period=PeriodUnit(raw.get("period", PeriodUnit.MONTH.value)),
        category=raw.get("category") or None,
    )


def _build(kind: str, builder, rows) -> Tuple:
    built = []
    for index, raw in enumerate(rows or ()):
        try:
            built.append(builder(raw))
        except (KeyError, TypeError, ValueError) as e:
            raise SnapshotError(f"bad {kind} record #{index}: {e}") from e
    return tuple(built)


def snapshot_from_dict(data: Dict[str, Any]) -> Snapshot:
    """Build a Snapshot from the store's camelCase JSON shape."""
    return Snapshot(
        transactions=_build("transaction", _transaction, data.get("transactions")),
        accounts=_build("account", _account, data.get("accounts")),
        goals=_build("goal", _goal, data.get("budgetGoals")),
        currency=data.get("currency") or config.BASE_CURRENCY,
    )


def load_snapshot(path: Union[str, Path] = config.SEED_PATH) -> Snapshot:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    snapshot = snapshot_from_dict(data)
    logger.info(
        "Loaded snapshot from %s: %d transactions, %d accounts, %d goals",
        path, len(snapshot.transactions), len(snapshot.accounts), len(snapshot.goals),
    )
    return snapshot
