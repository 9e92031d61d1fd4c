from datetime import date
from typing import Any, Dict, Optional, Tuple

from finance_engine import config
from finance_engine.aggregate import (
    account_balance,
    daily_series,
    range_total,
    summarize,
    total_balance,
    weekly_summaries,
)
from finance_engine.breakdown import breakdown, category_total, daily_average
from finance_engine.delta import fallback_label
from finance_engine.domain import Period, PeriodUnit, Snapshot, Transaction, TransactionType
from finance_engine.goals import evaluate_goals
from finance_engine.periods import build_periods, period_index, resolve_period, weeks_in_range
from finance_engine.scope import scope_by_account, selectable_accounts, visible_account_ids
from finance_engine.trend import compare_to_previous, compare_to_trailing, direction_for_type


class ReportService:
    """Facade that runs the report pipeline over one snapshot.

    The snapshot is taken once by the caller; build a new service after the
    store changes instead of patching old results.
    """

    def __init__(
        self,
        snapshot: Snapshot,
        today: Optional[date] = None,
        period_count: int = config.DEFAULT_PERIOD_COUNT,
    ):
        self.snapshot = snapshot
        self.today = today or date.today()
        self.period_count = period_count

    def periods(self, unit: PeriodUnit = PeriodUnit.MONTH) -> Tuple[Period, ...]:
        return build_periods(self.period_count, unit, self.today)

    def scoped(self, account_id: Optional[str] = None) -> Tuple[Transaction, ...]:
        """Transactions for one account, or for every account shown in "all accounts"."""
        allowed = None if account_id else visible_account_ids(self.snapshot.accounts, self.snapshot.currency)
        return scope_by_account(self.snapshot.transactions, account_id, allowed)

    def period_report(
        self,
        period_key: Optional[str] = None,
        account_id: Optional[str] = None,
        unit: PeriodUnit = PeriodUnit.MONTH,
        top_n: int = config.DEFAULT_TOP_N,
    ) -> Dict[str, Any]:
        periods = self.periods(unit)
        period = resolve_period(periods, period_key)
        r = period.range()
        trans = self.scoped(account_id)

        index = period_index(periods, period.key)
        expense_total = range_total(trans, TransactionType.EXPENSE, perspective_account_id=account_id)
        previous = expense_total(periods[index - 1].start, periods[index - 1].end) if index > 0 else 0
        summary = summarize(trans, r, account_id)

        return {
            "period": period,
            "account_id": account_id,
            "summary": summary,
            "income": breakdown(trans, TransactionType.INCOME, top_n, r, account_id),
            "expense": breakdown(trans, TransactionType.EXPENSE, top_n, r, account_id),
            "daily_spending": daily_series(trans, r, TransactionType.EXPENSE, account_id),
            "vs_previous": compare_to_previous(summary.expense, previous, direction_for_type(TransactionType.EXPENSE)),
        }

    def category_report(
        self,
        t_type: TransactionType = TransactionType.EXPENSE,
        category: Optional[str] = None,
        period_key: Optional[str] = None,
        account_id: Optional[str] = None,
        window_size: int = config.TRAILING_WINDOW,
    ) -> Dict[str, Any]:
        t_type = TransactionType(t_type)
        periods = self.periods(PeriodUnit.MONTH)
        period = resolve_period(periods, period_key)
        r = period.range()
        trans = self.scoped(account_id)

        options = breakdown(trans, t_type, date_range=r, perspective_account_id=account_id).rows
        labels = [row.label for row in options]
        if category is None or (labels and category not in labels):
            category = labels[0] if labels else fallback_label(t_type)

        total = category_total(trans, t_type, category, r, account_id)
        total_fn = range_total(trans, t_type, category, account_id)
        weekly = tuple((week, total_fn(week.start, week.end)) for week in weeks_in_range(r))

        return {
            "period": period,
            "category": category,
            "options": options,
            "total": total,
            "daily_average": daily_average(total, r),
            "trend": compare_to_trailing(
                periods, period_index(periods, period.key), total_fn, direction_for_type(t_type), window_size
            ),
            "weekly": weekly,
        }

    def weekly_report(self, period_key: Optional[str] = None, account_id: Optional[str] = None) -> Dict[str, Any]:
        period = resolve_period(self.periods(PeriodUnit.MONTH), period_key)
        weeks = weekly_summaries(self.scoped(account_id), period.range(), account_id)
        return {
            "period": period,
            "weeks": weeks,
            "net": sum((w.net for w in weeks), 0),
        }

    def goal_report(self, account_id: Optional[str] = None):
        return evaluate_goals(self.snapshot.goals, self.scoped(account_id), self.today, account_id)

    def balances(self) -> Dict[str, Any]:
        trans = self.snapshot.transactions
        return {
            "accounts": {
                a.id: account_balance(a, trans) for a in selectable_accounts(self.snapshot.accounts)
            },
            "total": total_balance(self.snapshot.accounts, trans, self.snapshot.currency),
        }
