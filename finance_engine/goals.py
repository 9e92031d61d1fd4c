from datetime import date
from typing import Iterable, Optional, Sequence, Tuple

from finance_engine.aggregate import reportable, sum_amounts
from finance_engine.dates import unit_range
from finance_engine.delta import delta
from finance_engine.domain import (
    BudgetGoal,
    DateRange,
    Direction,
    GoalProgress,
    Number,
    Transaction,
    TransactionType,
)
from finance_engine.scope import by_category, by_type, in_range, iter_transactions


def _ratio(value: Number, target: Number) -> Number:
    # targets are validated > 0 on the write path; a bad one reads as 0%
    if not target or target < 0:
        return 0
    return min(1, float(value) / float(target))


def goal_range(goal: BudgetGoal, today: Optional[date] = None) -> DateRange:
    return unit_range(goal.period, today or date.today())


def evaluate_goal(
    goal: BudgetGoal,
    trans: Iterable[Transaction],
    date_range: DateRange,
    perspective_account_id: Optional[str] = None,
) -> GoalProgress:
    """Progress of a spending limit (goal has a category) or a savings goal."""
    within = tuple(iter_transactions(reportable(trans, perspective_account_id), in_range(date_range)))

    category = (goal.category or "").strip()
    if category:
        spent = sum_amounts(iter_transactions(
            within, by_type(TransactionType.EXPENSE), by_category(category, TransactionType.EXPENSE)
        ))
        return GoalProgress(
            label=f"{category} spend",
            value=spent,
            percentage=_ratio(spent, goal.target),
            direction=Direction.LIMIT,
        )

    saved = max(0, sum((delta(t, perspective_account_id) for t in within), 0))
    return GoalProgress(
        label="Net saved",
        value=saved,
        percentage=_ratio(saved, goal.target),
        direction=Direction.SAVE,
    )


def evaluate_goals(
    goals: Sequence[BudgetGoal],
    trans: Iterable[Transaction],
    today: Optional[date] = None,
    perspective_account_id: Optional[str] = None,
) -> Tuple[Tuple[BudgetGoal, GoalProgress], ...]:
    """Each goal evaluated over its own current week or month."""
    trans = tuple(trans)
    return tuple(
        (g, evaluate_goal(g, trans, goal_range(g, today), perspective_account_id))
        for g in goals
    )
