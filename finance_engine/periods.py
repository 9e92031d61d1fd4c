"""Selectable reporting periods (weeks or months) and their date ranges."""

from datetime import date, timedelta
from typing import Optional, Sequence, Tuple

from finance_engine import config
from finance_engine.dates import month_key, range_label, shift, unit_range, week_key
from finance_engine.domain import DateRange, Period, PeriodUnit
from finance_engine.functional import Maybe, first


def make_period(unit: PeriodUnit, day: date) -> Period:
    """The week or month containing ``day``."""
    unit = PeriodUnit(unit)
    r = unit_range(unit, day)
    if unit is PeriodUnit.MONTH:
        return Period(month_key(r.start), r.start.strftime("%b %Y"), unit, r.start, r.end)
    return Period(week_key(r.start), range_label(r), unit, r.start, r.end)


def build_periods(
    count: int = config.DEFAULT_PERIOD_COUNT,
    unit: PeriodUnit = PeriodUnit.MONTH,
    today: Optional[date] = None,
) -> Tuple[Period, ...]:
    """``count`` consecutive periods ending with the current one, oldest first."""
    unit = PeriodUnit(unit)
    anchor = unit_range(unit, today or date.today()).start
    return tuple(
        make_period(unit, shift(unit, anchor, -(count - 1 - index)))
        for index in range(max(0, count))
    )


def period_range(unit: PeriodUnit, day: Optional[date] = None) -> DateRange:
    return unit_range(unit, day or date.today())


def find_period(periods: Sequence[Period], key: Optional[str]) -> Maybe[Period]:
    return first(periods, lambda p: p.key == key)


def resolve_period(periods: Sequence[Period], key: Optional[str]) -> Optional[Period]:
    """The period for ``key``, falling back to the newest one."""
    fallback = periods[-1] if periods else None
    return find_period(periods, key).get_or_else(fallback)


def period_index(periods: Sequence[Period], key: Optional[str]) -> int:
    for index, p in enumerate(periods):
        if p.key == key:
            return index
    return -1


def weeks_in_range(r: DateRange) -> Tuple[DateRange, ...]:
    """Weeks overlapping ``r``, clipped to its bounds."""
    weeks = []
    cursor = unit_range(PeriodUnit.WEEK, r.start).start
    while cursor <= r.end:
        week_end = cursor + timedelta(days=6)
        weeks.append(DateRange(max(cursor, r.start), min(week_end, r.end)))
        cursor += timedelta(weeks=1)
    return tuple(weeks)
