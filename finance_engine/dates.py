import calendar
import logging
from datetime import date, datetime, timedelta

from finance_engine import config
from finance_engine.domain import DateRange, DayLike, PeriodUnit
from finance_engine.functional import Maybe, Nothing, Some

logger = logging.getLogger(__name__)

_FALLBACK_FORMATS = ("%Y/%m/%d", "%Y.%m.%d", "%m/%d/%Y")


def parse_day(value: DayLike) -> Maybe[date]:
    """Return the calendar day of ``value``; time of day is dropped.

    Accepts ``date``/``datetime`` objects and ISO strings (with or without a
    time part). Anything else is Nothing rather than an error.
    """
    if value is None:
        return Nothing()
    if isinstance(value, datetime):
        return Some(value.date())
    if isinstance(value, date):
        return Some(value)
    if not isinstance(value, str) or not value.strip():
        return Nothing()

    text = value.strip()
    try:
        return Some(date.fromisoformat(text[:10]))
    except ValueError:
        pass
    for fmt in _FALLBACK_FORMATS:
        try:
            return Some(datetime.strptime(text, fmt).date())
        except ValueError:
            continue
    logger.debug("Unparseable date %r", value)
    return Nothing()


def start_of_week(d: date, week_start: int | None = None) -> date:
    first = config.WEEK_START if week_start is None else week_start
    return d - timedelta(days=(d.weekday() - first) % 7)


def end_of_week(d: date, week_start: int | None = None) -> date:
    return start_of_week(d, week_start) + timedelta(days=6)


def start_of_month(d: date) -> date:
    return d.replace(day=1)


def end_of_month(d: date) -> date:
    return d.replace(day=calendar.monthrange(d.year, d.month)[1])


def add_months(d: date, n: int) -> date:
    """Add n months to d, clamping the day to the target month's length."""
    month = d.month - 1 + n
    year = d.year + month // 12
    month = month % 12 + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return d.replace(year=year, month=month, day=day)


def unit_range(unit: PeriodUnit, d: date) -> DateRange:
    unit = PeriodUnit(unit)
    if unit is PeriodUnit.WEEK:
        return DateRange(start_of_week(d), end_of_week(d))
    return DateRange(start_of_month(d), end_of_month(d))


def shift(unit: PeriodUnit, d: date, n: int) -> date:
    """Move ``d`` by ``n`` weeks or months."""
    if PeriodUnit(unit) is PeriodUnit.WEEK:
        return d + timedelta(weeks=n)
    return add_months(d, n)


def iter_days(r: DateRange):
    for offset in range(r.days):
        yield r.start + timedelta(days=offset)


def month_key(d: date) -> str:
    return d.strftime("%Y-%m")


def week_key(start: date) -> str:
    if config.WEEK_START == 0:
        iso_year, iso_week, _ = start.isocalendar()
        return f"{iso_year}-W{iso_week:02d}"
    return start.isoformat()


def range_label(r: DateRange) -> str:
    """'Mar 4 – Mar 10, 2024' style label."""
    return f"{r.start.strftime('%b')} {r.start.day} – {r.end.strftime('%b')} {r.end.day}, {r.end.year}"
