# backend/app/analytics/periods.py
"""
Symbolic time periods -> concrete, inclusive date ranges.

Every function takes the reference instant explicitly so that resolution is a
pure function of its inputs. Callers at the request boundary pass
``datetime.now(timezone.utc)``.
"""
from typing import Callable, Dict, Union, get_args
import datetime as dt

from app.analytics.errors import UnsupportedPeriodError
from app.schemas.metrics import CycleRanges, DateRange, TimePeriod

SUPPORTED_PERIODS = frozenset(get_args(TimePeriod))


# ---------- date helpers ----------
def month_floor(d: dt.date) -> dt.date:
    return d.replace(day=1)

def month_add(d: dt.date, months: int) -> dt.date:
    y = d.year + (d.month - 1 + months) // 12
    m = (d.month - 1 + months) % 12 + 1
    return dt.date(y, m, 1)

def month_end(d: dt.date) -> dt.date:
    return month_add(d, 1) - dt.timedelta(days=1)

def quarter_floor(d: dt.date) -> dt.date:
    return dt.date(d.year, 3 * ((d.month - 1) // 3) + 1, 1)

def _as_date(now: Union[dt.datetime, dt.date]) -> dt.date:
    return now.date() if isinstance(now, dt.datetime) else now


# ---------- period table ----------
def _last_full_months(months: int) -> Callable[[dt.date], DateRange]:
    def _resolve(today: dt.date) -> DateRange:
        start_of_this_month = month_floor(today)
        return DateRange(
            start=month_add(start_of_this_month, -months),
            end=start_of_this_month - dt.timedelta(days=1),
        )
    return _resolve

def _this_week(today: dt.date) -> DateRange:
    return DateRange(start=today - dt.timedelta(days=today.weekday()), end=today)

def _last_week(today: dt.date) -> DateRange:
    monday = today - dt.timedelta(days=today.weekday())
    return DateRange(start=monday - dt.timedelta(days=7), end=monday - dt.timedelta(days=1))

def _this_month(today: dt.date) -> DateRange:
    return DateRange(start=month_floor(today), end=today)

def _this_quarter(today: dt.date) -> DateRange:
    return DateRange(start=quarter_floor(today), end=today)

def _last_quarter(today: dt.date) -> DateRange:
    start_of_this_quarter = quarter_floor(today)
    return DateRange(
        start=month_add(start_of_this_quarter, -3),
        end=start_of_this_quarter - dt.timedelta(days=1),
    )

def _this_year(today: dt.date) -> DateRange:
    return DateRange(start=dt.date(today.year, 1, 1), end=today)

def _last_year(today: dt.date) -> DateRange:
    return DateRange(start=dt.date(today.year - 1, 1, 1), end=dt.date(today.year - 1, 12, 31))

_RESOLVERS: Dict[str, Callable[[dt.date], DateRange]] = {
    "this-week": _this_week,
    "last-week": _last_week,
    "this-month": _this_month,
    "last-month": _last_full_months(1),
    "last-3-months": _last_full_months(3),
    "last-6-months": _last_full_months(6),
    "this-quarter": _this_quarter,
    "last-quarter": _last_quarter,
    "this-year": _this_year,
    "last-year": _last_year,
}


def resolve_range(period: str, now: Union[dt.datetime, dt.date]) -> DateRange:
    """
    Resolve ``period`` against ``now``.
    "last-*" tokens cover full calendar units ending before the current one;
    "this-*" tokens run from the start of the current unit through today.
    """
    resolver = _RESOLVERS.get(period)
    if resolver is None:
        raise UnsupportedPeriodError(period)
    return resolver(_as_date(now))


def resolve_cycle_ranges(now: Union[dt.datetime, dt.date]) -> CycleRanges:
    """Current calendar month and the one immediately before it."""
    start_of_this_month = month_floor(_as_date(now))
    start_of_last_month = month_add(start_of_this_month, -1)
    return CycleRanges(
        current=DateRange(start=start_of_this_month, end=month_end(start_of_this_month)),
        previous=DateRange(start=start_of_last_month, end=month_end(start_of_last_month)),
    )
