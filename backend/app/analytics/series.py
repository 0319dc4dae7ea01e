# backend/app/analytics/series.py
"""
Chart series built from fact rows.

Bar series are flat (one value per date). Stacked series map an exact ISO
date-time key to a list of named values; several sources can be merged into
one stacked series, keeping the order in which the sources were given.
"""
from typing import Dict, Iterable, List, Mapping, Tuple, get_args
from datetime import datetime

from app.analytics.errors import UnknownMetricError, as_number
from app.schemas.metrics import (
    BarSeriesPoint,
    CompoundMetricName,
    GoogleSheetMetricName,
    MetricFact,
    StackedSeriesPoint,
    StackedSeriesValue,
)

KNOWN_METRICS = frozenset(get_args(GoogleSheetMetricName)) | frozenset(get_args(CompoundMetricName))

StackedSeries = Dict[str, List[StackedSeriesValue]]


def ensure_known_metric(metric_name: str) -> str:
    if metric_name not in KNOWN_METRICS:
        raise UnknownMetricError(metric_name)
    return metric_name


# ---------- bar ----------
def to_bar_series(facts: Iterable[MetricFact]) -> List[BarSeriesPoint]:
    """One point per fact, in input order (callers sort by date)."""
    return [
        BarSeriesPoint(date=f.date, value=as_number(f.metric_name, f.metric_value))
        for f in facts
    ]

def to_grouped_bar_series(facts: Iterable[MetricFact]) -> Dict[str, List[BarSeriesPoint]]:
    """
    Bar series per metric name, for queries that return several metrics at once.
    A name with no rows has no key; callers fall back to ``[]``.
    """
    grouped: Dict[str, List[BarSeriesPoint]] = {}
    for f in facts:
        key = ensure_known_metric(f.metric_name)
        grouped.setdefault(key, []).append(
            BarSeriesPoint(date=f.date, value=as_number(f.metric_name, f.metric_value))
        )
    return grouped


# ---------- stacked ----------
def to_stacked_by_date(rows: Iterable[Tuple[datetime, object]], name: str) -> StackedSeries:
    """
    ``(date, value)`` rows -> ``{iso_datetime: [StackedSeriesValue(name, value)]}``.
    Keys are the exact ISO date-time of each row; no calendar-day rounding.
    """
    out: StackedSeries = {}
    for date, value in rows:
        out.setdefault(date.isoformat(), []).append(
            StackedSeriesValue(name=name, value=as_number(name, value))
        )
    return out

def merge(a: Mapping[str, List[StackedSeriesValue]], b: Mapping[str, List[StackedSeriesValue]]) -> StackedSeries:
    """
    Dates only in one input keep that input's list; dates in both get
    ``a[date] + b[date]``. Key order: a's keys, then b's new keys.
    Neither input is mutated.
    """
    merged: StackedSeries = {date: list(values) for date, values in a.items()}
    for date, values in b.items():
        if date in merged:
            merged[date] = merged[date] + list(values)
        else:
            merged[date] = list(values)
    return merged

def merge_all(*series: Mapping[str, List[StackedSeriesValue]]) -> StackedSeries:
    """Left fold of ``merge``; earlier arguments take precedence in each list."""
    merged: StackedSeries = {}
    for s in series:
        merged = merge(merged, s)
    return merged

def flatten_stacked(series: Mapping[str, List[StackedSeriesValue]]) -> List[StackedSeriesPoint]:
    # mapping insertion order, not re-sorted by date
    return [StackedSeriesPoint(date=date, values=list(values)) for date, values in series.items()]
