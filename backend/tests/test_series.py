# backend/tests/test_series.py
import datetime as dt
import pytest

from app.analytics.errors import NonNumericMetricError, UnknownMetricError
from app.analytics.series import (
    ensure_known_metric,
    flatten_stacked,
    merge,
    merge_all,
    to_bar_series,
    to_grouped_bar_series,
    to_stacked_by_date,
)
from app.schemas.metrics import MetricFact, StackedSeriesValue

def _fact(day: str, name: str, value) -> MetricFact:
    return MetricFact(date=dt.datetime.fromisoformat(day), metric_name=name, metric_value=value)

def _sv(name: str, value: float) -> StackedSeriesValue:
    return StackedSeriesValue(name=name, value=value)

def _pairs(series):
    return {d: [(v.name, v.value) for v in vs] for d, vs in series.items()}

# ---------------------- bar ----------------------

def test_bar_series_keeps_input_order_and_every_row():
    facts = [
        _fact("2024-01-03", "twitter_followers_count", 30),
        _fact("2024-01-01", "twitter_followers_count", 10),
        _fact("2024-01-01", "twitter_followers_count", 10),
    ]
    points = to_bar_series(facts)
    assert [(p.date.day, p.value) for p in points] == [(3, 30), (1, 10), (1, 10)]

def test_bar_series_empty():
    assert to_bar_series([]) == []

def test_grouped_bar_series_two_names():
    facts = [
        _fact("2024-01-01", "pocket_network_DNA_NPS", 1),
        _fact("2024-01-01", "community_NPS", 10),
        _fact("2024-02-01", "pocket_network_DNA_NPS", 2),
        _fact("2024-03-01", "community_NPS", 30),
        _fact("2024-03-01", "pocket_network_DNA_NPS", 3),
    ]
    grouped = to_grouped_bar_series(facts)
    assert set(grouped) == {"pocket_network_DNA_NPS", "community_NPS"}
    assert [p.value for p in grouped["pocket_network_DNA_NPS"]] == [1, 2, 3]
    assert [p.value for p in grouped["community_NPS"]] == [10, 30]
    assert [p.date.month for p in grouped["community_NPS"]] == [1, 3]

def test_grouped_bar_series_absent_name_has_no_key():
    grouped = to_grouped_bar_series([_fact("2024-01-01", "community_NPS", 5)])
    assert "pocket_network_DNA_NPS" not in grouped
    assert grouped.get("pocket_network_DNA_NPS", []) == []

def test_bar_series_rejects_text_values():
    with pytest.raises(NonNumericMetricError):
        to_bar_series([_fact("2024-01-01", "twitter_followers_count", "lots")])

def test_metric_names_are_a_closed_set():
    assert ensure_known_metric("community_NPS") == "community_NPS"
    with pytest.raises(UnknownMetricError):
        ensure_known_metric("discord_members_count")

def test_metric_fact_validates_name_at_construction():
    with pytest.raises(ValueError):
        _fact("2024-01-01", "discord_members_count", 1)

# -------------------- stacked --------------------

def test_stacked_by_date_keys_on_exact_datetime():
    rows = [
        (dt.datetime(2024, 1, 1), 4),
        (dt.datetime(2024, 1, 1, 12), 5),
    ]
    stacked = to_stacked_by_date(rows, "Velocity_of_experiments")
    assert _pairs(stacked) == {
        "2024-01-01T00:00:00": [("Velocity_of_experiments", 4)],
        "2024-01-01T12:00:00": [("Velocity_of_experiments", 5)],
    }

def test_stacked_by_date_rejects_bool():
    with pytest.raises(NonNumericMetricError):
        to_stacked_by_date([(dt.datetime(2024, 1, 1), True)], "No_debated_proposals_count")

def test_merge_concatenates_shared_dates():
    a = {"2024-01-01": [_sv("X", 1)]}
    b = {"2024-01-01": [_sv("Y", 2)], "2024-01-02": [_sv("Y", 3)]}
    assert _pairs(merge(a, b)) == {
        "2024-01-01": [("X", 1), ("Y", 2)],
        "2024-01-02": [("Y", 3)],
    }

def test_merge_does_not_mutate_inputs():
    a = {"d1": [_sv("X", 1)]}
    b = {"d1": [_sv("Y", 2)]}
    merge(a, b)
    assert _pairs(a) == {"d1": [("X", 1)]}
    assert _pairs(b) == {"d1": [("Y", 2)]}

def test_empty_mapping_is_identity():
    a = {"d1": [_sv("X", 1)], "d2": [_sv("X", 2)]}
    assert _pairs(merge(a, {})) == _pairs(a)
    assert _pairs(merge({}, a)) == _pairs(a)
    assert list(merge(a, {})) == ["d1", "d2"]

def test_merge_is_associative_and_follows_input_precedence():
    a = {"d": [_sv("A", 1)]}
    b = {"d": [_sv("B", 2)]}
    c = {"d": [_sv("C", 3)]}
    left = merge(merge(a, b), c)
    right = merge(a, merge(b, c))
    assert _pairs(left) == _pairs(right) == {"d": [("A", 1), ("B", 2), ("C", 3)]}
    assert _pairs(merge_all(a, b, c)) == _pairs(left)

def test_merge_all_of_nothing_is_empty():
    assert merge_all() == {}

def test_flatten_follows_first_seen_date_order():
    a = {"2024-01-03": [_sv("X", 3)], "2024-01-01": [_sv("X", 1)]}
    b = {"2024-01-02": [_sv("Y", 2)], "2024-01-01": [_sv("Y", 9)]}
    points = flatten_stacked(merge(a, b))
    # a's dates in a's order, then b's new dates; no re-sort by date
    assert [p.date for p in points] == ["2024-01-03", "2024-01-01", "2024-01-02"]
    assert [(v.name, v.value) for v in points[1].values] == [("X", 1), ("Y", 9)]

def test_distinct_sub_day_timestamps_do_not_merge():
    a = to_stacked_by_date([(dt.datetime(2024, 1, 1), 4)], "Velocity_of_experiments")
    b = to_stacked_by_date([(dt.datetime(2024, 1, 1, 6), 2)], "No_debated_proposals_count")
    points = flatten_stacked(merge(a, b))
    assert len(points) == 2
    assert all(len(p.values) == 1 for p in points)
