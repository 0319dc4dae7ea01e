# backend/app/analytics/aggregate.py
from typing import Iterable

from app.analytics.errors import as_number
from app.schemas.metrics import AggregatedMetric, CycleRanges, MetricFact


class RunningMean:
    """
    Mean that is updated one observation at a time:
        avg' = (count * avg + x) / (count + 1)
    Never holds the raw sum of the observations.
    """

    __slots__ = ("count", "avg")

    def __init__(self):
        self.count = 0
        self.avg = 0.0

    def add(self, x: float) -> None:
        self.avg = (self.count * self.avg + x) / (self.count + 1)
        self.count += 1


def change_ratio(current: float, previous: float) -> float:
    """(current - previous) / current; 0 when there is no current activity."""
    # also 0 for (0, previous > 0), where the raw ratio would be -inf
    if current == 0:
        return 0.0
    return (current - previous) / current


def aggregate(facts: Iterable[MetricFact], cycles: CycleRanges) -> AggregatedMetric:
    """
    Single pass over ``facts``. A fact whose calendar day lies in
    ``cycles.current`` feeds the current mean; every other fact feeds the
    previous mean, including facts outside ``cycles.previous``.
    """
    current, previous = RunningMean(), RunningMean()
    for fact in facts:
        x = as_number(fact.metric_name, fact.metric_value)
        bucket = current if cycles.current.contains(fact.date.date()) else previous
        bucket.add(x)

    return AggregatedMetric(
        value=current.avg,
        previous=previous.avg,
        change=change_ratio(current.avg, previous.avg),
    )
