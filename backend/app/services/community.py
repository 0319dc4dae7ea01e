# backend/app/services/community.py
"""
Community metric families for the analytics dashboard.

Each family fans its independent reads out to the thread pool, waits for all
of them, then runs the (synchronous, in-memory) aggregation and series code.
``now`` is injectable so results are reproducible in tests.
"""
from typing import Optional
from datetime import datetime, timezone
import asyncio, logging
from fastapi.concurrency import run_in_threadpool

from app.analytics.aggregate import aggregate
from app.analytics.periods import resolve_cycle_ranges, resolve_range
from app.analytics.series import (
    flatten_stacked,
    merge_all,
    to_bar_series,
    to_grouped_bar_series,
    to_stacked_by_date,
)
from app.db.facts import find_compound_facts, find_facts, find_snapshot_proposals
from app.schemas.metrics import (
    AdaptabilityMetrics,
    AwarenessMetrics,
    BarValues,
    CommunityCollaborationMetrics,
    DateRange,
    StackedValues,
    TransparencyMetrics,
    ValueChange,
)

NPS_METRICS = ("pocket_network_DNA_NPS", "community_NPS")

# Stacked series labels shown in the chart legend
VELOCITY_LABEL = "Velocity_of_experiments"
DEBATED_PROPOSALS_LABEL = "No_debated_proposals_count"


def _now(now: Optional[datetime]) -> datetime:
    return now if now is not None else datetime.now(timezone.utc)


async def get_community_collaboration_metrics(period: str, now: Optional[datetime] = None) -> CommunityCollaborationMetrics:
    now = _now(now)
    date_range = resolve_range(period, now)
    cycles = resolve_cycle_ranges(now)

    nps_facts, impact_facts = await asyncio.gather(
        run_in_threadpool(find_facts, NPS_METRICS, date_range),
        run_in_threadpool(
            find_facts,
            ["projects_delivering_impact"],
            DateRange(start=cycles.previous.start, end=cycles.current.end),
        ),
    )

    impact = aggregate(impact_facts, cycles)
    nps = to_grouped_bar_series(nps_facts)
    logging.info(
        "community collaboration %s: impact=%.3f change=%.3f nps_rows=%d",
        period, impact.value, impact.change, len(nps_facts),
    )

    return CommunityCollaborationMetrics(metrics={
        "ecosystem_projects_delivering_impact": ValueChange(value=impact.value, change=impact.change),
        "pocket_network_DNA_NPS": BarValues(values=nps.get("pocket_network_DNA_NPS", [])),
        "community_NPS": BarValues(values=nps.get("community_NPS", [])),
    })


async def get_awareness_metrics(period: str, now: Optional[datetime] = None) -> AwarenessMetrics:
    date_range = resolve_range(period, _now(now))
    facts = await run_in_threadpool(find_facts, ["twitter_followers_count"], date_range)
    logging.info("awareness %s: follower_rows=%d", period, len(facts))

    return AwarenessMetrics(metrics={
        "twitter_followers": BarValues(values=to_bar_series(facts)),
    })


async def get_transparency_metrics(period: str, now: Optional[datetime] = None) -> TransparencyMetrics:
    now = _now(now)
    date_range = resolve_range(period, now)
    # self-reporting share is a monthly figure: always last month, whatever the period
    last_month = resolve_range("last-month", now)

    open_facts, self_reporting_facts = await asyncio.gather(
        run_in_threadpool(find_facts, ["projects_working_in_open_count"], date_range),
        run_in_threadpool(find_compound_facts, ["percentage_of_projects_self_reporting"], last_month),
    )
    logging.info(
        "transparency %s: open_rows=%d self_reporting_rows=%d",
        period, len(open_facts), len(self_reporting_facts),
    )

    return TransparencyMetrics(metrics={
        "projects_working_in_the_open": BarValues(values=to_bar_series(open_facts)),
        "percentage_of_projects_self_reporting": BarValues(values=to_bar_series(self_reporting_facts)),
    })


async def get_adaptability_metrics(period: str, now: Optional[datetime] = None) -> AdaptabilityMetrics:
    date_range = resolve_range(period, _now(now))

    velocity_facts, snapshots = await asyncio.gather(
        run_in_threadpool(find_facts, ["velocity_of_experiments"], date_range),
        run_in_threadpool(find_snapshot_proposals, date_range),
    )
    logging.info(
        "adaptability %s: velocity_rows=%d snapshot_rows=%d",
        period, len(velocity_facts), len(snapshots),
    )

    # sheet values first within a shared date
    merged = merge_all(
        to_stacked_by_date(((f.date, f.metric_value) for f in velocity_facts), VELOCITY_LABEL),
        to_stacked_by_date(((s.date, s.no_debated_proposals_count) for s in snapshots), DEBATED_PROPOSALS_LABEL),
    )

    return AdaptabilityMetrics(metrics={
        "velocity_of_experiments_v_no_debated_proposals": StackedValues(values=flatten_stacked(merged)),
    })
