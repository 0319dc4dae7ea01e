# backend/app/db/facts.py
"""
Read-only queries over the metric stores.

Every query filters on an inclusive day range and returns rows sorted by
date ascending; the analytics code relies on that order and never re-sorts.
"""
from typing import List, Sequence, Tuple
import sqlite3, logging, datetime as dt
from app.analytics.series import ensure_known_metric
from app.db.session import engine
from app.schemas.metrics import DateRange, MetricFact, SnapshotProposals

FACT_TABLES = ("google_sheet", "compound_metrics")

# ---------- DB ----------
def _conn() -> sqlite3.Connection:
    # one connection per fetch: fetches run concurrently in worker threads
    db_path = engine.url.database
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn

def _bounds(date_range: DateRange) -> Tuple[str, str]:
    """Inclusive day range -> half-open [start, end + 1 day) text bounds."""
    return (
        date_range.start.isoformat(),
        (date_range.end + dt.timedelta(days=1)).isoformat(),
    )

def _parse_date(raw) -> dt.datetime:
    return raw if isinstance(raw, dt.datetime) else dt.datetime.fromisoformat(str(raw))

# ---------- queries ----------
def _find(table: str, metric_names: Sequence[str], date_range: DateRange) -> List[MetricFact]:
    if table not in FACT_TABLES:
        raise ValueError(f"not a fact table: {table}")
    names = [ensure_known_metric(n) for n in metric_names]
    if not names:
        return []

    placeholders = ",".join("?" for _ in names)
    start, end = _bounds(date_range)
    with _conn() as conn:
        rows = conn.execute(
            f"SELECT date, metric_name, metric_value FROM {table} "
            f"WHERE metric_name IN ({placeholders}) AND date >= ? AND date < ? "
            "ORDER BY date",
            (*names, start, end),
        ).fetchall()

    logging.debug("%s: %d rows for %s in %s..%s", table, len(rows), names, start, end)
    return [
        MetricFact(date=_parse_date(r["date"]), metric_name=r["metric_name"], metric_value=r["metric_value"])
        for r in rows
    ]

def find_facts(metric_names: Sequence[str], date_range: DateRange) -> List[MetricFact]:
    """Spreadsheet facts for ``metric_names`` within ``date_range``."""
    return _find("google_sheet", metric_names, date_range)

def find_compound_facts(metric_names: Sequence[str], date_range: DateRange) -> List[MetricFact]:
    return _find("compound_metrics", metric_names, date_range)

def find_snapshot_proposals(date_range: DateRange) -> List[SnapshotProposals]:
    """Governance snapshots with community + core proposals summed per row."""
    start, end = _bounds(date_range)
    with _conn() as conn:
        rows = conn.execute(
            """
            SELECT date,
                   COALESCE(community_proposals_count,0) + COALESCE(core_proposals_count,0)
                     AS no_debated_proposals_count
            FROM snap_shot
            WHERE date >= ? AND date < ?
            ORDER BY date
            """,
            (start, end),
        ).fetchall()

    logging.debug("snap_shot: %d rows in %s..%s", len(rows), start, end)
    return [
        SnapshotProposals(date=_parse_date(r["date"]), no_debated_proposals_count=r["no_debated_proposals_count"])
        for r in rows
    ]
