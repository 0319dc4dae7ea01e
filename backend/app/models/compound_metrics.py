from typing import get_args
from sqlalchemy import Column, DateTime, Enum, Integer, Numeric, UniqueConstraint
from app.db.session import Base
from app.schemas.metrics import CompoundMetricName


class CompoundMetrics(Base):
    """Metrics derived from several upstream sources (e.g. self-reporting share)."""

    __tablename__ = "compound_metrics"
    __table_args__ = (UniqueConstraint("date", "metric_name", name="uq_compound_metrics_date_metric"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(DateTime, nullable=False, index=True)
    metric_name = Column(
        Enum(*get_args(CompoundMetricName), name="compound_metric_name", create_constraint=True),
        nullable=False,
        index=True,
    )
    metric_value = Column(Numeric)
