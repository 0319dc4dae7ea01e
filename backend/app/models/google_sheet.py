from typing import get_args
from sqlalchemy import Column, DateTime, Enum, Integer, Numeric, UniqueConstraint
from app.db.session import Base
from app.schemas.metrics import GoogleSheetMetricName


class GoogleSheet(Base):
    """Facts exported from the community metrics spreadsheet."""

    __tablename__ = "google_sheet"
    __table_args__ = (UniqueConstraint("date", "metric_name", name="uq_google_sheet_date_metric"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(DateTime, nullable=False, index=True)
    metric_name = Column(
        Enum(*get_args(GoogleSheetMetricName), name="google_sheet_metric_name", create_constraint=True),
        nullable=False,
        index=True,
    )
    # NUMERIC affinity: numbers come back as numbers, free text stays text
    metric_value = Column(Numeric)
