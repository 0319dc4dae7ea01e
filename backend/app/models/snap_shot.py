from sqlalchemy import Column, DateTime, Integer
from app.db.session import Base


class SnapShot(Base):
    __tablename__ = "snap_shot"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(DateTime, nullable=False, index=True)
    community_proposals_count = Column(Integer, nullable=False, default=0)
    core_proposals_count = Column(Integer, nullable=False, default=0)
