"""Snapshot ORM model: immutable copy of a collection taken before a clear."""
from sqlalchemy import Column, String, DateTime, Integer, JSON, Index
from app.database import Base


class Snapshot(Base):
    __tablename__ = "snapshots"
    __table_args__ = (
        Index("ix_snapshots_collection_created_at", "collection", "created_at"),
        {"sqlite_autoincrement": True},
    )

    snapshot_id = Column(Integer, primary_key=True, autoincrement=True)
    collection = Column(String(32), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    note = Column(String(500), nullable=True)
    records = Column(JSON, nullable=False)

    @property
    def record_count(self) -> int:
        return len(self.records or [])
