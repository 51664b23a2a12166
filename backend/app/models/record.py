"""Record ORM model: one row per live record in a collection."""
import enum
from sqlalchemy import Column, String, DateTime, Integer, JSON, UniqueConstraint, Index
from app.database import Base


class Collection(str, enum.Enum):
    appointments = "appointments"
    feedback = "feedback"
    payments = "payments"


# Prefix used when a record id is generated for the collection.
ID_PREFIXES = {
    Collection.appointments: "apt",
    Collection.feedback: "fb",
    Collection.payments: "pay",
}


class Record(Base):
    __tablename__ = "records"
    __table_args__ = (
        UniqueConstraint("collection", "record_id", name="uq_records_collection_record_id"),
        Index("ix_records_collection_created_at", "collection", "created_at"),
        {"sqlite_autoincrement": True},
    )

    seq = Column(Integer, primary_key=True, autoincrement=True)
    collection = Column(String(32), nullable=False)
    record_id = Column(String(64), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    data = Column(JSON, nullable=False)
