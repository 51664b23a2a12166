"""Record store: durable, schema-loose storage for the record collections.

Each live record is one row whose ``data`` column holds the record verbatim
(``id``, ``timestamp`` and any extra fields). The ``created_at`` column mirrors
``timestamp`` so listings can sort in SQL, and ``seq`` keeps insertion order.

Every write commits before returning. Any SQLAlchemy failure is rolled back and
surfaced as ``StorageError``; nothing is retried here.
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.record import Collection, ID_PREFIXES, Record
from app.services.exceptions import DuplicateRecord, NotFound, StorageError

logger = logging.getLogger(__name__)

# Owned by the store; patches never overwrite them.
PROTECTED_FIELDS = ("id", "timestamp")


def utc_timestamp(moment: Optional[datetime] = None) -> str:
    """ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""
    moment = (moment or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: Any) -> datetime:
    """Parse a record timestamp back to an aware UTC datetime (now if unusable)."""
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            parsed = None
        if parsed is not None:
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return parsed.astimezone(timezone.utc)
    return datetime.now(timezone.utc)


def new_record_id(collection: Collection) -> str:
    return f"{ID_PREFIXES[collection]}_{uuid.uuid4().hex}"


class RecordStore:
    """Keyed storage for appointments, feedback and payments."""

    def __init__(self, db: Session):
        self.db = db

    def _rows(self, collection: Collection):
        return self.db.query(Record).filter(Record.collection == collection.value)

    def _commit(self, action: str, collection: Collection) -> None:
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise DuplicateRecord(f"Duplicate record id in {collection.value}") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Failed to %s %s", action, collection.value)
            raise StorageError(f"Could not {action} {collection.value}") from exc

    def _read(self, query_fn, collection: Collection):
        try:
            return query_fn()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Failed to read %s", collection.value)
            raise StorageError(f"Could not read {collection.value}") from exc

    def append(self, collection: Collection, fields: dict[str, Any]) -> dict[str, Any]:
        """Store a new record; assigns ``id`` if absent and always stamps ``timestamp``."""
        collection = Collection(collection)
        now = datetime.now(timezone.utc)
        record_id = fields.get("id") or new_record_id(collection)

        record = {"id": record_id}
        record.update({k: v for k, v in fields.items() if k not in PROTECTED_FIELDS})
        record["timestamp"] = utc_timestamp(now)

        self.db.add(Record(
            collection=collection.value,
            record_id=str(record_id),
            created_at=now,
            data=record,
        ))
        self._commit("append to", collection)
        logger.info("Stored %s record %s", collection.value, record_id)
        return record

    def list(self, collection: Collection) -> list[dict[str, Any]]:
        """All records, newest first."""
        collection = Collection(collection)
        rows = self._read(
            lambda: self._rows(collection).order_by(Record.created_at.desc(), Record.seq.desc()).all(),
            collection,
        )
        return [dict(row.data) for row in rows]

    def contents(self, collection: Collection) -> list[dict[str, Any]]:
        """All records in insertion order, as captured by snapshots."""
        collection = Collection(collection)
        rows = self._read(lambda: self._rows(collection).order_by(Record.seq).all(), collection)
        return [dict(row.data) for row in rows]

    def find(self, collection: Collection, field: str, value: Any) -> list[dict[str, Any]]:
        """Records whose ``field`` equals ``value`` (insertion order)."""
        return [r for r in self.contents(collection) if r.get(field) == value]

    def update_field(self, collection: Collection, record_id: Any, patch: dict[str, Any]) -> dict[str, Any]:
        """Merge ``patch`` into an existing record; ``id`` and ``timestamp`` are kept."""
        collection = Collection(collection)
        row = self._read(
            lambda: self._rows(collection).filter(Record.record_id == str(record_id)).first(),
            collection,
        )
        if not row:
            raise NotFound(f"Record {record_id} not found in {collection.value}")

        merged = dict(row.data)
        merged.update({k: v for k, v in patch.items() if k not in PROTECTED_FIELDS})
        row.data = merged
        self._commit("update", collection)
        logger.info("Updated %s record %s (%s)", collection.value, record_id, ", ".join(sorted(patch)))
        return merged

    def replace_all(self, collection: Collection, records: list[dict[str, Any]]) -> int:
        """Swap the whole collection for ``records`` in one transaction.

        On failure the transaction is rolled back, so the previous contents stay readable.
        """
        collection = Collection(collection)
        try:
            self._rows(collection).delete()
            for record in records:
                self.db.add(Record(
                    collection=collection.value,
                    record_id=str(record["id"]),
                    created_at=parse_timestamp(record.get("timestamp")),
                    data=dict(record),
                ))
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Failed to replace %s", collection.value)
            raise StorageError(f"Could not restore {collection.value}") from exc
        logger.info("Replaced %s with %d records", collection.value, len(records))
        return len(records)

    def remove_all(self, collection: Collection) -> int:
        collection = Collection(collection)
        try:
            removed = self._rows(collection).delete()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Failed to purge %s", collection.value)
            raise StorageError(f"Could not clear {collection.value}") from exc
        self._commit("clear", collection)
        logger.info("Removed %d records from %s", removed, collection.value)
        return removed
