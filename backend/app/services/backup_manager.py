"""Backup manager: point-in-time snapshots of a collection."""
import copy
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from app.models.record import Collection
from app.models.snapshot import Snapshot
from app.services.exceptions import StorageError
from app.services.record_store import RecordStore

logger = logging.getLogger(__name__)


class BackupManager:
    """Creates and looks up snapshots. Snapshots are never updated or deleted."""

    def __init__(self, store: RecordStore):
        self.store = store
        self.db = store.db

    def snapshot(self, collection: Collection, note: Optional[str] = None) -> Snapshot:
        """Persist a full copy of the collection's current contents.

        Raises StorageError if the contents cannot be read or the snapshot cannot be
        committed; in that case no snapshot exists.
        """
        collection = Collection(collection)
        records = copy.deepcopy(self.store.contents(collection))
        snap = Snapshot(
            collection=collection.value,
            created_at=datetime.now(timezone.utc),
            note=note,
            records=records,
        )
        self.db.add(snap)
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Snapshot of %s failed", collection.value)
            raise StorageError(f"Could not back up {collection.value}") from exc
        self.db.refresh(snap)
        logger.info("Snapshot %s of %s taken (%d records)", snap.snapshot_id, collection.value, len(records))
        return snap

    def latest(self, collection: Collection) -> Optional[Snapshot]:
        """Newest snapshot for the collection, or None when there is no backup.

        Equal timestamps fall back to the highest snapshot_id (created last).
        """
        collection = Collection(collection)
        try:
            return (
                self.db.query(Snapshot)
                .filter(Snapshot.collection == collection.value)
                .order_by(Snapshot.created_at.desc(), Snapshot.snapshot_id.desc())
                .first()
            )
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Could not look up backups for %s", collection.value)
            raise StorageError(f"Could not read backups for {collection.value}") from exc

    def history(self, collection: Collection) -> list[Snapshot]:
        collection = Collection(collection)
        try:
            return (
                self.db.query(Snapshot)
                .filter(Snapshot.collection == collection.value)
                .order_by(Snapshot.created_at.desc(), Snapshot.snapshot_id.desc())
                .all()
            )
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Could not list backups for %s", collection.value)
            raise StorageError(f"Could not read backups for {collection.value}") from exc
