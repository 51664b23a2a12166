"""Undo engine: restores a collection from its most recent snapshot."""
import copy
import logging
from dataclasses import dataclass

from app.models.record import Collection
from app.services.backup_manager import BackupManager
from app.services.exceptions import NoBackupAvailable
from app.services.record_store import RecordStore

logger = logging.getLogger(__name__)


@dataclass
class RestoreResult:
    restored_count: int
    ok: bool


class UndoEngine:
    """Single-level undo: always re-applies the latest snapshot, never merges."""

    def __init__(self, store: RecordStore, backups: BackupManager):
        self.store = store
        self.backups = backups

    def undo(self, collection: Collection) -> RestoreResult:
        collection = Collection(collection)
        snap = self.backups.latest(collection)
        if snap is None:
            logger.info("Undo requested for %s but no backup exists", collection.value)
            raise NoBackupAvailable(collection.value)

        records = copy.deepcopy(snap.records)
        count = self.store.replace_all(collection, records)
        # Read back: the live collection must now equal the snapshot exactly.
        ok = self.store.contents(collection) == records
        if ok:
            logger.info("Restored %d %s records from snapshot %s", count, collection.value, snap.snapshot_id)
        else:
            logger.error("Restore of %s from snapshot %s did not read back intact", collection.value, snap.snapshot_id)
        return RestoreResult(restored_count=count, ok=ok)
