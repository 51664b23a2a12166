"""Collection service: serialises every write to a collection and runs clear/undo.

clear = snapshot (committed) then purge, inside the collection lock. If the
snapshot fails the purge never runs. undo = latest snapshot replaces the live
contents, inside the same lock, so a clear can never interleave with a restore.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from app.models.record import Collection
from app.models.snapshot import Snapshot
from app.services.backup_manager import BackupManager
from app.services.collection_locks import CollectionLocks
from app.services.record_store import RecordStore
from app.services.undo_engine import RestoreResult, UndoEngine

logger = logging.getLogger(__name__)


class CollectionService:
    def __init__(
        self,
        store: RecordStore,
        backups: BackupManager,
        undo_engine: UndoEngine,
        locks: CollectionLocks,
    ):
        self.store = store
        self.backups = backups
        self.undo_engine = undo_engine
        self.locks = locks

    def add(self, collection: Collection, fields: dict[str, Any]) -> dict[str, Any]:
        with self.locks.hold(collection):
            return self.store.append(collection, fields)

    def list(self, collection: Collection) -> list[dict[str, Any]]:
        return self.store.list(collection)

    def find(self, collection: Collection, field: str, value: Any) -> list[dict[str, Any]]:
        return self.store.find(collection, field, value)

    def update(self, collection: Collection, record_id: Any, patch: dict[str, Any]) -> dict[str, Any]:
        with self.locks.hold(collection):
            return self.store.update_field(collection, record_id, patch)

    def clear(self, collection: Collection, note: Optional[str] = None) -> Snapshot:
        collection = Collection(collection)
        with self.locks.hold(collection):
            snap = self.backups.snapshot(collection, note=note)
            removed = self.store.remove_all(collection)
        logger.info("Cleared %s: %d records removed, backup %s", collection.value, removed, snap.snapshot_id)
        return snap

    def undo(self, collection: Collection) -> RestoreResult:
        with self.locks.hold(collection):
            return self.undo_engine.undo(collection)

    def backup_history(self, collection: Collection) -> list[Snapshot]:
        return self.backups.history(collection)
