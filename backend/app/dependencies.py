"""FastAPI dependencies wiring the storage collaborators and the admin gate."""
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.services.backup_manager import BackupManager
from app.services.collection_locks import CollectionLocks
from app.services.collection_service import CollectionService
from app.services.exceptions import Unauthorized
from app.services.record_store import RecordStore
from app.services.undo_engine import UndoEngine


def get_locks(request: Request) -> CollectionLocks:
    return request.app.state.collection_locks


def get_record_store(db: Session = Depends(get_db)) -> RecordStore:
    return RecordStore(db)


def get_backup_manager(store: RecordStore = Depends(get_record_store)) -> BackupManager:
    return BackupManager(store)


def get_undo_engine(
    store: RecordStore = Depends(get_record_store),
    backups: BackupManager = Depends(get_backup_manager),
) -> UndoEngine:
    return UndoEngine(store, backups)


def get_collection_service(
    store: RecordStore = Depends(get_record_store),
    backups: BackupManager = Depends(get_backup_manager),
    undo_engine: UndoEngine = Depends(get_undo_engine),
    locks: CollectionLocks = Depends(get_locks),
) -> CollectionService:
    return CollectionService(store, backups, undo_engine, locks)


def require_admin(request: Request) -> None:
    """Admin gate: the session must carry the flag set at login."""
    if not request.session.get("is_admin"):
        raise Unauthorized()
