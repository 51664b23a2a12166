"""Admin feedback routes: list, clear, undo, backup history."""
import logging
from typing import Any, Optional
from fastapi import APIRouter, Depends, Query

from app.dependencies import get_collection_service, require_admin
from app.models.record import Collection
from app.schemas.admin import ClearOut, SnapshotOut, UndoOut
from app.services.collection_service import CollectionService
from app.services.exceptions import StorageError

logger = logging.getLogger(__name__)
router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=list[dict[str, Any]])
def list_feedback(service: CollectionService = Depends(get_collection_service)):
    return service.list(Collection.feedback)


@router.delete("", response_model=ClearOut)
def clear_feedback(
    note: Optional[str] = Query(None, max_length=500),
    service: CollectionService = Depends(get_collection_service),
):
    snap = service.clear(Collection.feedback, note=note)
    return ClearOut(message="All feedback cleared. You can undo.", backup_id=snap.snapshot_id)


@router.post("/undo", response_model=UndoOut)
def undo_clear_feedback(service: CollectionService = Depends(get_collection_service)):
    result = service.undo(Collection.feedback)
    if not result.ok:
        raise StorageError("Restore could not be verified, please retry undo")
    return UndoOut(message="Feedback restored from backup", restored=result.restored_count)


@router.get("/backups", response_model=list[SnapshotOut])
def list_feedback_backups(service: CollectionService = Depends(get_collection_service)):
    return service.backup_history(Collection.feedback)
