"""Admin appointment routes: list, clear, undo, backup history, status updates."""
import logging
from typing import Any, Optional
from fastapi import APIRouter, Body, Depends, Query

from app.dependencies import get_collection_service, require_admin
from app.models.record import Collection
from app.schemas.admin import ClearOut, SnapshotOut, UndoOut
from app.schemas.record import RecordUpdateOut
from app.services.collection_service import CollectionService
from app.services.exceptions import NotFound, StorageError

logger = logging.getLogger(__name__)
router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=list[dict[str, Any]])
def list_appointments(service: CollectionService = Depends(get_collection_service)):
    """All appointments, newest first."""
    return service.list(Collection.appointments)


@router.delete("", response_model=ClearOut)
def clear_appointments(
    note: Optional[str] = Query(None, max_length=500),
    service: CollectionService = Depends(get_collection_service),
):
    """Back up then remove every appointment."""
    snap = service.clear(Collection.appointments, note=note)
    return ClearOut(message="All appointments cleared. You can undo.", backup_id=snap.snapshot_id)


@router.post("/undo", response_model=UndoOut)
def undo_clear_appointments(service: CollectionService = Depends(get_collection_service)):
    """Restore appointments from the latest backup."""
    result = service.undo(Collection.appointments)
    if not result.ok:
        raise StorageError("Restore could not be verified, please retry undo")
    return UndoOut(message="Appointments restored from backup", restored=result.restored_count)


@router.get("/backups", response_model=list[SnapshotOut])
def list_appointment_backups(service: CollectionService = Depends(get_collection_service)):
    return service.backup_history(Collection.appointments)


@router.patch("/{record_id}", response_model=RecordUpdateOut)
def update_appointment(
    record_id: str,
    patch: dict[str, Any] = Body(...),
    service: CollectionService = Depends(get_collection_service),
):
    """Partial update, e.g. marking an appointment done."""
    try:
        updated = service.update(Collection.appointments, record_id, patch)
    except NotFound:
        raise NotFound("Appointment not found")
    return RecordUpdateOut(data=updated)
