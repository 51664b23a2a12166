"""Public submission routes: no authentication."""
import logging
from fastapi import APIRouter, Depends, HTTPException, status

from app.dependencies import get_collection_service
from app.models.record import Collection
from app.schemas.record import AppointmentCreate, FeedbackCreate, SubmissionOut
from app.services.collection_service import CollectionService
from app.services.exceptions import StorageError

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/appointment", response_model=SubmissionOut)
def submit_appointment(payload: AppointmentCreate, service: CollectionService = Depends(get_collection_service)):
    """Book an appointment."""
    try:
        saved = service.add(Collection.appointments, payload.to_fields())
    except StorageError:
        logger.exception("Save appointment failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not save appointment, please try again later",
        )
    return SubmissionOut(type="appointment", data=saved)


@router.post("/feedback", response_model=SubmissionOut)
def submit_feedback(payload: FeedbackCreate, service: CollectionService = Depends(get_collection_service)):
    """Leave feedback."""
    try:
        saved = service.add(Collection.feedback, payload.to_fields())
    except StorageError:
        logger.exception("Save feedback failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not save feedback, please try again later",
        )
    return SubmissionOut(type="feedback", data=saved)
