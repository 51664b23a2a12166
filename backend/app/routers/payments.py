"""Payment routes: admin listing plus the public gateway order/callback flow."""
import json
import logging
from typing import Any
from fastapi import APIRouter, Depends, HTTPException, Request, status

from app.config import settings
from app.dependencies import get_collection_service, require_admin
from app.models.record import Collection
from app.schemas.payment import PaymentCallbackOut, PaymentOrderCreate, PaymentOrderOut
from app.services import payment_service
from app.services.collection_service import CollectionService

logger = logging.getLogger(__name__)
router = APIRouter()


async def callback_params(request: Request) -> dict[str, Any]:
    """Gateway callbacks arrive form-encoded; JSON bodies are accepted too."""
    if request.headers.get("content-type", "").startswith("application/json"):
        try:
            body = await request.json()
        except json.JSONDecodeError:
            body = None
        if not isinstance(body, dict):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid callback payload")
        return body
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


@router.get("/payments", response_model=list[dict[str, Any]], dependencies=[Depends(require_admin)])
def list_payments(service: CollectionService = Depends(get_collection_service)):
    return service.list(Collection.payments)


@router.post("/paytm/order", response_model=PaymentOrderOut)
def create_payment_order(payload: PaymentOrderCreate, service: CollectionService = Depends(get_collection_service)):
    """Book an appointment awaiting payment and return the signed gateway form."""
    return payment_service.create_order(service, payload.to_fields(), payload.amount, settings)


@router.post("/paytm/callback", response_model=PaymentCallbackOut)
def payment_callback(
    params: dict[str, Any] = Depends(callback_params),
    service: CollectionService = Depends(get_collection_service),
):
    """Gateway-originated confirmation; rejected unless the checksum verifies."""
    payment = payment_service.handle_callback(service, params, settings)
    return PaymentCallbackOut(data=payment)
