"""Payment gateway integration: our side of the trust boundary only.

Order params are signed and callback params verified with the gateway's own
checksum library (``paytmchecksum``), keyed by the merchant key.
"""
import logging
import time
import uuid
from typing import Any

from paytmchecksum import PaytmChecksum

from app.config import Settings
from app.models.record import Collection
from app.services.collection_service import CollectionService
from app.services.exceptions import InvalidSignature, PaymentsDisabled

logger = logging.getLogger(__name__)

SIGNATURE_FIELD = "CHECKSUMHASH"
SUCCESS_STATUS = "TXN_SUCCESS"
AWAITING_PAYMENT = "awaiting_payment"

PROCESS_URLS = {
    "production": "https://securegw.paytm.in/order/process",
    "staging": "https://securegw-stage.paytm.in/order/process",
}


def process_url(env: str) -> str:
    return PROCESS_URLS["production"] if env.lower() == "production" else PROCESS_URLS["staging"]


def _signable(params: dict[str, Any]) -> dict[str, str]:
    """String-valued copy without the checksum field, as the checksum library expects."""
    signable = {}
    for key, value in params.items():
        if key == SIGNATURE_FIELD:
            continue
        value = "" if value is None else str(value)
        # The library refuses these values by terminating the process.
        if "|" in value or "REFUND" in value:
            raise InvalidSignature(f"Unsignable value for {key}")
        signable[key] = value
    return signable


def generate_signature(params: dict[str, Any], merchant_key: str) -> str:
    return PaytmChecksum.generateSignature(_signable(params), merchant_key)


def verify_signature(params: dict[str, Any], merchant_key: str) -> None:
    received = params.get(SIGNATURE_FIELD)
    if not isinstance(received, str) or not received:
        raise InvalidSignature("Missing checksum")
    try:
        valid = PaytmChecksum.verifySignature(_signable(params), merchant_key, received)
    except (ValueError, TypeError, IndexError) as exc:
        # Undecryptable checksum.
        raise InvalidSignature() from exc
    if not valid:
        raise InvalidSignature()


def new_order_id() -> str:
    return f"ORDER_{int(time.time() * 1000)}_{uuid.uuid4().hex[:6]}"


def create_order(
    service: CollectionService,
    appointment_fields: dict[str, Any],
    amount: float,
    settings: Settings,
) -> dict[str, Any]:
    """Book an appointment awaiting payment and return the signed gateway form."""
    if not settings.PAYMENT_MERCHANT_KEY:
        raise PaymentsDisabled()

    order_id = new_order_id()
    appointment = service.add(Collection.appointments, {
        **appointment_fields,
        "order_id": order_id,
        "status": AWAITING_PAYMENT,
    })

    params = {
        "MID": settings.PAYMENT_MERCHANT_ID,
        "ORDER_ID": order_id,
        "CUST_ID": str(appointment.get("email") or appointment["id"]),
        "TXN_AMOUNT": f"{amount:.2f}",
        "CHANNEL_ID": "WEB",
        "WEBSITE": settings.PAYMENT_WEBSITE,
        "CALLBACK_URL": settings.PAYMENT_CALLBACK_URL,
    }
    params[SIGNATURE_FIELD] = generate_signature(params, settings.PAYMENT_MERCHANT_KEY)
    logger.info("Payment order %s created for appointment %s", order_id, appointment["id"])
    return {
        "success": True,
        "order_id": order_id,
        "process_url": process_url(settings.PAYMENT_ENV),
        "params": params,
    }


def handle_callback(service: CollectionService, params: dict[str, Any], settings: Settings) -> dict[str, Any]:
    """Record a verified gateway callback and settle the matching appointment.

    Replays are harmless: a transaction already recorded is returned as-is, and only
    appointments still awaiting payment are settled.
    """
    if not settings.PAYMENT_MERCHANT_KEY:
        raise PaymentsDisabled()
    verify_signature(params, settings.PAYMENT_MERCHANT_KEY)

    order_id = params.get("ORDERID")
    txn_id = params.get("TXNID")
    txn_status = params.get("STATUS")

    if txn_id:
        for existing in service.find(Collection.payments, "txn_id", txn_id):
            logger.info("Payment callback for txn %s already recorded", txn_id)
            return existing

    payment = service.add(Collection.payments, {
        "order_id": order_id,
        "txn_id": txn_id,
        "amount": params.get("TXNAMOUNT"),
        "status": txn_status,
        "gateway_response": {k: v for k, v in params.items() if k != SIGNATURE_FIELD},
    })

    if order_id:
        if txn_status == SUCCESS_STATUS:
            patch = {"status": "pending", "payment_id": txn_id}
        else:
            patch = {"status": "payment_failed"}
        for appointment in service.find(Collection.appointments, "order_id", order_id):
            if appointment.get("status") != AWAITING_PAYMENT:
                continue
            service.update(Collection.appointments, appointment["id"], patch)

    logger.info("Payment callback for order %s: %s", order_id, txn_status)
    return payment
