"""Pydantic schemas for the payment gateway order/callback flow."""
from __future__ import annotations
from typing import Any
from pydantic import BaseModel, Field

from app.schemas.record import AppointmentCreate


class PaymentOrderCreate(AppointmentCreate):
    """Appointment details plus the amount to charge."""

    amount: float = Field(gt=0)

    def to_fields(self) -> dict[str, Any]:
        fields = self.model_dump(exclude={"amount", "id"})
        if not fields.get("fee"):
            fields["fee"] = self.amount
        return fields


class PaymentOrderOut(BaseModel):
    success: bool = True
    order_id: str
    process_url: str
    params: dict[str, str]


class PaymentCallbackOut(BaseModel):
    status: str = "success"
    data: dict[str, Any]
