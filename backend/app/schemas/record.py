"""Pydantic schemas for public submissions and record updates.

Records are schema-loose: unknown fields are accepted and stored verbatim.
The declared fields only carry the defaults a booking form relies on.
"""
from __future__ import annotations
import math
from typing import Any, Optional, Union
from pydantic import BaseModel, ConfigDict, field_validator, model_validator


def to_number(value: Any) -> Optional[Union[int, float]]:
    """Loose numeric coercion; returns None for anything that is not a finite number."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str) and value.strip():
        try:
            number = float(value)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return int(number) if float(number).is_integer() else number


def _blank_to_none(value: Any) -> Any:
    return None if value == "" else value


class AppointmentCreate(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[Union[str, int]] = None
    name: Any = None
    email: Any = None
    phone: Any = None
    bookingType: Any = None
    fee: Union[int, float] = 0
    date: Any = None
    message: Any = ""
    status: Any = "pending"
    payment_id: Any = None
    order_id: Any = None

    @model_validator(mode="before")
    @classmethod
    def _legacy_msg(cls, data: Any) -> Any:
        # Older forms post the text as "msg".
        if isinstance(data, dict) and "msg" in data:
            data = dict(data)
            msg = data.pop("msg")
            if not data.get("message"):
                data["message"] = msg if msg is not None else ""
        return data

    @field_validator("id", "name", "email", "phone", "bookingType", "date", "payment_id", "order_id", mode="before")
    @classmethod
    def _empty_as_null(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("fee", mode="before")
    @classmethod
    def _coerce_fee(cls, value: Any) -> Union[int, float]:
        return to_number(value) or 0

    @field_validator("message", mode="before")
    @classmethod
    def _message_default(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("status", mode="before")
    @classmethod
    def _status_default(cls, value: Any) -> Any:
        return value or "pending"

    def to_fields(self) -> dict[str, Any]:
        return self.model_dump()


class FeedbackCreate(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: Any = None
    email: Any = None
    phone: Any = None
    message: Any = ""
    rating: Optional[Union[int, float]] = None

    @model_validator(mode="before")
    @classmethod
    def _feedback_alias(cls, data: Any) -> Any:
        # The feedback form sends "feedback"; the API historically took "message".
        if isinstance(data, dict) and "feedback" in data:
            data = dict(data)
            text = data.pop("feedback")
            if text is not None:
                data["message"] = text
        return data

    @field_validator("name", "email", "phone", mode="before")
    @classmethod
    def _empty_as_null(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("message", mode="before")
    @classmethod
    def _message_default(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("rating", mode="before")
    @classmethod
    def _coerce_rating(cls, value: Any) -> Optional[Union[int, float]]:
        return to_number(value) if value else None

    def to_fields(self) -> dict[str, Any]:
        fields = self.model_dump()
        # Feedback ids are always generated.
        fields.pop("id", None)
        return fields


class SubmissionOut(BaseModel):
    status: str = "success"
    type: str
    data: dict[str, Any]


class RecordUpdateOut(BaseModel):
    status: str = "success"
    data: dict[str, Any]
