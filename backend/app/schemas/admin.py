"""Pydantic schemas for admin login and collection maintenance."""
from __future__ import annotations
from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel


class LoginRequest(BaseModel):
    # Left untyped so odd credentials fail the comparison instead of validation.
    username: Any = ""
    password: Any = ""


class LoginOut(BaseModel):
    success: bool


class SessionOut(BaseModel):
    authenticated: bool


class ClearOut(BaseModel):
    status: str = "success"
    message: str
    backup_id: Optional[int] = None


class UndoOut(BaseModel):
    status: str = "success"
    message: str
    restored: int


class SnapshotOut(BaseModel):
    snapshot_id: int
    collection: str
    created_at: datetime
    note: Optional[str] = None
    record_count: int

    model_config = {"from_attributes": True}
