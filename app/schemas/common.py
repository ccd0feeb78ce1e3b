"""
Shared schema helpers
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_serializer

from app.utils.datetime_utils import iso_8601_utc


class TimestampedOut(BaseModel):
    """Output base for rows with created_at/updated_at. Datetimes in UTC (Z)."""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("created_at", "updated_at", when_used="always")
    @classmethod
    def _ser_datetime(cls, dt):
        return iso_8601_utc(dt) if dt is not None else None


class PasswordConfirmation(BaseModel):
    """Body for destructive actions that re-check the actor's password"""
    password: str


class MessageResponse(BaseModel):
    message: str
