"""
Base models for all Pydantic models in the application.

Datetimes are stored as naive UTC so they compare with ``datetime.utcnow``.
"""
from datetime import datetime, timezone
from uuid import uuid4

from pydantic import BaseModel, Field, validator


def new_id() -> str:
    """Generate a new string identifier."""
    return str(uuid4())


def to_naive_utc(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values pass through."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class TimestampedModel(BaseModel):
    """Base model with a creation timestamp."""

    created_at: datetime = Field(default_factory=datetime.utcnow)

    @validator("created_at")
    def normalize_created_at(cls, v):
        return to_naive_utc(v)


class IdentifiedModel(TimestampedModel):
    """Base model with string identification and timestamps."""

    id: str = Field(default_factory=new_id)


class UserOwnedModel(IdentifiedModel):
    """Base model for entities owned by a user."""

    user_id: str = Field(..., min_length=1, description="User who owns this entity")
