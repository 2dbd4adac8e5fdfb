"""Profile schemas."""

from datetime import datetime

from pydantic import Field

from tododash.schemas.base import BaseSchema, TrimmedName


class ProfileUpdate(BaseSchema):
    """Upsert payload; the first update creates the profile."""

    name: TrimmedName = Field(..., max_length=255)
    avatar_url: str | None = None


class ProfileResponse(BaseSchema):
    """Schema for profile responses."""

    id: str
    name: str
    avatar_url: str | None
    created_at: datetime
    updated_at: datetime


class AvatarResponse(BaseSchema):
    url: str
