"""Tag schemas."""

from datetime import datetime

from pydantic import Field

from tododash.schemas.base import BaseSchema, HexColor, TrimmedName

# Preset palette offered when creating a tag
TAG_COLORS = [
    "#6B7280",  # Gray
    "#EF4444",  # Red
    "#F59E0B",  # Yellow
    "#10B981",  # Green
    "#3B82F6",  # Blue
    "#8B5CF6",  # Purple
    "#F97316",  # Orange
    "#06B6D4",  # Cyan
]


class TagCreate(BaseSchema):
    """Schema for creating a tag."""

    name: TrimmedName = Field(..., max_length=50)
    color: HexColor = TAG_COLORS[0]


class TagResponse(BaseSchema):
    """Schema for tag responses."""

    id: str
    name: str
    color: str
    created_at: datetime
