"""Category schemas."""

from datetime import datetime

from pydantic import Field

from tododash.schemas.base import BaseSchema, HexColor, TrimmedName

# Preset palette offered when creating a category
CATEGORY_COLORS = [
    "#3B82F6",  # Blue
    "#10B981",  # Green
    "#F59E0B",  # Yellow
    "#EF4444",  # Red
    "#8B5CF6",  # Purple
    "#F97316",  # Orange
    "#06B6D4",  # Cyan
    "#84CC16",  # Lime
]


class CategoryCreate(BaseSchema):
    """Schema for creating a category."""

    name: TrimmedName = Field(..., max_length=100)
    color: HexColor = CATEGORY_COLORS[0]
    sort_order: int = 0


class CategoryUpdate(BaseSchema):
    """Schema for updating a category."""

    name: TrimmedName | None = Field(None, max_length=100)
    color: HexColor | None = None
    sort_order: int | None = None


class CategorySummary(BaseSchema):
    """Category as embedded in a todo."""

    id: str
    name: str
    color: str


class CategoryResponse(BaseSchema):
    """Schema for category responses."""

    id: str
    name: str
    color: str
    sort_order: int
    created_at: datetime
