"""Bulk operation schemas."""

import enum

from pydantic import Field, model_validator

from tododash.models.todo import Priority
from tododash.schemas.base import BaseSchema


class BulkOperation(str, enum.Enum):
    COMPLETE = "complete"
    INCOMPLETE = "incomplete"
    DELETE = "delete"
    UPDATE = "update"


class BulkRequest(BaseSchema):
    """One operation applied to every selected todo.

    ``update`` applies ``priority`` and/or ``category_id``; an explicit
    ``category_id: null`` clears the category. With ``atomic`` the batch runs
    as a single transaction instead of one independent mutation per ID.
    """

    todo_ids: list[str] = Field(..., min_length=1)
    operation: BulkOperation
    priority: Priority | None = None
    category_id: str | None = None
    atomic: bool = False

    @model_validator(mode="after")
    def _check_update_fields(self) -> "BulkRequest":
        if self.operation == BulkOperation.UPDATE and not self.patch_values():
            raise ValueError("update requires priority or category_id")
        return self

    def patch_values(self) -> dict:
        """Column values written by an ``update`` operation."""
        values = {}
        if "priority" in self.model_fields_set and self.priority is not None:
            values["priority"] = self.priority
        if "category_id" in self.model_fields_set:
            values["category_id"] = self.category_id
        return values


class BulkResult(BaseSchema):
    """Per-ID outcome of a bulk operation.

    ``missing`` IDs matched no owned row; they are not failures. ``error`` is
    set when at least one mutation raised; mutations that already succeeded
    are kept.
    """

    operation: BulkOperation
    succeeded: list[str] = Field(default_factory=list)
    missing: list[str] = Field(default_factory=list)
    failed: list[str] = Field(default_factory=list)
    error: str | None = None
