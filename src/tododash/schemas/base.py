"""Base schemas and utilities."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

HexColor = Annotated[str, Field(pattern=r"^#[0-9A-Fa-f]{6}$")]
TrimmedName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(from_attributes=True)
