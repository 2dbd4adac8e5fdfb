"""AI suggestion schemas."""

from tododash.schemas.base import BaseSchema


class SuggestionRequest(BaseSchema):
    goal: str = ""
