"""Normalized operation results: ``{data}``, ``{success}`` or ``{error}``."""

from typing import Any

from pydantic import BaseModel, Field

from tododash.errors import ErrorKind


class ActionResult(BaseModel):
    """Outcome of an action; callers branch on ``error`` instead of catching."""

    success: bool = True
    data: Any = None
    error: str | None = None
    kind: ErrorKind | None = Field(default=None, exclude=True)

    @classmethod
    def ok(cls, data: Any = None) -> "ActionResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, kind: ErrorKind = ErrorKind.UNEXPECTED) -> "ActionResult":
        return cls(success=False, error=error, kind=kind)

    def to_payload(self) -> dict[str, Any]:
        """JSON body as sent over the wire."""
        if self.error is not None:
            payload = {"error": self.error}
            if self.data is not None:
                payload.update(self.model_dump(mode="json", include={"data"}))
            return payload
        if self.data is None:
            return {"success": True}
        return self.model_dump(mode="json", include={"data"})
