"""HTTP API for TodoDash."""

from tododash.api.routes import router

__all__ = ["router"]
