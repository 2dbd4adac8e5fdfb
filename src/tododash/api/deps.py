"""Request dependencies and the result-to-response mapping."""

from fastapi import Depends, Request
from fastapi.responses import JSONResponse

from tododash.context import AppContext
from tododash.database import Database
from tododash.errors import ErrorKind
from tododash.schemas.result import ActionResult

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.PROVIDER: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.UNEXPECTED: 500,
    ErrorKind.UNAVAILABLE: 503,
}


def get_context(request: Request) -> AppContext:
    """The AppContext owned by the running application."""
    return request.app.state.context


def get_database(context: AppContext = Depends(get_context)) -> Database:
    return context.database


def respond(result: ActionResult, status_code: int = 200) -> JSONResponse:
    """Render an ActionResult, choosing the status from its error kind."""
    if result.error is not None:
        status_code = STATUS_BY_KIND[result.kind or ErrorKind.UNEXPECTED]
    return JSONResponse(result.to_payload(), status_code=status_code)
