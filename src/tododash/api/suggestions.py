"""AI todo suggestion endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from tododash.api.auth import CurrentUser
from tododash.api.deps import get_context, respond
from tododash.api.limits import default_limit, limiter
from tododash.context import AppContext
from tododash.schemas.suggestion import SuggestionRequest
from tododash.services import actions

router = APIRouter(prefix="/suggestions", tags=["suggestions"])


@router.post("")
@limiter.limit(default_limit)
async def suggest_todos(
    request: Request,
    data: SuggestionRequest,
    user: CurrentUser,
    context: Annotated[AppContext, Depends(get_context)],
):
    """Suggest 3-5 todos for a free-text goal."""
    result = await actions.suggest_todos(context.completion, context.settings.locale, data.goal)
    return respond(result)
