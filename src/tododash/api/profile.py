"""Profile and avatar API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, UploadFile

from tododash.api.auth import CurrentUser
from tododash.api.deps import get_context, respond
from tododash.api.limits import default_limit, limiter, upload_limit
from tododash.context import AppContext
from tododash.errors import ErrorKind
from tododash.schemas.profile import ProfileUpdate
from tododash.schemas.result import ActionResult
from tododash.services import actions

router = APIRouter(prefix="/profile", tags=["profile"])

Context = Annotated[AppContext, Depends(get_context)]

CHUNK_SIZE = 64 * 1024  # 64 KB chunks


def _too_large(max_size: int) -> ActionResult:
    return ActionResult.fail(
        f"File size must be less than {max_size // (1024 * 1024)}MB",
        ErrorKind.VALIDATION,
    )


@router.get("")
async def get_profile(user: CurrentUser, context: Context):
    """Get the current user's profile; ``data`` is null before the first update."""
    result = await actions.get_profile(context.database, user.id)
    if result.error is None and result.data is None:
        return {"data": None}
    return respond(result)


@router.put("")
@limiter.limit(default_limit)
async def update_profile(request: Request, data: ProfileUpdate, user: CurrentUser, context: Context):
    """Create or update the current user's profile."""
    return respond(await actions.update_profile(context.database, user.id, data))


@router.post("/avatar")
@limiter.limit(upload_limit)
async def upload_avatar(request: Request, file: UploadFile, user: CurrentUser, context: Context):
    """Upload an avatar image and return its public URL.

    Type and size are checked here before reading the whole body and again
    by the service before anything is sent to storage.
    """
    settings = context.settings
    max_size = settings.max_avatar_size_bytes

    if (file.content_type or "").lower() not in settings.allowed_avatar_types:
        return respond(ActionResult.fail(
            "Please upload a valid image file (JPEG, PNG, or WebP)",
            ErrorKind.VALIDATION,
        ))

    # Early rejection from Content-Length; it can be spoofed, so the
    # streaming read below enforces the limit too
    content_length = request.headers.get("content-length")
    if content_length and content_length.isdigit() and int(content_length) > max_size + CHUNK_SIZE:
        return respond(_too_large(max_size))

    chunks = []
    total_size = 0
    while True:
        chunk = await file.read(CHUNK_SIZE)
        if not chunk:
            break
        total_size += len(chunk)
        if total_size > max_size:
            return respond(_too_large(max_size))
        chunks.append(chunk)

    result = await actions.upload_avatar(
        context.storage,
        settings,
        user.id,
        file.filename,
        b"".join(chunks),
        file.content_type,
    )
    return respond(result)


@router.delete("/avatar")
@limiter.limit(default_limit)
async def delete_avatar(request: Request, user: CurrentUser, context: Context):
    """Remove the avatar from storage and clear it on the profile."""
    return respond(
        await actions.remove_avatar(context.database, context.storage, context.settings, user.id)
    )
