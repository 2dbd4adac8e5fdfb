"""Tag API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from tododash.api.auth import CurrentUser
from tododash.api.deps import get_database, respond
from tododash.api.limits import default_limit, limiter
from tododash.database import Database
from tododash.schemas.tag import TAG_COLORS, TagCreate
from tododash.services import actions

router = APIRouter(prefix="/tags", tags=["tags"])

DB = Annotated[Database, Depends(get_database)]


@router.get("")
async def list_tags(user: CurrentUser, db: DB):
    """List the user's tags."""
    return respond(await actions.list_tags(db, user.id))


@router.get("/colors")
async def tag_colors():
    """Preset palette for new tags."""
    return {"data": TAG_COLORS}


@router.post("", status_code=status.HTTP_201_CREATED)
@limiter.limit(default_limit)
async def create_tag(request: Request, data: TagCreate, user: CurrentUser, db: DB):
    """Create a new tag."""
    return respond(
        await actions.create_tag(db, user.id, data),
        status_code=status.HTTP_201_CREATED,
    )


@router.delete("/{tag_id}")
@limiter.limit(default_limit)
async def delete_tag(request: Request, tag_id: str, user: CurrentUser, db: DB):
    """Delete a tag and detach it everywhere."""
    return respond(await actions.delete_tag(db, user.id, tag_id))
