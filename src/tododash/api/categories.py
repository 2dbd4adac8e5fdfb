"""Category API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from tododash.api.auth import CurrentUser
from tododash.api.deps import get_database, respond
from tododash.api.limits import default_limit, limiter
from tododash.database import Database
from tododash.schemas.category import CATEGORY_COLORS, CategoryCreate, CategoryUpdate
from tododash.services import actions

router = APIRouter(prefix="/categories", tags=["categories"])

DB = Annotated[Database, Depends(get_database)]


@router.get("")
async def list_categories(user: CurrentUser, db: DB):
    """List the user's categories."""
    return respond(await actions.list_categories(db, user.id))


@router.get("/colors")
async def category_colors():
    """Preset palette for new categories."""
    return {"data": CATEGORY_COLORS}


@router.post("", status_code=status.HTTP_201_CREATED)
@limiter.limit(default_limit)
async def create_category(request: Request, data: CategoryCreate, user: CurrentUser, db: DB):
    """Create a category; the response can be selected right away."""
    return respond(
        await actions.create_category(db, user.id, data),
        status_code=status.HTTP_201_CREATED,
    )


@router.put("/{category_id}")
@limiter.limit(default_limit)
async def update_category(
    request: Request,
    category_id: str,
    data: CategoryUpdate,
    user: CurrentUser,
    db: DB,
):
    """Update a category."""
    return respond(await actions.update_category(db, user.id, category_id, data))


@router.delete("/{category_id}")
@limiter.limit(default_limit)
async def delete_category(request: Request, category_id: str, user: CurrentUser, db: DB):
    """Delete a category. Its todos stay, with no category."""
    return respond(await actions.delete_category(db, user.id, category_id))
