"""Todo API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status

from tododash.api.auth import CurrentUser
from tododash.api.deps import get_database, respond
from tododash.api.limits import default_limit, limiter
from tododash.database import Database
from tododash.models.todo import Priority
from tododash.schemas.bulk import BulkRequest
from tododash.schemas.todo import TodoCreate, TodoFilters, TodoReorder, TodoUpdate
from tododash.services import actions

router = APIRouter(prefix="/todos", tags=["todos"])

DB = Annotated[Database, Depends(get_database)]


@router.get("")
async def list_todos(
    user: CurrentUser,
    db: DB,
    completed: bool | None = None,
    priority: Priority | None = None,
    category_id: str | None = None,
    tag_ids: Annotated[list[str] | None, Query()] = None,
):
    """List todos with optional filtering.

    ``tag_ids`` may be repeated; a todo matches when it has any of them.
    """
    filters = TodoFilters(
        completed=completed,
        priority=priority,
        category_id=category_id,
        tag_ids=tag_ids,
    )
    return respond(await actions.list_todos(db, user.id, filters))


@router.post("", status_code=status.HTTP_201_CREATED)
@limiter.limit(default_limit)
async def create_todo(request: Request, data: TodoCreate, user: CurrentUser, db: DB):
    """Create a new todo."""
    return respond(
        await actions.create_todo(db, user.id, data),
        status_code=status.HTTP_201_CREATED,
    )


@router.post("/bulk")
@limiter.limit(default_limit)
async def bulk_todos(request: Request, data: BulkRequest, user: CurrentUser, db: DB):
    """Apply one operation to every selected todo."""
    return respond(await actions.bulk_apply(db, user.id, data))


@router.post("/reorder")
@limiter.limit(default_limit)
async def reorder_todos(request: Request, data: TodoReorder, user: CurrentUser, db: DB):
    """Persist a new display order."""
    return respond(await actions.reorder_todos(db, user.id, data.todo_ids))


@router.get("/{todo_id}")
async def get_todo(todo_id: str, user: CurrentUser, db: DB):
    """Get a single todo by ID."""
    return respond(await actions.get_todo(db, user.id, todo_id))


@router.put("/{todo_id}")
@limiter.limit(default_limit)
async def update_todo(request: Request, todo_id: str, data: TodoUpdate, user: CurrentUser, db: DB):
    """Update a todo."""
    return respond(await actions.update_todo(db, user.id, todo_id, data))


@router.patch("/{todo_id}")
@limiter.limit(default_limit)
async def patch_todo(request: Request, todo_id: str, data: TodoUpdate, user: CurrentUser, db: DB):
    """Partially update a todo (only specified fields are modified)."""
    return respond(await actions.update_todo(db, user.id, todo_id, data))


@router.post("/{todo_id}/toggle")
@limiter.limit(default_limit)
async def toggle_todo(request: Request, todo_id: str, user: CurrentUser, db: DB):
    """Flip a todo between done and not done."""
    return respond(await actions.toggle_todo(db, user.id, todo_id))


@router.delete("/{todo_id}")
@limiter.limit(default_limit)
async def delete_todo(request: Request, todo_id: str, user: CurrentUser, db: DB):
    """Delete a todo. Deleting an unknown ID succeeds without changing anything."""
    return respond(await actions.delete_todo(db, user.id, todo_id))


@router.post("/{todo_id}/tags/{tag_id}")
@limiter.limit(default_limit)
async def attach_tag(request: Request, todo_id: str, tag_id: str, user: CurrentUser, db: DB):
    """Attach a tag to a todo; attaching twice is a no-op."""
    return respond(await actions.attach_tag(db, user.id, todo_id, tag_id))


@router.delete("/{todo_id}/tags/{tag_id}")
@limiter.limit(default_limit)
async def detach_tag(request: Request, todo_id: str, tag_id: str, user: CurrentUser, db: DB):
    """Detach a tag from a todo."""
    return respond(await actions.detach_tag(db, user.id, todo_id, tag_id))
