"""Action boundary: every operation returns an ``ActionResult`` and never raises.

Expected failures (validation, not found, provider errors) keep their
message. Anything else is logged and replaced by a generic message. Each
action opens its own session so a failure is rolled back before it is
reported.
"""

import functools
import logging

from tododash.config import Settings
from tododash.database import Database
from tododash.errors import ErrorKind, NotFoundError, TodoDashError
from tododash.providers import CompletionClient, IdentityClient, ObjectStorage
from tododash.schemas.auth import AuthUser, SessionResponse
from tododash.schemas.bulk import BulkRequest
from tododash.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from tododash.schemas.profile import AvatarResponse, ProfileResponse, ProfileUpdate
from tododash.schemas.result import ActionResult
from tododash.schemas.tag import TagCreate, TagResponse
from tododash.schemas.todo import TodoCreate, TodoFilters, TodoResponse, TodoUpdate
from tododash.services import validation
from tododash.services.bulk import BulkService
from tododash.services.profile_service import AvatarService, ProfileService
from tododash.services.suggestions import SuggestionService
from tododash.services.todo_service import CategoryService, TagService, TodoService

logger = logging.getLogger(__name__)


def action(failure_message: str):
    """Wrap a coroutine so its outcome is always an ActionResult."""

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> ActionResult:
            try:
                data = await func(*args, **kwargs)
            except TodoDashError as e:
                return ActionResult.fail(e.message, e.kind)
            except Exception:
                logger.exception(failure_message)
                return ActionResult.fail(failure_message)
            if isinstance(data, ActionResult):
                return data
            return ActionResult.ok(data)

        return wrapper

    return decorator


# Todos

@action("Failed to fetch todos")
async def list_todos(
    database: Database, user_id: str, filters: TodoFilters | None = None
) -> list[TodoResponse]:
    async with database.session() as db:
        todos = await TodoService(db, user_id).get_all(filters)
        return [TodoResponse.model_validate(t) for t in todos]


@action("Failed to fetch todo")
async def get_todo(database: Database, user_id: str, todo_id: str) -> TodoResponse:
    async with database.session() as db:
        todo = await TodoService(db, user_id).get_by_id(todo_id)
        if not todo:
            raise NotFoundError("Todo not found")
        return TodoResponse.model_validate(todo)


@action("Failed to create todo")
async def create_todo(database: Database, user_id: str, data: TodoCreate) -> TodoResponse:
    async with database.session() as db:
        todo = await TodoService(db, user_id).create(data)
        return TodoResponse.model_validate(todo)


@action("Failed to update todo")
async def update_todo(
    database: Database, user_id: str, todo_id: str, data: TodoUpdate
) -> TodoResponse:
    async with database.session() as db:
        todo = await TodoService(db, user_id).update(todo_id, data)
        if not todo:
            raise NotFoundError("Todo not found")
        return TodoResponse.model_validate(todo)


@action("Failed to toggle todo")
async def toggle_todo(database: Database, user_id: str, todo_id: str) -> TodoResponse:
    async with database.session() as db:
        todo = await TodoService(db, user_id).toggle(todo_id)
        if not todo:
            raise NotFoundError("Todo not found")
        return TodoResponse.model_validate(todo)


@action("Failed to delete todo")
async def delete_todo(database: Database, user_id: str, todo_id: str) -> None:
    async with database.session() as db:
        await TodoService(db, user_id).delete(todo_id)


@action("Failed to add tag to todo")
async def attach_tag(database: Database, user_id: str, todo_id: str, tag_id: str) -> dict:
    async with database.session() as db:
        attached = await TodoService(db, user_id).attach_tag(todo_id, tag_id)
        return {"changed": attached}


@action("Failed to remove tag from todo")
async def detach_tag(database: Database, user_id: str, todo_id: str, tag_id: str) -> dict:
    async with database.session() as db:
        detached = await TodoService(db, user_id).detach_tag(todo_id, tag_id)
        return {"changed": detached}


@action("Failed to reorder todos")
async def reorder_todos(database: Database, user_id: str, todo_ids: list[str]) -> dict:
    async with database.session() as db:
        moved = await TodoService(db, user_id).reorder(todo_ids)
        return {"moved": moved}


@action("Failed to apply bulk operation")
async def bulk_apply(database: Database, user_id: str, request: BulkRequest) -> ActionResult:
    result = await BulkService(database, user_id).apply(request)
    if result.error:
        # Whole batch reported as failed; completed mutations stay applied
        return ActionResult(
            success=False, data=result, error=result.error, kind=ErrorKind.UNEXPECTED
        )
    return ActionResult.ok(result)


# Categories

@action("Failed to fetch categories")
async def list_categories(database: Database, user_id: str) -> list[CategoryResponse]:
    async with database.session() as db:
        categories = await CategoryService(db, user_id).get_all()
        return [CategoryResponse.model_validate(c) for c in categories]


@action("Failed to create category")
async def create_category(
    database: Database, user_id: str, data: CategoryCreate
) -> CategoryResponse:
    async with database.session() as db:
        category = await CategoryService(db, user_id).create(
            name=data.name,
            color=data.color,
            sort_order=data.sort_order,
        )
        return CategoryResponse.model_validate(category)


@action("Failed to update category")
async def update_category(
    database: Database, user_id: str, category_id: str, data: CategoryUpdate
) -> CategoryResponse:
    async with database.session() as db:
        category = await CategoryService(db, user_id).update(
            category_id, **data.model_dump(exclude_unset=True)
        )
        if not category:
            raise NotFoundError("Category not found")
        return CategoryResponse.model_validate(category)


@action("Failed to delete category")
async def delete_category(database: Database, user_id: str, category_id: str) -> None:
    async with database.session() as db:
        await CategoryService(db, user_id).delete(category_id)


# Tags

@action("Failed to fetch tags")
async def list_tags(database: Database, user_id: str) -> list[TagResponse]:
    async with database.session() as db:
        tags = await TagService(db, user_id).get_all()
        return [TagResponse.model_validate(t) for t in tags]


@action("Failed to create tag")
async def create_tag(database: Database, user_id: str, data: TagCreate) -> TagResponse:
    async with database.session() as db:
        tag = await TagService(db, user_id).create(name=data.name, color=data.color)
        return TagResponse.model_validate(tag)


@action("Failed to delete tag")
async def delete_tag(database: Database, user_id: str, tag_id: str) -> None:
    async with database.session() as db:
        await TagService(db, user_id).delete(tag_id)


# Profile

@action("Failed to fetch profile")
async def get_profile(database: Database, user_id: str) -> ProfileResponse | None:
    async with database.session() as db:
        profile = await ProfileService(db, user_id).get()
        return ProfileResponse.model_validate(profile) if profile else None


@action("Failed to update profile")
async def update_profile(database: Database, user_id: str, data: ProfileUpdate) -> ProfileResponse:
    async with database.session() as db:
        profile = await ProfileService(db, user_id).upsert(data.name, data.avatar_url)
        return ProfileResponse.model_validate(profile)


@action("Failed to upload avatar")
async def upload_avatar(
    storage: ObjectStorage,
    settings: Settings,
    user_id: str,
    filename: str | None,
    content: bytes,
    content_type: str | None,
) -> AvatarResponse:
    url = await AvatarService(storage, settings, user_id).upload(filename, content, content_type)
    return AvatarResponse(url=url)


@action("Failed to delete avatar")
async def remove_avatar(
    database: Database,
    storage: ObjectStorage,
    settings: Settings,
    user_id: str,
) -> None:
    async with database.session() as db:
        service = ProfileService(db, user_id)
        profile = await service.get()
        if not profile or not profile.avatar_url:
            return None
        await AvatarService(storage, settings, user_id).delete(profile.avatar_url)
        await service.upsert(profile.name, None)


# Authentication

@action("Failed to sign up")
async def sign_up(identity: IdentityClient, email: str, password: str, name: str) -> AuthUser:
    email, name = validation.validate_sign_up(email, password, name)
    return await identity.sign_up(email, password, name)


@action("Failed to sign in")
async def sign_in(identity: IdentityClient, email: str, password: str) -> SessionResponse:
    email = validation.validate_sign_in(email, password)
    return await identity.sign_in(email, password)


@action("Failed to sign out")
async def sign_out(identity: IdentityClient, token: str) -> None:
    await identity.sign_out(token)


@action("Failed to send password reset email")
async def request_password_reset(
    identity: IdentityClient, email: str, redirect_to: str | None = None
) -> None:
    email = validation.require(email, "Email is required")
    await identity.request_password_reset(email, redirect_to)


@action("Failed to update password")
async def update_password(
    identity: IdentityClient, token: str, password: str, confirm_password: str
) -> None:
    validation.validate_password(password, confirm_password)
    await identity.update_password(token, password)


# Suggestions

@action("Failed to generate todo suggestions")
async def suggest_todos(completion: CompletionClient, locale: str, goal: str) -> list[str]:
    return await SuggestionService(completion, locale).suggest(goal)
