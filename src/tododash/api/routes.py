"""API router aggregation."""

from fastapi import APIRouter

from tododash.api.account import router as account_router
from tododash.api.todos import router as todos_router
from tododash.api.categories import router as categories_router
from tododash.api.tags import router as tags_router
from tododash.api.profile import router as profile_router
from tododash.api.suggestions import router as suggestions_router

router = APIRouter(prefix="/api")

router.include_router(account_router)
router.include_router(todos_router)
router.include_router(categories_router)
router.include_router(tags_router)
router.include_router(profile_router)
router.include_router(suggestions_router)
