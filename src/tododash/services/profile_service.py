"""Profile and avatar handling."""

import logging
import re
import time

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tododash.config import Settings
from tododash.models import Profile
from tododash.models.base import utcnow
from tododash.providers.storage import ObjectStorage
from tododash.services.validation import avatar_extension, validate_avatar

logger = logging.getLogger(__name__)


class ProfileService:
    """Service for the current user's profile."""

    def __init__(self, db: AsyncSession, user_id: str):
        self.db = db
        self.user_id = user_id

    async def get(self) -> Profile | None:
        result = await self.db.execute(select(Profile).where(Profile.id == self.user_id))
        return result.scalar_one_or_none()

    async def upsert(self, name: str, avatar_url: str | None = None) -> Profile:
        """Create the profile on first update, otherwise overwrite it."""
        profile = await self.get()
        if profile is None:
            profile = Profile(id=self.user_id, name=name, avatar_url=avatar_url)
            self.db.add(profile)
            logger.info("created profile for user %s", self.user_id)
        else:
            profile.name = name
            profile.avatar_url = avatar_url
            profile.updated_at = utcnow()
        await self.db.flush()
        return profile


class AvatarService:
    """Validates avatar files and moves them in and out of object storage."""

    def __init__(self, storage: ObjectStorage, settings: Settings, user_id: str):
        self.storage = storage
        self.settings = settings
        self.user_id = user_id

    def validate(self, size: int, content_type: str | None) -> None:
        validate_avatar(
            size,
            content_type,
            max_size=self.settings.max_avatar_size_bytes,
            allowed_types=self.settings.allowed_avatar_types,
        )

    def object_key(self, content_type: str) -> str:
        return f"{self.user_id}-{int(time.time() * 1000)}.{avatar_extension(content_type)}"

    def owns(self, key: str) -> bool:
        """Whether ``key`` was produced by ``object_key`` for this user."""
        return re.fullmatch(rf"{re.escape(self.user_id)}-\d+\.\w+", key) is not None

    async def upload(self, filename: str | None, content: bytes, content_type: str | None) -> str:
        """Upload and return the public URL. Validation runs before any request."""
        self.validate(len(content), content_type)
        key = self.object_key(content_type)
        url = await self.storage.upload(key, content, content_type)
        logger.info("uploaded avatar %s (from %s) for user %s", key, filename, self.user_id)
        return url

    async def delete(self, avatar_url: str) -> None:
        """Delete the object named by the last path segment of its URL.

        Keys belonging to another user are left alone.
        """
        key = avatar_url.rstrip("/").rsplit("/", 1)[-1]
        if not self.owns(key):
            logger.warning("not deleting avatar %s: not owned by user %s", key, self.user_id)
            return
        await self.storage.delete(key)
