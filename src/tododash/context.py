"""Process-level handles shared by requests."""

import logging
from dataclasses import dataclass

import httpx

from tododash.config import Settings
from tododash.database import Database
from tododash.providers import CompletionClient, IdentityClient, ObjectStorage

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Explicitly constructed database and provider clients.

    The owner of the process (the FastAPI lifespan, the CLI, a test) builds
    one with ``from_settings`` and closes it with ``aclose``.
    """

    settings: Settings
    database: Database
    http: httpx.AsyncClient
    identity: IdentityClient
    storage: ObjectStorage
    completion: CompletionClient

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "AppContext":
        http = httpx.AsyncClient(timeout=settings.http_timeout_seconds, transport=transport)
        return cls(
            settings=settings,
            database=Database(settings.database_url, echo=settings.debug),
            http=http,
            identity=IdentityClient(http, settings.auth_url, settings.auth_api_key),
            storage=ObjectStorage(
                http,
                settings.storage_url,
                settings.storage_api_key,
                settings.avatar_bucket,
            ),
            completion=CompletionClient(
                http,
                settings.completion_url,
                settings.completion_api_key,
                settings.completion_model,
                max_tokens=settings.completion_max_tokens,
                temperature=settings.completion_temperature,
            ),
        )

    async def aclose(self) -> None:
        await self.http.aclose()
        await self.database.dispose()
        logger.info("application context closed")
