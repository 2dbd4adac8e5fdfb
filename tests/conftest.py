"""Pytest configuration and fixtures."""

import json
import os
import tempfile

# Settings are read lazily through get_settings(); set test values before any import
os.environ.setdefault("TODODASH_RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("TODODASH_DATA_DIR", tempfile.mkdtemp(prefix="tododash-"))

import httpx
import pytest
from httpx import AsyncClient, ASGITransport

from tododash.config import Settings
from tododash.context import AppContext
from tododash.main import create_app

AUTH_URL = "http://auth.test/auth/v1"
STORAGE_URL = "http://storage.test/storage/v1"
COMPLETION_URL = "http://completion.test/v1"


class FakeProviders:
    """In-memory identity, storage and completion providers behind httpx.MockTransport."""

    def __init__(self):
        self.tokens = {"token-alice": "alice", "token-bob": "bob"}
        self.completion_text = '["Outline the report", "Draft the introduction", "Review with team"]'
        self.completion_status = 200
        self.storage_status = 200
        self.offline: set[str] = set()
        self.objects: dict[str, bytes] = {}
        self.requests: list[httpx.Request] = []

    def requests_to(self, host: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == host]

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        host = request.url.host
        if host in self.offline:
            raise httpx.ConnectError("connection refused", request=request)
        if host == "auth.test":
            return self._auth(request, request.url.path.removeprefix("/auth/v1"))
        if host == "storage.test":
            return self._storage(request, request.url.path.removeprefix("/storage/v1"))
        if host == "completion.test":
            return self._completion(request)
        return httpx.Response(404)

    def _user_for(self, request: httpx.Request) -> str | None:
        header = request.headers.get("authorization", "")
        return self.tokens.get(header.removeprefix("Bearer "))

    def _auth(self, request: httpx.Request, path: str) -> httpx.Response:
        body = json.loads(request.content) if request.content else {}
        if path == "/signup":
            if body["email"] == "taken@example.com":
                return httpx.Response(422, json={"msg": "User already registered"})
            return httpx.Response(200, json={
                "id": "new-user",
                "email": body["email"],
                "user_metadata": body.get("data", {}),
            })
        if path == "/token":
            if body.get("password") != "secret1":
                return httpx.Response(400, json={
                    "error": "invalid_grant",
                    "error_description": "Invalid login credentials",
                })
            return httpx.Response(200, json={
                "access_token": "token-alice",
                "refresh_token": "refresh-alice",
                "user": {"id": "alice", "email": body["email"]},
            })
        if path == "/logout":
            return httpx.Response(204)
        if path == "/recover":
            return httpx.Response(200, json={})
        if path == "/user":
            user_id = self._user_for(request)
            if user_id is None:
                return httpx.Response(401, json={"msg": "Invalid JWT"})
            return httpx.Response(200, json={"id": user_id, "email": f"{user_id}@example.com"})
        return httpx.Response(404)

    def _storage(self, request: httpx.Request, path: str) -> httpx.Response:
        if self.storage_status != 200:
            return httpx.Response(self.storage_status, json={"message": "Storage is down"})
        if request.method == "POST":
            key = path.rsplit("/", 1)[-1]
            self.objects[key] = request.content
            return httpx.Response(200, json={"Key": key})
        if request.method == "DELETE":
            for key in json.loads(request.content)["prefixes"]:
                self.objects.pop(key, None)
            return httpx.Response(200, json=[])
        return httpx.Response(404)

    def _completion(self, request: httpx.Request) -> httpx.Response:
        if self.completion_status != 200:
            return httpx.Response(
                self.completion_status,
                json={"error": {"message": "Rate limit exceeded"}},
            )
        return httpx.Response(200, json={
            "choices": [{"message": {"role": "assistant", "content": self.completion_text}}],
        })


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a temporary database and the fake providers."""
    return Settings(
        data_dir=tmp_path,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        auth_url=AUTH_URL,
        auth_api_key="anon-key",
        storage_url=STORAGE_URL,
        storage_api_key="service-key",
        completion_url=COMPLETION_URL,
        completion_api_key="test-key",
        rate_limit_enabled=False,
    )


@pytest.fixture
def providers():
    return FakeProviders()


@pytest.fixture
async def context(settings, providers):
    """Application context with tables created and providers mocked."""
    ctx = AppContext.from_settings(settings, transport=httpx.MockTransport(providers.handle))
    await ctx.database.create_all()
    yield ctx
    await ctx.aclose()


@pytest.fixture
def database(context):
    return context.database


@pytest.fixture
async def test_session(database):
    """A session that commits at the end of the test."""
    async with database.session() as session:
        yield session


@pytest.fixture
async def client(context):
    """Create a test client bound to the test context."""
    app = create_app(context=context)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers():
    return {"Authorization": "Bearer token-alice"}


@pytest.fixture
def other_headers():
    return {"Authorization": "Bearer token-bob"}
