"""Client for a GoTrue-compatible identity provider."""

import httpx

from tododash.errors import AuthError, ProviderError, ProviderUnavailableError
from tododash.providers.http import send
from tododash.schemas.auth import AuthUser, SessionResponse

UNAVAILABLE = "Authentication service is unavailable"


class IdentityClient:
    """Sign-up, sign-in and session lookup against the identity provider.

    Every failure surfaces as ``ProviderError`` (or ``AuthError`` for a bad
    session token) carrying the provider's message.
    """

    def __init__(self, http: httpx.AsyncClient, base_url: str, api_key: str):
        self.http = http
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key

    def _headers(self, token: str | None = None) -> dict[str, str]:
        headers = {"apikey": self.api_key}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _call(self, method: str, path: str, *, token: str | None = None, **kwargs) -> dict:
        response = await send(
            self.http,
            method,
            f"{self.base_url}{path}",
            unavailable=UNAVAILABLE,
            headers=self._headers(token),
            **kwargs,
        )
        if not response.content:
            return {}
        return response.json()

    async def sign_up(self, email: str, password: str, name: str) -> AuthUser:
        body = await self._call(
            "POST",
            "/signup",
            json={"email": email, "password": password, "data": {"name": name}},
        )
        # Depending on email confirmation settings the user is either the
        # body itself or nested next to a session
        user = body.get("user") or body
        return _user_from(user)

    async def sign_in(self, email: str, password: str) -> SessionResponse:
        body = await self._call(
            "POST",
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        user = _user_from(body.get("user") or {})
        return SessionResponse(
            access_token=body["access_token"],
            refresh_token=body.get("refresh_token"),
            user_id=user.id,
            email=user.email,
        )

    async def sign_out(self, token: str) -> None:
        await self._call("POST", "/logout", token=token)

    async def get_user(self, token: str) -> AuthUser:
        """Resolve a session token to its user; AuthError when it is not valid."""
        try:
            body = await self._call("GET", "/user", token=token)
        except ProviderUnavailableError:
            raise
        except ProviderError as e:
            raise AuthError(e.message) from e
        return _user_from(body)

    async def request_password_reset(self, email: str, redirect_to: str | None = None) -> None:
        params = {"redirect_to": redirect_to} if redirect_to else None
        await self._call("POST", "/recover", params=params, json={"email": email})

    async def update_password(self, token: str, password: str) -> None:
        await self._call("PUT", "/user", token=token, json={"password": password})


def _user_from(payload: dict) -> AuthUser:
    if not payload.get("id"):
        raise ProviderError("Authentication service returned no user")
    metadata = payload.get("user_metadata") or {}
    return AuthUser(id=payload["id"], email=payload.get("email"), name=metadata.get("name"))
