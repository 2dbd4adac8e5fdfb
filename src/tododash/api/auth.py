"""Authentication for the API."""

from typing import Annotated

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from tododash.api.deps import get_context
from tododash.context import AppContext
from tododash.errors import AuthError, ProviderError
from tododash.schemas.auth import AuthUser

bearer_scheme = HTTPBearer(auto_error=False)


async def get_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Security(bearer_scheme)] = None,
) -> str:
    """Session token from the ``Authorization: Bearer`` header."""
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return credentials.credentials


async def get_current_user(
    token: Annotated[str, Depends(get_token)],
    context: Annotated[AppContext, Depends(get_context)],
) -> AuthUser:
    """Resolve the session token to the owning user through the identity provider."""
    try:
        return await context.identity.get_user(token)
    except AuthError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )
    except ProviderError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=e.message,
        )


# Dependencies for use in routes
CurrentUser = Annotated[AuthUser, Depends(get_current_user)]
SessionToken = Annotated[str, Depends(get_token)]
