"""Sign-up, sign-in and password endpoints backed by the identity provider."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from tododash.api.auth import CurrentUser, SessionToken
from tododash.api.deps import get_context, respond
from tododash.api.limits import auth_limit, limiter
from tododash.context import AppContext
from tododash.schemas.auth import (
    PasswordResetRequest,
    PasswordUpdateForm,
    SignInForm,
    SignUpForm,
)
from tododash.services import actions

router = APIRouter(prefix="/auth", tags=["auth"])

Context = Annotated[AppContext, Depends(get_context)]


@router.post("/signup", status_code=status.HTTP_201_CREATED)
@limiter.limit(auth_limit)
async def sign_up(request: Request, form: SignUpForm, context: Context):
    """Register a new account."""
    result = await actions.sign_up(context.identity, form.email, form.password, form.name)
    return respond(result, status_code=status.HTTP_201_CREATED)


@router.post("/signin")
@limiter.limit(auth_limit)
async def sign_in(request: Request, form: SignInForm, context: Context):
    """Exchange email and password for a session."""
    return respond(await actions.sign_in(context.identity, form.email, form.password))


@router.post("/signout")
async def sign_out(token: SessionToken, context: Context):
    """End the current session."""
    return respond(await actions.sign_out(context.identity, token))


@router.get("/session")
async def get_session(user: CurrentUser):
    """The user behind the current session token."""
    return {"data": user.model_dump()}


@router.post("/password-reset")
@limiter.limit(auth_limit)
async def request_password_reset(request: Request, form: PasswordResetRequest, context: Context):
    """Send a password reset email."""
    result = await actions.request_password_reset(
        context.identity,
        form.email,
        context.settings.password_reset_redirect,
    )
    return respond(result)


@router.put("/password")
@limiter.limit(auth_limit)
async def update_password(
    request: Request,
    form: PasswordUpdateForm,
    token: SessionToken,
    context: Context,
):
    """Set a new password for the signed-in user."""
    result = await actions.update_password(
        context.identity,
        token,
        form.password,
        form.confirm_password,
    )
    return respond(result)
