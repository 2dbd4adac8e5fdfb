"""Authentication form schemas.

Fields are plain strings so that empty or mismatched input reaches the
form validators and produces the inline messages users see, instead of a
generic schema error.
"""

from tododash.schemas.base import BaseSchema


class SignUpForm(BaseSchema):
    email: str = ""
    password: str = ""
    name: str = ""


class SignInForm(BaseSchema):
    email: str = ""
    password: str = ""


class PasswordResetRequest(BaseSchema):
    email: str = ""


class PasswordUpdateForm(BaseSchema):
    password: str = ""
    confirm_password: str = ""


class AuthUser(BaseSchema):
    id: str
    email: str | None = None
    name: str | None = None


class SessionResponse(BaseSchema):
    access_token: str
    refresh_token: str | None = None
    user_id: str
    email: str | None = None
