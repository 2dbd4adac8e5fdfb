"""Input checks that run before any network call."""

from tododash.errors import ValidationError

MIN_PASSWORD_LENGTH = 6


def require(value: str, message: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationError(message)
    return value


def validate_password(password: str, confirm: str | None = None) -> None:
    if not (password or "").strip():
        raise ValidationError("Password is required")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )
    if confirm is not None and password != confirm:
        raise ValidationError("Passwords do not match")


def validate_sign_up(email: str, password: str, name: str) -> tuple[str, str]:
    """Return the trimmed email and name."""
    name = require(name, "Name is required")
    email = require(email, "Email is required")
    validate_password(password)
    return email, name


def validate_sign_in(email: str, password: str) -> str:
    email = require(email, "Email is required")
    if not password:
        raise ValidationError("Password is required")
    return email


def validate_avatar(
    size: int,
    content_type: str | None,
    *,
    max_size: int,
    allowed_types: set[str],
) -> None:
    """Reject oversized files and anything outside the image allow-list."""
    if size > max_size:
        raise ValidationError(
            f"File size must be less than {max_size // (1024 * 1024)}MB"
        )
    if (content_type or "").lower() not in allowed_types:
        raise ValidationError("Please upload a valid image file (JPEG, PNG, or WebP)")


EXTENSION_BY_TYPE = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


def avatar_extension(content_type: str) -> str:
    """Extension for the stored object, from the already validated MIME type."""
    content_type = content_type.lower()
    return EXTENSION_BY_TYPE.get(content_type, content_type.split("/")[-1])
