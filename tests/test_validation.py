"""Tests for form and upload validation."""

import pytest

from tododash.errors import ValidationError
from tododash.services import validation

MB = 1024 * 1024
ALLOWED = {"image/jpeg", "image/jpg", "image/png", "image/webp"}


class TestPasswordValidation:
    def test_too_short(self):
        with pytest.raises(ValidationError, match="at least 6 characters"):
            validation.validate_password("12345")

    def test_mismatch(self):
        with pytest.raises(ValidationError, match="Passwords do not match"):
            validation.validate_password("secret1", "secret2")

    def test_blank(self):
        with pytest.raises(ValidationError, match="Password is required"):
            validation.validate_password("   ")

    def test_valid(self):
        validation.validate_password("secret1", "secret1")


class TestSignUpValidation:
    def test_trims_fields(self):
        assert validation.validate_sign_up(" a@b.c ", "secret1", " Ann ") == ("a@b.c", "Ann")

    def test_name_required(self):
        with pytest.raises(ValidationError, match="Name is required"):
            validation.validate_sign_up("a@b.c", "secret1", "  ")

    def test_sign_in_password_required(self):
        with pytest.raises(ValidationError, match="Password is required"):
            validation.validate_sign_in("a@b.c", "")


class TestAvatarValidation:
    def test_too_large(self):
        with pytest.raises(ValidationError, match="less than 5MB"):
            validation.validate_avatar(6 * MB, "image/png", max_size=5 * MB, allowed_types=ALLOWED)

    def test_wrong_type(self):
        with pytest.raises(ValidationError, match="JPEG, PNG, or WebP"):
            validation.validate_avatar(100, "image/gif", max_size=5 * MB, allowed_types=ALLOWED)

    def test_missing_type(self):
        with pytest.raises(ValidationError):
            validation.validate_avatar(100, None, max_size=5 * MB, allowed_types=ALLOWED)

    def test_accepts_exact_limit(self):
        validation.validate_avatar(5 * MB, "IMAGE/PNG", max_size=5 * MB, allowed_types=ALLOWED)

    def test_extension(self):
        assert validation.avatar_extension("IMAGE/JPEG") == "jpg"
        assert validation.avatar_extension("image/png") == "png"
        assert validation.avatar_extension("image/webp") == "webp"
