"""Test configuration and fixtures."""

import os

from passage.config import AuthSettings, TimeoutSettings, ValidationSettings

# Settings() refuses to load without a signing secret
TEST_JWT_SECRET = "test-secret-0123456789abcdef0123456789abcdef"

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("AUTH__JWT_SECRET", TEST_JWT_SECRET)
# Lowest cost bcrypt accepts, to keep the suite fast
os.environ.setdefault("AUTH__BCRYPT_ROUNDS", "4")


def make_auth_settings(**overrides) -> AuthSettings:
    """Auth settings for tests, with a valid secret and cheap hashing."""
    values = {"jwt_secret": TEST_JWT_SECRET, "bcrypt_rounds": 4}
    values.update(overrides)
    return AuthSettings(**values)


def make_validation_settings(**overrides) -> ValidationSettings:
    """Validation settings for tests."""
    return ValidationSettings(**overrides)


def make_timeout_settings(**overrides) -> TimeoutSettings:
    """Timeout settings for tests."""
    return TimeoutSettings(**overrides)
