"""Root conftest: shared test configuration and record builders."""

import os

import pytest

# Cheap hashing and a fixed signing key for every test run
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_FORMAT", "text")

from studymatch.core.domain_types import UserId  # noqa: E402
from studymatch.core.records import User  # noqa: E402


@pytest.fixture
def make_user():
    """Build a User snapshot; ids default to a running counter."""
    counter = iter(range(1, 10_000))

    def _make(
        courses=(), availability=(), major="Computer Science",
        user_id=None, username=None, name="Test Student",
    ) -> User:
        uid = user_id if user_id is not None else next(counter)
        return User(
            id=UserId(uid),
            username=username or f"student{uid}@clemson.edu",
            password_hash="not-a-real-hash",
            name=name,
            major=major,
            courses=frozenset(courses),
            availability=frozenset(availability),
        )

    return _make
