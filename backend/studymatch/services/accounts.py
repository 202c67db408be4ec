"""Account Service: registration, login, profile, courses and availability.

Invariants:
    - Registration rules (core/enforce_registration) pass before any hashing or insert
    - New users start with empty courses and availability
    - Unknown username and wrong password raise the same InvalidCredentialsError
    - Course/availability edits never touch existing session requests
    - Every mutation goes through UserRepository.update(): no stale snapshots written back
"""

import logging
from dataclasses import replace
from typing import Iterable

from studymatch.core.domain_types import UserId
from studymatch.core.enforce_registration import (
    RegistrationForm, validate_profile_update, validate_registration,
)
from studymatch.core.errors import InvalidCredentialsError, UserNotFoundError
from studymatch.core.normalize_input import normalize_multi_select
from studymatch.core.records import User
from studymatch.core.repository_protocols import UserRepository
from studymatch.infrastructure.password_hashing import (
    hash_password, verify_password,
)

logger = logging.getLogger(__name__)


class AccountService:
    """User-facing account operations over the Identity Store."""

    def __init__(
        self,
        users: UserRepository,
        email_domain: str = "@clemson.edu",
        min_password_length: int = 8,
        bcrypt_rounds: int = 12,
    ):
        self.users = users
        self.email_domain = email_domain
        self.min_password_length = min_password_length
        self.bcrypt_rounds = bcrypt_rounds

    # ─── Registration & login ────────────────────────────────────

    def register(self, form: RegistrationForm) -> User:
        validate_registration(
            form,
            username_taken=lambda u: self.users.find_by_username(u) is not None,
            email_domain=self.email_domain,
            min_password_length=self.min_password_length,
        )
        user = self.users.insert(User(
            username=form.username,
            password_hash=hash_password(form.password, self.bcrypt_rounds),
            name=form.full_name,
            major=form.major.strip(),
        ))
        logger.info(f"Registered {user.username}", extra={"user_id": user.id})
        return user

    def authenticate(self, username: str, password: str) -> User:
        user = self.users.find_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Failed login attempt")
            raise InvalidCredentialsError()
        logger.info(f"{user.username} logged in", extra={"user_id": user.id})
        return user

    def get(self, user_id: UserId) -> User:
        user = self.users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    # ─── Profile ─────────────────────────────────────────────────

    def update_profile(
        self, user_id: UserId, name: str | None, major: str | None,
    ) -> User:
        validate_profile_update(name, major)
        return self.users.update(
            user_id,
            lambda u: replace(u, name=name.strip(), major=major.strip()),
        )

    # ─── Courses ─────────────────────────────────────────────────

    def add_course(self, user_id: UserId, course: str | None) -> User:
        """Blank courses are ignored; adding an existing course is a no-op."""
        course = (course or "").strip()
        if not course:
            return self.get(user_id)
        return self.users.update(
            user_id, lambda u: replace(u, courses=u.courses | {course}),
        )

    def remove_course(self, user_id: UserId, course: str) -> User:
        return self.users.update(
            user_id, lambda u: replace(u, courses=u.courses - {course}),
        )

    # ─── Availability ────────────────────────────────────────────

    def set_availability(
        self, user_id: UserId, slots: str | Iterable[str] | None,
    ) -> User:
        normalized = normalize_multi_select(slots)
        return self.users.update(
            user_id, lambda u: replace(u, availability=normalized),
        )

    def add_availability(
        self, user_id: UserId, slots: str | Iterable[str] | None,
    ) -> User:
        normalized = normalize_multi_select(slots)
        return self.users.update(
            user_id,
            lambda u: replace(u, availability=u.availability | normalized),
        )

    def remove_availability(
        self, user_id: UserId, slots: str | Iterable[str] | None,
    ) -> User:
        normalized = normalize_multi_select(slots)
        return self.users.update(
            user_id,
            lambda u: replace(u, availability=u.availability - normalized),
        )
