"""Registration Enforcement: pure validation of sign-up and profile input.

Invariants:
    - Registration checks run in a fixed order and stop at the first failure:
      username/password present, institutional domain, password length,
      confirmation match, username free, first/last name and major present
    - Usernames are compared case-sensitively, as stored
    - Nothing here hashes, stores or logs; callers act only after validation passes
"""

from dataclasses import dataclass
from typing import Callable

from studymatch.core.errors import (
    DuplicateUserError,
    InvalidEmailDomainError,
    MissingRequiredFieldError,
    PasswordMismatchError,
    PasswordTooShortError,
)


@dataclass(frozen=True)
class RegistrationForm:
    """Raw sign-up input as received from the boundary."""

    username: str = ""
    password: str = ""
    confirm_password: str = ""
    first_name: str = ""
    last_name: str = ""
    major: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name.strip()} {self.last_name.strip()}"


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _missing(**values: str | None) -> list[str]:
    return [name for name, value in values.items() if _blank(value)]


def validate_registration(
    form: RegistrationForm,
    username_taken: Callable[[str], bool],
    email_domain: str,
    min_password_length: int,
) -> None:
    """Raise the first applicable validation error, or return None."""
    missing = _missing(username=form.username, password=form.password)
    if missing:
        raise MissingRequiredFieldError(missing)

    if not form.username.endswith(email_domain):
        raise InvalidEmailDomainError(email_domain)
    if len(form.password) < min_password_length:
        raise PasswordTooShortError(min_password_length)
    if form.password != form.confirm_password:
        raise PasswordMismatchError()
    if username_taken(form.username):
        raise DuplicateUserError(form.username)

    missing = _missing(
        first_name=form.first_name, last_name=form.last_name, major=form.major,
    )
    if missing:
        raise MissingRequiredFieldError(missing)


def validate_profile_update(name: str | None, major: str | None) -> None:
    """Name and major are both required on profile update."""
    missing = _missing(name=name, major=major)
    if missing:
        raise MissingRequiredFieldError(missing)
