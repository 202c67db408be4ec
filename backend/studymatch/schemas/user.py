"""User Schemas: registration, login, profile and matching payloads.

Invariants:
    - Registration/profile fields default to "" so blank input reaches the
      registration rules and yields MISSING_REQUIRED_FIELD, not a pydantic error
    - Multi-select fields accept a single string or a list of strings
    - Sets are serialized as sorted lists; password_hash is never serialized
"""

from pydantic import BaseModel, Field

from studymatch.core.matching import ClassmateMatch
from studymatch.core.records import User


class RegisterRequest(BaseModel):
    """Sign-up form."""
    username: str = ""
    password: str = ""
    confirm_password: str = Field("", alias="confirmPassword")
    first_name: str = Field("", alias="firstName")
    last_name: str = Field("", alias="lastName")
    major: str = ""

    model_config = {"populate_by_name": True}


class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class ProfileUpdate(BaseModel):
    name: str = ""
    major: str = ""


class CourseInput(BaseModel):
    course: str = ""


class AvailabilityInput(BaseModel):
    """Time slots: `"Monday-10:00"` or `["Monday-10:00", "Tuesday-14:00"]`."""
    slots: str | list[str] | None = None


class UserSummary(BaseModel):
    """Minimal per-user listing."""
    id: int
    username: str
    name: str
    major: str

    @classmethod
    def from_user(cls, user: User) -> "UserSummary":
        return cls(
            id=user.id, username=user.username, name=user.name, major=user.major,
        )


class ProfileResponse(UserSummary):
    courses: list[str]
    availability: list[str]

    @classmethod
    def from_user(cls, user: User) -> "ProfileResponse":
        return cls(
            id=user.id,
            username=user.username,
            name=user.name,
            major=user.major,
            courses=sorted(user.courses),
            availability=sorted(user.availability),
        )


class MatchResponse(BaseModel):
    """One classmate with what they share with the acting user."""
    user: UserSummary
    mutual_courses: list[str]
    overlapping_availability: list[str]
    score: int

    @classmethod
    def from_match(cls, match: ClassmateMatch) -> "MatchResponse":
        return cls(
            user=UserSummary.from_user(match.user),
            mutual_courses=sorted(match.mutual_courses),
            overlapping_availability=sorted(match.overlapping_availability),
            score=match.score,
        )
