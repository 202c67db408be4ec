"""Profile Routes: the acting user's profile, courses and availability.

Invariants:
    - Every handler acts on the live record of the authenticated user only
    - Availability payloads are normalized to a set before reaching the service
"""

from fastapi import APIRouter

from studymatch.api.dependencies import AccountServiceDep, CurrentUser
from studymatch.schemas.user import (
    AvailabilityInput, CourseInput, ProfileResponse, ProfileUpdate,
)

router = APIRouter(prefix="/api/v1/profile", tags=["profile"])


@router.get("", response_model=ProfileResponse)
def get_profile(me: CurrentUser):
    return ProfileResponse.from_user(me)


@router.put("", response_model=ProfileResponse)
def update_profile(
    body: ProfileUpdate, me: CurrentUser, accounts: AccountServiceDep,
):
    """Name and major are both required."""
    return ProfileResponse.from_user(
        accounts.update_profile(me.id, body.name, body.major),
    )


# ─── Courses ─────────────────────────────────────────────────────

@router.post("/courses", response_model=ProfileResponse)
def add_course(body: CourseInput, me: CurrentUser, accounts: AccountServiceDep):
    return ProfileResponse.from_user(accounts.add_course(me.id, body.course))


@router.delete("/courses/{course:path}", response_model=ProfileResponse)
def remove_course(course: str, me: CurrentUser, accounts: AccountServiceDep):
    return ProfileResponse.from_user(accounts.remove_course(me.id, course))


# ─── Availability ────────────────────────────────────────────────

@router.put("/availability", response_model=ProfileResponse)
def set_availability(
    body: AvailabilityInput, me: CurrentUser, accounts: AccountServiceDep,
):
    """Replace the whole availability set."""
    return ProfileResponse.from_user(
        accounts.set_availability(me.id, body.slots),
    )


@router.post("/availability", response_model=ProfileResponse)
def add_availability(
    body: AvailabilityInput, me: CurrentUser, accounts: AccountServiceDep,
):
    return ProfileResponse.from_user(
        accounts.add_availability(me.id, body.slots),
    )


@router.delete("/availability", response_model=ProfileResponse)
def remove_availability(
    body: AvailabilityInput, me: CurrentUser, accounts: AccountServiceDep,
):
    return ProfileResponse.from_user(
        accounts.remove_availability(me.id, body.slots),
    )
