"""Domain Records: immutable snapshots of users and session requests.

Invariants:
    - Records are frozen; every change produces a new snapshot via dataclasses.replace
    - courses and availability are frozensets (duplicates suppressed, order irrelevant)
    - SessionRequest.from_user_id != SessionRequest.to_user_id
    - created_at is set once at creation and never replaced

Design Decisions:
    - Frozen dataclasses over mutable dicts
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from studymatch.core.domain_types import RequestId, RequestStatus, UserId


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class User:
    """Registered student. id is 0 until the Identity Store assigns one."""

    username: str
    password_hash: str
    name: str
    major: str
    courses: frozenset[str] = field(default_factory=frozenset)
    availability: frozenset[str] = field(default_factory=frozenset)
    id: UserId = UserId(0)


@dataclass(frozen=True)
class SessionRequest:
    """Proposal from one student to another for a shared course and slot."""

    from_user_id: UserId
    to_user_id: UserId
    course: str
    time_slot: str
    status: RequestStatus = RequestStatus.PENDING
    created_at: datetime = field(default_factory=_utcnow)
    id: RequestId = RequestId(0)

    def involves(self, user_id: UserId) -> bool:
        return user_id in (self.from_user_id, self.to_user_id)
