"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - UserId and RequestId wrap ints assigned by the stores, never by callers
    - Course codes and time slots are opaque strings compared by equality only
    - All request states encoded as an Enum, no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enum: serializes to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
RequestId = NewType("RequestId", int)


# ─── Value Types ─────────────────────────────────────────────────

CourseCode = NewType("CourseCode", str)   # e.g. "CPSC 1010"
TimeSlot = NewType("TimeSlot", str)       # e.g. "Monday-10:00"


# ─── Enums ───────────────────────────────────────────────────────

class RequestStatus(str, Enum):
    """Session request lifecycle states."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    CANCELLED = "cancelled"


# Allowed transitions: pending is initial, accepted may still be cancelled.
ALLOWED_TRANSITIONS: dict[RequestStatus, frozenset[RequestStatus]] = {
    RequestStatus.PENDING: frozenset(
        {RequestStatus.ACCEPTED, RequestStatus.DECLINED},
    ),
    RequestStatus.ACCEPTED: frozenset({RequestStatus.CANCELLED}),
    RequestStatus.DECLINED: frozenset(),
    RequestStatus.CANCELLED: frozenset(),
}
