"""Session Request Enforcement: pure precondition and transition rules.

Invariants:
    - check_* functions raise a typed StudyMatchError or return None; they never mutate
    - Send checks run in order: recipient exists, not self, course shared, slot shared
    - Authorization is checked before state, so a non-participant always gets
      NotAuthorized whatever the request status
    - apply_transition returns a NEW record; created_at and parties are never touched
    - ALLOWED_TRANSITIONS (domain_types) is the single source of truth for the state machine
"""

from dataclasses import replace

from studymatch.core.domain_types import (
    ALLOWED_TRANSITIONS, RequestStatus, UserId,
)
from studymatch.core.errors import (
    CourseNotSharedError,
    InvalidStateError,
    NotAuthorizedError,
    RecipientNotFoundError,
    SelfRequestError,
    SlotNotMutuallyAvailableError,
)
from studymatch.core.records import SessionRequest, User


# Verb used in error messages for each target state
_ACTION_FOR: dict[RequestStatus, str] = {
    RequestStatus.ACCEPTED: "accept",
    RequestStatus.DECLINED: "decline",
    RequestStatus.CANCELLED: "cancel",
}


def check_can_send(
    sender: User,
    recipient: User | None,
    recipient_id: UserId,
    course: str,
    time_slot: str,
) -> None:
    """Validate a new session request against both users' current snapshots."""
    if recipient is None:
        raise RecipientNotFoundError(recipient_id)
    if recipient.id == sender.id:
        raise SelfRequestError()
    if course not in sender.courses or course not in recipient.courses:
        raise CourseNotSharedError(course)
    if time_slot not in sender.availability or time_slot not in recipient.availability:
        raise SlotNotMutuallyAvailableError(time_slot)


def check_can_respond(
    request: SessionRequest, acting_user_id: UserId, target: RequestStatus,
) -> None:
    """Accept/decline: only the recipient, only while pending."""
    action = _ACTION_FOR[target]
    if acting_user_id != request.to_user_id:
        raise NotAuthorizedError(action)
    _check_transition(request, target)


def check_can_cancel(request: SessionRequest, acting_user_id: UserId) -> None:
    """Cancel: either participant, only once accepted."""
    if not request.involves(acting_user_id):
        raise NotAuthorizedError(_ACTION_FOR[RequestStatus.CANCELLED])
    _check_transition(request, RequestStatus.CANCELLED)


def _check_transition(request: SessionRequest, target: RequestStatus) -> None:
    if target not in ALLOWED_TRANSITIONS[request.status]:
        raise InvalidStateError(request.status.value, _ACTION_FOR[target])


def apply_transition(
    request: SessionRequest, acting_user_id: UserId, target: RequestStatus,
) -> SessionRequest:
    """Validate then return the transitioned record. Pure, raises on violation."""
    if target is RequestStatus.CANCELLED:
        check_can_cancel(request, acting_user_id)
    else:
        check_can_respond(request, acting_user_id, target)
    return replace(request, status=target)
