"""Request Lifecycle Manager: send, accept, decline and cancel session requests.

Invariants:
    - Every operation validates against the CURRENT store snapshot, then mutates
    - Transitions run inside RequestRepository.update(), so check-then-set on
      status is atomic per ledger
    - Duplicate pending requests between the same pair are allowed
    - Requests are never deleted

Design Decisions:
    - Pure rules in core/enforce_requests; this class only loads, stores and logs
"""

import logging

from studymatch.core.domain_types import RequestId, RequestStatus, UserId
from studymatch.core.enforce_requests import apply_transition, check_can_send
from studymatch.core.errors import UserNotFoundError
from studymatch.core.records import SessionRequest
from studymatch.core.repository_protocols import (
    RequestRepository, UserRepository,
)

logger = logging.getLogger(__name__)


class RequestLifecycleManager:
    """Session request state machine over the Identity Store and Request Ledger."""

    def __init__(self, users: UserRepository, requests: RequestRepository):
        self.users = users
        self.requests = requests

    def send_request(
        self,
        from_user_id: UserId,
        to_user_id: UserId,
        course: str,
        time_slot: str,
    ) -> SessionRequest:
        sender = self.users.find_by_id(from_user_id)
        if sender is None:
            raise UserNotFoundError(from_user_id)
        recipient = self.users.find_by_id(to_user_id)
        check_can_send(sender, recipient, to_user_id, course, time_slot)

        created = self.requests.insert(SessionRequest(
            from_user_id=from_user_id,
            to_user_id=to_user_id,
            course=course,
            time_slot=time_slot,
        ))
        logger.info(
            f"Session request {created.id} sent for {course} at {time_slot}",
            extra={"user_id": from_user_id, "request_id": created.id},
        )
        return created

    def accept(
        self, request_id: RequestId, acting_user_id: UserId,
    ) -> SessionRequest:
        return self._transition(request_id, acting_user_id, RequestStatus.ACCEPTED)

    def decline(
        self, request_id: RequestId, acting_user_id: UserId,
    ) -> SessionRequest:
        return self._transition(request_id, acting_user_id, RequestStatus.DECLINED)

    def cancel(
        self, request_id: RequestId, acting_user_id: UserId,
    ) -> SessionRequest:
        return self._transition(request_id, acting_user_id, RequestStatus.CANCELLED)

    def requests_for(self, user_id: UserId) -> dict[str, list[SessionRequest]]:
        """Split a user's requests into incoming and outgoing, id order."""
        mine = self.requests.for_user(user_id)
        return {
            "incoming": [r for r in mine if r.to_user_id == user_id],
            "outgoing": [r for r in mine if r.from_user_id == user_id],
        }

    def _transition(
        self,
        request_id: RequestId,
        acting_user_id: UserId,
        target: RequestStatus,
    ) -> SessionRequest:
        updated = self.requests.update(
            request_id,
            lambda current: apply_transition(current, acting_user_id, target),
        )
        logger.info(
            f"Session request {request_id} is now {updated.status.value}",
            extra={"user_id": acting_user_id, "request_id": request_id},
        )
        return updated
