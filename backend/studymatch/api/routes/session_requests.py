"""Session Request Routes: send, list and transition study requests.

Invariants:
    - The acting user id always comes from the access token, never the body
    - Failures surface as typed StudyMatchErrors via the global handler
"""

from fastapi import APIRouter, status

from studymatch.api.dependencies import CurrentUser, LifecycleDep
from studymatch.core.domain_types import RequestId, UserId
from studymatch.schemas.session_request import (
    RequestsView, SendRequestBody, SessionRequestResponse,
)

router = APIRouter(prefix="/api/v1/requests", tags=["requests"])


@router.get("", response_model=RequestsView)
def list_requests(me: CurrentUser, lifecycle: LifecycleDep):
    """Incoming and outgoing requests, each a full record."""
    view = lifecycle.requests_for(me.id)
    return RequestsView(
        incoming=[SessionRequestResponse.from_record(r) for r in view["incoming"]],
        outgoing=[SessionRequestResponse.from_record(r) for r in view["outgoing"]],
    )


@router.post(
    "", response_model=SessionRequestResponse,
    status_code=status.HTTP_201_CREATED,
)
def send_request(
    body: SendRequestBody, me: CurrentUser, lifecycle: LifecycleDep,
):
    created = lifecycle.send_request(
        me.id, UserId(body.to_user_id), body.course, body.time_slot,
    )
    return SessionRequestResponse.from_record(created)


@router.post("/{request_id}/accept", response_model=SessionRequestResponse)
def accept_request(request_id: int, me: CurrentUser, lifecycle: LifecycleDep):
    return SessionRequestResponse.from_record(
        lifecycle.accept(RequestId(request_id), me.id),
    )


@router.post("/{request_id}/decline", response_model=SessionRequestResponse)
def decline_request(request_id: int, me: CurrentUser, lifecycle: LifecycleDep):
    return SessionRequestResponse.from_record(
        lifecycle.decline(RequestId(request_id), me.id),
    )


@router.post("/{request_id}/cancel", response_model=SessionRequestResponse)
def cancel_request(request_id: int, me: CurrentUser, lifecycle: LifecycleDep):
    return SessionRequestResponse.from_record(
        lifecycle.cancel(RequestId(request_id), me.id),
    )
