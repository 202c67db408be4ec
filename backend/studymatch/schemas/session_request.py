"""Session Request Schemas: send payload and full-record responses."""

from datetime import datetime

from pydantic import BaseModel

from studymatch.core.domain_types import RequestStatus
from studymatch.core.records import SessionRequest


class SendRequestBody(BaseModel):
    """Proposal to study `course` together at `time_slot`."""
    to_user_id: int
    course: str
    time_slot: str


class SessionRequestResponse(BaseModel):
    id: int
    from_user_id: int
    to_user_id: int
    course: str
    time_slot: str
    status: RequestStatus
    created_at: datetime

    @classmethod
    def from_record(cls, r: SessionRequest) -> "SessionRequestResponse":
        return cls(
            id=r.id,
            from_user_id=r.from_user_id,
            to_user_id=r.to_user_id,
            course=r.course,
            time_slot=r.time_slot,
            status=r.status,
            created_at=r.created_at,
        )


class RequestsView(BaseModel):
    incoming: list[SessionRequestResponse]
    outgoing: list[SessionRequestResponse]
