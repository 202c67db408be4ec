"""Request Lifecycle Manager: end-to-end transitions over real in-memory stores.

Tests cover:
    - send/accept/cancel scenario and the terminal cancel
    - accepting or declining twice fails with InvalidState
    - authorization and lookup failures leave the ledger unchanged
    - duplicate pending requests between the same pair are allowed
    - incoming/outgoing split
    - racing accept and decline: exactly one wins, the other sees InvalidState
"""

import threading

import pytest

from studymatch.core.domain_types import RequestId, RequestStatus, UserId
from studymatch.core.errors import (
    CourseNotSharedError,
    InvalidStateError,
    NotAuthorizedError,
    RecipientNotFoundError,
    RequestNotFoundError,
    SelfRequestError,
    SlotNotMutuallyAvailableError,
    UserNotFoundError,
)
from studymatch.core.records import User


def _add(stores, username, courses=(), availability=()) -> User:
    return stores.users.insert(User(
        username=username, password_hash="h", name="N", major="CS",
        courses=frozenset(courses), availability=frozenset(availability),
    ))


@pytest.fixture
def pair(stores):
    a = _add(stores, "a@clemson.edu", {"CS101"}, {"Mon10"})
    b = _add(stores, "b@clemson.edu", {"CS101"}, {"Mon10"})
    return a, b


def test_send_accept_cancel_scenario(lifecycle, pair):
    a, b = pair
    req = lifecycle.send_request(b.id, a.id, "CS101", "Mon10")
    assert req.status == RequestStatus.PENDING
    assert (req.from_user_id, req.to_user_id) == (b.id, a.id)

    assert lifecycle.accept(req.id, a.id).status == RequestStatus.ACCEPTED
    assert lifecycle.cancel(req.id, a.id).status == RequestStatus.CANCELLED
    with pytest.raises(InvalidStateError):
        lifecycle.cancel(req.id, a.id)


def test_accept_twice_fails(lifecycle, pair):
    a, b = pair
    req = lifecycle.send_request(b.id, a.id, "CS101", "Mon10")
    lifecycle.accept(req.id, a.id)
    with pytest.raises(InvalidStateError):
        lifecycle.accept(req.id, a.id)


def test_decline_twice_fails(lifecycle, pair):
    a, b = pair
    req = lifecycle.send_request(b.id, a.id, "CS101", "Mon10")
    assert lifecycle.decline(req.id, a.id).status == RequestStatus.DECLINED
    with pytest.raises(InvalidStateError):
        lifecycle.decline(req.id, a.id)


def test_sender_may_cancel_accepted_request(lifecycle, pair):
    a, b = pair
    req = lifecycle.send_request(b.id, a.id, "CS101", "Mon10")
    lifecycle.accept(req.id, a.id)
    assert lifecycle.cancel(req.id, b.id).status == RequestStatus.CANCELLED


def test_cancel_pending_fails(lifecycle, pair):
    a, b = pair
    req = lifecycle.send_request(b.id, a.id, "CS101", "Mon10")
    with pytest.raises(InvalidStateError):
        lifecycle.cancel(req.id, b.id)


def test_outsider_cannot_touch_request(lifecycle, stores, pair):
    a, b = pair
    outsider = _add(stores, "c@clemson.edu", {"CS101"}, {"Mon10"})
    req = lifecycle.send_request(b.id, a.id, "CS101", "Mon10")
    for op in (lifecycle.accept, lifecycle.decline, lifecycle.cancel):
        with pytest.raises(NotAuthorizedError):
            op(req.id, outsider.id)
    lifecycle.accept(req.id, a.id)
    with pytest.raises(NotAuthorizedError):
        lifecycle.cancel(req.id, outsider.id)
    assert stores.requests.find_by_id(req.id).status == RequestStatus.ACCEPTED


def test_sender_cannot_accept_own_request(lifecycle, stores, pair):
    a, b = pair
    req = lifecycle.send_request(b.id, a.id, "CS101", "Mon10")
    with pytest.raises(NotAuthorizedError):
        lifecycle.accept(req.id, b.id)
    assert stores.requests.find_by_id(req.id).status == RequestStatus.PENDING


def test_unknown_request(lifecycle, pair):
    a, _ = pair
    with pytest.raises(RequestNotFoundError):
        lifecycle.accept(RequestId(404), a.id)


def test_send_failures_create_nothing(lifecycle, stores, pair):
    a, b = pair
    _add(stores, "c@clemson.edu", {"ART1"}, {"Mon10"})
    with pytest.raises(RecipientNotFoundError):
        lifecycle.send_request(a.id, UserId(99), "CS101", "Mon10")
    with pytest.raises(SelfRequestError):
        lifecycle.send_request(a.id, a.id, "CS101", "Mon10")
    with pytest.raises(CourseNotSharedError):
        lifecycle.send_request(a.id, UserId(3), "CS101", "Mon10")
    with pytest.raises(SlotNotMutuallyAvailableError):
        lifecycle.send_request(a.id, b.id, "CS101", "Tue9")
    assert stores.requests.all() == []


def test_unknown_sender(lifecycle, pair):
    _, b = pair
    with pytest.raises(UserNotFoundError):
        lifecycle.send_request(UserId(99), b.id, "CS101", "Mon10")


def test_duplicate_pending_requests_allowed(lifecycle, pair):
    a, b = pair
    first = lifecycle.send_request(a.id, b.id, "CS101", "Mon10")
    second = lifecycle.send_request(a.id, b.id, "CS101", "Mon10")
    assert first.id != second.id
    assert second.id > first.id


def test_send_uses_live_course_set(lifecycle, accounts, pair):
    a, b = pair
    accounts.remove_course(b.id, "CS101")
    with pytest.raises(CourseNotSharedError):
        lifecycle.send_request(a.id, b.id, "CS101", "Mon10")


def test_requests_for_splits_directions(lifecycle, pair):
    a, b = pair
    out = lifecycle.send_request(a.id, b.id, "CS101", "Mon10")
    inc = lifecycle.send_request(b.id, a.id, "CS101", "Mon10")
    view = lifecycle.requests_for(a.id)
    assert view["outgoing"] == [out]
    assert view["incoming"] == [inc]


def test_created_at_unchanged_by_transitions(lifecycle, pair):
    a, b = pair
    req = lifecycle.send_request(b.id, a.id, "CS101", "Mon10")
    accepted = lifecycle.accept(req.id, a.id)
    assert accepted.created_at == req.created_at


def test_concurrent_accept_and_decline_settle_exactly_once(lifecycle, pair):
    a, b = pair
    for _ in range(50):
        req = lifecycle.send_request(b.id, a.id, "CS101", "Mon10")
        barrier = threading.Barrier(2)
        outcomes = []

        def respond(action):
            barrier.wait()
            try:
                outcomes.append(action(req.id, a.id).status)
            except InvalidStateError as exc:
                outcomes.append(exc.code)

        threads = [
            threading.Thread(target=respond, args=(action,))
            for action in (lifecycle.accept, lifecycle.decline)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert outcomes.count("INVALID_STATE") == 1
        [winner] = [o for o in outcomes if o != "INVALID_STATE"]
        assert lifecycle.requests.find_by_id(req.id).status == winner
