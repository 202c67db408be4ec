"""Session Request Routes: full lifecycle over HTTP.

Tests cover:
    - B → A request, A accepts, A cancels, second cancel → 409 INVALID_STATE
    - each send failure maps to its error code
    - outsider gets 403, unknown request 404
    - requests view splits incoming/outgoing with full records
    - malformed body → 400 VALIDATION_ERROR, unexpected fault → opaque 500
"""

import pytest
from httpx import ASGITransport, AsyncClient

from studymatch.api.dependencies import get_request_lifecycle
from studymatch.main import app


@pytest.fixture
async def pair(client, signup):
    a_id, a = await signup("a@clemson.edu")
    b_id, b = await signup("b@clemson.edu")
    for headers in (a, b):
        await client.post(
            "/api/v1/profile/courses", headers=headers, json={"course": "CS101"},
        )
        await client.put(
            "/api/v1/profile/availability", headers=headers, json={"slots": "Mon10"},
        )
    return (a_id, a), (b_id, b)


async def _send(client, headers, to_user_id, course="CS101", time_slot="Mon10"):
    return await client.post("/api/v1/requests", headers=headers, json={
        "to_user_id": to_user_id, "course": course, "time_slot": time_slot,
    })


async def test_full_lifecycle(client, pair):
    (a_id, a), (b_id, b) = pair
    res = await _send(client, b, a_id)
    assert res.status_code == 201
    req = res.json()
    assert req["status"] == "pending"
    assert (req["from_user_id"], req["to_user_id"]) == (b_id, a_id)

    res = await client.post(f"/api/v1/requests/{req['id']}/accept", headers=a)
    assert res.json()["status"] == "accepted"
    res = await client.post(f"/api/v1/requests/{req['id']}/cancel", headers=a)
    assert res.json()["status"] == "cancelled"
    res = await client.post(f"/api/v1/requests/{req['id']}/cancel", headers=a)
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "INVALID_STATE"


async def test_decline(client, pair):
    (a_id, a), (_, b) = pair
    req = (await _send(client, b, a_id)).json()
    res = await client.post(f"/api/v1/requests/{req['id']}/decline", headers=a)
    assert res.json()["status"] == "declined"
    res = await client.post(f"/api/v1/requests/{req['id']}/accept", headers=a)
    assert res.status_code == 409


@pytest.mark.parametrize(
    "course,slot,code",
    [("MATH1", "Mon10", "COURSE_NOT_SHARED"), ("CS101", "Tue9", "SLOT_NOT_MUTUALLY_AVAILABLE")],
)
async def test_send_rejections(client, pair, course, slot, code):
    (a_id, _), (_, b) = pair
    res = await _send(client, b, a_id, course, slot)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == code


async def test_send_to_self_and_unknown(client, pair):
    (a_id, a), _ = pair
    res = await _send(client, a, a_id)
    assert res.json()["error"]["code"] == "SELF_REQUEST"
    res = await _send(client, a, 999)
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RECIPIENT_NOT_FOUND"


async def test_outsider_forbidden(client, pair, signup):
    (a_id, _), (_, b) = pair
    _, outsider = await signup("c@clemson.edu")
    req = (await _send(client, b, a_id)).json()
    for action in ("accept", "decline", "cancel"):
        res = await client.post(f"/api/v1/requests/{req['id']}/{action}", headers=outsider)
        assert res.status_code == 403
        assert res.json()["error"]["code"] == "NOT_AUTHORIZED"


async def test_unknown_request_404(client, pair):
    (_, a), _ = pair
    res = await client.post("/api/v1/requests/12345/accept", headers=a)
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "REQUEST_NOT_FOUND"


async def test_requests_view(client, pair):
    (a_id, a), (b_id, b) = pair
    outgoing = (await _send(client, a, b_id)).json()
    incoming = (await _send(client, b, a_id)).json()
    res = await client.get("/api/v1/requests", headers=a)
    body = res.json()
    assert [r["id"] for r in body["outgoing"]] == [outgoing["id"]]
    assert [r["id"] for r in body["incoming"]] == [incoming["id"]]
    assert set(body["incoming"][0]) == {
        "id", "from_user_id", "to_user_id", "course", "time_slot",
        "status", "created_at",
    }


async def test_malformed_body_gets_validation_envelope(client, pair):
    _, (_, b) = pair
    res = await client.post("/api/v1/requests", headers=b, json={
        "to_user_id": "abc", "course": "CS101", "time_slot": "Mon10",
    })
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["category"] == "validation"
    assert [d["field"] for d in error["details"]] == ["body.to_user_id"]


async def test_unexpected_fault_is_opaque_500(stores, signup):
    _, headers = await signup("fault@clemson.edu")

    def broken_lifecycle():
        raise RuntimeError("ledger exploded at 0xdeadbeef")

    app.dependency_overrides[get_request_lifecycle] = broken_lifecycle
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app, raise_app_exceptions=False),
            base_url="http://test",
        ) as c:
            res = await c.get("/api/v1/requests", headers=headers)
    finally:
        app.dependency_overrides.pop(get_request_lifecycle, None)

    assert res.status_code == 500
    error = res.json()["error"]
    assert error["code"] == "INTERNAL_ERROR"
    assert error["message"] == "An unexpected error occurred"
    assert "deadbeef" not in res.text
