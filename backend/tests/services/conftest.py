"""Service test fixtures: fresh in-memory stores + FastAPI test client.

Invariants:
    - Every test gets brand-new stores (module singleton replaced via init_stores)
    - The client talks to the real app over ASGITransport; lifespan is not run,
      so stores are initialized here
"""

import pytest
from httpx import ASGITransport, AsyncClient

import studymatch.infrastructure.memory_store as store_module
from studymatch.infrastructure.memory_store import init_stores
from studymatch.main import app
from studymatch.services.accounts import AccountService
from studymatch.services.request_lifecycle import RequestLifecycleManager


@pytest.fixture
def stores():
    original = store_module.store_manager
    manager = init_stores()
    yield manager
    store_module.store_manager = original


@pytest.fixture
def accounts(stores):
    return AccountService(stores.users, bcrypt_rounds=4)


@pytest.fixture
def lifecycle(stores):
    return RequestLifecycleManager(stores.users, stores.requests)


@pytest.fixture
async def client(stores):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def register_payload():
    def _payload(username="tiger@clemson.edu", **overrides):
        body = {
            "username": username,
            "password": "password123",
            "confirmPassword": "password123",
            "firstName": "John",
            "lastName": "Doe",
            "major": "Computer Science",
        }
        body.update(overrides)
        return body
    return _payload


@pytest.fixture
def signup(client, register_payload):
    """Register + log in; returns (user_id, auth headers)."""
    async def _signup(username, **overrides):
        res = await client.post(
            "/api/v1/auth/register", json=register_payload(username, **overrides),
        )
        assert res.status_code == 201, res.text
        login = await client.post(
            "/api/v1/auth/login",
            json={"username": username, "password": "password123"},
        )
        assert login.status_code == 200, login.text
        token = login.json()["access_token"]
        return res.json()["id"], {"Authorization": f"Bearer {token}"}
    return _signup
