"""In-Memory Stores: Identity Store and Request Ledger behind one lock each.

Invariants:
    - Ids are assigned here, monotonically from 1, never reused
    - Each store guards id assignment, duplicate checks and update() with a single RLock
    - update() stores the mutator's return value only if the mutator did not raise
    - all() / for_user() return lists in id (insertion) order
    - Nothing is ever deleted

Design Decisions:
    - Memory-resident only: state is lost on restart (single-process uvicorn)
    - Singleton store_manager initialized on startup by the FastAPI lifespan,
      replaced wholesale by tests via init_stores()
"""

import logging
import threading
from dataclasses import replace
from typing import Callable

from studymatch.core.domain_types import RequestId, UserId
from studymatch.core.errors import (
    DuplicateUserError, RequestNotFoundError, UserNotFoundError,
)
from studymatch.core.records import SessionRequest, User

logger = logging.getLogger(__name__)


class InMemoryUserStore:
    """Identity Store: users keyed by id, with a username index."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._users: dict[UserId, User] = {}
        self._by_username: dict[str, UserId] = {}
        self._next_id = 1

    def find_by_username(self, username: str) -> User | None:
        with self._lock:
            user_id = self._by_username.get(username)
            return self._users.get(user_id) if user_id is not None else None

    def find_by_id(self, user_id: UserId) -> User | None:
        with self._lock:
            return self._users.get(user_id)

    def insert(self, user: User) -> User:
        with self._lock:
            if user.username in self._by_username:
                raise DuplicateUserError(user.username)
            stored = replace(user, id=UserId(self._next_id))
            self._next_id += 1
            self._users[stored.id] = stored
            self._by_username[stored.username] = stored.id
            return stored

    def all(self) -> list[User]:
        with self._lock:
            return list(self._users.values())

    def update(self, user_id: UserId, mutator: Callable[[User], User]) -> User:
        with self._lock:
            current = self._users.get(user_id)
            if current is None:
                raise UserNotFoundError(user_id)
            updated = mutator(current)
            if updated.id != current.id or updated.username != current.username:
                raise ValueError("user id and username are immutable")
            self._users[user_id] = updated
            return updated


class InMemoryRequestLedger:
    """Request Ledger: append-only history of session requests."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._requests: dict[RequestId, SessionRequest] = {}
        self._next_id = 1

    def insert(self, request: SessionRequest) -> SessionRequest:
        with self._lock:
            stored = replace(request, id=RequestId(self._next_id))
            self._next_id += 1
            self._requests[stored.id] = stored
            return stored

    def find_by_id(self, request_id: RequestId) -> SessionRequest | None:
        with self._lock:
            return self._requests.get(request_id)

    def for_user(self, user_id: UserId) -> list[SessionRequest]:
        with self._lock:
            return [r for r in self._requests.values() if r.involves(user_id)]

    def all(self) -> list[SessionRequest]:
        with self._lock:
            return list(self._requests.values())

    def update(
        self,
        request_id: RequestId,
        mutator: Callable[[SessionRequest], SessionRequest],
    ) -> SessionRequest:
        with self._lock:
            current = self._requests.get(request_id)
            if current is None:
                raise RequestNotFoundError(request_id)
            updated = mutator(current)
            if updated.id != current.id or updated.created_at != current.created_at:
                raise ValueError("request id and created_at are immutable")
            self._requests[request_id] = updated
            return updated


class StoreManager:
    """Holds the process-wide Identity Store and Request Ledger."""

    def __init__(self) -> None:
        self.users = InMemoryUserStore()
        self.requests = InMemoryRequestLedger()


# Singleton (initialized on startup)
store_manager: StoreManager | None = None


def init_stores() -> StoreManager:
    global store_manager
    store_manager = StoreManager()
    logger.info("In-memory stores initialized")
    return store_manager


def get_store_manager() -> StoreManager:
    if not store_manager:
        raise RuntimeError("Stores not initialized")
    return store_manager
