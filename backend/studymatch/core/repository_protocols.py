"""Boundary Protocols: contracts between core and shell.

Invariants:
    - Core NEVER imports from infrastructure; implementations are injected by the shell
    - Stores assign ids; callers pass records with id == 0
    - update() applies a mutator atomically: if it raises, nothing is stored
    - Neither store exposes a delete operation

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Synchronous methods: stores are memory-resident, there is no IO to await
"""

from typing import Callable, Protocol

from studymatch.core.domain_types import RequestId, UserId
from studymatch.core.records import SessionRequest, User


class UserRepository(Protocol):
    """Identity Store contract."""
    def find_by_username(self, username: str) -> User | None: ...
    def find_by_id(self, user_id: UserId) -> User | None: ...
    def insert(self, user: User) -> User: ...
    def all(self) -> list[User]: ...
    def update(
        self, user_id: UserId, mutator: Callable[[User], User],
    ) -> User: ...


class RequestRepository(Protocol):
    """Request Ledger contract."""
    def insert(self, request: SessionRequest) -> SessionRequest: ...
    def find_by_id(self, request_id: RequestId) -> SessionRequest | None: ...
    def for_user(self, user_id: UserId) -> list[SessionRequest]: ...
    def all(self) -> list[SessionRequest]: ...
    def update(
        self,
        request_id: RequestId,
        mutator: Callable[[SessionRequest], SessionRequest],
    ) -> SessionRequest: ...
