"""Matchmaking Service: runs the Matching Engine against live Identity Store data.

Invariants:
    - The acting user is re-fetched from the store on every call
    - Candidates are enumerated in store (id) order, which fixes tie ordering
"""

from studymatch.core.domain_types import UserId
from studymatch.core.errors import UserNotFoundError
from studymatch.core.matching import (
    ClassmateMatch, SearchFilters, search_classmates, suggested_matches,
)
from studymatch.core.records import User
from studymatch.core.repository_protocols import UserRepository


class MatchmakingService:
    """Suggestions, search and the public user listing."""

    def __init__(self, users: UserRepository):
        self.users = users

    def _me(self, user_id: UserId) -> User:
        me = self.users.find_by_id(user_id)
        if me is None:
            raise UserNotFoundError(user_id)
        return me

    def suggested_for(self, user_id: UserId) -> list[ClassmateMatch]:
        return suggested_matches(self._me(user_id), self.users.all())

    def search(
        self, user_id: UserId, filters: SearchFilters,
    ) -> list[ClassmateMatch]:
        return search_classmates(self._me(user_id), self.users.all(), filters)

    def user_listing(self) -> list[User]:
        return self.users.all()
