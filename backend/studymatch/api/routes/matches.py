"""Matching Routes: user listing, ranked suggestions and classmate search.

Invariants:
    - Query input is normalized at this boundary: repeated `availability`
      keys become a set, blank `course` / `major` mean "no filter"
    - Responses preserve the Matching Engine's ordering
"""

from fastapi import APIRouter, Query

from studymatch.api.dependencies import CurrentUser, MatchmakingDep
from studymatch.core.matching import SearchFilters
from studymatch.core.normalize_input import (
    normalize_multi_select, normalize_optional_text,
)
from studymatch.schemas.user import MatchResponse, UserSummary

router = APIRouter(prefix="/api/v1", tags=["matching"])


@router.get("/users", response_model=list[UserSummary])
def list_users(me: CurrentUser, matchmaking: MatchmakingDep):
    return [UserSummary.from_user(u) for u in matchmaking.user_listing()]


@router.get("/matches/suggested", response_model=list[MatchResponse])
def suggested(me: CurrentUser, matchmaking: MatchmakingDep):
    """Classmates sharing a course and a time slot, best first."""
    return [
        MatchResponse.from_match(m) for m in matchmaking.suggested_for(me.id)
    ]


@router.get("/matches/search", response_model=list[MatchResponse])
def search(
    me: CurrentUser,
    matchmaking: MatchmakingDep,
    course: str | None = Query(None),
    major: str | None = Query(None),
    availability: list[str] | None = Query(None),
):
    filters = SearchFilters(
        course=normalize_optional_text(course),
        major=normalize_optional_text(major),
        availability=normalize_multi_select(availability),
    )
    return [
        MatchResponse.from_match(m) for m in matchmaking.search(me.id, filters)
    ]
