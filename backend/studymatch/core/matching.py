"""Matching Engine: shared courses, availability overlap, suggestions and search.

Invariants:
    - Pure: no store access, no mutation of the user snapshots passed in
    - shared_courses / overlapping_availability are symmetric set intersections
    - suggested_matches never returns the acting user, nor a candidate with an
      empty mutual-course set or an empty availability overlap
    - suggested_matches ordering: score descending, ties in enumeration order
    - search_classmates ordering: enumeration order
"""

from dataclasses import dataclass, field
from typing import Iterable

from studymatch.core.records import User


@dataclass(frozen=True)
class ClassmateMatch:
    """A candidate paired with what they have in common with the acting user."""

    user: User
    mutual_courses: frozenset[str]
    overlapping_availability: frozenset[str]

    @property
    def score(self) -> int:
        return len(self.mutual_courses) + len(self.overlapping_availability)


@dataclass(frozen=True)
class SearchFilters:
    """Optional search criteria. None / empty means the stage is skipped."""

    course: str | None = None
    major: str | None = None
    availability: frozenset[str] = field(default_factory=frozenset)


def shared_courses(a: User, b: User) -> frozenset[str]:
    return a.courses & b.courses


def overlapping_availability(a: User, b: User) -> frozenset[str]:
    return a.availability & b.availability


def _compare(me: User, candidate: User) -> ClassmateMatch:
    return ClassmateMatch(
        user=candidate,
        mutual_courses=shared_courses(me, candidate),
        overlapping_availability=overlapping_availability(me, candidate),
    )


def _others(me: User, candidates: Iterable[User]) -> list[User]:
    return [c for c in candidates if c.id != me.id]


def suggested_matches(
    me: User, candidates: Iterable[User],
) -> list[ClassmateMatch]:
    """Rank classmates sharing at least one course AND one time slot."""
    matches = [
        m for m in (_compare(me, c) for c in _others(me, candidates))
        if m.mutual_courses and m.overlapping_availability
    ]
    # sorted() is stable, so equal scores keep enumeration order
    return sorted(matches, key=lambda m: m.score, reverse=True)


def _same_major(candidate_major: str, wanted: str) -> bool:
    return candidate_major.strip().lower() == wanted.strip().lower()


def search_classmates(
    me: User, candidates: Iterable[User], filters: SearchFilters,
) -> list[ClassmateMatch]:
    """Filter classmates by course, major and availability, in input order."""
    pool = _others(me, candidates)

    if filters.course:
        pool = [c for c in pool if filters.course in c.courses]

    results = [_compare(me, c) for c in pool]

    if filters.major:
        results = [m for m in results if _same_major(m.user.major, filters.major)]

    if filters.availability:
        results = [
            m for m in results
            if m.overlapping_availability & filters.availability
        ]

    return results
