"""Input Normalization: coerce raw form/query values into domain shapes.

Invariants:
    - Multi-select fields arrive as None, a single string, or a list of strings;
      they always leave as a frozenset of stripped, non-blank strings
    - Optional text fields leave as a stripped string or None (blank means absent)
"""

from typing import Iterable


def normalize_multi_select(value: str | Iterable[str] | None) -> frozenset[str]:
    if value is None:
        return frozenset()
    if isinstance(value, str):
        value = [value]
    return frozenset(v.strip() for v in value if v and v.strip())


def normalize_optional_text(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None
