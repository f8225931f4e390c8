"""Translate a flat field -> value mapping into a conjunction of predicates over users.

Used by both search and export so the two endpoints always select the same rows.
"""

import re
from collections.abc import Mapping

from sqlalchemy import ColumnElement, func
from sqlalchemy.orm import Query

from app.models import User

FILTER_USERNAME = "username"
FILTER_AGE = "age"
SUPPORTED_FILTERS = (FILTER_USERNAME, FILTER_AGE)

# Ages are 32-bit signed integers; anything else leaves the filter unapplied.
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
_INTEGER_RE = re.compile(r"\s*[+-]?[0-9]+\s*", re.ASCII)


def _parse_int(value: str) -> int | None:
    if not isinstance(value, str) or _INTEGER_RE.fullmatch(value) is None:
        return None
    if len(value.strip().lstrip("+-").lstrip("0")) > len(str(INT32_MAX)):
        return None
    number = int(value)
    if number < INT32_MIN or number > INT32_MAX:
        return None
    return number


def build_user_filters(filters: Mapping[str, str]) -> list[ColumnElement[bool]]:
    """
    Build predicates for the supported filter keys (matched case-insensitively).

    username: case-insensitive substring. age: exact match, skipped if not an integer.
    Unknown keys are ignored.
    """
    predicates: list[ColumnElement[bool]] = []
    for key, value in filters.items():
        name = key.lower()
        if name == FILTER_USERNAME:
            predicates.append(
                func.upper(User.username).contains(value.upper(), autoescape=True)
            )
        elif name == FILTER_AGE:
            age = _parse_int(value)
            if age is not None:
                predicates.append(User.age == age)
    return predicates


def filter_users(query: Query, filters: Mapping[str, str]) -> Query:
    """Apply all predicates (AND) to a User query."""
    predicates = build_user_filters(filters)
    if predicates:
        query = query.filter(*predicates)
    return query
