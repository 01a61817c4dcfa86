"""Wildcard-aware permission checks.

Pure functions over a set of granted permission strings. A grant matches a
requested permission when it is the global ``*``, the exact string, or a
``prefix.*`` wildcard for a strict prefix of the requested path:

    >>> has_permission({"event.*"}, "event.create")
    True
    >>> has_permission({"a.b.*"}, "a.b")
    False
"""

from __future__ import annotations

from typing import AbstractSet, Iterable, Iterator

from .models import GLOBAL_WILDCARD


def wildcard_candidates(permission: str) -> Iterator[str]:
    """Yield ``prefix.*`` grants that would cover ``permission``, longest first.

    Neither the full path nor the empty prefix is produced, so a single
    segment permission yields nothing.
    """
    parts = permission.split(".")
    for i in range(len(parts) - 1, 0, -1):
        yield ".".join(parts[:i]) + ".*"


def has_permission(granted: AbstractSet[str], permission: str) -> bool:
    """Check one permission against the granted set."""
    if GLOBAL_WILDCARD in granted:
        return True
    if permission in granted:
        return True
    return any(candidate in granted for candidate in wildcard_candidates(permission))


def has_any_permission(granted: AbstractSet[str], permissions: Iterable[str]) -> bool:
    """True if at least one of ``permissions`` is granted."""
    return any(has_permission(granted, p) for p in permissions)


def has_all_permissions(granted: AbstractSet[str], permissions: Iterable[str]) -> bool:
    """True if every one of ``permissions`` is granted (vacuously for none)."""
    return all(has_permission(granted, p) for p in permissions)
