# src/auto_reload/reload/policies.py

from __future__ import annotations

"""
Usability policies: does a connectivity report justify starting a reload cycle?

first_match is the default and only looks at the first reported kind:
[wifi, none] is usable, [none, wifi] is not. any_match looks at every kind.
"""

from collections.abc import Callable, Sequence

from ..connectivity.models import ConnectionKind

UsabilityPolicy = Callable[[Sequence[ConnectionKind]], bool]

NETWORK_KINDS: frozenset[ConnectionKind] = frozenset({ConnectionKind.WIFI, ConnectionKind.MOBILE})


def first_match(kinds: Sequence[ConnectionKind]) -> bool:
    for kind in kinds:
        return kind in NETWORK_KINDS
    return False


def any_match(kinds: Sequence[ConnectionKind]) -> bool:
    return any(kind in NETWORK_KINDS for kind in kinds)


POLICIES: dict[str, UsabilityPolicy] = {
    "first_match": first_match,
    "any_match": any_match,
}


def get_policy(name: str) -> UsabilityPolicy:
    key = (name or "").strip().lower()
    try:
        return POLICIES[key]
    except KeyError:
        raise ValueError(
            f"Unknown usability policy {name!r}; expected one of: {', '.join(sorted(POLICIES))}"
        ) from None
