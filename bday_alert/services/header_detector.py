from __future__ import annotations

import logging
from collections.abc import Sequence

from ..models.raw_table import HeaderRoleMap, Role

"""Header row -> semantic role detection.

Headers are reduced to lower-case alphanumeric tokens and matched against a
fixed keyword list per role. Matching is on whole tokens only, so "Cognome"
never satisfies the "nome" keyword of the given-name role.

For each role the keywords are tried in priority order; the first header (in
header order) containing the keyword wins. A role with no match is left out
of the returned map.
"""

__all__ = [
    "ROLE_CANDIDATES",
    "detect_headers",
    "header_tokens",
]

logger = logging.getLogger(__name__)

ROLE_CANDIDATES: dict[Role, tuple[str, ...]] = {
    Role.SURNAME: ("cognome",),
    Role.GIVEN_NAME: ("nome",),
    Role.BIRTH_DATE: ("nascita", "data"),
    Role.UNIT: ("unita", "unità", "branca", "reparto"),
}


def header_tokens(header: str) -> list[str]:
    """Lower-case, turn every non-alphanumeric character into a space, split."""
    cleaned = "".join(ch if ch.isalnum() else " " for ch in header.lower())
    return cleaned.split()


def detect_headers(headers: Sequence[str]) -> HeaderRoleMap:
    tokens = [set(header_tokens(h)) for h in headers]
    roles: HeaderRoleMap = {}
    for role, candidates in ROLE_CANDIDATES.items():
        idx = _find_column(tokens, candidates)
        if idx is not None:
            roles[role] = idx
            logger.debug(f"header role {role.value} -> index={idx} header='{headers[idx]}'")
        else:
            logger.debug(f"header role {role.value} not found")
    return roles


def _find_column(tokens: list[set[str]], candidates: Sequence[str]) -> int | None:
    for candidate in candidates:
        for idx, words in enumerate(tokens):
            if candidate in words:
                return idx
    return None
