from __future__ import annotations

"""Personal name casing."""

__all__ = [
    "normalize_name",
]


def normalize_name(raw: str) -> str:
    """Canonicalize a free-text personal name to title case per word.

    Only the first character of each token is touched, and only when it is a
    letter: ``"DE LUCA"`` becomes ``"De Luca"`` while ``"(anna)"`` stays as is.
    Idempotent.
    """
    tokens = raw.strip().lower().split()
    return " ".join(_capitalize_token(t) for t in tokens)


def _capitalize_token(token: str) -> str:
    first = token[0]
    if not first.isalpha():
        return token
    cap = first.title()
    # letters such as U+0149 title-case to several characters or do not
    # lower back to themselves; leave those tokens as they are
    if len(cap) != 1 or cap.lower() != first:
        return token
    return cap + token[1:]
