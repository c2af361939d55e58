from __future__ import annotations

import re

"""Organizational unit label normalization.

Maps operator-entered unit labels ("Branco 2", "E.G.", "reparto esploratori",
"Clan R-S") onto the four AGESCI age branches. Labels matching no bucket are
kept verbatim (trimmed) so custom unit names survive the import.
"""

__all__ = [
    "normalize_unit",
    "UNIT_BUCKETS",
    "COCA",
    "LC",
    "EG",
    "RS",
]

COCA = "Co.Ca."
LC = "L/C"
EG = "E/G"
RS = "R/S"

# Order matters: first bucket with a matching keyword wins.
UNIT_BUCKETS: tuple[tuple[str, tuple[str, ...]], ...] = (
    (COCA, ("coca", "comunit", "adult")),
    (LC, ("lc", "l c", "lupetti", "coccinell")),
    (EG, ("eg", "e g", "esploratori", "guide")),
    (RS, ("rs", "r s", "rover", "scolte", "noviziato", "novizi")),
)

_DIGITS = re.compile(r"\d")


def _clean(raw: str) -> str:
    s = _DIGITS.sub("", raw.strip().lower()).strip()
    return s.replace(".", "").replace("-", " ").replace("/", "").strip()


def normalize_unit(raw: str) -> str:
    """Return the bucket label for ``raw``, else ``raw`` trimmed.

    Empty input returns an empty string (treated as "no unit" upstream).
    """
    if not raw.strip():
        return ""
    cleaned = _clean(raw)
    for label, keywords in UNIT_BUCKETS:
        if any(k in cleaned for k in keywords):
            return label
    return raw.strip()
