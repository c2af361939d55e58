from __future__ import annotations

import pytest

from bday_alert.services.name_normalizer import normalize_name


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("ROSSI", "Rossi"),
        ("  mario  ", "Mario"),
        ("de   LUCA", "De Luca"),
        ("maria\tgrazia", "Maria Grazia"),
        ("", ""),
        ("   ", ""),
        ("3b rossi", "3b Rossi"),
        ("(anna)", "(anna)"),
        ("ÉLODIE", "Élodie"),
        ("ŉa", "ŉa"),
        ("ǆEMAL", "ǅemal"),
    ],
)
def test_normalize_name(raw: str, expected: str):
    """Test name casing normalisation."""
    assert normalize_name(raw) == expected


@pytest.mark.parametrize(
    "raw", ["ROSSI", "de luca", "d'ANGELO", "  o'neil  mac  ", "strauß", "123", "ÀLVARO-JOSÉ", "ŉa", "ǆemal"]
)
def test_normalize_name_idempotent(raw: str):
    """Test normalising twice changes nothing."""
    once = normalize_name(raw)
    assert normalize_name(once) == once
