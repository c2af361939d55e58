from __future__ import annotations

import pytest

from bday_alert.services.unit_normalizer import COCA, EG, LC, RS, normalize_unit


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("Co.Ca.", COCA),
        ("Comunità Capi", COCA),
        ("adulti", COCA),
        ("LC", LC),
        ("L/C", LC),
        ("l.c.", LC),
        ("Branco Lupetti 2", LC),
        ("Cerchio Coccinelle", LC),
        ("E/G", EG),
        ("E-G", EG),
        ("Reparto Esploratori", EG),
        ("Guide", EG),
        ("R/S", RS),
        ("R-S", RS),
        ("Clan Rover", RS),
        ("Noviziato", RS),
    ],
)
def test_normalize_unit_buckets(raw: str, expected: str):
    """Test unit labels map to their taxonomy bucket."""
    assert normalize_unit(raw) == expected


def test_normalize_unit_bucket_order_first_match_wins():
    """Test buckets are checked in order."""
    # contains both "coca" and "lc": the adult bucket is tested first
    assert normalize_unit("coca lc") == COCA


def test_normalize_unit_unknown_label_kept_verbatim():
    """Test unknown labels come back trimmed."""
    assert normalize_unit("  Staff Zona  ") == "Staff Zona"


def test_normalize_unit_unknown_label_keeps_digits_and_case():
    assert normalize_unit(" Gruppo 12 ") == "Gruppo 12"


def test_normalize_unit_empty():
    """Test empty input gives empty output."""
    assert normalize_unit("") == ""
    assert normalize_unit("   ") == ""


def test_normalize_unit_digits_only_passes_through():
    assert normalize_unit("12") == "12"
