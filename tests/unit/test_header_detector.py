from __future__ import annotations

import pytest

from bday_alert.models.raw_table import Role
from bday_alert.services.header_detector import detect_headers, header_tokens


def test_header_tokens():
    """Test header tokenisation."""
    assert header_tokens("Data di nascita") == ["data", "di", "nascita"]
    assert header_tokens("  COGNOME/Nome ") == ["cognome", "nome"]
    assert header_tokens("Unità") == ["unità"]
    assert header_tokens("---") == []


def test_detect_registry_headers():
    """Test detection on a typical registry header row."""
    roles = detect_headers(["Cognome", "Nome", "Data di nascita", "Unità"])
    assert roles == {
        Role.SURNAME: 0,
        Role.GIVEN_NAME: 1,
        Role.BIRTH_DATE: 2,
        Role.UNIT: 3,
    }


def test_nome_is_not_matched_inside_cognome():
    """Test whole-word matching of "nome"."""
    roles = detect_headers(["Cognome", "Codice socio", "Nome"])
    assert roles[Role.SURNAME] == 0
    assert roles[Role.GIVEN_NAME] == 2


@pytest.mark.parametrize(
    "headers",
    [
        ["Cognome", "Nome"],
        ["Nome", "Cognome"],
        ["ID", "COGNOME", "Sesso", "NOME", "Data"],
        ["nome", "x", "y", "cognome"],
    ],
)
def test_surname_and_given_name_bind_to_different_columns(headers: list[str]):
    roles = detect_headers(headers)
    assert roles[Role.SURNAME] != roles[Role.GIVEN_NAME]
    assert headers[roles[Role.SURNAME]].lower() == "cognome"
    assert headers[roles[Role.GIVEN_NAME]].lower() == "nome"


def test_birth_date_prefers_nascita_over_data():
    """Test "nascita" has priority over "data"."""
    roles = detect_headers(["Data iscrizione", "Cognome", "Data di nascita"])
    assert roles[Role.BIRTH_DATE] == 2


def test_birth_date_falls_back_to_data():
    """Test "data" used when no header mentions "nascita"."""
    roles = detect_headers(["Cognome", "Data"])
    assert roles[Role.BIRTH_DATE] == 1


def test_unit_candidates():
    """Test every unit header candidate."""
    assert detect_headers(["Branca"])[Role.UNIT] == 0
    assert detect_headers(["Reparto"])[Role.UNIT] == 0
    assert detect_headers(["Unita'"])[Role.UNIT] == 0


def test_first_header_wins_for_same_keyword():
    """Test first header in order wins for one keyword."""
    roles = detect_headers(["Nome", "Nome (secondo)"])
    assert roles[Role.GIVEN_NAME] == 0


def test_missing_roles_are_absent():
    """Test unmatched roles are missing from the map."""
    roles = detect_headers(["Cognome", "Nome"])
    assert Role.BIRTH_DATE not in roles
    assert Role.UNIT not in roles


def test_no_headers():
    assert detect_headers([]) == {}
