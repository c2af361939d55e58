from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""BirthdayRecord model for the birthday alert tool.

A BirthdayRecord is the canonical entity produced by the row normalizer (or by
a manual edit) and persisted by the store. Records are immutable: edits replace
a whole entry in the stored sequence.
"""

__all__ = [
    "BirthdayRecord",
    "RecordValidationError",
    "PLACEHOLDER_NAME",
    "UNDATED",
    "is_valid_day_month",
]

PLACEHOLDER_NAME = "Senza nome"

# day/month pair used for rows whose birth date could not be resolved
UNDATED = (0, 0)

# February accepts 29 because the year is not required to confirm leap days
_DAYS_IN_MONTH = {
    1: 31, 2: 29, 3: 31, 4: 30, 5: 31, 6: 30,
    7: 31, 8: 31, 9: 30, 10: 31, 11: 30, 12: 31,
}


class RecordValidationError(ValueError):
    """Raised when a record is built with an impossible day/month pair."""


def is_valid_day_month(day: int, month: int) -> bool:
    max_day = _DAYS_IN_MONTH.get(month)
    if max_day is None:
        return False
    return 1 <= day <= max_day


@dataclass(frozen=True)
class BirthdayRecord:
    """Canonical birthday entry.

    Attributes:
        given_name: Normalized given name (may be empty)
        surname: Normalized surname (may be empty)
        day: Day of month 1-31, or 0 for an undated record
        month: Month 1-12, or 0 for an undated record
        unit: Unit label (taxonomy label or operator text), None when unknown
        year: Birth year when a full date was resolved
    """
    given_name: str
    surname: str
    day: int
    month: int
    unit: str | None = None
    year: int | None = None

    def __post_init__(self) -> None:
        if (self.day, self.month) == UNDATED:
            return
        if not is_valid_day_month(self.day, self.month):
            raise RecordValidationError(
                f"invalid birthday day={self.day} month={self.month}"
            )

    @property
    def is_dated(self) -> bool:
        return (self.day, self.month) != UNDATED

    @property
    def full_name(self) -> str:
        name = " ".join(p for p in (self.given_name, self.surname) if p.strip())
        return name or PLACEHOLDER_NAME

    @property
    def display_name(self) -> str:
        """Surname-first name used by listings."""
        name = " ".join(p for p in (self.surname, self.given_name) if p.strip())
        return name or PLACEHOLDER_NAME

    @property
    def date_key(self) -> str:
        """Resolved date as text: ISO when the year is known, ``--mm-dd`` otherwise."""
        if not self.is_dated:
            return ""
        if self.year is None:
            return f"--{self.month:02d}-{self.day:02d}"
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def identity(self) -> tuple[str, str, str, str]:
        """Composite key used for exact-duplicate detection."""
        return (self.surname, self.given_name, self.date_key, self.unit or "")

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "given_name": self.given_name,
            "surname": self.surname,
        }
        if self.unit is not None:
            data["unit"] = self.unit
        data["day"] = self.day
        data["month"] = self.month
        if self.year is not None:
            data["year"] = self.year
        return data

    @staticmethod
    def from_dict(data: dict[str, Any]) -> BirthdayRecord:
        """Build a record from its persisted layout.

        Raises:
            RecordValidationError: day/month pair out of calendar bounds
            KeyError / TypeError / ValueError: malformed payload
        """
        unit = data.get("unit")
        year = data.get("year")
        return BirthdayRecord(
            given_name=str(data.get("given_name", "")),
            surname=str(data.get("surname", "")),
            day=int(data["day"]),
            month=int(data["month"]),
            unit=str(unit) if unit is not None else None,
            year=int(year) if year is not None else None,
        )
