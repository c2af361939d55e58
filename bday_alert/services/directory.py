from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from ..models.birthday_record import BirthdayRecord

"""Listing helpers over the stored record sequence.

Entries keep the position of their record in the stored sequence so that an
edit or removal picked from a filtered/sorted listing targets the right one.
"""

__all__ = [
    "DirectoryEntry",
    "available_units",
    "search_records",
    "sort_by_birthday",
]


@dataclass(frozen=True)
class DirectoryEntry:
    index: int  # position in the stored sequence
    record: BirthdayRecord

    @property
    def date_label(self) -> str:
        if not self.record.is_dated:
            return "--/--"
        return f"{self.record.day:02d}/{self.record.month:02d}"


def available_units(records: Iterable[BirthdayRecord]) -> list[str]:
    """Distinct unit labels, sorted."""
    return sorted({r.unit for r in records if r.unit})


def search_records(
    records: Sequence[BirthdayRecord], query: str = "", unit: str | None = None
) -> list[DirectoryEntry]:
    """Filter by free text (display name or unit, case-insensitive) and exact unit."""
    q = query.strip().lower()
    entries: list[DirectoryEntry] = []
    for idx, record in enumerate(records):
        if q:
            in_name = q in record.display_name.lower()
            in_unit = record.unit is not None and q in record.unit.lower()
            if not (in_name or in_unit):
                continue
        if unit and record.unit != unit:
            continue
        entries.append(DirectoryEntry(index=idx, record=record))
    return entries


def sort_by_birthday(entries: Iterable[DirectoryEntry]) -> list[DirectoryEntry]:
    """Calendar order (month, day, then year); undated entries last by name."""
    def key(entry: DirectoryEntry) -> tuple:
        r = entry.record
        if not r.is_dated:
            return (1, 0, 0, 0, r.display_name)
        return (0, r.month, r.day, r.year or 0, r.display_name)

    return sorted(entries, key=key)
