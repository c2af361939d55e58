from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..models.birthday_record import UNDATED, BirthdayRecord, RecordValidationError

"""Manual add / edit / delete of birthday records.

Every function returns a new sequence; nothing is mutated in place. The
caller persists the result with store.save().
"""

__all__ = [
    "build_manual_record",
    "add_record",
    "replace_record",
    "remove_record",
    "toggle_unit",
]


def build_manual_record(
    given_name: str,
    surname: str,
    day: int,
    month: int,
    year: int | None = None,
    unit: str | None = None,
) -> BirthdayRecord:
    """Build a record from operator input.

    Names are trimmed but keep the casing the operator typed.

    Raises:
        RecordValidationError: day/month pair outside calendar bounds
    """
    if (day, month) == UNDATED:
        raise RecordValidationError("manual records need a birth day and month")
    unit_label = (unit or "").strip()
    return BirthdayRecord(
        given_name=given_name.strip(),
        surname=surname.strip(),
        day=day,
        month=month,
        unit=unit_label or None,
        year=year,
    )


def add_record(records: Sequence[BirthdayRecord], record: BirthdayRecord) -> list[BirthdayRecord]:
    return [*records, record]


def replace_record(
    records: Sequence[BirthdayRecord], index: int, record: BirthdayRecord
) -> list[BirthdayRecord]:
    """Replace the entry at ``index``; an index outside the sequence appends."""
    updated = list(records)
    if 0 <= index < len(updated):
        updated[index] = record
    else:
        updated.append(record)
    return updated


def remove_record(records: Sequence[BirthdayRecord], index: int) -> list[BirthdayRecord]:
    if not 0 <= index < len(records):
        raise IndexError(f"no record at position {index}")
    return [r for i, r in enumerate(records) if i != index]


def toggle_unit(subscriptions: Iterable[str], unit: str) -> set[str]:
    """Flip notification subscription for ``unit``."""
    current = set(subscriptions)
    if unit in current:
        current.remove(unit)
    else:
        current.add(unit)
    return current
