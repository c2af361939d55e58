from __future__ import annotations

from collections.abc import Collection, Iterable
from datetime import date

from ..models.birthday_record import BirthdayRecord
from ..models.notification_summary import NotificationSummary

"""Daily birthday matching and notification summary.

A record matches when its day and month equal today's and its unit passes the
subscription filter. An empty subscription set means every unit is selected,
including records with no unit at all; a non-empty set only lets through
records whose unit is a member.
"""

__all__ = [
    "NO_BIRTHDAYS_TITLE",
    "is_birthday_today",
    "select_birthdays",
    "format_detail_line",
    "build_title",
    "match_birthdays",
]

NO_BIRTHDAYS_TITLE = "Nessun compleanno oggi"
SINGLE_TITLE = "Oggi è il compleanno di {name}"
DUAL_TITLE = "Oggi 2 compleanni in unità AGESCI 🎂"
MANY_TITLE = "Oggi {count} compleanni in unità AGESCI 🎂"


def is_birthday_today(record: BirthdayRecord, today: date, subscribed_units: Collection[str]) -> bool:
    if record.month != today.month or record.day != today.day:
        return False
    if not subscribed_units:
        return True
    return record.unit is not None and record.unit in subscribed_units


def select_birthdays(
    records: Iterable[BirthdayRecord], today: date, subscribed_units: Collection[str]
) -> list[BirthdayRecord]:
    return [r for r in records if is_birthday_today(r, today, subscribed_units)]


def format_detail_line(record: BirthdayRecord) -> str:
    if record.unit:
        return f"{record.full_name} ({record.unit})"
    return record.full_name


def build_title(matched: list[BirthdayRecord]) -> str:
    count = len(matched)
    if count == 0:
        return NO_BIRTHDAYS_TITLE
    if count == 1:
        return SINGLE_TITLE.format(name=matched[0].full_name)
    if count == 2:
        return DUAL_TITLE
    return MANY_TITLE.format(count=count)


def match_birthdays(
    records: Iterable[BirthdayRecord], today: date, subscribed_units: Collection[str]
) -> NotificationSummary:
    """Compute today's birthdays and their notification summary.

    Args:
        records: Snapshot of the canonical record sequence
        today: Reference date (only day and month are compared)
        subscribed_units: Unit labels with notifications on; empty means all

    Returns:
        NotificationSummary with one detail line per match, in record order.
        A zero count means there is nothing to notify.
    """
    matched = select_birthdays(records, today, subscribed_units)
    return NotificationSummary(
        count=len(matched),
        title=build_title(matched),
        detail_lines=tuple(format_detail_line(r) for r in matched),
    )
