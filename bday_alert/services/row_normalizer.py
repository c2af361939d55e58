from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from ..models.birthday_record import BirthdayRecord
from ..models.raw_table import HeaderRoleMap, RawRow, RawTable, Role
from ..models.row_issue import BLANK_ROW, DUPLICATE_ROW, UNRESOLVED_DATE, RowIssue
from .date_resolver import resolve_date
from .name_normalizer import normalize_name
from .unit_normalizer import normalize_unit

"""Raw rows -> canonical BirthdayRecords.

Steps per data row:
1. Read surname / given name through the role map (missing role -> "") and
   normalize their casing
2. Resolve the birth date: native cell value first, display text second
3. Normalize the unit label (missing role or empty -> no unit)
4. Drop the row when both names are blank and no date resolved

Rows with a name but no resolvable date are kept as undated records (day and
month 0). After all rows are built, exact duplicates are collapsed.

Data quality problems never raise; they are reported through the optional
``on_issue`` callback. Only a role map pointing outside the header row is an
error (HeaderMappingError).
"""

__all__ = [
    "HeaderMappingError",
    "normalize_rows",
    "dedupe_records",
]

logger = logging.getLogger(__name__)

IssueCallback = Callable[[RowIssue], None]

# spreadsheet row number of the first data row (header is row 1)
FIRST_DATA_ROW = 2


class HeaderMappingError(IndexError):
    """Raised when a role map references a column outside the header row."""


def _check_roles(table: RawTable, roles: HeaderRoleMap) -> None:
    width = len(table.headers)
    for role, idx in roles.items():
        if not 0 <= idx < width:
            raise HeaderMappingError(
                f"role '{role.value}' mapped to column {idx}, table has {width} columns"
            )


def _field(row: RawRow, roles: HeaderRoleMap, role: Role) -> str:
    idx = roles.get(role)
    if idx is None:
        return ""
    return row.cell(idx).strip()


def _build_record(
    row: RawRow, roles: HeaderRoleMap, row_number: int, source: str, on_issue: IssueCallback | None
) -> BirthdayRecord | None:
    surname = normalize_name(_field(row, roles, Role.SURNAME))
    given_name = normalize_name(_field(row, roles, Role.GIVEN_NAME))

    birth = None
    date_text = ""
    date_idx = roles.get(Role.BIRTH_DATE)
    if date_idx is not None:
        date_text = row.cell(date_idx)
        birth = resolve_date(row.value(date_idx), date_text)

    unit = normalize_unit(_field(row, roles, Role.UNIT))

    if not surname and not given_name and birth is None:
        if on_issue is not None:
            on_issue(RowIssue.create(source, row_number, BLANK_ROW, "no name and no birth date"))
        return None

    if birth is None:
        if on_issue is not None:
            on_issue(
                RowIssue.create(
                    source, row_number, UNRESOLVED_DATE, f"unresolved birth date '{date_text.strip()}'"
                )
            )
        return BirthdayRecord(
            given_name=given_name, surname=surname, day=0, month=0, unit=unit or None
        )

    return BirthdayRecord(
        given_name=given_name,
        surname=surname,
        day=birth.day,
        month=birth.month,
        unit=unit or None,
        year=birth.year,
    )


def dedupe_records(
    records: Iterable[BirthdayRecord],
    on_duplicate: Callable[[int, BirthdayRecord], None] | None = None,
) -> list[BirthdayRecord]:
    """Drop later exact duplicates of (surname, given_name, date, unit).

    Order-stable and idempotent; records differing in any key field are kept.
    ``on_duplicate`` receives the position of each dropped record.
    """
    seen: set[tuple[str, str, str, str]] = set()
    kept: list[BirthdayRecord] = []
    for pos, record in enumerate(records):
        key = record.identity()
        if key in seen:
            if on_duplicate is not None:
                on_duplicate(pos, record)
            continue
        seen.add(key)
        kept.append(record)
    return kept


def normalize_rows(
    table: RawTable,
    roles: HeaderRoleMap,
    *,
    source: str = "<memory>",
    on_issue: IssueCallback | None = None,
) -> list[BirthdayRecord]:
    """Turn the data rows of ``table`` into de-duplicated BirthdayRecords.

    Args:
        table: Header row plus data rows from the spreadsheet reader
        roles: Column index per role, as returned by detect_headers()
        source: File name used in issue records
        on_issue: Receives a RowIssue for every dropped or degraded row

    Raises:
        HeaderMappingError: a role index is outside the header row
    """
    _check_roles(table, roles)

    built: list[BirthdayRecord] = []
    row_numbers: list[int] = []
    for offset, row in enumerate(table.rows):
        row_number = FIRST_DATA_ROW + offset
        record = _build_record(row, roles, row_number, source, on_issue)
        if record is None:
            continue
        built.append(record)
        row_numbers.append(row_number)
        logger.debug(
            f"parsed row {row_number}: surname='{record.surname}' given_name='{record.given_name}' "
            f"unit='{record.unit}' birth='{record.date_key}'"
        )

    def _report_duplicate(pos: int, record: BirthdayRecord) -> None:
        if on_issue is not None:
            on_issue(
                RowIssue.create(source, row_numbers[pos], DUPLICATE_ROW, f"duplicate of '{record.full_name}'")
            )

    records = dedupe_records(built, on_duplicate=_report_duplicate)
    logger.debug(f"{source}: {len(table.rows)} data rows -> {len(records)} records")
    return records
