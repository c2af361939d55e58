from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Collection, Sequence
from dataclasses import dataclass
from datetime import UTC, date, datetime
from pathlib import Path
from zoneinfo import ZoneInfo

from ..excel.reader import ExcelReadError, read_raw_table
from ..logging.issue_log import IssueLogBuffer
from ..models.birthday_record import BirthdayRecord
from ..models.import_result import FileStat, ImportResult
from ..models.notification_summary import NotificationSummary
from ..models.raw_table import RawTable, Role
from ..models.row_issue import BLANK_ROW, DUPLICATE_ROW, UNREADABLE_FILE, RowIssue
from ..store.json_store import BirthdayStore
from .daily_matcher import match_birthdays
from .header_detector import detect_headers
from .progress import ImportProgress
from .row_normalizer import IssueCallback, dedupe_records, normalize_rows

"""Service orchestration for the birthday alert tool.

Two entry points:
- import_files(): workbooks -> header detection -> row normalization ->
  cross-file dedup -> store.save() (whole sequence replaced)
- run_once(): store snapshot -> daily matcher -> NotificationSummary. The
  daily scheduler and the on-demand "check now" trigger both call this;
  run_check() also returns the size of the snapshot it matched against.
"""

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Base exception for processing errors."""
    pass


class _IssueCollector:
    """Counts row issues by type and forwards them to the issue log buffer."""

    def __init__(self, buffer: IssueLogBuffer | None) -> None:
        self.buffer = buffer
        self.counts: Counter[str] = Counter()

    def __call__(self, issue: RowIssue) -> None:
        self.counts[issue.issue_type] += 1
        if self.buffer is not None:
            self.buffer.append(issue)


def scan_excel_files(directory: Path) -> list[Path]:
    """List .xlsx files in ``directory`` (non-recursive), sorted by name.

    Raises:
        ProcessingError: If directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")

    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")

    try:
        return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix == ".xlsx")
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def import_table(
    table: RawTable, source: str = "<memory>", on_issue: IssueCallback | None = None
) -> list[BirthdayRecord]:
    """Detect header roles of ``table`` and normalize its rows."""
    if not table.headers:
        logger.info(f"{source}: empty sheet")
        return []
    roles = detect_headers(table.headers)
    missing = [role.value for role in Role if role not in roles]
    if missing:
        logger.warning(f"{source}: no column found for {', '.join(missing)}")
    return normalize_rows(table, roles, source=source, on_issue=on_issue)


def import_files(
    paths: Sequence[Path], store: BirthdayStore, issue_log: IssueLogBuffer | None = None
) -> ImportResult:
    """Import registry exports and replace the stored record sequence.

    Files are merged in the given order and de-duplicated across files. A file
    that cannot be read is counted as failed and skipped. The store is only
    written when at least one file was read, so a run where every file fails
    leaves the previous records in place.

    Raises:
        StoreError: the store could not be written
    """
    start_time = datetime.now(UTC)
    issues = _IssueCollector(issue_log)
    merged: list[BirthdayRecord] = []
    file_stats: list[FileStat] = []
    success_count = 0
    failed_count = 0
    data_rows = 0

    with ImportProgress(len(paths)) as progress:
        for path in paths:
            progress.start_file(path)
            file_start = datetime.now(UTC)
            try:
                table = read_raw_table(path)
            except ExcelReadError as e:
                logger.error(f"{path.name}: {e}")
                issues(RowIssue.create(path.name, -1, UNREADABLE_FILE, str(e)))
                failed_count += 1
                file_stats.append(
                    FileStat(
                        file_name=path.name,
                        status="failed",
                        data_rows=0,
                        records=0,
                        elapsed_seconds=(datetime.now(UTC) - file_start).total_seconds(),
                    )
                )
                progress.finish_file()
                continue

            records = import_table(table, source=path.name, on_issue=issues)
            merged.extend(records)
            success_count += 1
            data_rows += len(table)
            file_stats.append(
                FileStat(
                    file_name=path.name,
                    status="success",
                    data_rows=len(table),
                    records=len(records),
                    elapsed_seconds=(datetime.now(UTC) - file_start).total_seconds(),
                )
            )
            logger.info(f"{path.name}: {len(table)} rows -> {len(records)} records")
            progress.finish_file(records=len(records))

    def _report_cross_file_duplicate(pos: int, record: BirthdayRecord) -> None:
        issues(RowIssue.create("<merge>", -1, DUPLICATE_ROW, f"duplicate of '{record.full_name}' across files"))

    stored = dedupe_records(merged, on_duplicate=_report_cross_file_duplicate)

    if success_count > 0:
        store.save(stored)
    elif paths:
        logger.warning("no workbook could be read; stored birthdays left untouched")

    if issue_log is not None:
        issue_path = issue_log.flush()
        if issue_path is not None:
            logger.info(f"row issues written to {issue_path}")

    elapsed = (datetime.now(UTC) - start_time).total_seconds()
    return ImportResult(
        success_files=success_count,
        failed_files=failed_count,
        data_rows=data_rows,
        stored_records=len(stored) if success_count > 0 else 0,
        blank_rows=issues.counts[BLANK_ROW],
        duplicate_rows=issues.counts[DUPLICATE_ROW],
        undated_records=sum(1 for r in stored if not r.is_dated),
        elapsed_seconds=elapsed,
        file_stats=file_stats,
    )


def today_in(timezone: str) -> date:
    return datetime.now(ZoneInfo(timezone)).date()


@dataclass(frozen=True)
class CheckResult:
    summary: NotificationSummary
    records: int  # size of the snapshot the summary was computed on


def run_check(
    store: BirthdayStore, today: date, subscribed_units: Collection[str] | None = None
) -> CheckResult:
    """Match today's birthdays against a single snapshot of the store.

    Args:
        store: Persistence port the records (and default subscriptions) come from
        today: Reference date
        subscribed_units: Units with notifications on; None reads them from the
            store, an empty collection selects every unit
    """
    records = store.load()
    units = store.load_unit_subscriptions() if subscribed_units is None else set(subscribed_units)
    summary = match_birthdays(records, today, units)
    logger.debug(
        f"check {today.isoformat()}: {summary.count} of {len(records)} records "
        f"(units={sorted(units) if units else 'all'})"
    )
    return CheckResult(summary=summary, records=len(records))


def run_once(
    store: BirthdayStore, today: date, subscribed_units: Collection[str] | None = None
) -> NotificationSummary:
    return run_check(store, today, subscribed_units).summary
