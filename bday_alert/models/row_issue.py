from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""RowIssue model for the import issue log.

Row-level data quality problems (blank rows, unresolved dates, duplicates) are
not errors: the row normalizer degrades gracefully and reports them here so
the import pipeline can write them as JSON Lines.

Use row=-1 for file-level issues where no row applies.
"""

__all__ = [
    "RowIssue",
    "BLANK_ROW",
    "UNRESOLVED_DATE",
    "DUPLICATE_ROW",
    "UNREADABLE_FILE",
]

BLANK_ROW = "BLANK_ROW"
UNRESOLVED_DATE = "UNRESOLVED_DATE"
DUPLICATE_ROW = "DUPLICATE_ROW"
UNREADABLE_FILE = "UNREADABLE_FILE"


@dataclass(frozen=True)
class RowIssue:
    """Structured issue record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Spreadsheet file name (or "<memory>")
        row: Spreadsheet row number (1-based, header is row 1), -1 if unknown
        issue_type: Issue classification in UPPER_SNAKE_CASE format
        message: Human readable description
    """
    timestamp: str
    file: str
    row: int
    issue_type: str
    message: str

    @staticmethod
    def create(file: str, row: int, issue_type: str, message: str) -> RowIssue:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return RowIssue(
            timestamp=ts,
            file=file,
            row=row,
            issue_type=issue_type,
            message=message,
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
