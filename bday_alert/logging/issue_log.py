from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.row_issue import RowIssue

"""Import issue log buffering.

- JSON Lines with a fixed schema (see RowIssue)
- One ``issues-YYYYMMDD-HHMMSS.log`` file (UTC) per import run, created on
  the first non-empty flush
- Records are buffered and written once at the end of the run
"""

__all__ = [
    "RowIssue",
    "IssueLogBuffer",
]

DEFAULT_LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class IssueLogBuffer:
    """In-memory buffer of row issues. flush() appends them as JSON Lines.

    Not thread safe; one buffer belongs to one import run.
    """
    def __init__(self, logs_dir: Path | str = DEFAULT_LOGS_DIR) -> None:
        self.logs_dir = Path(logs_dir)
        self._records: list[RowIssue] = []
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self.logs_dir / f"issues-{stamp}.log"
        return self._file_path

    def append(self, record: RowIssue) -> None:
        self._records.append(record)

    def __len__(self) -> int:
        return len(self._records)

    def flush(self) -> Path | None:
        """Write buffered issues; returns the file path, or None when nothing was buffered."""
        if not self._records:
            return None
        fp = self.file_path
        fp.parent.mkdir(parents=True, exist_ok=True)
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
