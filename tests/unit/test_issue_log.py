from __future__ import annotations

import json
from pathlib import Path

from bday_alert.logging.issue_log import IssueLogBuffer
from bday_alert.models.row_issue import BLANK_ROW, UNREADABLE_FILE, RowIssue


def test_flush_writes_json_lines(tmp_path: Path):
    """Test flush writes one JSON object per line."""
    buf = IssueLogBuffer(tmp_path / "logs")
    buf.append(RowIssue.create("soci.xlsx", 4, BLANK_ROW, "no name and no birth date"))
    buf.append(RowIssue.create("rotto.xlsx", -1, UNREADABLE_FILE, "bad zip"))
    assert len(buf) == 2

    path = buf.flush()
    assert path is not None
    assert path.parent == tmp_path / "logs"
    assert path.name.startswith("issues-") and path.suffix == ".log"
    lines = path.read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["row"] for line in lines] == [4, -1]
    assert len(buf) == 0


def test_flush_empty_buffer_creates_nothing(tmp_path: Path):
    """Test empty flush creates no file."""
    buf = IssueLogBuffer(tmp_path / "logs")
    assert buf.flush() is None
    assert not (tmp_path / "logs").exists()


def test_flush_appends_to_same_file(tmp_path: Path):
    """Test later flushes append to the same file."""
    buf = IssueLogBuffer(tmp_path)
    buf.append(RowIssue.create("a.xlsx", 2, BLANK_ROW, "x"))
    first = buf.flush()
    buf.append(RowIssue.create("a.xlsx", 3, BLANK_ROW, "y"))
    second = buf.flush()
    assert first == second
    assert len(second.read_text(encoding="utf-8").splitlines()) == 2


def test_row_issue_unicode_kept():
    issue = RowIssue.create("unità.xlsx", 2, BLANK_ROW, "città")
    assert "unità.xlsx" in issue.to_json_line()
