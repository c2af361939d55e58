# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pandas as pd
import pytest

from bday_alert.logging.init import reset_logging


@pytest.fixture(autouse=True)
def _fresh_logging():
    # handler binds sys.stdout at setup time; capsys needs a new one per test
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("BDAY_ALERT_CONFIG", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
store_path: ./state/birthdays.json
timezone: Europe/Rome
issue_log_dir: ./logs
widget_max_lines: 3
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "bday_alert.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


def write_workbook(path: Path, rows: list[list[object]], sheet: str = "Soci") -> Path:
    """Write ``rows`` (header first) as the first sheet of an .xlsx file."""
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
    return path


@pytest.fixture()
def make_workbook(temp_workdir: Path):
    def _make(name: str, rows: list[list[object]]) -> Path:
        return write_workbook(temp_workdir / "data" / name, rows)
    return _make
