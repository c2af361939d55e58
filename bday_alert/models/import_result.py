from __future__ import annotations

from dataclasses import dataclass, field

"""Import result models.

Aggregated counters for one run of the import pipeline, used for the SUMMARY
log line and the CLI exit code.
"""


@dataclass(frozen=True)
class FileStat:
    """Per-file import statistics."""
    file_name: str
    status: str  # success/failed
    data_rows: int  # rows below the header
    records: int  # records emitted before cross-file dedup
    elapsed_seconds: float


@dataclass(frozen=True)
class ImportResult:
    success_files: int
    failed_files: int
    data_rows: int  # data rows read across all files
    stored_records: int  # records saved after cross-file dedup
    blank_rows: int
    duplicate_rows: int
    undated_records: int
    elapsed_seconds: float
    file_stats: list[FileStat] = field(default_factory=list)

    @property
    def saved(self) -> bool:
        return self.success_files > 0
