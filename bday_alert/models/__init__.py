"""Domain models for the birthday alert tool.

This package contains the data classes shared by the reader, the normalizers,
the matcher and the store.
"""

from .birthday_record import PLACEHOLDER_NAME, BirthdayRecord, RecordValidationError
from .config_models import AppConfig
from .import_result import FileStat, ImportResult
from .notification_summary import NotificationSummary
from .raw_table import HeaderRoleMap, RawRow, RawTable, Role
from .row_issue import RowIssue

__all__ = [
    # Configuration models
    "AppConfig",
    # Raw input
    "HeaderRoleMap",
    "RawRow",
    "RawTable",
    "Role",
    # Canonical records
    "BirthdayRecord",
    "RecordValidationError",
    "PLACEHOLDER_NAME",
    # Outputs
    "FileStat",
    "ImportResult",
    "NotificationSummary",
    "RowIssue",
]
