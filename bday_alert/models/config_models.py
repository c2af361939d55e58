from __future__ import annotations

from dataclasses import dataclass

"""Config dataclasses for the birthday alert tool.

Built by bday_alert.config.loader after schema validation; defaults are
applied there, not here.
"""


@dataclass(frozen=True)
class AppConfig:
    """Root configuration object.

    Relative paths are kept as written and resolved against the working
    directory by the callers.
    """
    source_directory: str  # directory scanned for .xlsx exports
    store_path: str  # JSON file holding records and unit subscriptions
    timezone: str  # IANA zone used to decide "today" (default: "UTC")
    issue_log_dir: str = "./logs"  # where issues-*.log files are written
    widget_max_lines: int = 3  # detail lines shown by the widget text
