from __future__ import annotations

from dataclasses import dataclass

from ..models.import_result import ImportResult
from ..models.notification_summary import NotificationSummary

"""Text rendering for summaries.

- render_import_summary_line: SUMMARY log line for an import run
- render_check_summary_line: SUMMARY log line for a daily check
- render_widget_text: compact three-part text for a home-screen widget, with
  the detail lines truncated to the widget's space budget
"""

__all__ = [
    "WidgetText",
    "WIDGET_TITLE",
    "WIDGET_EMPTY_BODY",
    "render_import_summary_line",
    "render_check_summary_line",
    "render_widget_text",
]

WIDGET_TITLE = "Compleanni di oggi"
WIDGET_EMPTY_SUBTITLE = "Nessun compleanno oggi"
WIDGET_EMPTY_BODY = "Tap to open the app"
WIDGET_SUBTITLE = "Oggi {count} compleanni 🎉"


@dataclass(frozen=True)
class WidgetText:
    title: str
    subtitle: str
    body: str


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # avoid scientific notation for very small numbers
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.2f}".rstrip("0").rstrip(".")


def render_import_summary_line(result: ImportResult) -> str:
    """Render the SUMMARY line of an import run.

    Format:
    SUMMARY files={total} success={success} failed={failed} rows={rows}
    records={records} blank={blank} duplicates={dup} undated={undated} elapsed_sec={elapsed}

    Examples:
        >>> result = ImportResult(
        ...     success_files=1, failed_files=0, data_rows=5, stored_records=4,
        ...     blank_rows=1, duplicate_rows=0, undated_records=0, elapsed_seconds=0.5,
        ... )
        >>> render_import_summary_line(result)
        'SUMMARY files=1 success=1 failed=0 rows=5 records=4 blank=1 duplicates=0 undated=0 elapsed_sec=0.5'
    """
    total_files = result.success_files + result.failed_files
    return (
        f"SUMMARY files={total_files} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"rows={result.data_rows} "
        f"records={result.stored_records} "
        f"blank={result.blank_rows} "
        f"duplicates={result.duplicate_rows} "
        f"undated={result.undated_records} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )


def render_check_summary_line(summary: NotificationSummary, records: int) -> str:
    return f"SUMMARY birthdays={summary.count} records={records} notify={'yes' if summary.should_notify else 'no'}"


def render_widget_text(summary: NotificationSummary, max_lines: int = 3) -> WidgetText:
    if not summary.should_notify:
        return WidgetText(title=WIDGET_TITLE, subtitle=WIDGET_EMPTY_SUBTITLE, body=WIDGET_EMPTY_BODY)
    return WidgetText(
        title=WIDGET_TITLE,
        subtitle=WIDGET_SUBTITLE.format(count=summary.count),
        body="\n".join(summary.detail_lines[:max_lines]),
    )
