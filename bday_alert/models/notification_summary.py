from __future__ import annotations

from dataclasses import dataclass

"""NotificationSummary model: output of the daily matcher."""

__all__ = [
    "NotificationSummary",
]


@dataclass(frozen=True)
class NotificationSummary:
    """Fully computed summary handed to notification / widget renderers.

    A zero-count summary means "nothing to send", never a failure.
    """
    count: int
    title: str
    detail_lines: tuple[str, ...] = ()

    @property
    def should_notify(self) -> bool:
        return self.count > 0

    @property
    def content(self) -> str:
        return " • ".join(self.detail_lines)
