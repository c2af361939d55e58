from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any, Protocol

from ..models.birthday_record import BirthdayRecord

"""Persistence of the canonical record sequence and unit subscriptions.

BirthdayStore is the port the core is given; JsonFileStore is the file-backed
adapter used by the CLI. The whole document is rewritten on every save
(temp file + os.replace), so readers always see either the old or the new
sequence, never a partial one. Writes from one process are serialized with a
lock; concurrent writers are last-writer-wins on the whole sequence.

File layout:
{
  "birthdays": [{"given_name": ..., "surname": ..., "unit": ..., "day": ..., "month": ..., "year": ...}],
  "units_with_notifications": ["E/G", ...]
}
"""

__all__ = [
    "StoreError",
    "BirthdayStore",
    "JsonFileStore",
]

logger = logging.getLogger(__name__)

BIRTHDAYS_KEY = "birthdays"
UNITS_KEY = "units_with_notifications"


class StoreError(Exception):
    """Raised when the store file cannot be read, parsed or written."""


class BirthdayStore(Protocol):
    def load(self) -> list[BirthdayRecord]: ...

    def save(self, records: Sequence[BirthdayRecord]) -> None: ...

    def load_unit_subscriptions(self) -> set[str]: ...

    def save_unit_subscriptions(self, units: Iterable[str]) -> None: ...


class JsonFileStore:
    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"cannot read store {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StoreError(f"store {self.path}: expected a JSON object, got {type(data).__name__}")
        return data

    def _write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except OSError as e:
            Path(tmp).unlink(missing_ok=True)
            raise StoreError(f"cannot write store {self.path}: {e}") from e

    def load(self) -> list[BirthdayRecord]:
        """Stored records in order; empty list when nothing was saved yet."""
        raw = self._read().get(BIRTHDAYS_KEY, [])
        if not isinstance(raw, list):
            raise StoreError(f"store {self.path}: '{BIRTHDAYS_KEY}' must be a list")
        records: list[BirthdayRecord] = []
        for pos, item in enumerate(raw):
            try:
                records.append(BirthdayRecord.from_dict(item))
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                raise StoreError(f"store {self.path}: invalid birthday at position {pos}: {e}") from e
        return records

    def save(self, records: Sequence[BirthdayRecord]) -> None:
        with self._lock:
            data = self._read()
            data[BIRTHDAYS_KEY] = [r.to_dict() for r in records]
            self._write(data)
        logger.debug(f"saved {len(records)} records to {self.path}")

    def load_unit_subscriptions(self) -> set[str]:
        raw = self._read().get(UNITS_KEY, [])
        if not isinstance(raw, list):
            raise StoreError(f"store {self.path}: '{UNITS_KEY}' must be a list")
        return {str(u) for u in raw}

    def save_unit_subscriptions(self, units: Iterable[str]) -> None:
        with self._lock:
            data = self._read()
            data[UNITS_KEY] = sorted(set(units))
            self._write(data)
