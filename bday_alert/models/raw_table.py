from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

"""Raw spreadsheet grid and header role models.

RawTable is what the spreadsheet reader hands to the core: a header row and
data rows rendered as display strings. Each RawRow also keeps the native cell
values the reader saw so that date cells can be resolved without going
through their display text.
"""

__all__ = [
    "Role",
    "HeaderRoleMap",
    "RawRow",
    "RawTable",
]


class Role(Enum):
    """Semantic meaning of a spreadsheet column."""
    SURNAME = "surname"
    GIVEN_NAME = "given_name"
    BIRTH_DATE = "birth_date"
    UNIT = "unit"


HeaderRoleMap = dict[Role, int]


@dataclass(frozen=True)
class RawRow:
    cells: tuple[str, ...]
    values: tuple[Any, ...] = field(default=())  # native cell values, empty when unknown

    def __post_init__(self) -> None:
        if self.values and len(self.values) != len(self.cells):
            raise ValueError(
                f"row has {len(self.cells)} cells but {len(self.values)} native values"
            )

    def cell(self, index: int) -> str:
        return self.cells[index]

    def value(self, index: int) -> Any:
        if not self.values:
            return None
        return self.values[index]


@dataclass(frozen=True)
class RawTable:
    headers: tuple[str, ...]
    rows: tuple[RawRow, ...] = ()

    def __post_init__(self) -> None:
        width = len(self.headers)
        for pos, row in enumerate(self.rows, start=1):
            if len(row.cells) != width:
                raise ValueError(
                    f"data row {pos} has {len(row.cells)} cells, expected {width}"
                )

    @staticmethod
    def from_strings(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> RawTable:
        """Build a table from plain strings (no native values)."""
        return RawTable(
            headers=tuple(headers),
            rows=tuple(RawRow(cells=tuple(r)) for r in rows),
        )

    def __len__(self) -> int:
        return len(self.rows)
