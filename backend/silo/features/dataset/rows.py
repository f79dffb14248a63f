"""Typed dataset: closed column set fixed at import plus the row list."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

Row = dict[str, Any]


class UnknownColumnError(KeyError):
    """A column name outside the dataset's closed column set."""

    def __init__(self, column: str, columns: Iterable[str] = ()):
        self.column = column
        self.columns = tuple(columns)
        super().__init__(column)

    def __str__(self) -> str:
        return f"Unknown column '{self.column}'"


def collect_columns(rows: Iterable[Row]) -> tuple[str, ...]:
    """Column names in first-seen order across all rows."""
    seen: dict[str, None] = {}
    for row in rows:
        for key in row:
            seen.setdefault(str(key), None)
    return tuple(seen)


@dataclass(frozen=True)
class Dataset:
    """
    Rows sharing one closed column set.

    Build with ``Dataset.from_rows`` so every row carries every column
    (missing cells become "").
    """

    columns: tuple[str, ...] = ()
    rows: list[Row] = field(default_factory=list)

    @classmethod
    def from_rows(cls, rows: Iterable[Row], columns: Iterable[str] | None = None) -> Dataset:
        rows = [dict(r) for r in rows]
        cols = tuple(columns) if columns is not None else collect_columns(rows)
        for row in rows:
            for column in cols:
                row.setdefault(column, "")
        return cls(columns=cols, rows=rows)

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def has_column(self, column: str) -> bool:
        return column in self.columns

    def require(self, column: str) -> str:
        """Return ``column`` or raise UnknownColumnError."""
        if column not in self.columns:
            raise UnknownColumnError(column, self.columns)
        return column

    def value(self, row: Row, column: str) -> Any:
        """Cell of ``row``; raises UnknownColumnError outside the column set."""
        return row.get(self.require(column), "")

    def column_values(self, column: str) -> list[Any]:
        self.require(column)
        return [row.get(column, "") for row in self.rows]
