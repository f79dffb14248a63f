"""
Dataset repositories.

Data access layer for StoredDataset and MappingEntry models. Callers own
the transaction (commit after a successful request).
"""

import math
from datetime import date, datetime, time, timedelta
from typing import Any, Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from silo.shared.normalizer import to_text
from silo.shared.repository import BaseRepository
from .models import StoredDataset, MappingEntry


def json_safe(value: Any) -> Any:
    """Cell value that survives a JSON column."""
    if isinstance(value, (datetime, date, time)):
        return to_text(value)
    if isinstance(value, timedelta):
        return value.total_seconds()
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


def json_safe_rows(rows: Iterable[dict]) -> list[dict]:
    return [{str(k): json_safe(v) for k, v in row.items()} for row in rows]


class DatasetRepository(BaseRepository[StoredDataset]):
    """Repository for the stored row array."""

    def __init__(self, db: Session):
        super().__init__(db, StoredDataset)

    def save(
        self,
        rows: list[dict],
        columns: Iterable[str],
        file_name: str | None = None,
    ) -> StoredDataset:
        """
        Replace the stored dataset.

        Args:
            rows: Decoded rows (cells converted to JSON-safe values)
            columns: Column names in header order
            file_name: Original upload name

        Returns:
            Created StoredDataset
        """
        self.delete_all()
        return self.create(
            file_name=file_name,
            column_names=list(columns),
            rows=json_safe_rows(rows),
            row_count=len(rows),
        )

    def get_latest(self) -> StoredDataset | None:
        """Most recently stored dataset, None when nothing was imported."""
        result = self.db.execute(
            select(StoredDataset).order_by(StoredDataset.id.desc()).limit(1)
        )
        return result.scalars().first()


class MappingRepository(BaseRepository[MappingEntry]):
    """Repository for the flat role -> column record."""

    def __init__(self, db: Session):
        super().__init__(db, MappingEntry)

    def load(self) -> dict[str, str | None]:
        """Stored bindings as {role: column}."""
        return {entry.role: entry.column_name for entry in self.get_all()}

    def save(self, mapping: dict[str, str | None]) -> None:
        """Replace every stored binding with ``mapping``."""
        self.delete_all()
        for role, column in mapping.items():
            self.create(role=getattr(role, "value", role), column_name=column)
