"""
Application state: the loaded dataset and its resolved column mapping.

One AppContext lives on the FastAPI app (``app.state.context``). Loading
replaces everything at once; only explicit mapping edits change it
afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable

from silo.features.mapping.models import Mapping, PartialMapping
from silo.features.mapping.resolver import auto_mapping, resolve
from silo.shared.constants import Role
from silo.shared.normalizer import to_text

from .rows import Dataset, Row

logger = logging.getLogger(__name__)


@dataclass
class DatasetSummary:
    """Overview of the loaded dataset."""

    file_name: str | None
    row_count: int
    columns: list[str]
    competitors: int
    seasons: int
    distances: int
    mapping: dict[str, str | None] = field(default_factory=dict)
    unresolved: list[str] = field(default_factory=list)
    loaded_at: datetime | None = None


class AppContext:
    """Holds file name, Dataset and Mapping for the running app."""

    def __init__(self, synonyms: dict[Role, tuple[str, ...]] | None = None):
        self.synonyms = synonyms
        self.file_name: str | None = None
        self.dataset = Dataset()
        self.mapping = Mapping()
        self.loaded_at: datetime | None = None

    @property
    def rows(self) -> list[Row]:
        return self.dataset.rows

    @property
    def columns(self) -> tuple[str, ...]:
        return self.dataset.columns

    @property
    def is_loaded(self) -> bool:
        return not self.dataset.is_empty

    def load(
        self,
        rows: Iterable[Row],
        file_name: str | None = None,
        persisted_mapping: PartialMapping | Mapping | None = None,
        columns: Iterable[str] | None = None,
    ) -> Mapping:
        """Replace dataset and mapping wholesale; returns the resolved mapping."""
        self.dataset = Dataset.from_rows(rows, columns)
        self.file_name = file_name
        self.mapping = resolve(self.dataset.columns, persisted_mapping, synonyms=self.synonyms)
        self.loaded_at = datetime.utcnow()
        logger.info(
            f"Dataset loaded: {file_name or '(unnamed)'}, "
            f"{len(self.dataset)} rows, {len(self.dataset.columns)} columns"
        )
        unresolved = self.mapping.unresolved()
        if unresolved:
            logger.info(f"Unresolved roles: {', '.join(r.value for r in unresolved)}")
        return self.mapping

    def update_mapping(self, partial: PartialMapping) -> Mapping:
        """
        Apply explicit role -> column edits.

        None or "" unbinds a role; roles not mentioned keep their column.

        Raises:
            ValueError: Unknown role name
            UnknownColumnError: Column not in the dataset
        """
        current = self.mapping.as_dict()
        for key, column in partial.items():
            role = Role(key)
            if column is None or not str(column).strip():
                current[role.value] = None
                continue
            current[role.value] = self.dataset.require(column)
        self.mapping = Mapping(**current)
        logger.info(f"Mapping updated: {', '.join(sorted(partial))}")
        return self.mapping

    def reset_mapping(self) -> Mapping:
        """Drop manual edits and resolve from the header alone."""
        self.mapping = auto_mapping(self.dataset.columns, synonyms=self.synonyms)
        return self.mapping

    def clear(self) -> None:
        self.dataset = Dataset()
        self.mapping = Mapping()
        self.file_name = None
        self.loaded_at = None
        logger.info("Dataset cleared")

    def _distinct(self, role: Role) -> int:
        column = self.mapping.get(role)
        if column is None:
            return 0
        values = {to_text(v).strip() for v in self.dataset.column_values(column)}
        values.discard("")
        return len(values)

    def summary(self) -> DatasetSummary:
        return DatasetSummary(
            file_name=self.file_name,
            row_count=len(self.dataset),
            columns=list(self.dataset.columns),
            competitors=self._distinct(Role.COMPETITOR),
            seasons=self._distinct(Role.SEASON),
            distances=self._distinct(Role.DISTANCE),
            mapping=self.mapping.as_dict(),
            unresolved=[r.value for r in self.mapping.unresolved()],
            loaded_at=self.loaded_at,
        )

