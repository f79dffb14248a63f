"""
Dataset storage models.

Models:
- StoredDataset: The imported row array (one current dataset)
- MappingEntry: Flat role -> column record edited by the user
"""

from datetime import datetime
from sqlalchemy import Column, String, DateTime, Integer, JSON

from silo.models.base import Base


class StoredDataset(Base):
    """
    Last imported dataset.

    Rows are stored as one JSON array of JSON-safe dicts (dates as ISO
    strings). Only the most recent import is kept.
    """

    __tablename__ = "datasets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    file_name = Column(String(255), nullable=True)

    column_names = Column(JSON, nullable=False, default=list)  # ["Naam", "Ranking", ...]
    rows = Column(JSON, nullable=False, default=list)
    row_count = Column(Integer, default=0)

    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<StoredDataset {self.id}: {self.file_name} ({self.row_count} rows)>"


class MappingEntry(Base):
    """One persisted role binding. Missing role = never bound."""

    __tablename__ = "mapping_entries"

    role = Column(String(32), primary_key=True)  # "competitor" / "rank" / ...
    column_name = Column(String(255), nullable=True)

    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<MappingEntry {self.role} -> {self.column_name}>"
