"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy.

Feature models live next to their feature (features/dataset/models.py)
and are imported lazily to avoid circular imports.
"""

from silo.models.base import Base


def _get_dataset_models():
    """Lazy import of dataset storage models."""
    from silo.features.dataset.models import StoredDataset, MappingEntry
    return StoredDataset, MappingEntry


def __getattr__(name):
    if name == "StoredDataset":
        return _get_dataset_models()[0]
    if name == "MappingEntry":
        return _get_dataset_models()[1]

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "Base",
    "StoredDataset",
    "MappingEntry",
]
