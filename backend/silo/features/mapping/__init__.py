"""Mapping feature module — binds raw dataset columns to canonical roles."""

from .models import Mapping, PartialMapping
from .synonyms import DEFAULT_SYNONYMS, KEYWORDS, LEGACY_KEYS, load_synonyms
from .resolver import resolve, auto_mapping, missing_roles, guess_column

__all__ = [
    "Mapping",
    "PartialMapping",
    "DEFAULT_SYNONYMS",
    "KEYWORDS",
    "LEGACY_KEYS",
    "load_synonyms",
    "resolve",
    "auto_mapping",
    "missing_roles",
    "guess_column",
]
