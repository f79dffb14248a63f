"""
Shared utilities (NOT business logic).

Usage:
    from silo.shared import to_number, duration_to_seconds, parse_date
    from silo.shared.formatters import format_duration
"""
from .normalizer import (
    SPREADSHEET_EPOCH,
    is_finite,
    to_text,
    norm,
    contains_word,
    to_number,
    duration_to_seconds,
    parse_date,
    extract_season_years,
    season_year,
)
from .formatters import (
    format_duration,
    round_for_display,
    format_number,
    format_date,
)
from .constants import (
    Role,
    Operator,
    Logic,
    TEXT_OPERATORS,
    NUMERIC_OPERATORS,
    EVENT_ROLES,
    RANGE_SEPARATOR,
    UNAVAILABLE,
)
from .repository import BaseRepository

__all__ = [
    # normalizer
    "SPREADSHEET_EPOCH",
    "is_finite",
    "to_text",
    "norm",
    "contains_word",
    "to_number",
    "duration_to_seconds",
    "parse_date",
    "extract_season_years",
    "season_year",
    # formatters
    "format_duration",
    "round_for_display",
    "format_number",
    "format_date",
    # constants
    "Role",
    "Operator",
    "Logic",
    "TEXT_OPERATORS",
    "NUMERIC_OPERATORS",
    "EVENT_ROLES",
    "RANGE_SEPARATOR",
    "UNAVAILABLE",
    # repository
    "BaseRepository",
]
