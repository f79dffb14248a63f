"""
Unified constants for column roles and query operators.

Also holds the value ranges used by the normalizer.

This module provides a single source of truth for role and operator naming
across the entire application.
"""

from enum import Enum


class Role(str, Enum):
    """
    Canonical semantic slots a dataset column can be mapped onto.

    Used in:
    - Column mapping (resolver, persisted mapping)
    - Event identity (competition/location/distance/date/race/sex/season)
    - Aggregates (competitor, rank, time, date)
    """
    COMPETITOR = "competitor"
    SEX = "sex"
    NATIONALITY = "nationality"
    DISTANCE = "distance"
    TIME = "time"
    RANK = "rank"
    DATE = "date"
    COMPETITION = "competition"
    LOCATION = "location"
    SEASON = "season"
    RACE = "race"
    WINNER = "winner"


class Operator(str, Enum):
    """Filter rule operators."""
    CONTAINS = "contains"
    EQUALS = "equals"
    STARTS = "starts"
    ENDS = "ends"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    BETWEEN = "between"
    EMPTY = "empty"
    NOT_EMPTY = "notempty"


class Logic(str, Enum):
    """How a rule combines with the accumulated result of the rules before it."""
    AND = "AND"
    OR = "OR"


TEXT_OPERATORS: frozenset[Operator] = frozenset({
    Operator.CONTAINS,
    Operator.EQUALS,
    Operator.STARTS,
    Operator.ENDS,
})

NUMERIC_OPERATORS: frozenset[Operator] = frozenset({
    Operator.GT,
    Operator.GTE,
    Operator.LT,
    Operator.LTE,
})

# Roles that together identify one result instance (an "event")
EVENT_ROLES: tuple[Role, ...] = (
    Role.COMPETITION,
    Role.LOCATION,
    Role.DISTANCE,
    Role.DATE,
    Role.RACE,
    Role.SEX,
    Role.SEASON,
)

# Literal separator of the "between" operator value: "10..20"
RANGE_SEPARATOR = ".."

# Shown wherever a value cannot be displayed
UNAVAILABLE = "—"

SECONDS_PER_DAY = 86400

# Plausible ranges for year extraction from numeric cells
PLAIN_YEAR_RANGE = (1900, 2100)
SERIAL_DATE_RANGE = (20000, 60000)
