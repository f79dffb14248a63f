"""Dashboard facet filters: exact (trimmed) value selection per role."""

from __future__ import annotations

import logging
from typing import Any

from silo.features.mapping.models import Mapping
from silo.shared.constants import Role
from silo.shared.normalizer import parse_date, to_text

from .models import FacetFilter

logger = logging.getLogger(__name__)

Row = dict[str, Any]

# Facet name -> role whose column it filters
FACET_ROLES: dict[str, Role] = {
    "competition": Role.COMPETITION,
    "location": Role.LOCATION,
    "distance": Role.DISTANCE,
    "sex": Role.SEX,
    "season": Role.SEASON,
    "winner": Role.WINNER,
    "nationality": Role.NATIONALITY,
    "competitor": Role.COMPETITOR,
}


def _trimmed(v: Any) -> str:
    return to_text(v).strip()


def row_year(row: Row, mapping: Mapping) -> int | None:
    """Calendar year of the row's date cell."""
    column = mapping.get(Role.DATE)
    if column is None:
        return None
    parsed = parse_date(row.get(column))
    return parsed.year if parsed else None


def apply_facets(rows: list[Row], mapping: Mapping, facets: FacetFilter) -> list[Row]:
    """
    Rows matching every active facet.

    Text facets compare trimmed cell text exactly; the year facet uses the
    date role. A facet whose role is unresolved does not restrict anything.
    """
    active = facets.active()
    if not active:
        return rows

    checks: list[tuple[str, str]] = []
    for name, wanted in active.items():
        if name == "year":
            continue
        column = mapping.get(FACET_ROLES[name])
        if column is None:
            logger.debug(f"Facet '{name}' ignored: role not mapped")
            continue
        checks.append((column, _trimmed(wanted)))

    year = active.get("year")
    if year is not None and mapping.get(Role.DATE) is None:
        logger.debug("Facet 'year' ignored: date role not mapped")
        year = None

    result = []
    for row in rows:
        if year is not None and row_year(row, mapping) != year:
            continue
        if all(_trimmed(row.get(column)) == wanted for column, wanted in checks):
            result.append(row)
    return result


def distinct_values(rows: list[Row], column: str | None) -> list[str]:
    """Sorted distinct non-empty trimmed values of one column."""
    if column is None:
        return []
    values = {_trimmed(row.get(column)) for row in rows}
    values.discard("")
    return sorted(values, key=lambda v: (v.casefold(), v))


def facet_options(rows: list[Row], mapping: Mapping) -> dict[str, list]:
    """Selectable values for every facet (years as ints, ascending)."""
    years = {row_year(row, mapping) for row in rows}
    years.discard(None)

    options: dict[str, list] = {"year": sorted(years)}
    for name, role in FACET_ROLES.items():
        options[name] = distinct_values(rows, mapping.get(role))
    return options
