"""Event index construction from mapped rows."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from silo.features.mapping.models import Mapping
from silo.shared.constants import Role
from silo.shared.normalizer import is_finite, norm, to_number, to_text

from .distance import categorize_distance
from .models import EventIndex, EventKey

logger = logging.getLogger(__name__)

Row = dict[str, Any]


def _cell(row: Row, mapping: Mapping, role: Role) -> Any:
    column = mapping.get(role)
    return row.get(column) if column is not None else None


def competitor_name(row: Row, mapping: Mapping) -> str:
    """Trimmed competitor name ("" when missing or unmapped)."""
    return to_text(_cell(row, mapping, Role.COMPETITOR)).strip()


def event_key(row: Row, mapping: Mapping) -> EventKey:
    return EventKey(
        competition=norm(_cell(row, mapping, Role.COMPETITION)),
        location=norm(_cell(row, mapping, Role.LOCATION)),
        distance=norm(categorize_distance(_cell(row, mapping, Role.DISTANCE))),
        date=norm(_cell(row, mapping, Role.DATE)),
        race=norm(_cell(row, mapping, Role.RACE)),
        sex=norm(_cell(row, mapping, Role.SEX)),
        season=norm(_cell(row, mapping, Role.SEASON)),
    )


def build(rows: Iterable[Row], mapping: Mapping) -> EventIndex:
    """
    Group rows into events.

    Rows without a competitor name are skipped. When a competitor appears
    more than once in the same event (re-runs, duplicated heats) the lowest
    finite rank is kept.
    """
    index = EventIndex()
    skipped = 0

    for row in rows:
        name = competitor_name(row, mapping)
        if not name:
            skipped += 1
            continue

        key = event_key(row, mapping)
        index.event_competitors.setdefault(key, set()).add(name)
        index.competitor_events.setdefault(name, set()).add(key)

        rank = to_number(_cell(row, mapping, Role.RANK))
        if is_finite(rank):
            ranks = index.event_ranks.setdefault(key, {})
            if name not in ranks or rank < ranks[name]:
                ranks[name] = rank

    if skipped:
        logger.debug(f"Event index: skipped {skipped} rows without competitor")
    logger.debug(
        f"Event index: {index.size} events, {index.competitor_count} competitors"
    )
    return index
