"""KPIs, meetings and pairwise comparison over mapped rows and an event index."""

from __future__ import annotations

import math
from collections import Counter
from typing import Any, Callable, Mapping as MappingType, Sequence

from silo.features.events.builder import competitor_name
from silo.features.events.models import EventIndex
from silo.features.mapping.models import Mapping
from silo.shared.constants import Role
from silo.shared.normalizer import (
    contains_word,
    duration_to_seconds,
    is_finite,
    norm,
    parse_date,
    to_number,
    to_text,
)

from .models import Aggregation, CompetitorKpi, Leader, MedalCount, PairStat

Row = dict[str, Any]

TOP_COMPETITIONS = 5


def _column_values(rows: Sequence[Row], mapping: Mapping, role: Role) -> list[Any]:
    column = mapping.get(role)
    if column is None:
        return []
    return [row.get(column) for row in rows]


def _finite(values: list[float]) -> list[float]:
    return [v for v in values if is_finite(v)]


def summarize(
    rows: Sequence[Row],
    mapping: Mapping,
    titles: MappingType[str, str] | None = None,
    name: str = "",
) -> CompetitorKpi:
    """KPIs over a row subset (all rows count as starts)."""
    kpi = CompetitorKpi(name=name, starts=len(rows))

    rank_column = mapping.get(Role.RANK)
    ranks = [
        to_number(row.get(rank_column)) if rank_column is not None else math.nan
        for row in rows
    ]
    finite_ranks = _finite(ranks)
    kpi.wins = sum(1 for r in finite_ranks if r == 1)
    kpi.podiums = sum(1 for r in finite_ranks if 1 <= r <= 3)
    if finite_ranks:
        kpi.avg_rank = sum(finite_ranks) / len(finite_ranks)
        kpi.best_rank = min(finite_ranks)

    if titles:
        competitions = _column_values(rows, mapping, Role.COMPETITION)
        kpi.medals = {title: MedalCount() for title in titles}
        for competition, rank in zip(competitions, ranks):
            if rank not in (1, 2, 3):
                continue
            text = norm(competition)
            for title, keyword in titles.items():
                if contains_word(text, keyword):
                    medal = kpi.medals[title]
                    if rank == 1:
                        medal.gold += 1
                    elif rank == 2:
                        medal.silver += 1
                    else:
                        medal.bronze += 1

    times = _finite([duration_to_seconds(v) for v in _column_values(rows, mapping, Role.TIME)])
    if times:
        kpi.best_time = min(times)
        kpi.avg_time = sum(times) / len(times)

    dates = [d for d in map(parse_date, _column_values(rows, mapping, Role.DATE)) if d]
    if dates:
        kpi.last_date = max(dates)

    distances = Counter(
        text for text in (to_text(v).strip() for v in _column_values(rows, mapping, Role.DISTANCE)) if text
    )
    if distances:
        kpi.top_distance = distances.most_common(1)[0][0]

    competitions = Counter(
        text for text in (to_text(v).strip() for v in _column_values(rows, mapping, Role.COMPETITION)) if text
    )
    kpi.top_competitions = [c for c, _ in competitions.most_common(TOP_COMPETITIONS)]

    return kpi


def rows_for(name: str, rows: Sequence[Row], mapping: Mapping) -> list[Row]:
    """Rows whose trimmed competitor equals ``name``."""
    target = name.strip()
    if not target or mapping.get(Role.COMPETITOR) is None:
        return []
    return [row for row in rows if competitor_name(row, mapping) == target]


def aggregate(
    name: str,
    rows: Sequence[Row],
    mapping: Mapping,
    titles: MappingType[str, str] | None = None,
) -> CompetitorKpi:
    """KPIs of one competitor; zeroed when the competitor role is unresolved."""
    return summarize(rows_for(name, rows, mapping), mapping, titles, name=name.strip())


def _names(chosen: Sequence[str]) -> list[str]:
    """Trimmed, non-blank, de-duplicated names in selection order."""
    return list(dict.fromkeys(c.strip() for c in chosen if c and c.strip()))


def meetings_for(name: str, chosen: Sequence[str], index: EventIndex) -> int:
    """Events where ``name`` and at least one other chosen competitor took part."""
    name = name.strip()
    if not name:
        return 0
    others = {c for c in _names(chosen) if c != name}
    if not others:
        return 0
    return sum(
        1
        for event in index.events_of(name)
        if not others.isdisjoint(index.event_competitors.get(event, ()))
    )


def compare_pair(a: str, b: str, index: EventIndex) -> PairStat:
    """Tally shared events of two competitors; lower rank is ahead."""
    a, b = a.strip(), b.strip()
    events_a, events_b = index.events_of(a), index.events_of(b)
    smaller, larger = (events_a, events_b) if len(events_a) <= len(events_b) else (events_b, events_a)

    meetings = a_ahead = b_ahead = ties = unknown = 0
    for event in smaller:
        if event not in larger:
            continue
        meetings += 1
        rank_a, rank_b = index.rank_of(event, a), index.rank_of(event, b)
        if rank_a is None or rank_b is None:
            unknown += 1
        elif rank_a < rank_b:
            a_ahead += 1
        elif rank_b < rank_a:
            b_ahead += 1
        else:
            ties += 1

    return PairStat(a, b, meetings, a_ahead, b_ahead, ties, unknown)


def pairwise(chosen: Sequence[str], index: EventIndex) -> list[PairStat]:
    """Every unordered pair of distinct chosen competitors, in selection order."""
    names = _names(chosen)
    return [
        compare_pair(a, b, index)
        for i, a in enumerate(names)
        for b in names[i + 1:]
    ]


# metric -> (KPI attribute, higher is better)
LEADER_METRICS: tuple[tuple[str, str, bool], ...] = (
    ("wins", "wins", True),
    ("podiums", "podiums", True),
    ("best_rank", "best_rank", False),
    ("best_time", "best_time", False),
)


def leaders(kpis: Sequence[CompetitorKpi]) -> list[Leader]:
    """
    Leader per KPI among the compared competitors.

    A metric needs at least two finite values; on a tie the first
    competitor keeps the lead.
    """
    result = []
    for metric, attribute, higher_is_better in LEADER_METRICS:
        values = [
            (kpi.name, getattr(kpi, attribute))
            for kpi in kpis
            if is_finite(getattr(kpi, attribute))
        ]
        if len(values) < 2:
            continue
        better: Callable[[float, float], bool] = (
            (lambda x, y: x > y) if higher_is_better else (lambda x, y: x < y)
        )
        best_name, best_value = values[0]
        for name, value in values[1:]:
            if better(value, best_value):
                best_name, best_value = name, value
        result.append(Leader(metric=metric, name=best_name, value=best_value))
    return result


def aggregate_column(rows: Sequence[Row], column: str, agg: Aggregation | str) -> float | None:
    """
    Reduce one column for a custom metric row.

    COUNT counts non-empty cells. Other aggregations read the column as
    durations when at least max(3, half the non-empty cells) parse as
    durations, otherwise as plain numbers. None when nothing parses.
    """
    agg = Aggregation(agg)
    raw = [row.get(column) for row in rows if to_text(row.get(column)).strip() != ""]
    if agg == Aggregation.COUNT:
        return len(raw)

    numbers = _finite([to_number(v) for v in raw])
    times = _finite([duration_to_seconds(v) for v in raw])
    use_time = len(times) >= max(3, math.floor(len(raw) * 0.5))
    values = times if use_time else numbers
    if not values:
        return None

    if agg == Aggregation.BEST:
        return min(values)
    if agg == Aggregation.MAX:
        return max(values)
    return sum(values) / len(values)

