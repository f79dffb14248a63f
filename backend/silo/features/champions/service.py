"""Champion listings (rank-1 results at championship-type competitions)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping as MappingType, Sequence

from silo.features.mapping.models import Mapping
from silo.shared.constants import Role
from silo.shared.normalizer import contains_word, norm, season_year, to_number, to_text

logger = logging.getLogger(__name__)

Row = dict[str, Any]

AUTO = "auto"


@dataclass(frozen=True)
class ChampionRecord:
    """Winner of one (competition, season, distance) group."""

    competition: str
    season: str
    distance: str
    winner: str


def is_championship(text: Any, title_keywords: Sequence[str] = ()) -> bool:
    """
    Whether a competition name looks like a title event.

    World / European championships and Olympics by name, plus any title
    keyword as a whole word ("WK 2019 Inzell").
    """
    s = norm(text)
    if not s:
        return False
    if ("world" in s and "champ" in s) or "olymp" in s or ("europe" in s and "champ" in s):
        return True
    return any(contains_word(s, k) for k in title_keywords)


def _trimmed(row: Row, column: str | None) -> str:
    return to_text(row.get(column)).strip() if column is not None else ""


def list_champions(
    rows: Sequence[Row],
    mapping: Mapping,
    competition: str = AUTO,
    title_keywords: Sequence[str] = (),
) -> list[ChampionRecord]:
    """
    One record per (competition, season, distance) with a rank-1 result.

    ``competition`` is either "auto" (championship heuristic) or an exact
    competition value. The winner column is used when mapped and filled,
    otherwise the competitor. Needs the competition and rank roles.
    """
    comp_col = mapping.get(Role.COMPETITION)
    rank_col = mapping.get(Role.RANK)
    if comp_col is None or rank_col is None:
        logger.debug("Champions: competition or rank role not mapped")
        return []

    season_col = mapping.get(Role.SEASON)
    distance_col = mapping.get(Role.DISTANCE)
    winner_col = mapping.get(Role.WINNER)
    competitor_col = mapping.get(Role.COMPETITOR)

    wanted = competition.strip()
    groups: dict[tuple[str, str, str], ChampionRecord] = {}
    for row in rows:
        comp = _trimmed(row, comp_col)
        if wanted.lower() == AUTO:
            if not is_championship(comp, title_keywords):
                continue
        elif comp != wanted:
            continue
        if to_number(row.get(rank_col)) != 1:
            continue

        key = (comp, _trimmed(row, season_col), _trimmed(row, distance_col))
        if key in groups:
            continue
        winner = _trimmed(row, winner_col) or _trimmed(row, competitor_col)
        groups[key] = ChampionRecord(*key, winner=winner)

    return list(groups.values())


def champions_by_year(
    rows: Sequence[Row],
    mapping: Mapping,
    type_column: str,
    year_column: str,
    titles: MappingType[str, str],
) -> dict[str, dict[int, list[str]]]:
    """
    Champions per title and year.

    Args:
        type_column: Column holding the title type (e.g. "Wedstrijd")
        year_column: Column holding a year, season or date
        titles: Label -> value searched (case-insensitive substring) in the
            type column, e.g. {"World champion": "wk", "Olympic champion": "os"}

    Returns:
        {label: {year: sorted names}}, years newest first. When a rank role
        is mapped only rank-1 rows count.
    """
    competitor_col = mapping.get(Role.COMPETITOR)
    rank_col = mapping.get(Role.RANK)
    needles = {label: norm(value) for label, value in titles.items()}
    found: dict[str, dict[int, set[str]]] = {label: {} for label in titles}

    if competitor_col is None:
        logger.debug("Champions by year: competitor role not mapped")
        return {label: {} for label in titles}

    for row in rows:
        title_text = norm(row.get(type_column))
        if not title_text:
            continue
        name = _trimmed(row, competitor_col)
        if not name:
            continue
        if rank_col is not None and to_number(row.get(rank_col)) != 1:
            continue
        year = season_year(row.get(year_column))
        if year is None:
            continue

        for label, needle in needles.items():
            if needle and needle in title_text:
                found[label].setdefault(year, set()).add(name)

    return {
        label: {
            year: sorted(names, key=lambda n: (n.casefold(), n))
            for year, names in sorted(by_year.items(), reverse=True)
        }
        for label, by_year in found.items()
    }
