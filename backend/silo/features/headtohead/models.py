"""Head-to-head models (dataclasses, no DB dependency)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum


class Aggregation(str, Enum):
    """How a custom metric row reduces one column."""
    COUNT = "count"
    BEST = "best"  # min
    MAX = "max"
    AVG = "avg"


@dataclass
class MedalCount:
    """Podium finishes at one title type (e.g. "WK")."""

    gold: int = 0
    silver: int = 0
    bronze: int = 0

    @property
    def total(self) -> int:
        return self.gold + self.silver + self.bronze


@dataclass
class CompetitorKpi:
    """Aggregate results of one competitor over a row subset."""

    name: str
    starts: int = 0  # rows
    wins: int = 0  # rank == 1
    podiums: int = 0  # rank 1..3
    avg_rank: float | None = None  # finite ranks only
    best_rank: float | None = None
    medals: dict[str, MedalCount] = field(default_factory=dict)  # {"WK": MedalCount(...)}
    best_time: float | None = None  # seconds
    avg_time: float | None = None
    last_date: date | None = None
    top_distance: str | None = None  # most frequent distance
    top_competitions: list[str] = field(default_factory=list)  # up to 5, most frequent first


@dataclass(frozen=True)
class PairStat:
    """
    Meetings between two competitors.

    a_ahead + b_ahead + ties + unknown == meetings.
    """

    a: str
    b: str
    meetings: int = 0
    a_ahead: int = 0
    b_ahead: int = 0
    ties: int = 0
    unknown: int = 0  # at least one rank missing


@dataclass(frozen=True)
class Leader:
    """Who leads one KPI among the compared competitors."""

    metric: str  # "wins" / "podiums" / "best_rank" / "best_time"
    name: str
    value: float


@dataclass
class MetricRow:
    """One row of the comparison table: a metric value per competitor."""

    key: str  # "wins" or "<column>:<agg>"
    label: str
    values: list[float | None]
    display: list[str] = field(default_factory=list)
    lower_is_better: bool = False
    best_index: int | None = None  # first best column, None when nothing comparable
    best_indices: list[int] = field(default_factory=list)  # every column equal to the best


@dataclass
class HeadToHeadResult:
    """Full comparison of the chosen competitors."""

    competitors: list[str]
    kpis: list[CompetitorKpi]
    meetings: dict[str, int]
    pairs: list[PairStat]
    leaders: list[Leader]
    table: list[MetricRow]
    rows_considered: int = 0
    events: int = 0
