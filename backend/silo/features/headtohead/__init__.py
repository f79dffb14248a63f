"""Head-to-head feature module — KPIs, meetings and pairwise comparison."""

from .models import (
    Aggregation,
    MedalCount,
    CompetitorKpi,
    PairStat,
    Leader,
    MetricRow,
    HeadToHeadResult,
)
from .stats import (
    summarize,
    aggregate,
    rows_for,
    meetings_for,
    compare_pair,
    pairwise,
    leaders,
    aggregate_column,
)
from .service import HeadToHeadService, METRICS, DEFAULT_METRICS

__all__ = [
    "Aggregation",
    "MedalCount",
    "CompetitorKpi",
    "PairStat",
    "Leader",
    "MetricRow",
    "HeadToHeadResult",
    "summarize",
    "aggregate",
    "rows_for",
    "meetings_for",
    "compare_pair",
    "pairwise",
    "leaders",
    "aggregate_column",
    "HeadToHeadService",
    "METRICS",
    "DEFAULT_METRICS",
]
