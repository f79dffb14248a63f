"""HeadToHeadService — compare 2..N competitors over the filtered dataset."""

from __future__ import annotations

import logging
from typing import Any, Mapping as MappingType, Sequence

from silo.features.events.builder import build
from silo.features.mapping.models import Mapping
from silo.shared.constants import Role
from silo.shared.formatters import format_duration, format_number
from silo.shared.normalizer import is_finite, to_text

from .models import Aggregation, CompetitorKpi, HeadToHeadResult, MetricRow
from .stats import aggregate, aggregate_column, leaders, meetings_for, pairwise, rows_for

logger = logging.getLogger(__name__)

Row = dict[str, Any]

# key -> (label, lower is better)
METRICS: dict[str, tuple[str, bool]] = {
    "wins": ("Wins", False),
    "meetings": ("Meetings", False),
    "starts": ("Starts", False),
    "podiums": ("Podiums (top 3)", False),
    "avg": ("Average rank", True),
    "best": ("Best rank", True),
}

DEFAULT_METRICS: tuple[str, ...] = ("wins", "meetings")

AGGREGATION_LABELS: dict[Aggregation, str] = {
    Aggregation.BEST: "best (min)",
    Aggregation.AVG: "average",
    Aggregation.MAX: "max",
    Aggregation.COUNT: "count",
}


def _mark_best(row: MetricRow) -> MetricRow:
    comparable = [(i, v) for i, v in enumerate(row.values) if is_finite(v)]
    if not comparable:
        return row
    pick = min if row.lower_is_better else max
    best = pick(v for _, v in comparable)
    row.best_indices = [i for i, v in comparable if v == best]
    row.best_index = row.best_indices[0]
    return row


class HeadToHeadService:
    """Builds a full head-to-head comparison for one mapping."""

    def __init__(
        self,
        mapping: Mapping,
        titles: MappingType[str, str] | None = None,
        max_competitors: int = 4,
    ):
        self.mapping = mapping
        self.titles = dict(titles) if titles else None
        self.max_competitors = max_competitors

    def filter_rows(
        self,
        rows: Sequence[Row],
        competition: str | None = None,
        distance: str | None = None,
    ) -> list[Row]:
        """Restrict to one competition and/or distance (trimmed exact match)."""
        checks = []
        for role, wanted in ((Role.COMPETITION, competition), (Role.DISTANCE, distance)):
            column = self.mapping.get(role)
            if wanted and column is not None:
                checks.append((column, wanted.strip()))
        if not checks:
            return list(rows)
        return [
            row for row in rows
            if all(to_text(row.get(column)).strip() == wanted for column, wanted in checks)
        ]

    def compare(
        self,
        rows: Sequence[Row],
        competitors: Sequence[str],
        competition: str | None = None,
        distance: str | None = None,
        metrics: Sequence[str] = DEFAULT_METRICS,
        custom: Sequence[tuple[str, Aggregation | str]] = (),
    ) -> HeadToHeadResult:
        """
        Compare the chosen competitors.

        Args:
            rows: Full dataset rows
            competitors: Names in display order (blanks and duplicates dropped)
            competition / distance: Optional trimmed-exact filters
            metrics: Built-in metric keys for the table (see METRICS)
            custom: (column, aggregation) pairs for extra table rows

        Raises:
            ValueError: More competitors than allowed or unknown metric key
        """
        chosen = list(dict.fromkeys(c.strip() for c in competitors if c and c.strip()))
        if len(chosen) > self.max_competitors:
            raise ValueError(
                f"At most {self.max_competitors} competitors can be compared, got {len(chosen)}"
            )
        unknown = [m for m in metrics if m not in METRICS]
        if unknown:
            raise ValueError(f"Unknown metric: {', '.join(unknown)}")

        filtered = self.filter_rows(rows, competition, distance)
        index = build(filtered, self.mapping)

        kpis = [aggregate(name, filtered, self.mapping, self.titles) for name in chosen]
        meetings = {name: meetings_for(name, chosen, index) for name in chosen}

        table = [self._builtin_row(key, kpis, meetings) for key in metrics]
        table += [self._custom_row(column, agg, chosen, filtered) for column, agg in custom]

        logger.debug(
            f"Head-to-head {chosen}: {len(filtered)} rows, {index.size} events"
        )
        return HeadToHeadResult(
            competitors=chosen,
            kpis=kpis,
            meetings=meetings,
            pairs=pairwise(chosen, index),
            leaders=leaders(kpis),
            table=table,
            rows_considered=len(filtered),
            events=index.size,
        )

    def _builtin_row(
        self,
        key: str,
        kpis: list[CompetitorKpi],
        meetings: dict[str, int],
    ) -> MetricRow:
        label, lower_is_better = METRICS[key]
        values: list[float | None]
        if key == "meetings":
            values = [meetings[k.name] for k in kpis]
        elif key == "avg":
            values = [k.avg_rank for k in kpis]
        elif key == "best":
            values = [k.best_rank for k in kpis]
        else:
            values = [getattr(k, key) for k in kpis]

        if key == "avg":
            display = [format_number(v, 2) for v in values]
        else:
            display = [format_number(v) for v in values]

        return _mark_best(MetricRow(
            key=key,
            label=label,
            values=values,
            display=display,
            lower_is_better=lower_is_better,
        ))

    def _custom_row(
        self,
        column: str,
        agg: Aggregation | str,
        chosen: list[str],
        rows: list[Row],
    ) -> MetricRow:
        agg = Aggregation(agg)
        values = [aggregate_column(rows_for(name, rows, self.mapping), column, agg) for name in chosen]

        is_time_column = column == self.mapping.get(Role.TIME)
        display = []
        for v in values:
            if agg == Aggregation.COUNT:
                display.append(str(v if v is not None else 0))
            elif is_time_column:
                display.append(format_duration(v))
            else:
                display.append(format_number(v))

        return _mark_best(MetricRow(
            key=f"{column}:{agg.value}",
            label=f"{column} ({AGGREGATION_LABELS[agg]})",
            values=values,
            display=display,
            lower_is_better=agg in (Aggregation.BEST, Aggregation.AVG),
        ))
