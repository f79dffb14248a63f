"""
Head-to-Head Routes

Compare 2..N competitors: KPIs, meetings, pairwise record and a metric table.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from silo.api.v1.deps import require_dataset
from silo.config import settings
from silo.features.dataset.context import AppContext
from silo.features.dataset.rows import UnknownColumnError
from silo.features.headtohead import Aggregation, HeadToHeadService, DEFAULT_METRICS
from silo.shared.formatters import format_date, format_duration

router = APIRouter()


# === Pydantic schemas ===


class CustomMetricSchema(BaseModel):
    column: str
    agg: Aggregation = Aggregation.COUNT


class HeadToHeadRequest(BaseModel):
    competitors: list[str] = Field(default_factory=list)
    competition: Optional[str] = None
    distance: Optional[str] = None
    metrics: list[str] = Field(default_factory=lambda: list(DEFAULT_METRICS))
    custom: list[CustomMetricSchema] = []


class MedalSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    gold: int
    silver: int
    bronze: int


class CompetitorKpiSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    starts: int
    wins: int
    podiums: int
    avg_rank: Optional[float] = None
    best_rank: Optional[float] = None
    medals: dict[str, MedalSchema] = {}
    best_time: Optional[float] = None
    avg_time: Optional[float] = None
    last_date: Optional[date] = None
    top_distance: Optional[str] = None
    top_competitions: list[str] = []
    # display helpers
    best_time_formatted: str = ""
    avg_time_formatted: str = ""
    last_date_formatted: str = ""


class PairStatSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    a: str
    b: str
    meetings: int
    a_ahead: int
    b_ahead: int
    ties: int
    unknown: int


class LeaderSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    metric: str
    name: str
    value: float


class MetricRowSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    key: str
    label: str
    values: list[Optional[float]]
    display: list[str]
    lower_is_better: bool
    best_index: Optional[int] = None
    best_indices: list[int] = []


class HeadToHeadResponse(BaseModel):
    competitors: list[str]
    kpis: list[CompetitorKpiSchema]
    meetings: dict[str, int]
    pairs: list[PairStatSchema]
    leaders: list[LeaderSchema]
    table: list[MetricRowSchema]
    rows_considered: int
    events: int
    filters: str  # "WK 2019 | 500m" / "All data"


# === Endpoints ===


@router.post("", response_model=HeadToHeadResponse)
async def compare_competitors(
    request: HeadToHeadRequest,
    context: AppContext = Depends(require_dataset),
):
    """
    Compare the chosen competitors within an optional competition/distance.

    An empty selection returns empty results rather than an error.
    """
    for metric in request.custom:
        try:
            context.dataset.require(metric.column)
        except UnknownColumnError as e:
            raise HTTPException(status_code=400, detail=str(e))

    service = HeadToHeadService(
        context.mapping,
        titles=settings.title_keywords,
        max_competitors=settings.max_competitors,
    )
    try:
        result = service.compare(
            context.rows,
            request.competitors,
            competition=request.competition,
            distance=request.distance,
            metrics=request.metrics,
            custom=[(m.column, m.agg) for m in request.custom],
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    kpis = []
    for kpi in result.kpis:
        schema = CompetitorKpiSchema.model_validate(kpi)
        schema.best_time_formatted = format_duration(kpi.best_time)
        schema.avg_time_formatted = format_duration(kpi.avg_time)
        schema.last_date_formatted = format_date(kpi.last_date)
        kpis.append(schema)

    filters = " | ".join(p for p in (request.competition, request.distance) if p) or "All data"

    return HeadToHeadResponse(
        competitors=result.competitors,
        kpis=kpis,
        meetings=result.meetings,
        pairs=[PairStatSchema.model_validate(p) for p in result.pairs],
        leaders=[LeaderSchema.model_validate(leader) for leader in result.leaders],
        table=[MetricRowSchema.model_validate(r) for r in result.table],
        rows_considered=result.rows_considered,
        events=result.events,
        filters=filters,
    )
