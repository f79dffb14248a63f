"""
Dashboard Routes

Facet options and KPI tiles for the filtered dataset.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from silo.api.v1.deps import require_dataset
from silo.features.dataset.context import AppContext
from silo.features.headtohead.stats import summarize
from silo.features.mapping.resolver import missing_roles
from silo.features.query import FACET_ROLES, FacetFilter, apply_facets, distinct_values
from silo.features.query import facet_options as build_facet_options
from silo.shared.constants import Role
from silo.shared.formatters import format_number

router = APIRouter()

# Roles the dashboard filters on
DASHBOARD_ROLES = (Role.DATE, *FACET_ROLES.values(), Role.RANK)


# === Pydantic schemas ===


class FacetOptionsSchema(BaseModel):
    options: dict[str, list]
    missing: list[str] = []


class FacetRequest(BaseModel):
    year: Optional[int] = None
    competition: Optional[str] = None
    location: Optional[str] = None
    distance: Optional[str] = None
    sex: Optional[str] = None
    season: Optional[str] = None
    winner: Optional[str] = None
    nationality: Optional[str] = None
    competitor: Optional[str] = None


class KpiSchema(BaseModel):
    starts: int
    wins: int
    podiums: int
    best_rank: Optional[float] = None
    avg_rank: Optional[float] = None
    avg_rank_display: str


class DashboardKpiResponse(BaseModel):
    rows: int
    total: int
    kpi: Optional[KpiSchema] = None  # null when no rows match
    competitors: list[str] = []  # selectable within the current facets


# === Endpoints ===


@router.get("/options", response_model=FacetOptionsSchema)
async def facet_options(context: AppContext = Depends(require_dataset)):
    """Distinct values per facet, plus the roles the mapping leaves open."""
    return FacetOptionsSchema(
        options=build_facet_options(context.rows, context.mapping),
        missing=[r.value for r in missing_roles(context.mapping, DASHBOARD_ROLES)],
    )


@router.post("/kpis", response_model=DashboardKpiResponse)
async def dashboard_kpis(
    request: FacetRequest,
    context: AppContext = Depends(require_dataset),
):
    """
    KPIs over the rows matching the facets.

    The competitor facet narrows the KPI rows only; the competitor list
    reflects the other facets.
    """
    facets = FacetFilter(**request.model_dump())
    without_competitor = FacetFilter(**{**request.model_dump(), "competitor": None})

    scoped = apply_facets(context.rows, context.mapping, without_competitor)
    rows = apply_facets(scoped, context.mapping, facets) if facets.competitor else scoped

    kpi = None
    if rows:
        summary = summarize(rows, context.mapping)
        kpi = KpiSchema(
            starts=summary.starts,
            wins=summary.wins,
            podiums=summary.podiums,
            best_rank=summary.best_rank,
            avg_rank=summary.avg_rank,
            avg_rank_display=format_number(summary.avg_rank, 2),
        )

    return DashboardKpiResponse(
        rows=len(rows),
        total=len(context.rows),
        kpi=kpi,
        competitors=distinct_values(scoped, context.mapping.get(Role.COMPETITOR)),
    )
