"""
Champions Routes

Title winners from the loaded dataset.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from silo.api.v1.deps import require_dataset
from silo.config import settings
from silo.features.champions import AUTO, champions_by_year, list_champions
from silo.features.dataset.context import AppContext
from silo.features.dataset.rows import UnknownColumnError

router = APIRouter()


# === Pydantic schemas ===


class ChampionsRequest(BaseModel):
    competition: str = AUTO  # "auto" or an exact competition value
    limit: Optional[int] = Field(default=None, ge=1)


class ChampionSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    competition: str
    season: str
    distance: str
    winner: str


class ChampionsResponse(BaseModel):
    total: int
    items: list[ChampionSchema] = []


class ChampionsByYearRequest(BaseModel):
    type_column: str
    year_column: str
    # label -> text searched in the type column, e.g. {"World champion": "WK"}
    titles: dict[str, str] = Field(default_factory=lambda: dict(settings.title_keywords))


class TitleYearSchema(BaseModel):
    year: int
    names: list[str]


# === Endpoints ===


@router.post("", response_model=ChampionsResponse)
async def get_champions(
    request: ChampionsRequest,
    context: AppContext = Depends(require_dataset),
):
    """Rank-1 results per (competition, season, distance)."""
    records = list_champions(
        context.rows,
        context.mapping,
        competition=request.competition,
        title_keywords=list(settings.title_keywords.values()),
    )
    limit = request.limit or settings.preview_limit
    return ChampionsResponse(
        total=len(records),
        items=[ChampionSchema.model_validate(r) for r in records[:limit]],
    )


@router.post("/by-year", response_model=dict[str, list[TitleYearSchema]])
async def get_champions_by_year(
    request: ChampionsByYearRequest,
    context: AppContext = Depends(require_dataset),
):
    """Champions per title type and year, newest year first."""
    try:
        type_column = context.dataset.require(request.type_column)
        year_column = context.dataset.require(request.year_column)
    except UnknownColumnError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not any(v.strip() for v in request.titles.values()):
        raise HTTPException(status_code=400, detail="Provide at least one title value")

    grouped = champions_by_year(
        context.rows, context.mapping, type_column, year_column, request.titles
    )
    return {
        label: [TitleYearSchema(year=year, names=names) for year, names in by_year.items()]
        for label, by_year in grouped.items()
    }
