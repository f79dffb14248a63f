"""
Query Routes

Rule-based row filtering over the loaded dataset.
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from silo.api.v1.deps import require_dataset
from silo.config import settings
from silo.features.dataset.context import AppContext
from silo.features.dataset.repository import json_safe_rows
from silo.features.query import Rule, run, validate_rules
from silo.shared.constants import Logic, Operator

router = APIRouter()


# === Pydantic schemas ===


class RuleSchema(BaseModel):
    logic: Logic = Logic.AND  # ignored on the first rule
    column: str
    operator: Operator
    value: str = ""


class QueryRequest(BaseModel):
    rules: list[RuleSchema] = []
    limit: Optional[int] = Field(default=None, ge=1)


class QueryResponse(BaseModel):
    count: int
    total: int
    columns: list[str] = []
    rows: list[dict[str, Any]] = []
    warnings: list[str] = []


# === Endpoints ===


@router.post("", response_model=QueryResponse)
async def run_query(
    request: QueryRequest,
    context: AppContext = Depends(require_dataset),
):
    """
    Filter rows with a rule chain.

    Rules fold left: each rule combines with the result so far using its
    own AND/OR. Problems that make a rule always false are returned as
    warnings instead of errors.
    """
    rules = [
        Rule(column=r.column, operator=r.operator, value=r.value, logic=r.logic)
        for r in request.rules
    ]
    matched = run(rules, context.rows, columns=context.columns)
    limit = request.limit or settings.preview_limit

    return QueryResponse(
        count=len(matched),
        total=len(context.rows),
        columns=list(context.columns),
        rows=json_safe_rows(matched[:limit]),
        warnings=validate_rules(rules, context.columns),
    )
