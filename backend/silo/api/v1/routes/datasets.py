"""
Dataset Routes

Endpoints for uploading, inspecting and clearing the current dataset.
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from pydantic import BaseModel
from sqlalchemy.orm import Session

from silo.api.v1.deps import get_context, require_dataset
from silo.config import settings
from silo.db.session import get_db
from silo.features.dataset.context import AppContext
from silo.features.dataset.repository import DatasetRepository, MappingRepository, json_safe_rows
from silo.features.dataset.xlsx_reader import WorkbookError, read_workbook

logger = logging.getLogger(__name__)

router = APIRouter()

ALLOWED_EXTENSIONS = (".xlsx", ".xlsm")


# === Pydantic schemas ===


class DatasetSummarySchema(BaseModel):
    file_name: Optional[str] = None
    sheet_name: Optional[str] = None
    row_count: int
    columns: list[str] = []
    competitors: int = 0
    seasons: int = 0
    distances: int = 0
    mapping: dict[str, Optional[str]] = {}
    unresolved: list[str] = []
    loaded_at: Optional[datetime] = None


def summary_schema(context: AppContext, sheet_name: Optional[str] = None) -> DatasetSummarySchema:
    summary = context.summary()
    return DatasetSummarySchema(
        file_name=summary.file_name,
        sheet_name=sheet_name,
        row_count=summary.row_count,
        columns=summary.columns,
        competitors=summary.competitors,
        seasons=summary.seasons,
        distances=summary.distances,
        mapping=summary.mapping,
        unresolved=summary.unresolved,
        loaded_at=summary.loaded_at,
    )


# === Endpoints ===


@router.post("/upload", response_model=DatasetSummarySchema)
async def upload_dataset(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context),
):
    """
    Upload a results workbook.

    Uses the 'results' sheet when present, otherwise the first sheet.
    Replaces the current dataset; stored mapping edits are re-applied.
    """
    if not file.filename or not file.filename.lower().endswith(ALLOWED_EXTENSIONS):
        raise HTTPException(status_code=400, detail="Only .xlsx files are allowed")

    content = await file.read()

    if len(content) == 0:
        raise HTTPException(status_code=400, detail="File is empty")

    if len(content) > settings.max_upload_mb * 1024 * 1024:
        raise HTTPException(
            status_code=400,
            detail=f"File too large (max {settings.max_upload_mb}MB)"
        )

    try:
        workbook = read_workbook(content, settings.results_sheet_name)
    except WorkbookError as e:
        logger.warning(f"Upload rejected: {file.filename}: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    if not workbook.rows:
        raise HTTPException(status_code=400, detail=f"Sheet '{workbook.sheet_name}' has no data rows")

    # same cell types as after a reload from storage
    rows = json_safe_rows(workbook.rows)

    DatasetRepository(db).save(rows, workbook.columns, file_name=file.filename)
    db.commit()

    context.load(
        rows,
        file_name=file.filename,
        persisted_mapping=MappingRepository(db).load(),
        columns=workbook.columns,
    )
    return summary_schema(context, workbook.sheet_name)


@router.get("/current", response_model=DatasetSummarySchema)
async def get_current_dataset(context: AppContext = Depends(require_dataset)):
    """Summary of the loaded dataset (rows, columns, unique counts, mapping)."""
    return summary_schema(context)


@router.delete("/current")
async def delete_current_dataset(
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context),
):
    """Forget the loaded dataset. Stored mapping edits are kept."""
    deleted = DatasetRepository(db).delete_all()
    db.commit()
    context.clear()
    return {"success": True, "deleted": deleted}
