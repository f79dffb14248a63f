"""
Mapping Routes

Endpoints for reading and editing the role -> column mapping.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from silo.api.v1.deps import require_dataset
from silo.db.session import get_db
from silo.features.dataset.context import AppContext
from silo.features.dataset.repository import MappingRepository
from silo.features.dataset.rows import UnknownColumnError

router = APIRouter()


# === Pydantic schemas ===


class MappingSchema(BaseModel):
    mapping: dict[str, Optional[str]]
    unresolved: list[str] = []
    columns: list[str] = []


class MappingUpdateRequest(BaseModel):
    # role -> column; null or "" unbinds the role
    mapping: dict[str, Optional[str]]


def mapping_schema(context: AppContext) -> MappingSchema:
    return MappingSchema(
        mapping=context.mapping.as_dict(),
        unresolved=[r.value for r in context.mapping.unresolved()],
        columns=list(context.columns),
    )


# === Endpoints ===


@router.get("", response_model=MappingSchema)
async def get_mapping(context: AppContext = Depends(require_dataset)):
    """Current mapping plus the columns it can bind to."""
    return mapping_schema(context)


@router.put("", response_model=MappingSchema)
async def update_mapping(
    request: MappingUpdateRequest,
    db: Session = Depends(get_db),
    context: AppContext = Depends(require_dataset),
):
    """
    Bind roles to columns explicitly.

    Only the roles in the request change. Edits are stored and re-applied
    to later uploads whose header still has the column.
    """
    try:
        context.update_mapping(request.mapping)
    except UnknownColumnError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    repo = MappingRepository(db)
    stored = repo.load()
    stored.update({role: context.mapping.get(role) for role in request.mapping})
    repo.save(stored)
    db.commit()

    return mapping_schema(context)


@router.post("/auto", response_model=MappingSchema)
async def reset_mapping(
    db: Session = Depends(get_db),
    context: AppContext = Depends(require_dataset),
):
    """Discard stored edits and resolve from the header alone."""
    context.reset_mapping()
    MappingRepository(db).delete_all()
    db.commit()
    return mapping_schema(context)
