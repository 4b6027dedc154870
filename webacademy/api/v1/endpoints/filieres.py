"""
Public list of filieres.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.domain.constants import Institute
from webacademy.domain.schemas.taxonomy import FiliereRead
from webacademy.infrastructure.database.base import get_db
from webacademy.services.filieres import FiliereService

router = APIRouter()


@router.get("", response_model=List[FiliereRead])
async def list_filieres(
    institute: Optional[Institute] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    items = await FiliereService(db).list_public(institute.value if institute else None)
    return [FiliereRead.model_validate(f) for f in items]
