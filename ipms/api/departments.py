"""Department endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ipms.database import get_db
from ipms.schemas.idea import CreateDepartmentRequest, DepartmentOut
from ipms.storage import repositories

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/departments", response_model=DepartmentOut, status_code=status.HTTP_201_CREATED)
async def create_department(
    body: CreateDepartmentRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Create a department. Codes are unique."""
    if await repositories.get_department_by_code(db, body.code):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Department code {body.code} already exists",
        )
    try:
        department = await repositories.create_department(db, **body.model_dump())
    except SQLAlchemyError:
        logger.exception("Failed to create department %s", body.code)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Failed to create department",
        )
    return department


@router.get("/departments", response_model=list[DepartmentOut])
async def list_departments(
    db: Annotated[AsyncSession, Depends(get_db)],
    include_inactive: bool = False,
):
    """List departments, active ones only unless include_inactive is set."""
    return await repositories.list_departments(db, active_only=not include_inactive)
