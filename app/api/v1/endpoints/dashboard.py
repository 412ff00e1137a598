"""
Dashboard Routes

Counters for the admin home page.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_admin
from app.core.database import get_db
from app.schemas.student import DashboardStats
from app.services import student_service


router = APIRouter(
    prefix="/dashboard",
    tags=["Dashboard"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=DashboardStats, summary="Get dashboard counters")
async def get_dashboard(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DashboardStats:
    """Number of active students and of courses."""
    return await student_service.get_dashboard_stats(db)
