"""
Student Routes

Endpoints for student administration.
"""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_admin
from app.core.database import get_db
from app.schemas.student import StudentCreate, StudentListItem
from app.services import student_service


router = APIRouter(
    prefix="/students",
    tags=["Students"],
    dependencies=[Depends(require_admin)],
)


@router.get(
    "",
    response_model=List[StudentListItem],
    summary="List students",
)
async def list_students(
    db: Annotated[AsyncSession, Depends(get_db)],
    search: Annotated[Optional[str], Query(description="Name, surname, email or status fragment")] = None,
) -> List[StudentListItem]:
    """
    List students, newest first.

    Deleted students are only listed when a search term is given.
    """
    return await student_service.list_students(db, search)


@router.post(
    "",
    response_model=StudentListItem,
    status_code=status.HTTP_201_CREATED,
    summary="Register a student",
)
async def create_student(
    data: StudentCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> StudentListItem:
    student = await student_service.create_student(data, db)
    return student_service.to_list_item(student)


@router.delete(
    "/{student_id}",
    response_model=StudentListItem,
    summary="Soft-delete a student",
)
async def delete_student(
    student_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> StudentListItem:
    """
    Mark the student as deleted. Progress data is kept and the account can
    be restored.
    """
    student = await student_service.soft_delete_student(student_id, db)
    return student_service.to_list_item(student)


@router.post(
    "/{student_id}/restore",
    response_model=StudentListItem,
    summary="Restore a deleted student",
)
async def restore_student(
    student_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> StudentListItem:
    student = await student_service.restore_student(student_id, db)
    return student_service.to_list_item(student)
