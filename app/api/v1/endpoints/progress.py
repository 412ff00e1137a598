"""
Progress Routes

Endpoints for the admin student progress report.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.deps import get_progress_store, require_admin
from app.schemas.progress import CourseProgressView, StudentSummaryView
from app.services import progress_service
from app.services.progress_store import SqlProgressStore


router = APIRouter(
    prefix="/students",
    tags=["Progress"],
    dependencies=[Depends(require_admin)],
)


async def _ensure_student(store: SqlProgressStore, student_id: str) -> None:
    if await store.fetch_student(student_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Student not found",
        )


@router.get(
    "/{student_id}/progress",
    response_model=StudentSummaryView,
    summary="Get a student's progress report",
)
async def get_student_progress(
    student_id: str,
    store: Annotated[SqlProgressStore, Depends(get_progress_store)],
) -> StudentSummaryView:
    """
    Get the progress report for a student.

    **Per lesson:** best quiz attempt (highest score, then most points),
    completion and view state.

    **Per course:** completion percentage, average best score over completed
    lessons, points totals. A course is "Completed" at 80% of its lessons.

    **Overall:** course counts and averages across enrolled courses.

    Args:
        student_id: Student ID.
        store: Progress record store.

    Returns:
        Student summary with one entry per enrolled course.
    """
    await _ensure_student(store, student_id)
    return await progress_service.build_student_summary(store, student_id)


@router.get(
    "/{student_id}/courses/{course_id}/progress",
    response_model=CourseProgressView,
    summary="Get a student's progress in one course",
)
async def get_course_progress(
    student_id: str,
    course_id: str,
    store: Annotated[SqlProgressStore, Depends(get_progress_store)],
) -> CourseProgressView:
    """
    Get a student's lesson-by-lesson progress for one course.

    Args:
        student_id: Student ID.
        course_id: Course ID.
        store: Progress record store.

    Returns:
        Course progress view.
    """
    await _ensure_student(store, student_id)
    return await progress_service.build_course_progress(store, student_id, course_id)
