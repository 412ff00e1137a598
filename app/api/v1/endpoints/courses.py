"""
Course Routes

Endpoints for course, lesson and quiz management. Course images and lesson
files are handled by the content routes.
"""

from typing import Annotated, List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_admin
from app.core.database import get_db
from app.schemas.course import (
    CourseCreate,
    CourseDetail,
    CourseListItem,
    CourseRead,
    CourseUpdate,
    LessonCreate,
    LessonDetail,
    LessonRead,
    LessonUpdate,
    QuizCreate,
    QuizRead,
    QuizUpdate,
)
from app.services import course_service


router = APIRouter(
    prefix="/courses",
    tags=["Courses"],
    dependencies=[Depends(require_admin)],
)

DbSession = Annotated[AsyncSession, Depends(get_db)]


# ============== Courses ==============

@router.get("", response_model=List[CourseListItem], summary="List courses")
async def list_courses(db: DbSession) -> List[CourseListItem]:
    """List courses with their enrollment counts."""
    return await course_service.list_courses(db)


@router.post(
    "",
    response_model=CourseRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a course",
)
async def create_course(data: CourseCreate, db: DbSession):
    return await course_service.create_course(data, db)


@router.get("/{course_id}", response_model=CourseDetail, summary="Get a course")
async def get_course(course_id: str, db: DbSession) -> CourseDetail:
    """Get a course with its lessons in course order."""
    return await course_service.get_course_detail(course_id, db)


@router.patch("/{course_id}", response_model=CourseRead, summary="Update a course")
async def update_course(course_id: str, data: CourseUpdate, db: DbSession):
    return await course_service.update_course(course_id, data, db)


@router.delete(
    "/{course_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a course",
)
async def delete_course(course_id: str, db: DbSession) -> None:
    """
    Delete a course, its lessons and quizzes, and its stored files.

    Recorded quiz attempts are kept.
    """
    await course_service.delete_course(course_id, db)


# ============== Lessons ==============

@router.get(
    "/{course_id}/lessons",
    response_model=List[LessonRead],
    summary="List the lessons of a course",
)
async def list_lessons(course_id: str, db: DbSession):
    return await course_service.list_lessons(course_id, db)


@router.post(
    "/{course_id}/lessons",
    response_model=LessonRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add a lesson",
)
async def create_lesson(course_id: str, data: LessonCreate, db: DbSession):
    return await course_service.create_lesson(course_id, data, db)


@router.get(
    "/{course_id}/lessons/{lesson_id}",
    response_model=LessonDetail,
    summary="Get a lesson",
)
async def get_lesson(course_id: str, lesson_id: str, db: DbSession) -> LessonDetail:
    """Get a lesson with its quiz questions."""
    return await course_service.get_lesson_detail(course_id, lesson_id, db)


@router.patch(
    "/{course_id}/lessons/{lesson_id}",
    response_model=LessonRead,
    summary="Update a lesson",
)
async def update_lesson(course_id: str, lesson_id: str, data: LessonUpdate, db: DbSession):
    return await course_service.update_lesson(course_id, lesson_id, data, db)


@router.delete(
    "/{course_id}/lessons/{lesson_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a lesson",
)
async def delete_lesson(course_id: str, lesson_id: str, db: DbSession) -> None:
    await course_service.delete_lesson(course_id, lesson_id, db)


# ============== Quizzes ==============

@router.post(
    "/{course_id}/lessons/{lesson_id}/quizzes",
    response_model=QuizRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add a quiz question",
)
async def create_quiz(course_id: str, lesson_id: str, data: QuizCreate, db: DbSession):
    return await course_service.create_quiz(course_id, lesson_id, data, db)


@router.patch(
    "/{course_id}/lessons/{lesson_id}/quizzes/{quiz_id}",
    response_model=QuizRead,
    summary="Update a quiz question",
)
async def update_quiz(
    course_id: str,
    lesson_id: str,
    quiz_id: str,
    data: QuizUpdate,
    db: DbSession,
):
    return await course_service.update_quiz(course_id, lesson_id, quiz_id, data, db)


@router.delete(
    "/{course_id}/lessons/{lesson_id}/quizzes/{quiz_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a quiz question",
)
async def delete_quiz(course_id: str, lesson_id: str, quiz_id: str, db: DbSession) -> None:
    await course_service.delete_quiz(course_id, lesson_id, quiz_id, db)
