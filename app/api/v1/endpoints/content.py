"""
Content Routes

Endpoints for course images and lesson files.
"""

from typing import Annotated, List

from fastapi import APIRouter, Depends, File, Query, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_admin
from app.core.database import get_db
from app.schemas.content import CourseImageResponse, LessonFilesResponse
from app.services import content_service


router = APIRouter(
    prefix="/courses",
    tags=["Content"],
    dependencies=[Depends(require_admin)],
)


def _lesson_files(lesson) -> LessonFilesResponse:
    return LessonFilesResponse(
        course_id=lesson.course_id,
        lesson_id=lesson.id,
        content_urls=list(lesson.content_urls or []),
    )


@router.put(
    "/{course_id}/image",
    response_model=CourseImageResponse,
    summary="Replace the course image",
)
async def upload_course_image(
    course_id: str,
    image: Annotated[UploadFile, File()],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> CourseImageResponse:
    """
    Upload a course image. The previous image is removed from storage.
    """
    course = await content_service.set_course_image(course_id, image, db)
    return CourseImageResponse(course_id=course.id, image_url=course.image_url)


@router.post(
    "/{course_id}/lessons/{lesson_id}/files",
    response_model=LessonFilesResponse,
    summary="Attach files to a lesson",
)
async def upload_lesson_files(
    course_id: str,
    lesson_id: str,
    files: Annotated[List[UploadFile], File()],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> LessonFilesResponse:
    """
    Upload one or more files and attach them to the lesson.
    """
    lesson = await content_service.add_lesson_files(course_id, lesson_id, files, db)
    return _lesson_files(lesson)


@router.delete(
    "/{course_id}/lessons/{lesson_id}/files",
    response_model=LessonFilesResponse,
    summary="Remove a file from a lesson",
)
async def delete_lesson_file(
    course_id: str,
    lesson_id: str,
    url: Annotated[str, Query(description="Delivery URL of the file")],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> LessonFilesResponse:
    """
    Detach a file from the lesson and delete it from storage.
    """
    lesson = await content_service.remove_lesson_file(course_id, lesson_id, url, db)
    return _lesson_files(lesson)
