"""
Content Service

Course image and lesson file management backed by Cloudinary.
"""

import logging
from typing import List

from fastapi import HTTPException, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.course import Course
from app.models.lesson import Lesson
from app.services.storage_service import CloudinaryService

logger = logging.getLogger(__name__)


async def get_course(course_id: str, db: AsyncSession) -> Course:
    """
    Get course by ID.

    Raises:
        HTTPException: 404 if not found.
    """
    course = await db.get(Course, course_id)
    if not course:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Course not found",
        )
    return course


async def get_lesson(course_id: str, lesson_id: str, db: AsyncSession) -> Lesson:
    """
    Get a lesson that belongs to the given course.

    Raises:
        HTTPException: 404 if not found.
    """
    result = await db.execute(
        select(Lesson).where(
            Lesson.id == lesson_id,
            Lesson.course_id == course_id,
        )
    )
    lesson = result.scalar_one_or_none()
    if not lesson:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Lesson not found",
        )
    return lesson


def _storage_error(action: str, exc: Exception) -> HTTPException:
    logger.error("storage %s failed: %s", action, exc)
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=f"File storage {action} failed",
    )


async def discard_files(urls: List[str]) -> None:
    """Best-effort removal of stored files; failures are logged and skipped."""
    for url in urls:
        try:
            await run_in_threadpool(CloudinaryService.delete_file, url)
        except Exception:
            logger.exception("stored file cleanup failed url=%s", url)


async def set_course_image(
    course_id: str,
    upload: UploadFile,
    db: AsyncSession,
) -> Course:
    """
    Upload a new course image and replace the current one.

    The previous image is deleted only after the new upload succeeded.

    Args:
        course_id: Course ID.
        upload: Image file.
        db: Database session.

    Returns:
        Updated course.

    Raises:
        HTTPException: 404 if the course does not exist.
        HTTPException: 502 if the upload fails.
    """
    course = await get_course(course_id, db)
    old_url = course.image_url

    try:
        new_url = await run_in_threadpool(
            CloudinaryService.upload_image,
            upload.file,
            upload.filename or "image",
        )
    except Exception as e:
        raise _storage_error("upload", e) from e

    course.image_url = new_url
    await db.commit()

    if old_url and old_url != new_url:
        try:
            await run_in_threadpool(CloudinaryService.delete_file, old_url)
        except Exception:
            # The course already points at the new image; a stale file is left behind.
            logger.exception("old image delete failed course_id=%s url=%s", course_id, old_url)

    await db.refresh(course)
    return course


async def add_lesson_files(
    course_id: str,
    lesson_id: str,
    uploads: List[UploadFile],
    db: AsyncSession,
) -> Lesson:
    """
    Upload files and append their URLs to a lesson.

    Raises:
        HTTPException: 400 if no files were sent.
        HTTPException: 404 if the lesson does not exist.
        HTTPException: 502 if an upload fails. Files already uploaded in the
            same batch are deleted again and the lesson is left unchanged.
    """
    if not uploads:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No files provided",
        )

    lesson = await get_lesson(course_id, lesson_id, db)

    new_urls = []
    for upload in uploads:
        try:
            url = await run_in_threadpool(
                CloudinaryService.upload_file,
                upload.file,
                upload.filename or "file",
            )
        except Exception as e:
            await discard_files(new_urls)
            raise _storage_error("upload", e) from e
        new_urls.append(url)

    # Reassign so the JSON column is flagged dirty
    lesson.content_urls = list(lesson.content_urls or []) + new_urls
    await db.commit()
    await db.refresh(lesson)
    return lesson


async def remove_lesson_file(
    course_id: str,
    lesson_id: str,
    url: str,
    db: AsyncSession,
) -> Lesson:
    """
    Remove a file from a lesson and delete it from storage.

    Raises:
        HTTPException: 404 if the lesson or the file URL is unknown.
        HTTPException: 502 if the storage delete fails.
    """
    lesson = await get_lesson(course_id, lesson_id, db)
    urls = list(lesson.content_urls or [])

    if url not in urls:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="File not attached to this lesson",
        )

    try:
        await run_in_threadpool(CloudinaryService.delete_file, url)
    except Exception as e:
        raise _storage_error("delete", e) from e

    lesson.content_urls = [u for u in urls if u != url]
    await db.commit()
    await db.refresh(lesson)
    return lesson
