"""
Course Service

Course, lesson and quiz management. Stored files referenced by deleted
courses and lessons are removed from Cloudinary after the database change
is committed.
"""

import logging
from collections import Counter
from datetime import datetime
from typing import List
from uuid import uuid4

from fastapi import HTTPException, status
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.course import Course
from app.models.lesson import Lesson
from app.models.quiz import Quiz
from app.models.student import Student
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
from app.services.content_service import discard_files, get_course, get_lesson

logger = logging.getLogger(__name__)


def _apply(target, changes) -> None:
    # Omitted and null fields keep their stored value
    for field, value in changes.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(target, field, value)


async def _lessons_of(course_id: str, db: AsyncSession) -> List[Lesson]:
    result = await db.execute(
        select(Lesson)
        .where(Lesson.course_id == course_id)
        .order_by(Lesson.position, Lesson.id)
    )
    return list(result.scalars().all())


# ============== Courses ==============

async def list_courses(db: AsyncSession) -> List[CourseListItem]:
    """
    List all courses by title with the number of students enrolled in each.

    Soft-deleted students still count as enrolled.
    """
    courses = (
        await db.execute(select(Course).order_by(Course.title, Course.id))
    ).scalars().all()

    enrollments = Counter()
    for enrolled in (await db.execute(select(Student.enrolled_courses))).scalars():
        if isinstance(enrolled, list):
            enrollments.update({str(c) for c in enrolled if c})

    return [
        CourseListItem(
            **CourseRead.model_validate(course).model_dump(),
            enrollment_count=enrollments[course.id],
        )
        for course in courses
    ]


async def create_course(data: CourseCreate, db: AsyncSession) -> Course:
    """Create a course without an image."""
    course = Course(id=str(uuid4()), **data.model_dump())
    db.add(course)
    await db.commit()
    await db.refresh(course)

    logger.info("course created course_id=%s", course.id)
    return course


async def get_course_detail(course_id: str, db: AsyncSession) -> CourseDetail:
    """
    Get a course with its lessons in course order.

    Raises:
        HTTPException: 404 if not found.
    """
    course = await get_course(course_id, db)
    lessons = await _lessons_of(course_id, db)
    return CourseDetail(
        **CourseRead.model_validate(course).model_dump(),
        lessons=[LessonRead.model_validate(lesson) for lesson in lessons],
    )


async def update_course(course_id: str, data: CourseUpdate, db: AsyncSession) -> Course:
    """
    Update course fields. The image is managed by the course image endpoint.

    Raises:
        HTTPException: 404 if not found.
    """
    course = await get_course(course_id, db)
    _apply(course, data)
    await db.commit()
    await db.refresh(course)
    return course


async def delete_course(course_id: str, db: AsyncSession) -> None:
    """
    Delete a course with its lessons and quizzes.

    Recorded quiz attempts are kept. The course image and lesson files are
    removed from storage once the rows are gone; storage failures are logged.

    Raises:
        HTTPException: 404 if not found.
    """
    course = await get_course(course_id, db)
    lessons = await _lessons_of(course_id, db)

    stored_urls = [course.image_url] if course.image_url else []
    for lesson in lessons:
        stored_urls.extend(lesson.content_urls or [])

    await db.execute(delete(Quiz).where(Quiz.course_id == course_id))
    await db.execute(delete(Lesson).where(Lesson.course_id == course_id))
    await db.delete(course)
    await db.commit()

    await discard_files(stored_urls)
    logger.info("course deleted course_id=%s lessons=%d", course_id, len(lessons))


# ============== Lessons ==============

async def list_lessons(course_id: str, db: AsyncSession) -> List[Lesson]:
    """
    List the lessons of a course in course order.

    Raises:
        HTTPException: 404 if the course does not exist.
    """
    await get_course(course_id, db)
    return await _lessons_of(course_id, db)


async def create_lesson(course_id: str, data: LessonCreate, db: AsyncSession) -> Lesson:
    """
    Add a lesson to a course.

    Without an explicit position the lesson goes after the current last one.

    Raises:
        HTTPException: 404 if the course does not exist.
    """
    await get_course(course_id, db)

    position = data.position
    if position is None:
        last = await db.scalar(
            select(func.max(Lesson.position)).where(Lesson.course_id == course_id)
        )
        position = 0 if last is None else last + 1

    lesson = Lesson(
        id=str(uuid4()),
        course_id=course_id,
        title=data.title,
        description=data.description,
        content_type=data.content_type,
        content_urls=list(data.content_urls),
        position=position,
        uploaded_at=datetime.utcnow(),
    )
    db.add(lesson)
    await db.commit()
    await db.refresh(lesson)

    logger.info("lesson created course_id=%s lesson_id=%s", course_id, lesson.id)
    return lesson


async def get_lesson_detail(course_id: str, lesson_id: str, db: AsyncSession) -> LessonDetail:
    """
    Get a lesson with its quiz questions, oldest first.

    Raises:
        HTTPException: 404 if the lesson does not exist in the course.
    """
    lesson = await get_lesson(course_id, lesson_id, db)
    quizzes = (
        await db.execute(
            select(Quiz)
            .where(Quiz.lesson_id == lesson_id)
            .order_by(Quiz.created_at, Quiz.id)
        )
    ).scalars().all()
    return LessonDetail(
        **LessonRead.model_validate(lesson).model_dump(),
        quizzes=[QuizRead.model_validate(quiz) for quiz in quizzes],
    )


async def update_lesson(
    course_id: str,
    lesson_id: str,
    data: LessonUpdate,
    db: AsyncSession,
) -> Lesson:
    """
    Update lesson fields. Files are managed by the lesson files endpoints.

    Raises:
        HTTPException: 404 if the lesson does not exist in the course.
    """
    lesson = await get_lesson(course_id, lesson_id, db)
    _apply(lesson, data)
    await db.commit()
    await db.refresh(lesson)
    return lesson


async def delete_lesson(course_id: str, lesson_id: str, db: AsyncSession) -> None:
    """
    Delete a lesson with its quizzes and remove its files from storage.

    Raises:
        HTTPException: 404 if the lesson does not exist in the course.
    """
    lesson = await get_lesson(course_id, lesson_id, db)
    stored_urls = list(lesson.content_urls or [])

    await db.execute(delete(Quiz).where(Quiz.lesson_id == lesson_id))
    await db.delete(lesson)
    await db.commit()

    await discard_files(stored_urls)
    logger.info("lesson deleted course_id=%s lesson_id=%s", course_id, lesson_id)


# ============== Quizzes ==============

async def get_quiz(course_id: str, lesson_id: str, quiz_id: str, db: AsyncSession) -> Quiz:
    """
    Get a quiz question of a lesson.

    Raises:
        HTTPException: 404 if the lesson or the quiz does not exist.
    """
    await get_lesson(course_id, lesson_id, db)
    result = await db.execute(
        select(Quiz).where(Quiz.id == quiz_id, Quiz.lesson_id == lesson_id)
    )
    quiz = result.scalar_one_or_none()
    if not quiz:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Quiz not found",
        )
    return quiz


async def create_quiz(
    course_id: str,
    lesson_id: str,
    data: QuizCreate,
    db: AsyncSession,
) -> Quiz:
    """
    Add a multiple-choice question to a lesson.

    Raises:
        HTTPException: 404 if the lesson does not exist in the course.
    """
    await get_lesson(course_id, lesson_id, db)
    quiz = Quiz(
        id=str(uuid4()),
        course_id=course_id,
        lesson_id=lesson_id,
        created_at=datetime.utcnow(),
        **data.model_dump(),
    )
    db.add(quiz)
    await db.commit()
    await db.refresh(quiz)
    return quiz


async def update_quiz(
    course_id: str,
    lesson_id: str,
    quiz_id: str,
    data: QuizUpdate,
    db: AsyncSession,
) -> Quiz:
    quiz = await get_quiz(course_id, lesson_id, quiz_id, db)
    _apply(quiz, data)
    await db.commit()
    await db.refresh(quiz)
    return quiz


async def delete_quiz(course_id: str, lesson_id: str, quiz_id: str, db: AsyncSession) -> None:
    quiz = await get_quiz(course_id, lesson_id, quiz_id, db)
    await db.delete(quiz)
    await db.commit()
