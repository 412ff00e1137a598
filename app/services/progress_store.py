"""
Progress Store

SQLAlchemy-backed reads of students, courses, lessons and quiz attempts,
returned as progress schemas. Raw records are coerced field by field so a
missing or badly typed value falls back to a documented default instead of
failing the read.
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, AsyncIterator, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.course import Course
from app.models.lesson import Lesson
from app.models.quiz_attempt import QuizAttempt
from app.models.student import Student
from app.schemas.progress import (
    AttemptRecord,
    LessonBasicState,
    LessonRef,
    StudentProfile,
)


# ============== Field Coercion ==============

def parse_timestamp(value: Any) -> Optional[datetime]:
    """Accept a datetime or an ISO-8601 string; anything else is absent."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


def _flag(value: Any) -> bool:
    return value is True


def coerce_basic_state(raw: Any) -> LessonBasicState:
    """
    Build a basic-state record from a raw progress entry.

    Recognised keys: viewed, lastViewed, completed, completedAt. Flags count
    only when they are real booleans.
    """
    if not isinstance(raw, dict):
        return LessonBasicState()
    return LessonBasicState(
        viewed=_flag(raw.get("viewed")),
        last_viewed_at=parse_timestamp(raw.get("lastViewed")),
        completed=_flag(raw.get("completed")),
        completed_at=parse_timestamp(raw.get("completedAt")),
    )


def attempt_from_row(row: QuizAttempt) -> AttemptRecord:
    """
    Convert a stored quiz attempt into an AttemptRecord.

    Defaults: attempt number 1, score 0, points 0, not correct, question
    "Unknown Question". Score percentages are clamped to 0-100 and points
    to non-negative values.
    """
    score_percent = float(row.quiz_score) if row.quiz_score is not None else 0.0
    points = int(row.score) if row.score is not None else 0

    return AttemptRecord(
        response_id=row.id,
        lesson_id=row.lesson_id,
        course_id=row.course_id,
        attempt_number=row.attempt if row.attempt is not None else 1,
        is_correct=_flag(row.is_correct),
        score_percent=min(max(score_percent, 0.0), 100.0),
        points_score=max(points, 0),
        selected_answer=row.selected_answer,
        correct_answer_at_time_of_attempt=row.correct_answer,
        question_text=row.question if row.question is not None else "Unknown Question",
        submitted_at=row.submitted_at,
    )


def profile_from_student(student: Student) -> StudentProfile:
    return StudentProfile(
        student_id=student.id,
        name=student.name or "Unknown",
        surname=student.surname or "",
        email=student.email or "No email",
        created_at=student.created_at,
        last_activity=student.last_activity,
        skill_level=student.skill_level or "Not set",
        total_score=student.total_score or 0,
        subjects_of_interest=[str(s) for s in (student.subjects_of_interest or []) if s],
        is_deleted=bool(student.is_deleted),
    )


# ============== Store ==============

class SqlProgressStore:
    """
    Reads progress inputs through one AsyncSession.

    Methods are awaited one after another; an AsyncSession must not be used
    from concurrent tasks. A failed query rolls the session back before the
    error propagates, so later reads in the same request start from a clean
    transaction.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def _reading(self) -> AsyncIterator[None]:
        try:
            yield
        except Exception:
            await self.db.rollback()
            raise

    async def _get_student(self, student_id: str) -> Optional[Student]:
        async with self._reading():
            return await self.db.get(Student, student_id)

    async def fetch_student(self, student_id: str) -> Optional[StudentProfile]:
        student = await self._get_student(student_id)
        if student is None:
            return None
        return profile_from_student(student)

    async def fetch_enrolled_course_ids(self, student_id: str) -> List[str]:
        student = await self._get_student(student_id)
        if student is None or not isinstance(student.enrolled_courses, list):
            return []
        return [str(c) for c in student.enrolled_courses if c]

    async def fetch_basic_state(self, student_id: str) -> Dict[str, LessonBasicState]:
        student = await self._get_student(student_id)
        if student is None or not isinstance(student.progress, dict):
            return {}
        return {
            str(lesson_id): coerce_basic_state(raw)
            for lesson_id, raw in student.progress.items()
        }

    async def fetch_course_name(self, course_id: str) -> Optional[str]:
        async with self._reading():
            course = await self.db.get(Course, course_id)
        if course is None:
            return None
        return course.title or None

    async def fetch_lessons(self, course_id: str) -> List[LessonRef]:
        async with self._reading():
            result = await self.db.execute(
                select(Lesson)
                .where(Lesson.course_id == course_id)
                .order_by(Lesson.position, Lesson.id)
            )
            lessons = result.scalars().all()
        return [
            LessonRef(lesson_id=lesson.id, lesson_name=lesson.title)
            for lesson in lessons
        ]

    async def fetch_attempts(
        self,
        course_id: str,
        lesson_id: str,
        student_id: str,
    ) -> List[AttemptRecord]:
        async with self._reading():
            result = await self.db.execute(
                select(QuizAttempt)
                .where(
                    QuizAttempt.course_id == course_id,
                    QuizAttempt.lesson_id == lesson_id,
                    QuizAttempt.student_id == student_id,
                )
                .order_by(func.coalesce(QuizAttempt.attempt, 1), QuizAttempt.id)
            )
            rows = result.scalars().all()
        return [attempt_from_row(row) for row in rows]
