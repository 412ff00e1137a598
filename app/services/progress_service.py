"""
Progress Service

Builds the student progress report shown on the admin student detail page.

Fetches go through a ProgressStore; every fetch failure is logged and
replaced by an empty result so one broken course or lesson never aborts the
whole report.
"""

import logging
from typing import Dict, List, Optional, Protocol

from app.schemas.progress import (
    AttemptRecord,
    CourseProgressView,
    LessonBasicState,
    LessonRef,
    StudentProfile,
    StudentSummaryView,
)
from app.services.progress_engine import (
    aggregate_course_progress,
    aggregate_student_summary,
    build_lesson_progress,
)

logger = logging.getLogger(__name__)


class ProgressStore(Protocol):
    """Read access to the records the progress report is built from."""

    async def fetch_student(self, student_id: str) -> Optional[StudentProfile]: ...

    async def fetch_enrolled_course_ids(self, student_id: str) -> List[str]: ...

    async def fetch_basic_state(self, student_id: str) -> Dict[str, LessonBasicState]: ...

    async def fetch_course_name(self, course_id: str) -> Optional[str]: ...

    async def fetch_lessons(self, course_id: str) -> List[LessonRef]: ...

    async def fetch_attempts(
        self, course_id: str, lesson_id: str, student_id: str
    ) -> List[AttemptRecord]: ...


async def _course_name(store: ProgressStore, course_id: str) -> str:
    try:
        name = await store.fetch_course_name(course_id)
    except Exception:
        logger.warning("course name lookup failed course_id=%s", course_id, exc_info=True)
        return course_id
    return name or course_id


async def _lessons(store: ProgressStore, course_id: str) -> List[LessonRef]:
    try:
        return list(await store.fetch_lessons(course_id))
    except Exception:
        logger.warning("lesson fetch failed course_id=%s", course_id, exc_info=True)
        return []


async def _attempts(
    store: ProgressStore,
    course_id: str,
    lesson_id: str,
    student_id: str,
) -> List[AttemptRecord]:
    try:
        return list(await store.fetch_attempts(course_id, lesson_id, student_id))
    except Exception:
        logger.warning(
            "attempt fetch failed course_id=%s lesson_id=%s student_id=%s",
            course_id, lesson_id, student_id, exc_info=True,
        )
        return []


async def _basic_state(store: ProgressStore, student_id: str) -> Dict[str, LessonBasicState]:
    try:
        return dict(await store.fetch_basic_state(student_id) or {})
    except Exception:
        logger.warning("basic state fetch failed student_id=%s", student_id, exc_info=True)
        return {}


async def build_course_progress(
    store: ProgressStore,
    student_id: str,
    course_id: str,
    basic_state: Optional[Dict[str, LessonBasicState]] = None,
) -> CourseProgressView:
    """
    Build one course's progress for a student.

    Args:
        store: Record source.
        student_id: Student ID.
        course_id: Course ID.
        basic_state: Lesson basic-state map; fetched when not supplied.

    Returns:
        Course progress view with one lesson row per course lesson, in
        course order.
    """
    if basic_state is None:
        basic_state = await _basic_state(store, student_id)

    course_name = await _course_name(store, course_id)

    lessons = []
    for lesson in await _lessons(store, course_id):
        attempts = await _attempts(store, course_id, lesson.lesson_id, student_id)
        lessons.append(
            build_lesson_progress(
                lesson_id=lesson.lesson_id,
                lesson_name=lesson.lesson_name,
                basic_state=basic_state.get(lesson.lesson_id),
                attempts=attempts,
            )
        )

    return aggregate_course_progress(course_id, course_name, lessons)


async def build_student_summary(
    store: ProgressStore,
    student_id: str,
) -> StudentSummaryView:
    """
    Build the full progress report for a student.

    Flow:
    1. Load the student profile and lesson basic state.
    2. For each enrolled course (enrollment order) build its progress.
    3. Roll the courses up into the student summary.

    Never raises for missing or unreadable records; an unknown student
    yields an empty summary.

    Args:
        store: Record source.
        student_id: Student ID.

    Returns:
        Student summary view.
    """
    try:
        profile = await store.fetch_student(student_id)
    except Exception:
        logger.warning("student fetch failed student_id=%s", student_id, exc_info=True)
        profile = None
    if profile is None:
        profile = StudentProfile(student_id=student_id)

    try:
        course_ids = list(await store.fetch_enrolled_course_ids(student_id))
    except Exception:
        logger.warning("enrollment fetch failed student_id=%s", student_id, exc_info=True)
        course_ids = []

    basic_state = await _basic_state(store, student_id)

    courses = []
    for course_id in course_ids:
        courses.append(
            await build_course_progress(store, student_id, course_id, basic_state)
        )

    summary = aggregate_student_summary(profile, courses)
    logger.info(
        "progress summary built student_id=%s courses=%d completed=%d",
        student_id, summary.total_courses, summary.total_completed_courses,
    )
    return summary
