"""
Integration test fixtures. Seeds the in-memory DB and overrides get_db for API tests.
"""
from datetime import datetime

import httpx
import pytest_asyncio

from app.models import Course, Lesson, QuizAttempt, Student


@pytest_asyncio.fixture
async def seeded_db(db_session):
    """
    One student enrolled in two existing courses and one missing course.

    course-1 has three lessons (out of insertion order by position), course-2
    has none.
    """
    db_session.add_all([
        Student(
            id="stu-1",
            name="Ada",
            surname="Lovelace",
            email="ada@example.com",
            created_at=datetime(2024, 1, 10),
            skill_level="Beginner",
            total_score=12,
            subjects_of_interest=["math"],
            enrolled_courses=["course-1", "ghost-course", "course-2"],
            progress={
                "l-intro": {"viewed": True, "lastViewed": "2024-02-01T10:00:00", "completed": True,
                            "completedAt": "2024-02-01T10:05:00"},
                "l-loops": {"viewed": "yes", "completed": 1},
                "l-ignored": "not a dict",
            },
        ),
        Course(id="course-1", title="Python Basics"),
        Course(id="course-2", title=None),
        Lesson(id="l-funcs", course_id="course-1", title="Functions", position=3),
        Lesson(id="l-intro", course_id="course-1", title="Intro", position=1),
        Lesson(id="l-loops", course_id="course-1", title=None, position=2),
        QuizAttempt(id="qa-2", course_id="course-1", lesson_id="l-loops", student_id="stu-1",
                    attempt=2, is_correct=True, quiz_score=90.0, score=1, selected_answer="for",
                    question="Which keyword loops?", submitted_at=datetime(2024, 2, 3, 9, 0)),
        QuizAttempt(id="qa-1", course_id="course-1", lesson_id="l-loops", student_id="stu-1",
                    attempt=1, is_correct=False, quiz_score=50.0, score=0, selected_answer="if",
                    question="Which keyword loops?", submitted_at=datetime(2024, 2, 2, 9, 0)),
        QuizAttempt(id="qa-3", course_id="course-1", lesson_id="l-loops", student_id="stu-1",
                    attempt=3, is_correct=None, quiz_score=90.0, score=0, selected_answer="while"),
        QuizAttempt(id="qa-legacy", course_id="course-1", lesson_id="l-funcs", student_id="stu-1"),
        QuizAttempt(id="qa-other", course_id="course-1", lesson_id="l-funcs", student_id="stu-2",
                    attempt=1, quiz_score=100.0, score=1),
    ])
    await db_session.commit()
    return db_session


@pytest_asyncio.fixture
async def api_client(seeded_db, session_factory):
    """HTTP client for the app with get_db pointed at the in-memory DB."""
    from app.core.database import get_db
    from app.main import app

    async def _get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
