"""
Pytest configuration and shared fixtures for the test suite.
Provides attempt/state factories, an in-memory progress store and an
in-memory SQLite database.
"""
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Add project root to Python path for imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from app.schemas.progress import (  # noqa: E402
    AttemptRecord,
    LessonBasicState,
    LessonRef,
    StudentProfile,
)


# ----- Record factories -----
def make_attempt(
    score: float,
    pts: int = 0,
    attempt: int = 1,
    lesson_id: str = "lesson-1",
    course_id: str = "course-1",
    submitted_at: Optional[datetime] = None,
    selected: Optional[str] = None,
) -> AttemptRecord:
    return AttemptRecord(
        response_id=f"{lesson_id}-r{attempt}",
        lesson_id=lesson_id,
        course_id=course_id,
        attempt_number=attempt,
        is_correct=pts > 0,
        score_percent=score,
        points_score=pts,
        selected_answer=selected,
        question_text="What is 2 + 2?",
        submitted_at=submitted_at,
    )


@pytest.fixture
def attempt_factory():
    return make_attempt


# ----- In-memory progress store -----
class FakeProgressStore:
    """
    Dict-backed ProgressStore. Any id listed in a `fail_*` set, or a `fail_*`
    flag set to True, makes the matching fetch raise.
    """

    def __init__(
        self,
        students: Optional[Dict[str, StudentProfile]] = None,
        enrollments: Optional[Dict[str, List[str]]] = None,
        course_names: Optional[Dict[str, str]] = None,
        lessons: Optional[Dict[str, List[LessonRef]]] = None,
        attempts: Optional[Dict[tuple, List[AttemptRecord]]] = None,
        basic_state: Optional[Dict[str, Dict[str, LessonBasicState]]] = None,
    ):
        self.students = students or {}
        self.enrollments = enrollments or {}
        self.course_names = course_names or {}
        self.lessons = lessons or {}
        self.attempts = attempts or {}
        self.basic_state = basic_state or {}
        self.fail_student = False
        self.fail_enrollments = False
        self.fail_course_names = set()
        self.fail_lessons = set()
        self.fail_attempts = set()
        self.fail_basic_state = False
        self.calls = []

    async def fetch_student(self, student_id):
        self.calls.append(("student", student_id))
        if self.fail_student:
            raise RuntimeError("student record unavailable")
        return self.students.get(student_id)

    async def fetch_enrolled_course_ids(self, student_id):
        self.calls.append(("enrollments", student_id))
        if self.fail_enrollments:
            raise RuntimeError("enrollments unavailable")
        return list(self.enrollments.get(student_id, []))

    async def fetch_basic_state(self, student_id):
        self.calls.append(("basic_state", student_id))
        if self.fail_basic_state:
            raise RuntimeError("basic state unavailable")
        return dict(self.basic_state.get(student_id, {}))

    async def fetch_course_name(self, course_id):
        self.calls.append(("course_name", course_id))
        if course_id in self.fail_course_names:
            raise RuntimeError(f"course {course_id} unavailable")
        return self.course_names.get(course_id)

    async def fetch_lessons(self, course_id):
        self.calls.append(("lessons", course_id))
        if course_id in self.fail_lessons:
            raise RuntimeError(f"lessons of {course_id} unavailable")
        return list(self.lessons.get(course_id, []))

    async def fetch_attempts(self, course_id, lesson_id, student_id):
        self.calls.append(("attempts", course_id, lesson_id))
        if lesson_id in self.fail_attempts:
            raise RuntimeError(f"attempts of {lesson_id} unavailable")
        return list(self.attempts.get((course_id, lesson_id, student_id), []))


@pytest.fixture
def fake_store():
    """Store with one student enrolled in two courses."""
    return FakeProgressStore(
        students={
            "stu-1": StudentProfile(student_id="stu-1", name="Ada", surname="Lovelace", email="ada@example.com"),
        },
        enrollments={"stu-1": ["course-a", "course-b"]},
        course_names={"course-a": "Algebra", "course-b": "Biology"},
        lessons={
            "course-a": [LessonRef(lesson_id="a1", lesson_name="Sets"), LessonRef(lesson_id="a2", lesson_name="Groups")],
            "course-b": [LessonRef(lesson_id="b1", lesson_name="Cells")],
        },
        attempts={
            ("course-a", "a1", "stu-1"): [
                make_attempt(60, 0, attempt=1, lesson_id="a1", course_id="course-a"),
                make_attempt(100, 1, attempt=2, lesson_id="a1", course_id="course-a"),
            ],
            ("course-b", "b1", "stu-1"): [
                make_attempt(40, 0, attempt=1, lesson_id="b1", course_id="course-b"),
            ],
        },
        basic_state={
            "stu-1": {
                "a2": LessonBasicState(viewed=True, completed=False),
            },
        },
    )


# ----- In-memory DB -----
@pytest_asyncio.fixture
async def db_engine():
    """Create an in-memory SQLite engine with all tables."""
    from app.core.database import Base
    import app.models  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    return async_sessionmaker(bind=db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session
