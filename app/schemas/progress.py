"""
Progress Schemas

Pydantic models for quiz attempts, lesson basic state and the derived
lesson / course / student progress views. Derived metrics are computed on
read from the lesson and course sequences.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


# Lesson pass bar: best attempt score at or above this marks the lesson completed.
LESSON_PASS_THRESHOLD = 80.0

# Course completion bar: completion percentage at or above this marks the course completed.
COURSE_COMPLETION_THRESHOLD = 80.0

# Each lesson quiz is worth a single point.
LESSON_MAX_POINTS = 1


def _mean(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _percentage(part: float, whole: float) -> float:
    return (part * 100.0) / whole if whole > 0 else 0.0


class AttemptRecord(BaseModel):
    """One recorded quiz submission. Never mutated once built."""

    model_config = ConfigDict(frozen=True)

    response_id: Optional[str] = Field(None, description="Store id of the submission")
    lesson_id: str = Field(..., description="Lesson the quiz belongs to")
    course_id: str = Field(..., description="Course the lesson belongs to")
    attempt_number: int = Field(1, description="Attempt counter as recorded by the store")
    is_correct: bool = Field(False, description="Whether the selected answer was correct")
    score_percent: float = Field(0.0, ge=0, le=100, description="Score percentage (0-100)")
    points_score: int = Field(0, ge=0, description="Points awarded")
    selected_answer: Optional[str] = Field(None, description="Answer picked by the student")
    correct_answer_at_time_of_attempt: Optional[str] = Field(
        None, description="Correct answer when the attempt was graded"
    )
    question_text: str = Field("Unknown Question", description="Question shown to the student")
    submitted_at: Optional[datetime] = Field(None, description="Submission time, absent for legacy records")
    is_best_attempt: bool = Field(False, description="Set on the best attempt within a lesson snapshot")

    @computed_field
    @property
    def result(self) -> str:
        return "Correct" if self.is_correct else "Incorrect"


class LessonBasicState(BaseModel):
    """Viewed/completed flags for a lesson, independent of quizzes."""

    model_config = ConfigDict(frozen=True)

    viewed: bool = False
    last_viewed_at: Optional[datetime] = None
    completed: bool = False
    completed_at: Optional[datetime] = None


class LessonRef(BaseModel):
    """A lesson as enumerated from a course."""

    lesson_id: str
    lesson_name: Optional[str] = None


class LessonProgressView(BaseModel):
    """Progress of one student on one lesson."""

    lesson_id: str
    lesson_name: str
    viewed: bool = False
    last_viewed_at: Optional[datetime] = None
    completed: bool = False
    attempt_count: int = 0
    best_score_percent: float = 0.0
    best_points_score: int = 0
    max_possible_points: int = LESSON_MAX_POINTS
    best_selected_answer: Optional[str] = None
    completed_at: Optional[datetime] = None
    attempts: List[AttemptRecord] = Field(default_factory=list)

    @computed_field
    @property
    def has_quiz(self) -> bool:
        return self.attempt_count > 0

    @computed_field
    @property
    def points_percentage(self) -> float:
        return _percentage(self.best_points_score, self.max_possible_points)

    @computed_field
    @property
    def status(self) -> str:
        if self.completed:
            return "Completed"
        return "Viewed" if self.viewed else "Not Started"


class CourseProgressView(BaseModel):
    """Progress of one student across the lessons of one course."""

    course_id: str
    course_name: str
    lessons: List[LessonProgressView] = Field(default_factory=list)

    @computed_field
    @property
    def completed_lessons(self) -> int:
        return sum(1 for lesson in self.lessons if lesson.completed)

    @computed_field
    @property
    def total_lessons(self) -> int:
        return len(self.lessons)

    @computed_field
    @property
    def completion_percentage(self) -> float:
        return _percentage(self.completed_lessons, self.total_lessons)

    @computed_field
    @property
    def average_best_score(self) -> float:
        """Mean best score over completed lessons only."""
        return _mean([l.best_score_percent for l in self.lessons if l.completed])

    @computed_field
    @property
    def average_points_percentage(self) -> float:
        return _mean([l.points_percentage for l in self.lessons if l.completed])

    @computed_field
    @property
    def total_points_earned(self) -> int:
        return sum(lesson.best_points_score for lesson in self.lessons)

    @computed_field
    @property
    def total_possible_points(self) -> int:
        return self.total_lessons * LESSON_MAX_POINTS

    @computed_field
    @property
    def overall_points_percentage(self) -> float:
        pct = _percentage(self.total_points_earned, self.total_possible_points)
        return max(0.0, min(pct, 100.0))  # Clamp to 0-100%

    @computed_field
    @property
    def status(self) -> str:
        if self.completion_percentage >= COURSE_COMPLETION_THRESHOLD:
            return "Completed"
        return "In Progress"


class StudentProfile(BaseModel):
    """Identity fields of a student as read from the store."""

    student_id: str
    name: str = "Unknown"
    surname: str = ""
    email: str = "No email"
    created_at: Optional[datetime] = None
    last_activity: Optional[datetime] = None
    skill_level: str = "Not set"
    total_score: int = 0
    subjects_of_interest: List[str] = Field(default_factory=list)
    is_deleted: bool = False


class StudentSummaryView(BaseModel):
    """Student-wide progress report used by the admin student detail page."""

    student_id: str
    name: str = "Unknown"
    surname: str = ""
    email: str = "No email"
    created_at: Optional[datetime] = None
    last_activity: Optional[datetime] = None
    skill_level: str = "Not set"
    total_score: int = 0
    subjects_of_interest: List[str] = Field(default_factory=list)
    account_status: str = "Active"
    courses: List[CourseProgressView] = Field(default_factory=list)

    @computed_field
    @property
    def full_name(self) -> str:
        return f"{self.name} {self.surname}".strip()

    @computed_field
    @property
    def total_courses(self) -> int:
        return len(self.courses)

    @computed_field
    @property
    def total_completed_courses(self) -> int:
        return sum(
            1 for c in self.courses
            if c.completion_percentage >= COURSE_COMPLETION_THRESHOLD
        )

    @computed_field
    @property
    def overall_quiz_score(self) -> float:
        return _mean([c.average_best_score for c in self.courses])

    @computed_field
    @property
    def overall_points_percentage(self) -> float:
        return _mean([c.overall_points_percentage for c in self.courses])
