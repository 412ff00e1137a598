"""
Learning Admin - Schemas Module

Pydantic models for request/response validation.
"""

from app.schemas.progress import (
    AttemptRecord,
    LessonBasicState,
    LessonRef,
    LessonProgressView,
    CourseProgressView,
    StudentProfile,
    StudentSummaryView,
)
from app.schemas.content import (
    CourseImageResponse,
    LessonFilesResponse,
)
from app.schemas.course import (
    CourseCreate,
    CourseUpdate,
    CourseRead,
    CourseListItem,
    CourseDetail,
    LessonCreate,
    LessonUpdate,
    LessonRead,
    LessonDetail,
    QuizCreate,
    QuizUpdate,
    QuizRead,
)
from app.schemas.student import StudentCreate, StudentListItem, DashboardStats
from app.schemas.tutor import QuestionRequest, AnswerResponse

__all__ = [
    # Progress
    "AttemptRecord",
    "LessonBasicState",
    "LessonRef",
    "LessonProgressView",
    "CourseProgressView",
    "StudentProfile",
    "StudentSummaryView",
    # Content
    "CourseImageResponse",
    "LessonFilesResponse",
    # Courses
    "CourseCreate",
    "CourseUpdate",
    "CourseRead",
    "CourseListItem",
    "CourseDetail",
    "LessonCreate",
    "LessonUpdate",
    "LessonRead",
    "LessonDetail",
    "QuizCreate",
    "QuizUpdate",
    "QuizRead",
    # Students
    "StudentCreate",
    "StudentListItem",
    "DashboardStats",
    # Tutor
    "QuestionRequest",
    "AnswerResponse",
]
