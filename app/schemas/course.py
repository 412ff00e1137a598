"""
Course Schemas

Pydantic models for course, lesson and quiz management.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


AnswerKey = Literal["A", "B", "C", "D"]


# ============== Courses ==============

class CourseCreate(BaseModel):
    """Request body for creating a course. The image is uploaded separately."""

    title: str = Field(..., min_length=1, max_length=255, description="Course title")
    description: Optional[str] = Field(None, description="Course description")
    category: Optional[str] = Field(None, max_length=100, description="Subject category")
    difficulty: Optional[str] = Field(None, max_length=50, description="Beginner, Intermediate or Advanced")


class CourseUpdate(BaseModel):
    """Partial course update; omitted fields keep their value."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=100)
    difficulty: Optional[str] = Field(None, max_length=50)


class CourseRead(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    difficulty: Optional[str] = None
    image_url: Optional[str] = None


class CourseListItem(CourseRead):
    """Course row with the number of enrolled students."""

    enrollment_count: int = Field(0, description="Students enrolled in the course")


# ============== Lessons ==============

class LessonCreate(BaseModel):
    """
    Request body for creating a lesson.

    Link lessons carry their URLs here; uploaded files are attached through
    the lesson files endpoint.
    """

    title: str = Field(..., min_length=1, max_length=255, description="Lesson title")
    description: Optional[str] = Field(None, description="Lesson description")
    content_type: Optional[str] = Field(None, max_length=50, description="e.g. Video, Document, Link")
    content_urls: List[str] = Field(default_factory=list, description="External content URLs")
    position: Optional[int] = Field(
        None, ge=0, description="Order within the course; appended at the end when omitted"
    )


class LessonUpdate(BaseModel):
    """Partial lesson update; omitted fields keep their value."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    content_type: Optional[str] = Field(None, max_length=50)
    position: Optional[int] = Field(None, ge=0)


class LessonRead(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    course_id: str
    title: Optional[str] = None
    description: Optional[str] = None
    content_type: Optional[str] = None
    content_urls: Optional[List[str]] = None
    position: int = 0
    uploaded_at: Optional[datetime] = None


# ============== Quizzes ==============

class QuizCreate(BaseModel):
    """Request body for a multiple-choice question."""

    question: str = Field(..., min_length=1, description="Question text")
    option_a: str = Field(..., min_length=1)
    option_b: str = Field(..., min_length=1)
    option_c: str = Field(..., min_length=1)
    option_d: str = Field(..., min_length=1)
    correct_answer: AnswerKey = Field(..., description="Letter of the correct option")
    difficulty: Optional[str] = Field(None, max_length=50)


class QuizUpdate(BaseModel):
    """Partial quiz update; omitted fields keep their value."""

    question: Optional[str] = Field(None, min_length=1)
    option_a: Optional[str] = Field(None, min_length=1)
    option_b: Optional[str] = Field(None, min_length=1)
    option_c: Optional[str] = Field(None, min_length=1)
    option_d: Optional[str] = Field(None, min_length=1)
    correct_answer: Optional[AnswerKey] = None
    difficulty: Optional[str] = Field(None, max_length=50)


class QuizRead(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    course_id: str
    lesson_id: str
    question: str
    option_a: str
    option_b: str
    option_c: str
    option_d: str
    correct_answer: str
    difficulty: Optional[str] = None
    created_at: Optional[datetime] = None


# ============== Detail views ==============

class LessonDetail(LessonRead):
    """Lesson with its quiz questions."""

    quizzes: List[QuizRead] = Field(default_factory=list)


class CourseDetail(CourseRead):
    """Course with its lessons in course order."""

    lessons: List[LessonRead] = Field(default_factory=list)
