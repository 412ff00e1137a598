"""QuizAttempt model."""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base


class QuizAttempt(Base):
    """
    One quiz submission for a lesson by a student.

    Payload columns are nullable: legacy submissions were recorded before
    some fields existed. Course and lesson ids are plain references; the
    attempt history outlives deleted courses and lessons.
    """

    __tablename__ = "quiz_attempts"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    course_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    lesson_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    student_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    attempt: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    is_correct: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    quiz_score: Mapped[Optional[float]] = mapped_column(Float, nullable=True)  # percent 0-100
    score: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)  # points
    selected_answer: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    correct_answer: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    question: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    submitted_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    def __repr__(self) -> str:
        return (
            f"<QuizAttempt(id={self.id}, lesson_id={self.lesson_id}, "
            f"attempt={self.attempt}, quiz_score={self.quiz_score})>"
        )
