"""Student document model."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base


class Student(Base):
    """
    A student record.

    `enrolled_courses` keeps course ids in enrollment order. `progress` maps
    lesson id to the raw basic-state document for that lesson
    (viewed / lastViewed / completed / completedAt); entries are written by the
    student-facing app and may be partial.
    """

    __tablename__ = "students"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    surname: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    created_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    last_activity: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False)
    skill_level: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    total_score: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    subjects_of_interest: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)
    enrolled_courses: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)
    progress: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSON, nullable=True)

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, email={self.email})>"
