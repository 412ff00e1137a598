"""
Student Schemas

Pydantic models for student administration and the dashboard counters.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class StudentCreate(BaseModel):
    """Request body for registering a student."""

    name: str = Field(..., min_length=1, max_length=100, description="First name")
    surname: str = Field(..., min_length=1, max_length=100, description="Last name")
    email: str = Field(
        ...,
        max_length=255,
        pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$",
        description="Email address",
    )
    skill_level: str = Field("Beginner", description="Beginner, Intermediate or Advanced")
    subjects_of_interest: List[str] = Field(default_factory=list, description="Subjects the student follows")


class StudentListItem(BaseModel):
    """One row of the student list."""

    id: str = Field(..., description="Student ID")
    name: str = Field("Unknown", description="First name")
    surname: str = Field("", description="Last name")
    email: str = Field("No email", description="Email address")
    status: str = Field("Active", description="Active or Deleted")
    created_at: Optional[datetime] = Field(None, description="Registration time")
    last_activity: Optional[datetime] = Field(None, description="Last recorded activity")
    enrolled_courses_count: int = Field(0, description="Number of enrolled courses")
    skill_level: str = Field("Not set", description="Skill level")
    total_score: int = Field(0, description="Accumulated score")
    subjects_of_interest: List[str] = Field(default_factory=list)


class DashboardStats(BaseModel):
    """Counters shown on the admin home page."""

    student_count: int = Field(..., description="Students that are not soft-deleted")
    course_count: int = Field(..., description="All courses")
