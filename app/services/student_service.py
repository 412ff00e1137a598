"""
Student Service

Student administration: listing and search, registration, soft delete and
restore, plus the dashboard counters.
"""

import logging
from datetime import datetime
from typing import List, Optional
from uuid import uuid4

from fastapi import HTTPException, status
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.course import Course
from app.models.student import Student
from app.schemas.student import DashboardStats, StudentCreate, StudentListItem

logger = logging.getLogger(__name__)


def to_list_item(student: Student) -> StudentListItem:
    """Convert a stored student into a list row, filling display defaults."""
    enrolled = student.enrolled_courses if isinstance(student.enrolled_courses, list) else []
    return StudentListItem(
        id=student.id,
        name=student.name or "Unknown",
        surname=student.surname or "",
        email=student.email or "No email",
        status="Deleted" if student.is_deleted else "Active",
        created_at=student.created_at,
        last_activity=student.last_activity,
        enrolled_courses_count=len(enrolled),
        skill_level=student.skill_level or "Not set",
        total_score=student.total_score or 0,
        subjects_of_interest=[str(s) for s in (student.subjects_of_interest or []) if s],
    )


def _matches(item: StudentListItem, term: str) -> bool:
    term = term.lower()
    return any(
        term in value.lower()
        for value in (item.name, item.surname, item.email, item.status)
    )


async def list_students(db: AsyncSession, search: Optional[str] = None) -> List[StudentListItem]:
    """
    List students, newest first.

    Without a search term soft-deleted students are hidden. With one, every
    student whose name, surname, email or status contains the term
    (case-insensitive) is returned, deleted ones included, so "deleted"
    finds the deleted accounts.

    Args:
        db: Database session.
        search: Optional search term.

    Returns:
        Student rows; students without a registration time come last.
    """
    term = (search or "").strip()
    result = await db.execute(select(Student))

    items = []
    for student in result.scalars().all():
        if student.is_deleted and not term:
            continue
        item = to_list_item(student)
        if term and not _matches(item, term):
            continue
        items.append(item)

    items.sort(
        key=lambda s: (s.created_at is not None, s.created_at or datetime.min),
        reverse=True,
    )
    return items


async def get_student(student_id: str, db: AsyncSession) -> Student:
    """
    Get student by ID.

    Raises:
        HTTPException: 404 if not found.
    """
    student = await db.get(Student, student_id)
    if not student:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Student not found",
        )
    return student


async def create_student(data: StudentCreate, db: AsyncSession) -> Student:
    """
    Register a student with no enrollments and a zero score.

    Args:
        data: Registration details.
        db: Database session.

    Returns:
        Created student.
    """
    now = datetime.utcnow()
    student = Student(
        id=str(uuid4()),
        name=data.name,
        surname=data.surname,
        email=data.email,
        created_at=now,
        last_activity=now,
        is_deleted=False,
        skill_level=data.skill_level or "Beginner",
        total_score=0,
        subjects_of_interest=list(data.subjects_of_interest),
        enrolled_courses=[],
        progress={},
    )
    db.add(student)
    await db.commit()
    await db.refresh(student)

    logger.info("student created student_id=%s", student.id)
    return student


async def _set_deleted(student_id: str, deleted: bool, db: AsyncSession) -> Student:
    student = await get_student(student_id, db)
    student.is_deleted = deleted
    student.last_activity = datetime.utcnow()
    await db.commit()
    await db.refresh(student)
    return student


async def soft_delete_student(student_id: str, db: AsyncSession) -> Student:
    """
    Mark a student as deleted. The record and its progress are kept.

    Raises:
        HTTPException: 404 if not found.
    """
    student = await _set_deleted(student_id, True, db)
    logger.info("student soft-deleted student_id=%s", student_id)
    return student


async def restore_student(student_id: str, db: AsyncSession) -> Student:
    """
    Clear the deleted mark of a student.

    Raises:
        HTTPException: 404 if not found.
    """
    student = await _set_deleted(student_id, False, db)
    logger.info("student restored student_id=%s", student_id)
    return student


async def get_dashboard_stats(db: AsyncSession) -> DashboardStats:
    """Count active (not soft-deleted) students and all courses."""
    student_count = await db.scalar(
        select(func.count())
        .select_from(Student)
        .where(or_(Student.is_deleted.is_(False), Student.is_deleted.is_(None)))
    )
    course_count = await db.scalar(select(func.count()).select_from(Course))

    return DashboardStats(
        student_count=student_count or 0,
        course_count=course_count or 0,
    )
