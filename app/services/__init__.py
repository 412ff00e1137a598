"""
Learning Admin - Services Module

Business logic layer.
"""

from app.services import content_service
from app.services import course_service
from app.services import progress_engine
from app.services import progress_service
from app.services import storage_service
from app.services import student_service
from app.services import tutor_service

__all__ = [
    "content_service",
    "course_service",
    "progress_engine",
    "progress_service",
    "storage_service",
    "student_service",
    "tutor_service",
]
