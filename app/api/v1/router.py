"""
API v1 Router

Collects the versioned endpoint routers.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import content, courses, dashboard, progress, students, tutor


api_router = APIRouter()
api_router.include_router(dashboard.router)
api_router.include_router(students.router)
api_router.include_router(progress.router)
api_router.include_router(courses.router)
api_router.include_router(content.router)
api_router.include_router(tutor.router)
