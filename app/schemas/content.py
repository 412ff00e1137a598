"""
Content Schemas

Pydantic models for course image and lesson file management.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class CourseImageResponse(BaseModel):
    """Schema returned after a course image upload."""

    course_id: str = Field(..., description="Course ID")
    image_url: Optional[str] = Field(None, description="Delivery URL of the course image")


class LessonFilesResponse(BaseModel):
    """Schema listing the stored files of a lesson."""

    course_id: str = Field(..., description="Course ID")
    lesson_id: str = Field(..., description="Lesson ID")
    content_urls: List[str] = Field(default_factory=list, description="Delivery URLs of the lesson files")
