"""
Learning Admin - Models Module

SQLAlchemy ORM models.
"""

from app.models.student import Student
from app.models.course import Course
from app.models.lesson import Lesson
from app.models.quiz import Quiz
from app.models.quiz_attempt import QuizAttempt

__all__ = ["Student", "Course", "Lesson", "Quiz", "QuizAttempt"]
