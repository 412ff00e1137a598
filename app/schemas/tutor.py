"""
Tutor Schemas

Pydantic models for the question/answer lookup.
"""

from pydantic import BaseModel, Field


class QuestionRequest(BaseModel):
    question: str = Field("", description="Free-text question from a student")


class AnswerResponse(BaseModel):
    answer: str = Field(..., description="Best matching answer or a fallback message")
