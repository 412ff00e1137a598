"""
Tutor Routes

Question/answer lookup for students.
"""

from fastapi import APIRouter, HTTPException, status

from app.schemas.tutor import AnswerResponse, QuestionRequest
from app.services.tutor_service import get_tutor_service


router = APIRouter(prefix="/tutor", tags=["Tutor"])


@router.post(
    "/ask",
    response_model=AnswerResponse,
    summary="Ask the tutor a question",
)
async def ask(data: QuestionRequest) -> AnswerResponse:
    """
    Look up the closest known question and return its answer.

    Args:
        data: The student's question.

    Returns:
        The matched answer, or a fallback message when nothing is close enough.
    """
    if not data.question.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Question cannot be empty.",
        )

    try:
        tutor = get_tutor_service()
    except FileNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Tutor data not available",
        ) from e

    return AnswerResponse(answer=tutor.get_answer(data.question))
