"""
Tutor Service

Answers student questions from a fixed question/answer table by word
overlap. Unrelated to progress reporting.
"""

import csv
import logging
import math
from pathlib import Path
from typing import List, Optional, Tuple

from app.core.config import settings

logger = logging.getLogger(__name__)

EMPTY_QUESTION_REPLY = "Please ask a valid question."
NO_MATCH_REPLY = "Sorry, I don't have an answer for that question."


def similarity(a: str, b: str) -> float:
    """
    Word-overlap similarity between two normalized strings.

    Shared distinct words divided by the geometric mean of the word counts.
    """
    a_words = a.split()
    b_words = b.split()
    if not a_words or not b_words:
        return 0.0

    common = len(set(a_words) & set(b_words))
    return common / math.sqrt(len(a_words) * len(b_words))


def load_qa_table(path: Path) -> List[Tuple[str, str]]:
    """
    Load (question, answer) pairs from a CSV file.

    The first row is a header. Empty fields are dropped, then the question
    is the first remaining field and the answer the third; rows with fewer
    than three non-empty fields are skipped.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    if not path.is_file():
        raise FileNotFoundError(f"Tutor data file not found at: {path}")

    pairs = []
    with path.open(newline="", encoding="utf-8") as fh:
        reader = csv.reader(fh)
        next(reader, None)  # header
        for row in reader:
            fields = [field for field in row if field]
            if len(fields) >= 3:
                pairs.append((fields[0], fields[2]))

    logger.info("tutor table loaded rows=%d path=%s", len(pairs), path)
    return pairs


class TutorService:
    """Best-match lookup over a question/answer table."""

    def __init__(self, qa_pairs: List[Tuple[str, str]], threshold: float = 0.3):
        self.qa_pairs = qa_pairs
        self.threshold = threshold

    def get_answer(self, question: Optional[str]) -> str:
        if not question or not question.strip():
            return EMPTY_QUESTION_REPLY

        query = question.strip().lower()
        best_answer = None
        best_score = -1.0

        for known_question, answer in self.qa_pairs:
            score = similarity(query, known_question.lower())
            if score > best_score:
                best_score = score
                best_answer = answer

        if best_answer is None or best_score < self.threshold:
            return NO_MATCH_REPLY
        return best_answer


_tutor: Optional[TutorService] = None


def get_tutor_service() -> TutorService:
    """Get or create the tutor service from the configured CSV file."""
    global _tutor
    if _tutor is None:
        pairs = load_qa_table(Path(settings.TUTOR_DATA_PATH))
        _tutor = TutorService(pairs, threshold=settings.TUTOR_MATCH_THRESHOLD)
    return _tutor
