"""
Progress Engine

Pure aggregation of quiz attempts and lesson basic state into lesson, course
and student progress views. Nothing here performs I/O; callers hand in
already-fetched records.
"""

from typing import Optional, Sequence, Tuple

from app.schemas.progress import (
    LESSON_PASS_THRESHOLD,
    AttemptRecord,
    CourseProgressView,
    LessonBasicState,
    LessonProgressView,
    StudentProfile,
    StudentSummaryView,
)


def _rank_key(attempt: AttemptRecord) -> Tuple[float, int]:
    return attempt.score_percent, attempt.points_score


def _best_index(attempts: Sequence[AttemptRecord]) -> Optional[int]:
    if not attempts:
        return None
    # max() keeps the first of equally ranked items, so fetch order breaks full ties
    return max(range(len(attempts)), key=lambda i: _rank_key(attempts[i]))


def select_best_attempt(attempts: Sequence[AttemptRecord]) -> Optional[AttemptRecord]:
    """
    Pick the authoritative attempt for a lesson.

    Attempts are ranked by score percentage, then by points. Among attempts
    tied on both, the earliest in the given order wins.

    Args:
        attempts: Attempts for one lesson, in fetch order.

    Returns:
        The best attempt, or None when there are no attempts.
    """
    index = _best_index(attempts)
    return attempts[index] if index is not None else None


def build_lesson_progress(
    lesson_id: str,
    lesson_name: Optional[str],
    basic_state: Optional[LessonBasicState],
    attempts: Sequence[AttemptRecord],
) -> LessonProgressView:
    """
    Merge a lesson's basic state and quiz attempts into one progress view.

    Precedence:
    - completed: basic-state flag OR best attempt at/above the pass bar.
    - completed_at: basic-state timestamp, else best attempt submission time.
    - viewed / last_viewed_at: basic state only.

    Args:
        lesson_id: Lesson ID.
        lesson_name: Display name; falls back to the lesson ID when empty.
        basic_state: Viewed/completed flags, or None if the student has none.
        attempts: Attempts for this lesson, in fetch order.

    Returns:
        Lesson progress view. The returned attempt list is a snapshot in which
        the best attempt is flagged; the given records are left untouched.
    """
    state = basic_state or LessonBasicState()
    best_index = _best_index(attempts)
    best = attempts[best_index] if best_index is not None else None

    passed = best is not None and best.score_percent >= LESSON_PASS_THRESHOLD
    completed_at = state.completed_at
    if completed_at is None and best is not None:
        completed_at = best.submitted_at

    snapshot = [
        a.model_copy(update={"is_best_attempt": True}) if i == best_index else a
        for i, a in enumerate(attempts)
    ]

    return LessonProgressView(
        lesson_id=lesson_id,
        lesson_name=lesson_name or lesson_id,
        viewed=state.viewed,
        last_viewed_at=state.last_viewed_at,
        completed=state.completed or passed,
        attempt_count=len(attempts),
        best_score_percent=best.score_percent if best else 0.0,
        best_points_score=best.points_score if best else 0,
        best_selected_answer=best.selected_answer if best else None,
        completed_at=completed_at,
        attempts=snapshot,
    )


def aggregate_course_progress(
    course_id: str,
    course_name: Optional[str],
    lessons: Sequence[LessonProgressView],
) -> CourseProgressView:
    """Wrap lesson views into a course view; metrics are derived on read."""
    return CourseProgressView(
        course_id=course_id,
        course_name=course_name or course_id,
        lessons=list(lessons),
    )


def aggregate_student_summary(
    profile: StudentProfile,
    courses: Sequence[CourseProgressView],
) -> StudentSummaryView:
    """Combine a student's identity with per-course progress, in enrollment order."""
    return StudentSummaryView(
        student_id=profile.student_id,
        name=profile.name,
        surname=profile.surname,
        email=profile.email,
        created_at=profile.created_at,
        last_activity=profile.last_activity,
        skill_level=profile.skill_level,
        total_score=profile.total_score,
        subjects_of_interest=list(profile.subjects_of_interest),
        account_status="Deleted" if profile.is_deleted else "Active",
        courses=list(courses),
    )
