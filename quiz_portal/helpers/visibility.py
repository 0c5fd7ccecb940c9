from datetime import datetime
from typing import Optional

from quiz_portal.enums import QuizPhase, QuizRoute
from quiz_portal.helpers.access_state import evaluate_display
from quiz_portal.helpers.clock import phase
from quiz_portal.helpers.facets import quiz_matches_facets
from quiz_portal.schemas.quiz import QuizView, SubmissionView
from quiz_portal.schemas.statistics import QuizFilters
from quiz_portal.schemas.user import Caller


def visible_to_student(
    quiz: QuizView,
    route: QuizRoute,
    submission: Optional[SubmissionView],
    now: datetime,
) -> bool:
    finished = submission is not None and submission.is_finished

    if route == QuizRoute.REVIEW:
        return finished

    current = phase(now, quiz.start_time, quiz.end_time)

    if route == QuizRoute.UPCOMING:
        return current == QuizPhase.UPCOMING and not finished

    return current in (QuizPhase.UPCOMING, QuizPhase.ACTIVE) and not finished


def matches_filters(quiz: QuizView, filters: QuizFilters, now: datetime) -> bool:
    if not quiz_matches_facets(quiz, filters):
        return False

    if filters.status is not None:
        label = evaluate_display(quiz, None, now).status.value
        return label.lower() == filters.status.strip().lower()

    return True


def visible(
    quiz: QuizView,
    caller: Caller,
    route: QuizRoute,
    submission: Optional[SubmissionView],
    now: datetime,
    filters: Optional[QuizFilters] = None,
) -> bool:
    """
    Students see quizzes by route (review/upcoming/default);
    faculty and admins see whatever passes their filters.
    """
    if caller.is_student:
        return visible_to_student(quiz, QuizRoute(route), submission, now)
    return matches_filters(quiz, filters or QuizFilters(), now)
