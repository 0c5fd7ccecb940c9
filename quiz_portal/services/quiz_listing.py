from datetime import datetime
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from quiz_portal.enums import QuizRoute
from quiz_portal.helpers.access_state import evaluate_for_caller
from quiz_portal.helpers.clock import utc_now
from quiz_portal.helpers.visibility import visible
from quiz_portal.logging_config import get_logger
from quiz_portal.repository.quiz_repository import get_student_submissions, list_quizzes
from quiz_portal.schemas.quiz import QuizCard
from quiz_portal.schemas.statistics import QuizFilters
from quiz_portal.schemas.user import Caller

logger = get_logger("services.quiz_listing")


async def list_quizzes_for_caller(
    db: AsyncSession,
    caller: Caller,
    route: QuizRoute = QuizRoute.DEFAULT,
    filters: Optional[QuizFilters] = None,
    now: Optional[datetime] = None,
) -> List[QuizCard]:
    """
    Quizzes the caller should see on ``route``, each with its display
    status and the action (students) or management actions (staff).
    """
    now = now or utc_now()
    route = QuizRoute(route)

    # --------------------------
    # Fetch quizzes + own submissions
    # --------------------------
    quizzes = await list_quizzes(db)

    submissions = {}
    if caller.is_student:
        submissions = await get_student_submissions(db, caller.user_id)

    # --------------------------
    # Visibility + state per quiz
    # --------------------------
    cards = []
    for quiz in quizzes:
        submission = submissions.get(quiz.id)
        if not visible(quiz, caller, route, submission, now, filters):
            continue
        cards.append(evaluate_for_caller(quiz, caller, submission, now))

    logger.info(
        f"Listed {len(cards)}/{len(quizzes)} quizzes for {caller.role.value} "
        f"{caller.user_id} on route '{route.value}'"
    )
    return cards
