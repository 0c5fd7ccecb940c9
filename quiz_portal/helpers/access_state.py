from datetime import datetime
from typing import List, Optional

from quiz_portal.enums import DisplayStatus, ManagementAction, QuizAction, QuizPhase
from quiz_portal.helpers.clock import format_countdown, phase, time_until_start
from quiz_portal.helpers.subjects import subject_display
from quiz_portal.schemas.quiz import DisplayState, QuizCard, QuizView, SubmissionView
from quiz_portal.schemas.user import Caller


def evaluate_display(
    quiz: QuizView,
    submission: Optional[SubmissionView],
    now: datetime,
) -> DisplayState:
    """
    Work out what a student sees for ``quiz`` at ``now``.

    A finished submission (submitted/evaluated) wins over the clock, so the
    quiz reads as Submitted no matter where ``now`` falls. Otherwise the
    window phase decides: Upcoming (countdown only), Active (may attempt)
    or Expired (disabled). Nothing is stored, every call recomputes.
    """
    if submission is not None and submission.is_finished:
        return DisplayState(status=DisplayStatus.SUBMITTED, action=QuizAction.VIEW_RESULTS)

    current = phase(now, quiz.start_time, quiz.end_time)

    if current == QuizPhase.UPCOMING:
        return DisplayState(
            status=DisplayStatus.UPCOMING,
            action=QuizAction.NONE,
            starts_in=time_until_start(now, quiz.start_time),
        )

    if current == QuizPhase.ACTIVE:
        return DisplayState(status=DisplayStatus.ACTIVE, action=QuizAction.ATTEMPT)

    return DisplayState(status=DisplayStatus.EXPIRED, action=QuizAction.NONE)


def management_actions(quiz: QuizView, caller: Caller) -> List[ManagementAction]:
    actions = []
    if caller.is_admin or (quiz.created_by is not None and quiz.created_by == caller.user_id):
        actions.extend([ManagementAction.EDIT, ManagementAction.DELETE])
    actions.append(ManagementAction.VIEW_SUBMISSIONS)
    return actions


def evaluate_for_caller(
    quiz: QuizView,
    caller: Caller,
    submission: Optional[SubmissionView],
    now: datetime,
) -> QuizCard:
    """Students get attempt/view actions; faculty and admins get management actions."""
    card = {
        "quiz_id": quiz.id,
        "title": quiz.title,
        "subject": subject_display(quiz.subject),
        "start_time": quiz.start_time,
        "end_time": quiz.end_time,
        "duration": quiz.duration,
    }

    if not caller.is_student:
        state = evaluate_display(quiz, None, now)
        return QuizCard(
            **card,
            status=state.status,
            management_actions=management_actions(quiz, caller),
        )

    state = evaluate_display(quiz, submission, now)
    return QuizCard(
        **card,
        status=state.status,
        action=state.action,
        starts_in=state.starts_in,
        countdown=format_countdown(state.starts_in) if state.starts_in is not None else None,
    )
