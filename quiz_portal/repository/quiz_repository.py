from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from quiz_portal.helpers.clock import utc_now
from quiz_portal.helpers.facets import quiz_matches_facets
from quiz_portal.logging_config import get_logger
from quiz_portal.models import AdmissionRange, Quiz, QuizSubmission
from quiz_portal.schemas.admission import AdmissionEntry, AdmissionRangeView
from quiz_portal.schemas.quiz import (
    AllowedGroup, QuizSnapshot, QuizView, SubjectInline, SubjectRef, SubmissionView,
)
from quiz_portal.schemas.statistics import StatsFacets

logger = get_logger("repository")


# --------------------------
# ORM -> snapshot views
# --------------------------
def quiz_to_view(quiz: Quiz) -> QuizView:
    subject = None
    if quiz.subject is not None:
        subject = SubjectInline(
            id=str(quiz.subject.id),
            name=quiz.subject.name,
            code=quiz.subject.code,
        )
    elif quiz.subject_id is not None:
        subject = SubjectRef(id=str(quiz.subject_id))

    return QuizView(
        id=quiz.id,
        title=quiz.title,
        subject=subject,
        duration=quiz.duration,
        start_time=quiz.start_time,
        end_time=quiz.end_time,
        allowed_groups=[AllowedGroup.model_validate(g) for g in quiz.allowed_groups],
        total_authorized_students=quiz.total_authorized_students,
        total_marks=quiz.total_marks,
        created_by=quiz.created_by,
    )


def submission_to_view(submission: QuizSubmission) -> SubmissionView:
    student = submission.student
    return SubmissionView(
        id=submission.id,
        quiz_id=submission.quiz_id,
        student_id=submission.student_id,
        status=submission.status,
        answers=[{"marks": a.marks} for a in submission.answers],
        student_department=student.department if student else None,
        student_year=student.year if student else None,
    )


def admission_range_to_view(admission_range: AdmissionRange) -> AdmissionRangeView:
    return AdmissionRangeView(
        id=admission_range.id,
        department=admission_range.department,
        year=admission_range.year,
        section=admission_range.section,
        is_active=admission_range.is_active,
        regular_entry=AdmissionEntry(
            start=admission_range.regular_start,
            end=admission_range.regular_end,
        ),
        lateral_entry=AdmissionEntry(
            start=admission_range.lateral_start,
            end=admission_range.lateral_end,
        ),
    )


def _quiz_query():
    return select(Quiz).options(
        selectinload(Quiz.subject),
        selectinload(Quiz.allowed_groups),
    )


def _submission_query():
    return select(QuizSubmission).options(
        selectinload(QuizSubmission.answers),
        selectinload(QuizSubmission.student),
    )


# --------------------------
# Quizzes
# --------------------------
async def get_quiz(db: AsyncSession, quiz_id: UUID) -> Optional[QuizView]:
    result = await db.execute(_quiz_query().where(Quiz.id == quiz_id))
    quiz = result.scalar_one_or_none()

    if not quiz:
        return None
    return quiz_to_view(quiz)


async def list_quizzes(db: AsyncSession, facets: Optional[StatsFacets] = None) -> List[QuizView]:
    result = await db.execute(
        _quiz_query().order_by(Quiz.start_time, Quiz.id)
    )
    quizzes = [quiz_to_view(q) for q in result.scalars().all()]

    if facets is not None:
        quizzes = [q for q in quizzes if quiz_matches_facets(q, facets)]

    logger.debug(f"Loaded {len(quizzes)} quizzes")
    return quizzes


# --------------------------
# Submissions
# --------------------------
async def list_submissions(db: AsyncSession, quiz_id: UUID) -> List[SubmissionView]:
    result = await db.execute(
        _submission_query()
        .where(QuizSubmission.quiz_id == quiz_id)
        .order_by(QuizSubmission.started_at, QuizSubmission.id)
    )
    return [submission_to_view(s) for s in result.scalars().all()]


async def list_all_submissions(db: AsyncSession) -> Dict[UUID, List[SubmissionView]]:
    result = await db.execute(
        _submission_query().order_by(
            QuizSubmission.quiz_id,
            QuizSubmission.started_at,
            QuizSubmission.id,
        )
    )

    submissions_by_quiz: Dict[UUID, List[SubmissionView]] = {}
    for submission in result.scalars().all():
        submissions_by_quiz.setdefault(submission.quiz_id, []).append(
            submission_to_view(submission)
        )

    logger.debug(f"Loaded submissions for {len(submissions_by_quiz)} quizzes")
    return submissions_by_quiz


async def get_student_submissions(db: AsyncSession, student_id: UUID) -> Dict[UUID, SubmissionView]:
    """The student's submission per quiz; a student has at most one per quiz."""
    result = await db.execute(
        _submission_query().where(QuizSubmission.student_id == student_id)
    )
    return {s.quiz_id: submission_to_view(s) for s in result.scalars().all()}


# --------------------------
# Admission ranges
# --------------------------
async def get_admission_range(
    db: AsyncSession,
    department: str,
    year: int,
    section: str,
) -> Optional[AdmissionRangeView]:
    result = await db.execute(
        select(AdmissionRange)
        .where(
            AdmissionRange.department == department,
            AdmissionRange.year == year,
            AdmissionRange.section == section,
            AdmissionRange.is_active.is_(True),
        )
        .order_by(AdmissionRange.created_at.desc())
    )
    admission_range = result.scalars().first()

    if not admission_range:
        return None
    return admission_range_to_view(admission_range)


# --------------------------
# Snapshot
# --------------------------
async def load_snapshot(db: AsyncSession, now: Optional[datetime] = None) -> QuizSnapshot:
    quizzes = await list_quizzes(db)
    submissions_by_quiz = await list_all_submissions(db)

    return QuizSnapshot(
        quizzes=quizzes,
        submissions_by_quiz=submissions_by_quiz,
        taken_at=now or utc_now(),
    )
