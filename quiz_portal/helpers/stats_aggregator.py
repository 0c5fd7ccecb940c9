"""
Score statistics over a quiz/submission population.

The reduction walks quizzes in the order given and each quiz's submissions
in the order given, so float sums come out identical on every call with the
same input. Nothing here touches the database; callers pass a snapshot.
"""

from typing import Dict, Iterable, List, Mapping, Optional, Tuple
from uuid import UUID

from quiz_portal.enums import ScoreBand, SubmissionStatus
from quiz_portal.exceptions import EmptyDivision
from quiz_portal.helpers.facets import quiz_matches_facets
from quiz_portal.helpers.score_classifier import classify, percentage_of
from quiz_portal.helpers.subjects import subject_code, subject_display, subject_key
from quiz_portal.schemas.quiz import QuizSnapshot, QuizView, SubmissionView
from quiz_portal.schemas.statistics import (
    Aggregate, AggregateBucket, ScoreDistribution, StatsFacets, SubjectBucket,
)


class _Tally:
    __slots__ = ("count", "score_sum")

    def __init__(self):
        self.count = 0
        self.score_sum = 0.0

    def add(self, score: float):
        self.count += 1
        self.score_sum += score


def submission_score(submission: SubmissionView) -> float:
    return sum(answer.marks for answer in submission.answers)


def _mean(total: float, count: int, group: str) -> float:
    if count == 0:
        raise EmptyDivision(group)
    return total / count


def _average(tally: _Tally, group: str) -> float:
    try:
        return _mean(tally.score_sum, tally.count, group)
    except EmptyDivision:
        return 0.0


def _bucket(tally: _Tally, group: str) -> AggregateBucket:
    return AggregateBucket(
        total_submissions=tally.count,
        average_score_percent=_average(tally, group),
    )


def _unique(values: Iterable) -> List:
    seen = []
    for value in values:
        if value not in seen:
            seen.append(value)
    return seen


def _cohort_keys(quiz: QuizView, submission: SubmissionView) -> Tuple[List[str], List[int]]:
    """
    Department and year a submission is reported under: the student's own
    cohort when known, otherwise every distinct value among the quiz's groups.
    """
    if submission.student_department is not None:
        departments = [submission.student_department]
    else:
        departments = _unique(g.department for g in quiz.allowed_groups)

    if submission.student_year is not None:
        years = [submission.student_year]
    else:
        years = _unique(g.year for g in quiz.allowed_groups)

    return departments, years


def compute_aggregate(
    quizzes: List[QuizView],
    submissions_by_quiz: Mapping[UUID, List[SubmissionView]],
    facets: Optional[StatsFacets] = None,
) -> Aggregate:
    facets = facets or StatsFacets()
    retained = [quiz for quiz in quizzes if quiz_matches_facets(quiz, facets)]

    total_students = 0
    overall = _Tally()
    distribution: Dict[ScoreBand, int] = {band: 0 for band in ScoreBand}

    subject_tallies: Dict[str, _Tally] = {}
    subject_labels: Dict[str, Tuple[Optional[str], str]] = {}
    department_tallies: Dict[str, _Tally] = {}
    year_tallies: Dict[int, _Tally] = {}

    for quiz in retained:
        total_students += quiz.total_authorized_students

        subject_id = subject_key(quiz.subject)
        if subject_id is not None and subject_id not in subject_tallies:
            subject_tallies[subject_id] = _Tally()
            subject_labels[subject_id] = (subject_code(quiz.subject), subject_display(quiz.subject))

        # every targeted cohort shows up, even with nothing submitted yet
        for group in quiz.allowed_groups:
            department_tallies.setdefault(group.department, _Tally())
            year_tallies.setdefault(group.year, _Tally())

        for submission in submissions_by_quiz.get(quiz.id, []):
            if submission.status == SubmissionStatus.NOT_ATTEMPTED:
                continue

            score = submission_score(submission)
            band = classify(percentage_of(score, quiz.total_marks))

            distribution[band] += 1
            overall.add(score)

            if subject_id is not None:
                subject_tallies[subject_id].add(score)

            departments, years = _cohort_keys(quiz, submission)
            for department in departments:
                department_tallies.setdefault(department, _Tally()).add(score)
            for year in years:
                year_tallies.setdefault(year, _Tally()).add(score)

    subject_wise = {}
    for subject_id, tally in subject_tallies.items():
        code, label = subject_labels[subject_id]
        subject_wise[subject_id] = SubjectBucket(
            total_submissions=tally.count,
            average_score_percent=_average(tally, f"subject:{subject_id}"),
            code=code,
            label=label,
        )

    return Aggregate(
        total_students=total_students,
        total_submissions=overall.count,
        average_score_percent=_average(overall, "overall"),
        score_distribution=ScoreDistribution(
            **{band.value: count for band, count in distribution.items()}
        ),
        subject_wise=subject_wise,
        department_wise={
            department: _bucket(tally, f"department:{department}")
            for department, tally in department_tallies.items()
        },
        year_wise={
            year: _bucket(tally, f"year:{year}")
            for year, tally in year_tallies.items()
        },
    )


def aggregate_snapshot(snapshot: QuizSnapshot, facets: Optional[StatsFacets] = None) -> Aggregate:
    return compute_aggregate(snapshot.quizzes, snapshot.submissions_by_quiz, facets)
