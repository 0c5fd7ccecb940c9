import uuid
from datetime import timedelta

import pytest

from quiz_portal.enums import DisplayStatus, QuizRoute, SubmissionStatus, UserRole
from quiz_portal.helpers.access_state import evaluate_display
from quiz_portal.helpers.visibility import visible
from quiz_portal.schemas.quiz import AllowedGroup
from quiz_portal.schemas.statistics import QuizFilters
from quiz_portal.schemas.user import Caller


@pytest.fixture
def student():
    return Caller(user_id=uuid.uuid4(), role=UserRole.STUDENT)


@pytest.fixture
def faculty():
    return Caller(user_id=uuid.uuid4(), role=UserRole.FACULTY)


@pytest.fixture
def quizzes(make_quiz, now):
    return {
        "upcoming": make_quiz(start_time=now + timedelta(hours=1), end_time=now + timedelta(hours=2)),
        "active": make_quiz(start_time=now - timedelta(hours=1), end_time=now + timedelta(hours=1)),
        "expired": make_quiz(start_time=now - timedelta(hours=2), end_time=now - timedelta(hours=1)),
    }


class TestStudentRoutes:
    """Route-specific visibility for students"""

    @pytest.mark.parametrize(
        "route, expected",
        [
            (QuizRoute.DEFAULT, {"upcoming", "active"}),
            (QuizRoute.UPCOMING, {"upcoming"}),
            (QuizRoute.REVIEW, set()),
        ],
    )
    def test_without_submissions(self, quizzes, student, now, route, expected):
        shown = {name for name, quiz in quizzes.items() if visible(quiz, student, route, None, now)}
        assert shown == expected

    @pytest.mark.parametrize(
        "route, expected",
        [
            (QuizRoute.DEFAULT, set()),
            (QuizRoute.UPCOMING, set()),
            (QuizRoute.REVIEW, {"upcoming", "active", "expired"}),
        ],
    )
    def test_with_finished_submissions(self, quizzes, student, make_submission, now, route, expected):
        shown = {
            name
            for name, quiz in quizzes.items()
            if visible(quiz, student, route, make_submission(quiz, marks=[1], status=SubmissionStatus.EVALUATED), now)
        }
        assert shown == expected

    def test_in_progress_submission_still_listed(self, quizzes, student, make_submission, now):
        quiz = quizzes["active"]
        submission = make_submission(quiz, status=SubmissionStatus.IN_PROGRESS)

        assert visible(quiz, student, QuizRoute.DEFAULT, submission, now)
        assert not visible(quiz, student, QuizRoute.REVIEW, submission, now)

    def test_route_accepts_plain_string(self, quizzes, student, now):
        assert visible(quizzes["upcoming"], student, "upcoming", None, now)

    def test_unknown_route_rejected(self, quizzes, student, now):
        with pytest.raises(ValueError):
            visible(quizzes["active"], student, "archive", None, now)

    def test_upcoming_quiz_over_time(self, make_quiz, student, now):
        quiz = make_quiz(start_time=now + timedelta(hours=1), end_time=now + timedelta(hours=2))

        assert visible(quiz, student, QuizRoute.DEFAULT, None, now)
        assert evaluate_display(quiz, None, now).status == DisplayStatus.UPCOMING

        later = now + timedelta(hours=3)
        assert not visible(quiz, student, QuizRoute.DEFAULT, None, later)
        assert evaluate_display(quiz, None, later).status == DisplayStatus.EXPIRED


class TestStaffFilters:
    """Facet filtering for faculty and admins"""

    def test_no_filters_shows_everything(self, quizzes, faculty, now):
        assert all(visible(q, faculty, QuizRoute.DEFAULT, None, now) for q in quizzes.values())

    def test_route_is_ignored_for_staff(self, quizzes, faculty, now):
        assert visible(quizzes["expired"], faculty, QuizRoute.UPCOMING, None, now)

    @pytest.mark.parametrize("status", ["expired", "EXPIRED", " Expired "])
    def test_status_facet_is_case_insensitive(self, quizzes, faculty, now, status):
        filters = QuizFilters(status=status)

        shown = {name for name, q in quizzes.items() if visible(q, faculty, QuizRoute.DEFAULT, None, now, filters)}

        assert shown == {"expired"}

    def test_completed_status_matches_nothing(self, quizzes, faculty, now):
        filters = QuizFilters(status="completed")

        assert not any(visible(q, faculty, QuizRoute.DEFAULT, None, now, filters) for q in quizzes.values())

    def test_group_facets_combine_with_status(self, make_quiz, faculty, now):
        quiz = make_quiz(
            allowed_groups=[
                AllowedGroup(department="CS", year=2, semester=3, section="A"),
                AllowedGroup(department="EE", year=3, semester=5, section="B"),
            ]
        )

        assert visible(quiz, faculty, QuizRoute.DEFAULT, None, now, QuizFilters(department="EE", semester=5, status="active"))
        assert not visible(quiz, faculty, QuizRoute.DEFAULT, None, now, QuizFilters(department="EE", semester=3))
        assert not visible(quiz, faculty, QuizRoute.DEFAULT, None, now, QuizFilters(department="CS", status="upcoming"))

    def test_subject_filter(self, make_quiz, faculty, now):
        quiz = make_quiz()

        assert visible(quiz, faculty, QuizRoute.DEFAULT, None, now, QuizFilters(subject="CS201"))
        assert not visible(quiz, faculty, QuizRoute.DEFAULT, None, now, QuizFilters(subject="MA101"))

    def test_naive_now_with_status_filter(self, make_quiz, student, faculty, now):
        naive_now = now.replace(tzinfo=None)
        quiz = make_quiz(
            start_time=naive_now - timedelta(hours=1),
            end_time=naive_now + timedelta(hours=1),
        )

        assert visible(quiz, student, QuizRoute.DEFAULT, None, naive_now)
        assert visible(quiz, faculty, QuizRoute.DEFAULT, None, naive_now, QuizFilters(status="active"))
