import enum


# ---------------------------
# Role Enum
# ---------------------------
class UserRole(str, enum.Enum):
    ADMIN = "admin"
    STUDENT = "student"
    FACULTY = "faculty"


# ---------------------------
# Submission Status
# ---------------------------
class SubmissionStatus(str, enum.Enum):
    NOT_ATTEMPTED = "not_attempted"  # synthetic, never stored
    IN_PROGRESS = "in_progress"
    SUBMITTED = "submitted"
    EVALUATED = "evaluated"


PERSISTED_SUBMISSION_STATUSES = (
    SubmissionStatus.IN_PROGRESS,
    SubmissionStatus.SUBMITTED,
    SubmissionStatus.EVALUATED,
)

FINISHED_SUBMISSION_STATUSES = frozenset(
    {SubmissionStatus.SUBMITTED, SubmissionStatus.EVALUATED}
)


# ---------------------------
# Derived quiz states
# ---------------------------
class QuizPhase(str, enum.Enum):
    UPCOMING = "upcoming"
    ACTIVE = "active"
    EXPIRED = "expired"


class DisplayStatus(str, enum.Enum):
    UPCOMING = "Upcoming"
    ACTIVE = "Active"
    EXPIRED = "Expired"
    SUBMITTED = "Submitted"


class QuizAction(str, enum.Enum):
    NONE = "none"
    ATTEMPT = "attempt"
    VIEW_RESULTS = "view_results"


class ManagementAction(str, enum.Enum):
    EDIT = "edit"
    DELETE = "delete"
    VIEW_SUBMISSIONS = "view_submissions"


class QuizRoute(str, enum.Enum):
    DEFAULT = "default"
    UPCOMING = "upcoming"
    REVIEW = "review"


class ScoreBand(str, enum.Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    AVERAGE = "average"
    POOR = "poor"
