from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Annotated, Dict, List, Literal, Optional, Union
from datetime import datetime, timedelta
from uuid import UUID

from quiz_portal.enums import (
    DisplayStatus, ManagementAction, QuizAction, SubmissionStatus,
    FINISHED_SUBMISSION_STATUSES,
)
from quiz_portal.helpers.clock import as_utc


# Subject is either a bare identifier or a full record
class SubjectRef(BaseModel):
    kind: Literal["ref"] = "ref"
    id: str

    model_config = {"frozen": True}


class SubjectInline(BaseModel):
    kind: Literal["inline"] = "inline"
    id: str
    name: Optional[str] = None
    code: Optional[str] = None

    model_config = {"frozen": True}


Subject = Annotated[Union[SubjectRef, SubjectInline], Field(discriminator="kind")]


class AllowedGroup(BaseModel):
    department: str
    year: int
    semester: Optional[int] = None
    section: str

    model_config = {"from_attributes": True, "frozen": True}


class QuizView(BaseModel):
    id: UUID
    title: str
    subject: Optional[Subject] = None
    duration: int = 0
    start_time: datetime
    end_time: datetime
    allowed_groups: List[AllowedGroup] = []
    total_authorized_students: int = 0
    total_marks: float = 0
    created_by: Optional[UUID] = None

    model_config = {"from_attributes": True, "frozen": True}

    @field_validator("total_marks", "total_authorized_students", "duration", mode="before")
    @classmethod
    def _missing_count_is_zero(cls, value):
        return 0 if value is None else value

    @field_validator("allowed_groups", mode="before")
    @classmethod
    def _missing_groups_is_empty(cls, value):
        return [] if value is None else value

    @field_validator("start_time", "end_time")
    @classmethod
    def _normalize_timezone(cls, value: datetime) -> datetime:
        return as_utc(value)

    @model_validator(mode="after")
    def _check_window(self):
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be before end_time")
        return self


class AnswerView(BaseModel):
    marks: float = 0

    model_config = {"from_attributes": True, "frozen": True}

    @field_validator("marks", mode="before")
    @classmethod
    def _missing_marks_is_zero(cls, value):
        return 0 if value is None else value


class SubmissionView(BaseModel):
    id: Optional[UUID] = None
    quiz_id: UUID
    student_id: UUID
    status: SubmissionStatus
    answers: List[AnswerView] = []

    # cohort of the submitting student, when known
    student_department: Optional[str] = None
    student_year: Optional[int] = None

    model_config = {"from_attributes": True, "frozen": True}

    @field_validator("answers", mode="before")
    @classmethod
    def _missing_answers_is_empty(cls, value):
        return [] if value is None else value

    @property
    def is_finished(self) -> bool:
        return self.status in FINISHED_SUBMISSION_STATUSES


class QuizSnapshot(BaseModel):
    """Quizzes and their submissions as read at ``taken_at``."""

    quizzes: List[QuizView] = []
    submissions_by_quiz: Dict[UUID, List[SubmissionView]] = {}
    taken_at: datetime

    model_config = {"frozen": True}


# Derived, never persisted

class DisplayState(BaseModel):
    status: DisplayStatus
    action: QuizAction
    starts_in: Optional[timedelta] = None

    model_config = {"frozen": True}


class QuizCard(BaseModel):
    quiz_id: UUID
    title: str
    subject: str
    start_time: datetime
    end_time: datetime
    duration: int
    status: DisplayStatus
    action: Optional[QuizAction] = None
    starts_in: Optional[timedelta] = None
    countdown: Optional[str] = None
    management_actions: List[ManagementAction] = []
