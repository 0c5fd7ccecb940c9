import uuid
from datetime import datetime, timezone
from sqlalchemy import (
    Column, String, Boolean, DateTime, Integer, Float, Enum, ForeignKey,
    Text, Uuid, UniqueConstraint, CheckConstraint,
)
from sqlalchemy.orm import relationship

from quiz_portal.database import Base
from quiz_portal.enums import UserRole, SubmissionStatus, PERSISTED_SUBMISSION_STATUSES


def _utcnow():
    return datetime.now(timezone.utc)


# ---------------------------
# User Model
# ---------------------------
class User(Base):
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    role = Column(Enum(UserRole, name="user_role_enum"), nullable=False)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=True)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow)

    department = Column(String(100), nullable=True)

    # Student-specific
    admission_number = Column(String(50), unique=True, nullable=True)
    is_lateral = Column(Boolean, default=False)
    year = Column(Integer, nullable=True)
    section = Column(String(10), nullable=True)


# ---------------------------
# Subject Model
# ---------------------------
class Subject(Base):
    __tablename__ = "subjects"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    code = Column(String(50), unique=True, nullable=False)
    name = Column(String(255), nullable=False)

    quizzes = relationship("Quiz", back_populates="subject")


# ---------------------------
# Quiz Model
# ---------------------------
class Quiz(Base):
    __tablename__ = "quizzes"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    subject_id = Column(Uuid(as_uuid=True), ForeignKey("subjects.id"), nullable=True)
    created_by = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    duration = Column(Integer, nullable=False)  # minutes
    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=False)
    total_marks = Column(Integer, default=0)
    total_authorized_students = Column(Integer, default=0)

    created_at = Column(DateTime(timezone=True), default=_utcnow)

    subject = relationship("Subject", back_populates="quizzes")
    creator = relationship("User")
    allowed_groups = relationship(
        "QuizAllowedGroup",
        back_populates="quiz",
        cascade="all, delete-orphan",
        order_by="QuizAllowedGroup.position",
    )
    submissions = relationship("QuizSubmission", back_populates="quiz", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint("start_time < end_time", name="quiz_window_order"),
    )


class QuizAllowedGroup(Base):
    __tablename__ = "quiz_allowed_groups"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    quiz_id = Column(Uuid(as_uuid=True), ForeignKey("quizzes.id"), nullable=False)
    position = Column(Integer, default=0)

    department = Column(String(100), nullable=False)
    year = Column(Integer, nullable=False)
    semester = Column(Integer, nullable=True)
    section = Column(String(10), nullable=False)

    quiz = relationship("Quiz", back_populates="allowed_groups")


# ---------------------------
# Submission Models
# ---------------------------
class QuizSubmission(Base):
    __tablename__ = "quiz_submissions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    quiz_id = Column(Uuid(as_uuid=True), ForeignKey("quizzes.id"), nullable=False)
    student_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)

    # not_attempted is synthetic and has no row
    status = Column(
        Enum(
            *[s.value for s in PERSISTED_SUBMISSION_STATUSES],
            name="submission_status_enum",
        ),
        nullable=False,
        default=SubmissionStatus.IN_PROGRESS.value,
    )
    started_at = Column(DateTime(timezone=True), default=_utcnow)
    submitted_at = Column(DateTime(timezone=True), nullable=True)

    quiz = relationship("Quiz", back_populates="submissions")
    student = relationship("User")
    answers = relationship(
        "QuizAnswer",
        back_populates="submission",
        cascade="all, delete-orphan",
        order_by="QuizAnswer.position",
    )

    __table_args__ = (
        UniqueConstraint("quiz_id", "student_id", name="unique_quiz_submission"),
    )


class QuizAnswer(Base):
    __tablename__ = "quiz_answers"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    submission_id = Column(Uuid(as_uuid=True), ForeignKey("quiz_submissions.id"), nullable=False)
    position = Column(Integer, default=0)

    marks = Column(Float, default=0)

    submission = relationship("QuizSubmission", back_populates="answers")


# ---------------------------
# Admission Range Model
# ---------------------------
class AdmissionRange(Base):
    __tablename__ = "admission_ranges"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    department = Column(String(100), nullable=False)
    year = Column(Integer, nullable=False)
    section = Column(String(10), nullable=False)
    is_active = Column(Boolean, default=True)

    regular_start = Column(String(50), nullable=False)
    regular_end = Column(String(50), nullable=False)
    lateral_start = Column(String(50), nullable=False)
    lateral_end = Column(String(50), nullable=False)

    created_at = Column(DateTime(timezone=True), default=_utcnow)
