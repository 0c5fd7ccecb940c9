"""
Quiz Portal - Test Configuration and Fixtures
"""
import os
import uuid
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator

import pytest
from faker import Faker
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.pool import StaticPool

# Set testing environment
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite://'
os.environ.setdefault('LOG_LEVEL', 'DEBUG')

from quiz_portal.database import Base, build_engine, build_session_factory
from quiz_portal.enums import SubmissionStatus, UserRole
from quiz_portal.models import (
    AdmissionRange, Quiz, QuizAllowedGroup, QuizAnswer, QuizSubmission, Subject, User,
)
from quiz_portal.schemas.quiz import AllowedGroup, QuizView, SubjectInline, SubmissionView

fake = Faker()

NOW = datetime(2024, 3, 15, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return NOW


# ---------------------------
# Snapshot factories
# ---------------------------
@pytest.fixture
def make_quiz():
    def _make_quiz(**overrides) -> QuizView:
        data = {
            'id': uuid.uuid4(),
            'title': fake.sentence(nb_words=3),
            'subject': SubjectInline(id='sub-ds', name='Data Structures', code='CS201'),
            'duration': 30,
            'start_time': NOW - timedelta(hours=1),
            'end_time': NOW + timedelta(hours=1),
            'allowed_groups': [AllowedGroup(department='CS', year=2, semester=1, section='A')],
            'total_authorized_students': 60,
            'total_marks': 10,
        }
        data.update(overrides)
        return QuizView(**data)

    return _make_quiz


@pytest.fixture
def make_submission():
    def _make_submission(quiz: QuizView, marks=(), status=SubmissionStatus.SUBMITTED, **overrides) -> SubmissionView:
        data = {
            'id': uuid.uuid4(),
            'quiz_id': quiz.id,
            'student_id': uuid.uuid4(),
            'status': status,
            'answers': [{'marks': m} for m in marks],
        }
        data.update(overrides)
        return SubmissionView(**data)

    return _make_submission


# ---------------------------
# Database fixtures
# ---------------------------
@pytest.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Fresh in-memory database per test"""
    engine = build_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={'check_same_thread': False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    TestSessionLocal = build_session_factory(engine)
    async with TestSessionLocal() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def seed(db_session: AsyncSession):
    """Helpers that write ORM rows and commit them"""

    class Seeder:
        async def commit(self):
            await db_session.commit()
            db_session.expunge_all()

        async def user(self, role=UserRole.STUDENT, department='CS', year=2, section='A') -> User:
            user = User(
                role=role,
                name=fake.name(),
                email=fake.unique.email(),
                department=department,
                year=year if role == UserRole.STUDENT else None,
                section=section if role == UserRole.STUDENT else None,
            )
            db_session.add(user)
            await db_session.flush()
            return user

        async def subject(self, code='CS201', name='Data Structures') -> Subject:
            subject = Subject(code=code, name=name)
            db_session.add(subject)
            await db_session.flush()
            return subject

        async def quiz(self, groups=(('CS', 2, 1, 'A'),), subject=None, creator=None,
                       start_offset=timedelta(hours=-1), length=timedelta(hours=2),
                       total_marks=10, authorized=60, title=None) -> Quiz:
            quiz = Quiz(
                title=title or fake.sentence(nb_words=3),
                subject_id=subject.id if subject else None,
                created_by=creator.id if creator else None,
                duration=30,
                start_time=NOW + start_offset,
                end_time=NOW + start_offset + length,
                total_marks=total_marks,
                total_authorized_students=authorized,
                allowed_groups=[
                    QuizAllowedGroup(position=i, department=d, year=y, semester=sem, section=sec)
                    for i, (d, y, sem, sec) in enumerate(groups)
                ],
            )
            db_session.add(quiz)
            await db_session.flush()
            return quiz

        async def submission(self, quiz: Quiz, student: User, marks=(),
                             status=SubmissionStatus.SUBMITTED, started_at=None) -> QuizSubmission:
            submission = QuizSubmission(
                quiz_id=quiz.id,
                student_id=student.id,
                status=status.value,
                started_at=started_at or NOW,
                answers=[QuizAnswer(position=i, marks=m) for i, m in enumerate(marks)],
            )
            db_session.add(submission)
            await db_session.flush()
            return submission

        async def admission_range(self, department='CS', year=2, section='A', is_active=True,
                                  regular=('y21cs001', 'y21cs050'),
                                  lateral=('l22cs001', 'l22cs010')) -> AdmissionRange:
            admission_range = AdmissionRange(
                department=department,
                year=year,
                section=section,
                is_active=is_active,
                regular_start=regular[0],
                regular_end=regular[1],
                lateral_start=lateral[0],
                lateral_end=lateral[1],
            )
            db_session.add(admission_range)
            await db_session.flush()
            return admission_range

    return Seeder()
