from typing import Optional, Union

from quiz_portal.schemas.quiz import SubjectInline, SubjectRef

NO_SUBJECT = "N/A"


def subject_key(subject: Optional[Union[SubjectRef, SubjectInline]]) -> Optional[str]:
    """Identity used for grouping, whichever shape the subject came in."""
    if subject is None:
        return None
    return subject.id


def subject_code(subject: Optional[Union[SubjectRef, SubjectInline]]) -> Optional[str]:
    if isinstance(subject, SubjectInline):
        return subject.code
    return None


def subject_matches(subject: Optional[Union[SubjectRef, SubjectInline]], value: str) -> bool:
    if subject is None:
        return False
    if subject.id == value:
        return True
    return isinstance(subject, SubjectInline) and subject.code == value


def subject_display(subject: Optional[Union[SubjectRef, SubjectInline]]) -> str:
    if subject is None:
        return NO_SUBJECT
    if isinstance(subject, SubjectRef):
        return subject.id

    if subject.code and subject.name:
        if subject.code == subject.name:
            return subject.code
        return f"{subject.name} ({subject.code})"
    return subject.name or subject.code or NO_SUBJECT
