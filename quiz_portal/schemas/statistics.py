from pydantic import BaseModel, Field, field_validator
from typing import Dict, Optional

from quiz_portal.enums import ScoreBand

WILDCARD_VALUES = ("", "all")


class StatsFacets(BaseModel):
    department: Optional[str] = None
    year: Optional[int] = None
    semester: Optional[int] = None
    section: Optional[str] = None
    subject: Optional[str] = None

    model_config = {"frozen": True}

    @field_validator("*", mode="before")
    @classmethod
    def _wildcard_is_unset(cls, value):
        if isinstance(value, str) and value.strip().lower() in WILDCARD_VALUES:
            return None
        return value

    @property
    def has_group_facets(self) -> bool:
        return any(
            v is not None
            for v in (self.department, self.year, self.semester, self.section)
        )


class QuizFilters(StatsFacets):
    """Facets for faculty/admin quiz listings; adds the display status."""

    status: Optional[str] = None


class ScoreDistribution(BaseModel):
    excellent: int = 0
    good: int = 0
    average: int = 0
    poor: int = 0

    def count(self, band: ScoreBand) -> int:
        return getattr(self, band.value)

    @property
    def total(self) -> int:
        return self.excellent + self.good + self.average + self.poor


class AggregateBucket(BaseModel):
    total_submissions: int = 0
    # mean of raw scores; the name follows the report column
    average_score_percent: float = 0.0


class SubjectBucket(AggregateBucket):
    code: Optional[str] = None
    label: str = "N/A"


class Aggregate(AggregateBucket):
    """
    Statistics over the quizzes kept by the facets.

    ``department_wise`` and ``year_wise`` can overlap: a submission whose
    student has no recorded department or year is counted under every
    department or year the quiz targets, so those buckets may add up to more
    than ``total_submissions``. ``subject_wise`` never double counts.
    """

    total_students: int = 0
    score_distribution: ScoreDistribution = Field(default_factory=ScoreDistribution)
    subject_wise: Dict[str, SubjectBucket] = {}
    department_wise: Dict[str, AggregateBucket] = {}
    year_wise: Dict[int, AggregateBucket] = {}

    @property
    def submitted_count(self) -> int:
        return self.total_submissions

    @property
    def not_submitted_count(self) -> int:
        return max(self.total_students - self.total_submissions, 0)
