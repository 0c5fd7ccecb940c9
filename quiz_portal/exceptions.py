"""
Error taxonomy for the quiz portal core.

Every condition the core can hit comes from malformed or missing input, so
each one is a local, recoverable error carrying enough data to render a
precise message. The admission validator converts these into
``AdmissionCheck`` results at its public boundary.
"""

from typing import Any, Dict, Optional


class QuizPortalError(Exception):
    """Base exception for all quiz portal errors"""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


# ============================================
# Admission Number Errors
# ============================================

class AdmissionError(QuizPortalError):
    """Admission number could not be accepted"""


class NoRangeDefined(AdmissionError):
    """No active admission range exists for the cohort"""

    def __init__(self, department: str, year: int, section: str):
        super().__init__(
            "No admission range defined for this department, year and section",
            code="NO_RANGE_DEFINED",
            details={"department": department, "year": year, "section": section},
        )


class OutOfRange(AdmissionError):
    """Admission number ordinal lies outside the matched sub-range"""

    def __init__(self, admission_number: str, start: str, end: str):
        super().__init__(
            f"Invalid admission number. Must be between {start} and {end}",
            code="OUT_OF_RANGE",
            details={"admission_number": admission_number, "start": start, "end": end},
        )
        self.start = start
        self.end = end


class InvalidFormat(AdmissionError):
    """Value does not end in a three digit ordinal"""

    def __init__(self, value: str, field: str = "admission_number"):
        super().__init__(
            f"'{value}' must end with a 3 digit number",
            code="INVALID_FORMAT",
            details={"field": field, "value": value},
        )


# ============================================
# Aggregation Errors
# ============================================

class EmptyDivision(QuizPortalError):
    """Mean requested over zero submissions"""

    def __init__(self, group: str = "overall"):
        super().__init__(
            f"No submissions counted for group '{group}'",
            code="EMPTY_DIVISION",
            details={"group": group},
        )


# ============================================
# Caller Errors
# ============================================

class CallerNotPermitted(QuizPortalError):
    """Caller role may not run this operation"""

    def __init__(self, role: str, operation: str):
        super().__init__(
            f"Role '{role}' cannot access {operation}",
            code="NOT_PERMITTED",
            details={"role": role, "operation": operation},
        )
