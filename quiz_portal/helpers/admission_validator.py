import os
from typing import Optional

from dotenv import load_dotenv

from quiz_portal.exceptions import AdmissionError, InvalidFormat, NoRangeDefined, OutOfRange
from quiz_portal.schemas.admission import AdmissionCheck, AdmissionEntry, AdmissionRangeView

load_dotenv()

# Regular-entry admission numbers start with this prefix, lateral ones don't
REGULAR_ENTRY_PREFIX = os.getenv("REGULAR_ENTRY_PREFIX", "y")
ORDINAL_DIGITS = 3


def parse_ordinal(value: str, field: str = "admission_number") -> int:
    """Trailing three digits of an admission number as an integer."""
    suffix = value[-ORDINAL_DIGITS:] if value else ""
    if len(suffix) != ORDINAL_DIGITS or not (suffix.isascii() and suffix.isdigit()):
        raise InvalidFormat(value, field=field)
    return int(suffix)


def select_entry(admission_number: str, admission_range: AdmissionRangeView) -> AdmissionEntry:
    if admission_number.startswith(REGULAR_ENTRY_PREFIX):
        return admission_range.regular_entry
    return admission_range.lateral_entry


def ensure_in_range(admission_number: str, admission_range: AdmissionRangeView) -> AdmissionEntry:
    """
    Raise ``InvalidFormat`` or ``OutOfRange`` unless the number's ordinal
    lies within its sub-range (bounds inclusive). Returns the matched entry.
    """
    entry = select_entry(admission_number, admission_range)

    ordinal = parse_ordinal(admission_number)
    start = parse_ordinal(entry.start, field="start")
    end = parse_ordinal(entry.end, field="end")

    if ordinal < start or ordinal > end:
        raise OutOfRange(admission_number, entry.start, entry.end)
    return entry


def _failed(error: AdmissionError) -> AdmissionCheck:
    return AdmissionCheck(
        ok=False,
        error=error.code,
        message=error.message,
        allowed_start=error.details.get("start"),
        allowed_end=error.details.get("end"),
    )


def validate_admission_number(admission_number: str, admission_range: AdmissionRangeView) -> AdmissionCheck:
    try:
        entry = ensure_in_range(admission_number, admission_range)
    except AdmissionError as error:
        return _failed(error)
    return AdmissionCheck(ok=True, allowed_start=entry.start, allowed_end=entry.end)


def validate_for_cohort(
    admission_number: str,
    admission_range: Optional[AdmissionRangeView],
    department: str,
    year: int,
    section: str,
) -> AdmissionCheck:
    if admission_range is None or not admission_range.is_active:
        return _failed(NoRangeDefined(department, year, section))
    return validate_admission_number(admission_number, admission_range)
