from sqlalchemy.ext.asyncio import AsyncSession

from quiz_portal.helpers.admission_validator import validate_for_cohort
from quiz_portal.logging_config import get_logger
from quiz_portal.repository.quiz_repository import get_admission_range
from quiz_portal.schemas.admission import AdmissionCheck

logger = get_logger("services.admission")


async def check_admission_number(
    db: AsyncSession,
    department: str,
    year: int,
    section: str,
    admission_number: str,
) -> AdmissionCheck:
    admission_range = await get_admission_range(db, department, year, section)
    check = validate_for_cohort(admission_number, admission_range, department, year, section)

    if not check.ok:
        logger.info(
            f"Admission number {admission_number} rejected for "
            f"{department}/{year}/{section}: {check.error}"
        )
    return check
