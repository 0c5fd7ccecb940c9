from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from quiz_portal.exceptions import CallerNotPermitted
from quiz_portal.helpers.stats_aggregator import aggregate_snapshot
from quiz_portal.logging_config import get_logger
from quiz_portal.repository.quiz_repository import load_snapshot
from quiz_portal.schemas.statistics import Aggregate, StatsFacets
from quiz_portal.schemas.user import Caller

logger = get_logger("services.statistics")


async def compute_statistics(
    db: AsyncSession,
    caller: Caller,
    facets: Optional[StatsFacets] = None,
    now: Optional[datetime] = None,
) -> Aggregate:
    """
    Admin-only statistics over the whole quiz population.
    Every call reads a fresh snapshot; nothing is cached.
    """
    if not caller.is_admin:
        logger.warning(f"{caller.role.value} {caller.user_id} requested quiz statistics")
        raise CallerNotPermitted(caller.role.value, "quiz statistics")

    snapshot = await load_snapshot(db, now=now)
    aggregate = aggregate_snapshot(snapshot, facets)

    logger.info(
        f"Statistics over {len(snapshot.quizzes)} quizzes: "
        f"{aggregate.total_submissions} submissions, {aggregate.total_students} students"
    )
    return aggregate
