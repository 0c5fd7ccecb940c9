import argparse
import asyncio
import uuid

from quiz_portal.database import AsyncSessionLocal
from quiz_portal.enums import UserRole
from quiz_portal.exceptions import QuizPortalError
from quiz_portal.logging_config import configure_logging
from quiz_portal.schemas.statistics import StatsFacets
from quiz_portal.schemas.user import Caller
from quiz_portal.services.statistics import compute_statistics


def parse_args():
    parser = argparse.ArgumentParser(description="Print quiz statistics as JSON")
    parser.add_argument("--department")
    parser.add_argument("--year", type=int)
    parser.add_argument("--semester", type=int)
    parser.add_argument("--section")
    parser.add_argument("--subject", help="subject id or code")
    return parser.parse_args()


async def show_statistics(facets: StatsFacets):
    """
    Compute statistics as an admin over the current database contents.
    """
    caller = Caller(user_id=uuid.uuid4(), role=UserRole.ADMIN)

    async with AsyncSessionLocal() as session:
        try:
            aggregate = await compute_statistics(session, caller, facets)
        except QuizPortalError as e:
            print(f"Could not compute statistics: {e.message}")
            return

    print(aggregate.model_dump_json(indent=2))


if __name__ == "__main__":
    configure_logging()
    args = parse_args()
    asyncio.run(show_statistics(StatsFacets(**vars(args))))
