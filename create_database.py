import asyncio

from quiz_portal.database import Base, engine
from quiz_portal.logging_config import configure_logging, get_logger

# Registers every table on Base.metadata
import quiz_portal.models  # noqa: F401

logger = get_logger("create_database")


async def create_tables():
    async with engine.begin() as conn:
        logger.info(f"Creating tables: {', '.join(sorted(Base.metadata.tables))}")
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()
    logger.info("All tables created")


if __name__ == "__main__":
    configure_logging()
    asyncio.run(create_tables())
