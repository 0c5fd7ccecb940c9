import os
from dotenv import load_dotenv
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker, declarative_base

# ---------------------------
# Load environment variables
# ---------------------------
load_dotenv()

# ---------------------------
# Database URL
# ---------------------------
DATABASE_URL = os.getenv("DATABASE_URL")

if not DATABASE_URL:
    raise ValueError("❌ DATABASE_URL is not set in the .env file")

SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() in ("1", "true", "yes")


def build_engine(url: str, **kwargs) -> AsyncEngine:
    kwargs.setdefault("echo", SQL_ECHO)  # SQL_ECHO=true for SQL debug logs
    return create_async_engine(url, future=True, **kwargs)


def build_session_factory(bind: AsyncEngine) -> sessionmaker:
    return sessionmaker(
        bind=bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


# ---------------------------
# Engine + Session Local
# ---------------------------
engine = build_engine(DATABASE_URL)
AsyncSessionLocal = build_session_factory(engine)

# ---------------------------
# Base model
# ---------------------------
Base = declarative_base()

