from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from asset_manager.config import get_settings

# Load .env file (DATABASE_URL lives there)
load_dotenv()

DATABASE_URL = get_settings().DATABASE_URL


def _engine_options(url: str) -> dict:
    # In-memory SQLite must share one connection across threads
    if url.startswith("sqlite") and ":memory:" in url:
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


# SQLAlchemy engine & session factory
engine = create_engine(
    DATABASE_URL,
    future=True,
    echo=False,  # set True if you want to see SQL in terminal
    **_engine_options(DATABASE_URL),
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    bind=engine,
    future=True,
)

Base = declarative_base()


def init_db() -> None:
    """
    Import models and create tables if they don't exist.
    Alembic is the real migration tool, but this keeps local dev sane.
    """
    from asset_manager import models  # noqa: F401

    Base.metadata.create_all(bind=engine)

