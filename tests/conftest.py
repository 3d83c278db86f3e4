# tests/conftest.py
"""
Pytest configuration and fixtures.
"""

import os

import pytest

# Set test environment before any asset_manager import reads settings
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("STORAGE_PROVIDER", "mock")
os.environ.setdefault("LOG_JSON", "false")

from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from asset_manager.config import get_settings  # noqa: E402
from asset_manager.database import Base  # noqa: E402
from asset_manager import models  # noqa: E402,F401
from asset_manager.notifications.factory import reset_notification_publisher  # noqa: E402
from asset_manager.repositories.metadata_repository import SqlAlchemyMetadataRepository  # noqa: E402
from asset_manager.services.factory import reset_storage_service  # noqa: E402
from asset_manager.storage.factory import reset_storage_backend  # noqa: E402
from asset_manager.storage.local_backend import LocalStorageBackend  # noqa: E402


@pytest.fixture(autouse=True)
def reset_singletons():
    """Every test starts with fresh settings and factories."""
    get_settings.cache_clear()
    reset_storage_backend()
    reset_notification_publisher()
    reset_storage_service()
    yield
    get_settings.cache_clear()
    reset_storage_backend()
    reset_notification_publisher()
    reset_storage_service()


@pytest.fixture
def session_factory():
    """Isolated in-memory SQLite database per test."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    yield factory
    engine.dispose()


@pytest.fixture
def metadata_repository(session_factory):
    return SqlAlchemyMetadataRepository(session_factory)


@pytest.fixture
def local_backend(tmp_path):
    return LocalStorageBackend(base_path=str(tmp_path / "store"))
