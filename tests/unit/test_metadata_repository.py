"""Tests for SqlAlchemyMetadataRepository on in-memory SQLite."""

import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from asset_manager.models import ImageMetadata
from asset_manager.repositories.metadata_repository import SqlAlchemyMetadataRepository


def _record(key: str, uploaded_at: datetime | None = None) -> ImageMetadata:
    return ImageMetadata(
        id=str(uuid.uuid4()),
        filename=key.split("-", 1)[-1],
        content_type="image/png",
        size=100,
        storage_key=key,
        url=f"/store/view/{key}",
        uploaded_at=uploaded_at or datetime.now(timezone.utc),
    )


class TestSaveAndFind:

    def test_save_then_find_by_storage_key(self, metadata_repository):
        saved = metadata_repository.save(_record("k1-a.png"))

        found = metadata_repository.find_by_storage_key("k1-a.png")

        assert found is not None
        assert found.id == saved.id
        assert found.filename == "a.png"
        assert found.size == 100

    def test_find_missing_returns_none(self, metadata_repository):
        assert metadata_repository.find_by_storage_key("nope") is None

    def test_find_all_newest_first(self, metadata_repository):
        now = datetime.now(timezone.utc)
        metadata_repository.save(_record("old", now - timedelta(hours=1)))
        metadata_repository.save(_record("new", now))

        keys = [r.storage_key for r in metadata_repository.find_all()]

        assert keys == ["new", "old"]

    def test_detached_records_are_readable(self, metadata_repository):
        metadata_repository.save(_record("k1-a.png"))
        records = metadata_repository.find_all()
        # Attributes are loaded after the session closes
        assert records[0].url == "/store/view/k1-a.png"

    def test_storage_key_is_unique(self, metadata_repository):
        metadata_repository.save(_record("dup"))
        with pytest.raises(IntegrityError):
            metadata_repository.save(_record("dup"))

    def test_failed_save_leaves_no_row(self, metadata_repository):
        metadata_repository.save(_record("dup"))
        with pytest.raises(IntegrityError):
            metadata_repository.save(_record("dup"))
        assert len(metadata_repository.find_all()) == 1


class TestDelete:

    def test_delete_removes_record(self, metadata_repository):
        record = metadata_repository.save(_record("k1"))

        metadata_repository.delete(record)

        assert metadata_repository.find_by_storage_key("k1") is None

    def test_delete_already_gone_is_noop(self, metadata_repository):
        record = metadata_repository.save(_record("k1"))
        metadata_repository.delete(record)
        metadata_repository.delete(record)
        assert metadata_repository.find_all() == []

    def test_delete_leaves_other_records(self, metadata_repository):
        keep = metadata_repository.save(_record("keep"))
        drop = metadata_repository.save(_record("drop"))

        metadata_repository.delete(drop)

        assert [r.id for r in metadata_repository.find_all()] == [keep.id]


class TestErrors:

    def test_database_errors_propagate(self):
        session = MagicMock()
        session.__enter__.return_value = session
        session.commit.side_effect = OperationalError("INSERT", {}, Exception("db down"))
        repository = SqlAlchemyMetadataRepository(lambda: session)

        with pytest.raises(OperationalError):
            repository.save(_record("k1"))
        session.rollback.assert_called_once()
