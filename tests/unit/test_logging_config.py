"""Unit tests for structured logging helpers."""

import json
import logging

import pytest

from asset_manager.logging_config import JSONFormatter, configure_logging, log_storage_operation


class TestJSONFormatter:

    def test_includes_known_extras(self):
        record = logging.LogRecord("asset_manager.test", logging.INFO, __file__, 1, "stored", None, None)
        record.event = "object_stored"
        record.key = "abc-cat.jpg"
        record.size_bytes = 2048
        record.unrelated = "dropped"

        data = json.loads(JSONFormatter().format(record))

        assert data["level"] == "INFO"
        assert data["logger"] == "asset_manager.test"
        assert data["message"] == "stored"
        assert data["event"] == "object_stored"
        assert data["key"] == "abc-cat.jpg"
        assert data["size_bytes"] == 2048
        assert "unrelated" not in data
        assert data["timestamp"].endswith("Z")


class TestConfigureLogging:

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_installs_single_json_handler(self):
        configure_logging(json_format=True, level="debug")

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, JSONFormatter)
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("botocore").level == logging.WARNING


class TestLogStorageOperation:

    def test_logs_completion(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="asset_manager.storage"):
            with log_storage_operation("put", "a.png", backend="s3") as metrics:
                metrics["size_bytes"] = 10

        record = caplog.records[-1]
        assert record.event == "storage_put_complete"
        assert record.size_bytes == 10
        assert record.backend == "s3"

    def test_logs_and_reraises_failure(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="asset_manager.storage"):
            with pytest.raises(RuntimeError):
                with log_storage_operation("put", "a.png"):
                    raise RuntimeError("boom")

        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.event == "storage_put_failed"
