"""
Structured JSON logging for storage observability.

Provides a single-line JSON formatter for production and a context
manager that times object store operations.
"""

import json
import logging
import sys
import time
from contextlib import contextmanager
from datetime import datetime, timezone

# Extra fields copied from log records into the JSON payload
_EXTRA_FIELDS = [
    "event",
    "operation",
    "backend",
    "key",
    "size_bytes",
    "duration_ms",
    "content_type",
    "metadata_id",
    "queue",
]


# -----------------------------------------------------------------------------
# JSON Formatter
# -----------------------------------------------------------------------------


class JSONFormatter(logging.Formatter):
    """
    Format log records as single-line JSON.

    Output format:
    {"timestamp": "...", "level": "INFO", "logger": "...", "message": "...", ...}
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key in _EXTRA_FIELDS:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        return json.dumps(log_data, default=str)


def configure_logging(json_format: bool = True, level: str = "INFO") -> None:
    """
    Configure root logging.

    Args:
        json_format: If True, use JSON format. If False, use human-readable format.
        level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(getattr(logging, level.upper()))

    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))

    root_logger.addHandler(handler)

    # Reduce noise from third-party libraries
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("boto3").setLevel(logging.WARNING)
    logging.getLogger("s3transfer").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)


# -----------------------------------------------------------------------------
# Context Managers
# -----------------------------------------------------------------------------


@contextmanager
def log_storage_operation(operation: str, key: str, backend: str = "s3"):
    """
    Context manager for object store instrumentation.

    Logs operation completion or failure with timing and size.

    Usage:
        with log_storage_operation("put", key) as metrics:
            client.upload_fileobj(...)
            metrics["size_bytes"] = size
    """
    start_time = time.time()
    logger = logging.getLogger("asset_manager.storage")
    metrics: dict = {"size_bytes": 0}

    try:
        yield metrics

        duration_ms = int((time.time() - start_time) * 1000)
        logger.debug(
            f"{backend} {operation} completed: {key} ({metrics['size_bytes']} bytes, {duration_ms}ms)",
            extra={
                "event": f"storage_{operation}_complete",
                "operation": operation,
                "backend": backend,
                "key": key,
                "duration_ms": duration_ms,
                "size_bytes": metrics["size_bytes"],
            },
        )
    except Exception as e:
        duration_ms = int((time.time() - start_time) * 1000)
        logger.error(
            f"{backend} {operation} failed: {key} - {e}",
            extra={
                "event": f"storage_{operation}_failed",
                "operation": operation,
                "backend": backend,
                "key": key,
                "duration_ms": duration_ms,
            },
        )
        raise
