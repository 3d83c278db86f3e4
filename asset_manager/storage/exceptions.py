"""
Errors raised by storage backends.
"""


class StorageError(Exception):
    """Base class for object store failures."""


class StorageWriteError(StorageError):
    """The backend rejected a write (network, permission, quota)."""

    def __init__(self, key: str, reason: str = ""):
        self.key = key
        self.reason = reason
        message = f"Failed to write object: {key}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ObjectNotFound(StorageError):
    """The requested key does not exist in the container."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Object not found: {key}")
