"""Error taxonomy for session capture and restore."""

from __future__ import annotations

from typing import Any


class WinSessionError(Exception):
    """Base class for all winsession failures."""


class PreconditionError(WinSessionError):
    """A required external tool is unavailable."""


class StorageError(WinSessionError):
    """Base class for session file failures."""

    def __init__(self, message: str, path: Any = None) -> None:
        super().__init__(message)
        self.path = path


class StorageWriteError(StorageError):
    """The session file or its directory could not be written."""


class StorageReadError(StorageError):
    """The session file is missing or does not hold a valid session."""


class RelaunchSpawnError(WinSessionError):
    """A stored command could not be spawned."""

    def __init__(self, message: str, record: Any = None) -> None:
        super().__init__(message)
        self.record = record
