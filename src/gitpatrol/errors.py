"""Exception hierarchy shared by connectors and the scanner."""

from __future__ import annotations


class GitPatrolError(Exception):
    """Base class for every error raised by GitPatrol."""


class ConstructionError(GitPatrolError):
    """A connector could not be built from the given path or URL."""


class NotFoundError(GitPatrolError):
    """The remote repository or path does not exist."""


class RateLimitedError(GitPatrolError):
    """The remote API quota is exhausted."""


class AccessDeniedError(GitPatrolError):
    """The remote resource exists but is not accessible."""


class ApiError(GitPatrolError):
    """Any other non-success response from the remote API."""

    def __init__(self, message: str, status_code: int, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class NetworkError(GitPatrolError):
    """The remote API could not be reached."""


class EmptyRepositoryError(GitPatrolError):
    """A remote tree walk finished without discovering a single file."""


class DecodeError(GitPatrolError):
    """Fetched content is not valid UTF-8 or lacks the expected payload."""


class EntryNotFoundError(GitPatrolError):
    """A path was requested that the archive does not contain."""


class LockError(GitPatrolError):
    """The archive handle lock could not be acquired."""


class ArchiveReadError(GitPatrolError):
    """An archive entry exists but its data cannot be read."""
