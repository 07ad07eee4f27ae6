"""Exception types raised by the release upload helper."""

from __future__ import annotations

__all__ = ["InputError", "ReleaseUploadError", "RemoteError"]


class ReleaseUploadError(RuntimeError):
    """Base class for failures surfaced to the workflow."""


class InputError(ReleaseUploadError):
    """Raised when action inputs are missing or malformed."""


class RemoteError(ReleaseUploadError):
    """Raised when a GitHub API call fails.

    Parameters
    ----------
    message : str
        Human readable description, usually gh's own error text.
    status : int | None, optional
        HTTP status reported for the failed call, when it is known.
    """

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status
