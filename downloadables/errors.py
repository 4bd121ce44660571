"""Error taxonomy and exit code mapping for CLI."""

from __future__ import annotations


class DownloadablesError(Exception):
    """Base error for deterministic CLI exit codes."""

    exit_code: int = 1


class ValidationError(DownloadablesError):
    """Invalid user input or command usage."""

    exit_code = 2


class RuntimeFailure(DownloadablesError):
    """Unexpected runtime failure."""

    exit_code = 1


class IOFailure(DownloadablesError):
    """Filesystem, network or I/O failure."""

    exit_code = 3


class ManifestFetchError(IOFailure):
    """A link manifest could not be retrieved or decoded.

    Aggregation reports it as a warning and keeps going.
    """

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Link manifest {url} unavailable: {reason}")
        self.url = url
        self.reason = reason


def exit_code_for_exception(exc: BaseException) -> int:
    """Resolve a deterministic exit code for an exception."""
    if isinstance(exc, DownloadablesError):
        return exc.exit_code
    if isinstance(exc, OSError):
        return IOFailure.exit_code
    return RuntimeFailure.exit_code
