"""Error kinds raised by the file-tree engine.

Not-found is handled inside the engine where it is a legitimate outcome
(existence probes, idempotent wipes). Everything else surfaces as one of
the exceptions below and aborts the current call.
"""

import errno as errno_codes


class FileTreeError(Exception):
    """Base exception for file-tree engine errors."""


class IOFault(FileTreeError):
    """Raised when a filesystem call fails for a reason other than not-found.

    Attributes:
        path: Path the failing call operated on.
        errno: OS error number, or None if unavailable.
    """

    def __init__(self, message: str, *, path: str, errno: int | None = None) -> None:
        super().__init__(message)
        self.path = path
        self.errno = errno


class PermissionDeniedError(IOFault):
    """Raised when the OS refuses access to a path."""


class SourceNotFoundError(FileTreeError):
    """Raised when a required source path does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Source path does not exist: {path}")
        self.path = path


class NotInitializedError(FileTreeError):
    """Raised when a component is used before it was initialized."""


_PERMISSION_ERRNOS = (errno_codes.EACCES, errno_codes.EPERM)


def is_not_found(exc: OSError) -> bool:
    """Check whether an OSError means the path does not exist."""
    return isinstance(exc, FileNotFoundError) or exc.errno == errno_codes.ENOENT


def wrap_os_error(exc: OSError, path: str, action: str) -> IOFault:
    """Convert an OSError into the matching engine error.

    Args:
        exc: The original OS error.
        path: Path the failing call operated on.
        action: Short verb describing the call (e.g. "unlink").

    Returns:
        PermissionDeniedError for EACCES/EPERM, IOFault otherwise.
    """
    message = f"Cannot {action} {path}: {exc.strerror or exc}"
    if isinstance(exc, PermissionError) or exc.errno in _PERMISSION_ERRNOS:
        return PermissionDeniedError(message, path=path, errno=exc.errno)
    return IOFault(message, path=path, errno=exc.errno)
