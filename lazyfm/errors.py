"""Error taxonomy shared by commands, keymap loading, and file operations.

Filesystem failures are plain ``OSError`` subclasses and are not wrapped.
"""

from __future__ import annotations


class KeymapError(Exception):
    """Invalid command arguments, unknown command names, or unknown key codes."""

    def __init__(self, command: str | None, message: str) -> None:
        super().__init__(message)
        self.command = command
        self.message = message

    def __str__(self) -> str:
        if self.command is None:
            return self.message
        return f"{self.command}: {self.message}"


class WorkerError(Exception):
    """A file-operation worker failed; raised when the worker is joined."""

    def __init__(self, operation: str, cause: BaseException) -> None:
        super().__init__(f"{operation} failed: {format_error(cause)}")
        self.operation = operation
        self.cause = cause


def format_error(exc: BaseException) -> str:
    """One-line status-bar text for a command or worker failure."""
    if isinstance(exc, OSError) and exc.strerror:
        if exc.filename is not None:
            return f"{exc.strerror}: {exc.filename}"
        return exc.strerror
    return str(exc) or type(exc).__name__


__all__ = ["KeymapError", "WorkerError", "format_error"]
