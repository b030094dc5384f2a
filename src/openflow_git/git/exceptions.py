"""Exceptions for git operations.

Note: Names chosen to avoid collisions with stdlib exceptions (IOError, etc.).
"""


class GitServiceError(Exception):
    """Base exception for all git service operations."""


class CommandFailureError(GitServiceError):
    """Raised when the git binary exits with a nonzero status."""

    def __init__(
        self,
        message: str,
        stderr: str = "",
        args_vector: list[str] | None = None,
        returncode: int | None = None,
    ) -> None:
        super().__init__(message)
        self.stderr = stderr
        self.args_vector = list(args_vector or [])
        self.returncode = returncode


class GitIOError(GitServiceError):
    """Raised when a directory cannot be created or git cannot be spawned."""


class ValidationFailureError(GitServiceError):
    """Raised when an identifier or setting is empty or malformed."""


class NotFoundError(GitServiceError):
    """Raised when a task or project is missing from the store."""
