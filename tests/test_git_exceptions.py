"""Tests for git exception classes."""

import pytest

from openflow_git.git.exceptions import (
    CommandFailureError,
    GitIOError,
    GitServiceError,
    NotFoundError,
    ValidationFailureError,
)


class TestGitExceptions:
    """Tests for the git exception hierarchy."""

    @pytest.mark.parametrize(
        "exc_class",
        [CommandFailureError, GitIOError, ValidationFailureError, NotFoundError],
    )
    def test_inherits_from_git_service_error(self, exc_class):
        exc = exc_class("failed")
        assert isinstance(exc, GitServiceError)
        assert isinstance(exc, Exception)
        assert str(exc) == "failed"

    def test_command_failure_carries_context(self):
        exc = CommandFailureError(
            "Failed to create worktree: fatal",
            stderr="fatal: branch exists\n",
            args_vector=["worktree", "add"],
            returncode=128,
        )
        assert exc.stderr == "fatal: branch exists\n"
        assert exc.args_vector == ["worktree", "add"]
        assert exc.returncode == 128

    def test_command_failure_defaults(self):
        exc = CommandFailureError("boom")
        assert exc.stderr == ""
        assert exc.args_vector == []
        assert exc.returncode is None
