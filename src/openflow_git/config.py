"""Runtime configuration loaded from the environment."""

import os

from pydantic import BaseModel, ConfigDict

from openflow_git.git.exceptions import ValidationFailureError

DEFAULT_WORKTREE_BASE = "~/.openflow/worktrees"
MIN_COMMIT_LIMIT = 1
MAX_COMMIT_LIMIT = 1000


class GitSettings(BaseModel):
    """Settings for the git subsystem.

    Environment variables (a ``.env`` file is loaded by the CLI):
        OPENFLOW_GIT_BINARY: git executable (default "git").
        OPENFLOW_WORKTREE_BASE: root for task worktrees.
        OPENFLOW_DEFAULT_REMOTE: remote used by push (default "origin").
        OPENFLOW_COMMIT_LIMIT: default git log limit, clamped to 1..1000.
        OPENFLOW_GIT_TIMEOUT: seconds before a git call is abandoned
            (unset means no timeout).
    """

    model_config = ConfigDict(frozen=False)

    git_binary: str = "git"
    worktree_base: str = DEFAULT_WORKTREE_BASE
    default_remote: str = "origin"
    commit_limit: int = 50
    timeout_seconds: float | None = None

    @classmethod
    def from_env(cls) -> "GitSettings":
        """Build settings from OPENFLOW_* environment variables.

        Raises:
            ValidationFailureError: If a numeric variable is malformed.
        """
        commit_limit = _read_number("OPENFLOW_COMMIT_LIMIT", int)
        timeout = _read_number("OPENFLOW_GIT_TIMEOUT", float)
        return cls(
            git_binary=os.getenv("OPENFLOW_GIT_BINARY") or "git",
            worktree_base=os.getenv("OPENFLOW_WORKTREE_BASE") or DEFAULT_WORKTREE_BASE,
            default_remote=os.getenv("OPENFLOW_DEFAULT_REMOTE") or "origin",
            commit_limit=clamp_commit_limit(50 if commit_limit is None else commit_limit),
            timeout_seconds=timeout if timeout and timeout > 0 else None,
        )


def clamp_commit_limit(limit: int) -> int:
    return max(MIN_COMMIT_LIMIT, min(limit, MAX_COMMIT_LIMIT))


def _read_number(name: str, kind: type) -> int | float | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return kind(raw.strip())
    except ValueError as exc:
        raise ValidationFailureError(f"{name} must be a number, got {raw!r}") from exc
