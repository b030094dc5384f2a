"""Isolated git worktrees, diffs and commit logs for parallel agent tasks."""

from openflow_git.config import GitSettings
from openflow_git.git import (
    CommandFailureError,
    GitIOError,
    GitRunner,
    GitServiceError,
    NotFoundError,
    RepositoryQueries,
    ValidationFailureError,
    WorktreeManager,
    generate_branch_name,
    generate_worktree_path,
)
from openflow_git.resolver import InMemoryTaskStore, TaskWorktreeResolver

__version__ = "0.1.0"

__all__ = [
    "CommandFailureError",
    "GitIOError",
    "GitRunner",
    "GitServiceError",
    "GitSettings",
    "InMemoryTaskStore",
    "NotFoundError",
    "RepositoryQueries",
    "TaskWorktreeResolver",
    "ValidationFailureError",
    "WorktreeManager",
    "generate_branch_name",
    "generate_worktree_path",
]
