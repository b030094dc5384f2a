"""Git process, repository query and worktree lifecycle components."""

from openflow_git.git.exceptions import (
    CommandFailureError,
    GitIOError,
    GitServiceError,
    NotFoundError,
    ValidationFailureError,
)
from openflow_git.git.queries import RepositoryQueries
from openflow_git.git.runner import CommandResult, GitRunner
from openflow_git.git.worktrees import (
    WorktreeManager,
    generate_branch_name,
    generate_worktree_path,
    parse_worktree_list,
)

__all__ = [
    "CommandFailureError",
    "CommandResult",
    "GitIOError",
    "GitRunner",
    "GitServiceError",
    "NotFoundError",
    "RepositoryQueries",
    "ValidationFailureError",
    "WorktreeManager",
    "generate_branch_name",
    "generate_worktree_path",
    "parse_worktree_list",
]
