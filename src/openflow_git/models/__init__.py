"""Data models for openflow-git."""

from openflow_git.models.commit_models import Commit, CommitSummary
from openflow_git.models.diff_models import (
    DiffHunk,
    FileChangeType,
    FileDiff,
    FileDiffSummary,
)
from openflow_git.models.store_models import Chat, Project, Task, TaskWithChats
from openflow_git.models.worktree_models import Worktree, WorktreeStatus

__all__ = [
    "Chat",
    "Commit",
    "CommitSummary",
    "DiffHunk",
    "FileChangeType",
    "FileDiff",
    "FileDiffSummary",
    "Project",
    "Task",
    "TaskWithChats",
    "Worktree",
    "WorktreeStatus",
]
