"""Task-to-worktree resolution."""

from openflow_git.resolver.store import InMemoryTaskStore, TaskStore
from openflow_git.resolver.task_resolver import TaskWorktreeResolver, select_active_chat

__all__ = [
    "InMemoryTaskStore",
    "TaskStore",
    "TaskWorktreeResolver",
    "select_active_chat",
]
