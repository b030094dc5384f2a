"""Resolves which working directory holds a task's active agent session."""

import asyncio
import logging

from openflow_git.git.queries import RepositoryQueries
from openflow_git.models.commit_models import Commit
from openflow_git.models.diff_models import FileDiff
from openflow_git.models.store_models import Chat
from openflow_git.resolver.store import TaskStore

logger = logging.getLogger(__name__)

# Chats without a workflow step sort after every indexed chat.
UNINDEXED_STEP = float("inf")


def select_active_chat(chats: list[Chat]) -> Chat | None:
    """Pick the live-worktree chat with the lowest workflow step index.

    Chats with no worktree path, or whose worktree is flagged deleted, are
    ignored. Ties keep store order.
    """
    live = [chat for chat in chats if chat.worktree_path and not chat.worktree_deleted]
    if not live:
        return None
    return min(
        live,
        key=lambda chat: (
            chat.workflow_step_index
            if chat.workflow_step_index is not None
            else UNINDEXED_STEP
        ),
    )


class TaskWorktreeResolver:
    """Reads a task's diff and commits from its active worktree.

    Falls back to the project's primary repository when no chat has a live
    worktree. The cached worktree path is believed, not verified; a stale
    path surfaces as CommandFailureError from the underlying query.
    """

    def __init__(self, store: TaskStore, queries: RepositoryQueries | None = None) -> None:
        self.store = store
        self.queries: RepositoryQueries = queries or RepositoryQueries()

    def resolve_path(self, task_id: str) -> str:
        """Return the directory to read for task_id.

        Raises:
            NotFoundError: If the task, or the fallback project, is missing.
        """
        task_with_chats = self.store.get_task_with_chats(task_id)
        logger.debug(
            "Loaded task: task_id=%s, chat_count=%d", task_id, len(task_with_chats.chats)
        )

        chat = select_active_chat(task_with_chats.chats)
        if chat is not None:
            logger.debug("Using worktree path: task_id=%s, path=%s", task_id, chat.worktree_path)
            return chat.worktree_path

        project_id = task_with_chats.task.project_id
        logger.debug(
            "No worktree found, falling back to project repo: task_id=%s, project_id=%s",
            task_id, project_id,
        )
        return self.store.get_project(project_id).git_repo_path

    def resolve_diff(self, task_id: str) -> list[FileDiff]:
        return self.queries.get_diff(self.resolve_path(task_id))

    def resolve_commits(self, task_id: str, limit: int | None = None) -> list[Commit]:
        return self.queries.get_commits(self.resolve_path(task_id), limit)

    async def resolve_diff_async(self, task_id: str) -> list[FileDiff]:
        """resolve_diff on a worker thread, keeping the event loop free."""
        return await asyncio.to_thread(self.resolve_diff, task_id)

    async def resolve_commits_async(self, task_id: str, limit: int | None = None) -> list[Commit]:
        """resolve_commits on a worker thread, keeping the event loop free."""
        return await asyncio.to_thread(self.resolve_commits, task_id, limit)
