"""Read-only records consumed from the task persistence layer."""

from pydantic import BaseModel, ConfigDict, Field


class Task(BaseModel):
    """A unit of work owned by a project."""

    model_config = ConfigDict(frozen=False)

    id: str
    project_id: str
    title: str = ""


class Chat(BaseModel):
    """An agent session attached to a task.

    ``worktree_path`` and ``worktree_deleted`` cache filesystem state; a
    non-deleted path is believed to exist, not guaranteed to.
    """

    model_config = ConfigDict(frozen=False)

    id: str
    task_id: str | None = None
    chat_role: str = "main"
    worktree_path: str | None = None
    worktree_deleted: bool = False
    workflow_step_index: int | None = None


class Project(BaseModel):
    """A project backed by a primary git repository."""

    model_config = ConfigDict(frozen=False)

    id: str
    name: str = ""
    git_repo_path: str
    base_branch: str = "main"


class TaskWithChats(BaseModel):
    """A task together with its chat sessions, in store order."""

    model_config = ConfigDict(frozen=False)

    task: Task
    chats: list[Chat] = Field(default_factory=list)
