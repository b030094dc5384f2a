"""Task store interface consumed by the resolver."""

import json
from pathlib import Path
from typing import Protocol

from openflow_git.git.exceptions import NotFoundError
from openflow_git.models.store_models import Chat, Project, Task, TaskWithChats


class TaskStore(Protocol):
    """Read-only access to tasks, their chats and projects."""

    def get_task_with_chats(self, task_id: str) -> TaskWithChats:
        """Raises NotFoundError if the task does not exist."""
        ...

    def get_project(self, project_id: str) -> Project:
        """Raises NotFoundError if the project does not exist."""
        ...


class InMemoryTaskStore:
    """Dict-backed TaskStore, used by the CLI snapshot loader and tests."""

    def __init__(
        self,
        tasks: list[Task] | None = None,
        chats: list[Chat] | None = None,
        projects: list[Project] | None = None,
    ) -> None:
        self.tasks: dict[str, Task] = {task.id: task for task in tasks or []}
        self.chats: list[Chat] = list(chats or [])
        self.projects: dict[str, Project] = {project.id: project for project in projects or []}

    @classmethod
    def from_json_file(cls, path: str | Path) -> "InMemoryTaskStore":
        """Load a snapshot of the form ``{"tasks": [], "chats": [], "projects": []}``."""
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls(
            tasks=[Task.model_validate(item) for item in data.get("tasks", [])],
            chats=[Chat.model_validate(item) for item in data.get("chats", [])],
            projects=[Project.model_validate(item) for item in data.get("projects", [])],
        )

    def get_task_with_chats(self, task_id: str) -> TaskWithChats:
        task = self.tasks.get(task_id)
        if task is None:
            raise NotFoundError(f"Task not found: {task_id}")
        chats = [chat for chat in self.chats if chat.task_id == task_id]
        return TaskWithChats(task=task, chats=chats)

    def get_project(self, project_id: str) -> Project:
        project = self.projects.get(project_id)
        if project is None:
            raise NotFoundError(f"Project not found: {project_id}")
        return project
