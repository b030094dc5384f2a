"""Worktree models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict

BRANCH_PREFIX = "openflow/"
DETACHED_BRANCH = "(detached)"


class WorktreeStatus(str, Enum):
    """Lifecycle status of a worktree entry."""

    ACTIVE = "active"
    PRUNED = "pruned"
    LOCKED = "locked"


class Worktree(BaseModel):
    """One entry of ``git worktree list --porcelain``."""

    model_config = ConfigDict(frozen=False)

    path: str
    branch: str  # Short branch name, or "(detached)"
    head_commit: str | None = None
    is_main: bool = False
    status: WorktreeStatus = WorktreeStatus.ACTIVE

    @property
    def is_openflow_worktree(self) -> bool:
        return self.branch.startswith(BRANCH_PREFIX)

    @property
    def task_id(self) -> str | None:
        """Task id encoded in an ``openflow/{task_id}/{role}`` branch."""
        return self._branch_segment(1)

    @property
    def chat_role(self) -> str | None:
        """Chat role encoded in an ``openflow/{task_id}/{role}`` branch."""
        return self._branch_segment(2)

    def _branch_segment(self, index: int) -> str | None:
        if not self.is_openflow_worktree:
            return None
        parts = self.branch.split("/")
        if len(parts) > index:
            return parts[index]
        return None
