"""Worktree lifecycle: create, delete, list and naming helpers.

Branch naming convention: ``openflow/{task_id}/{chat_role}``.

Directory layout under the worktree base::

    ~/.openflow/worktrees/
        {project_id}/
            {task_id}-main/
            {task_id}-review/
"""

import logging
import os
from pathlib import Path

from openflow_git.git.exceptions import GitIOError, ValidationFailureError
from openflow_git.git.runner import GitRunner
from openflow_git.models.worktree_models import (
    BRANCH_PREFIX,
    DETACHED_BRANCH,
    Worktree,
    WorktreeStatus,
)

logger = logging.getLogger(__name__)


def generate_branch_name(task_id: str, chat_role: str) -> str:
    """Build the branch name for a task/role worktree.

    Raises:
        ValidationFailureError: If task_id or chat_role is empty.
    """
    if not task_id:
        raise ValidationFailureError("task_id cannot be empty")
    if not chat_role:
        raise ValidationFailureError("chat_role cannot be empty")
    return f"{BRANCH_PREFIX}{task_id}/{chat_role.lower()}"


def generate_worktree_path(
    base_path: str,
    project_id: str,
    task_id: str,
    chat_role: str,
) -> str:
    """Build the worktree directory for a task/role, expanding a leading ``~``."""
    expanded_base = os.path.expanduser(base_path)
    return f"{expanded_base}/{project_id}/{task_id}-{chat_role.lower()}"


def _same_path(first: str, second: str) -> bool:
    try:
        return Path(first).resolve(strict=True) == Path(second).resolve(strict=True)
    except OSError:
        return Path(first) == Path(second)


def parse_worktree_list(output: str, repo_path: str = "") -> list[Worktree]:
    """Parse ``git worktree list --porcelain`` output.

    Bare entries are skipped. The first non-bare entry, or any entry whose
    path resolves to ``repo_path``, is marked as the main worktree.

    Args:
        output: Porcelain listing text.
        repo_path: Path of the primary repository, used to flag the main entry.

    Returns:
        Worktree records in listing order.
    """
    worktrees: list[Worktree] = []
    entry: dict | None = None

    def flush() -> None:
        if entry is None or entry["bare"]:
            return
        is_main = not worktrees or (bool(repo_path) and _same_path(entry["path"], repo_path))
        worktrees.append(
            Worktree(
                path=entry["path"],
                branch=entry["branch"],
                head_commit=entry["head"],
                is_main=is_main,
                status=entry["status"],
            )
        )

    for line in output.splitlines():
        if line.startswith("worktree "):
            flush()
            entry = {
                "path": line.removeprefix("worktree "),
                "branch": "",
                "head": None,
                "bare": False,
                "status": WorktreeStatus.ACTIVE,
            }
        elif entry is None:
            continue
        elif line.startswith("HEAD "):
            entry["head"] = line.removeprefix("HEAD ")
        elif line.startswith("branch "):
            entry["branch"] = line.removeprefix("branch ").removeprefix("refs/heads/")
        elif line == "bare":
            entry["bare"] = True
        elif line.startswith("detached"):
            entry["branch"] = DETACHED_BRANCH
        elif line.startswith("locked"):
            entry["status"] = WorktreeStatus.LOCKED
        elif line.startswith("prunable"):
            entry["status"] = WorktreeStatus.PRUNED

    flush()
    return worktrees


class WorktreeManager:
    """Creates and removes isolated per-task worktrees.

    No locking is done here: distinct branches and directories keep
    operations on different worktrees independent, and callers serialise
    access to the same path.
    """

    def __init__(self, runner: GitRunner | None = None) -> None:
        self.runner: GitRunner = runner or GitRunner()

    def create(
        self,
        repo_path: str,
        branch_name: str,
        base_branch: str,
        worktree_path: str,
    ) -> str:
        """Add a worktree checked out onto a new branch from base_branch.

        Args:
            repo_path: Path to the main repository.
            branch_name: Branch to create (see generate_branch_name).
            base_branch: Branch or commit the new branch starts from.
            worktree_path: Directory for the new worktree.

        Returns:
            worktree_path.

        Raises:
            GitIOError: If the parent directory cannot be created.
            CommandFailureError: If ``git worktree add`` fails, e.g. the
                branch already exists.
        """
        logger.debug(
            "Creating worktree: repo_path=%s, branch_name=%s, base_branch=%s, worktree_path=%s",
            repo_path, branch_name, base_branch, worktree_path,
        )
        parent = Path(worktree_path).parent
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise GitIOError(f"Failed to create worktree parent {parent}: {exc}") from exc

        self.runner.run_checked(
            ["worktree", "add", "-b", branch_name, worktree_path, base_branch],
            repo_path,
            "create worktree",
        )
        logger.info("Created worktree: branch_name=%s, worktree_path=%s", branch_name, worktree_path)
        return worktree_path

    def delete(self, repo_path: str, worktree_path: str) -> None:
        """Remove a worktree, forcing removal if it holds uncommitted work.

        A best-effort prune always runs afterwards, even when removal fails.

        Raises:
            CommandFailureError: If both graceful and forced removal fail.
        """
        logger.debug("Deleting worktree: repo_path=%s, worktree_path=%s", repo_path, worktree_path)
        try:
            result = self.runner.run(["worktree", "remove", worktree_path], repo_path)
            if result.ok:
                logger.info("Deleted worktree: worktree_path=%s", worktree_path)
                return

            logger.warning(
                "Normal worktree removal failed, trying force: worktree_path=%s, stderr=%s",
                worktree_path, result.stderr.strip(),
            )
            self.runner.run_checked(
                ["worktree", "remove", "--force", worktree_path],
                repo_path,
                "delete worktree",
            )
            logger.info("Deleted worktree with --force: worktree_path=%s", worktree_path)
        finally:
            self.prune(repo_path)

    def prune(self, repo_path: str) -> bool:
        """Prune stale worktree metadata. Never raises.

        Returns:
            True if ``git worktree prune`` succeeded.
        """
        try:
            result = self.runner.run(["worktree", "prune"], repo_path)
        except GitIOError as exc:
            logger.warning("Worktree prune could not run: repo_path=%s, error=%s", repo_path, exc)
            return False
        if not result.ok:
            logger.warning(
                "Worktree prune failed: repo_path=%s, stderr=%s", repo_path, result.stderr.strip()
            )
        return result.ok

    def list_worktrees(self, repo_path: str) -> list[Worktree]:
        """List worktrees with branch, HEAD and main flag.

        Raises:
            CommandFailureError: If the listing fails.
        """
        result = self.runner.run_checked(
            ["worktree", "list", "--porcelain"], repo_path, "list worktrees"
        )
        worktrees = parse_worktree_list(result.stdout, repo_path)
        logger.debug("Listed worktrees: repo_path=%s, count=%d", repo_path, len(worktrees))
        return worktrees

    def generate_branch_name(self, task_id: str, chat_role: str) -> str:
        return generate_branch_name(task_id, chat_role)

    def generate_worktree_path(
        self,
        base_path: str,
        project_id: str,
        task_id: str,
        chat_role: str,
    ) -> str:
        return generate_worktree_path(base_path, project_id, task_id, chat_role)

    # Defined last: inside the class body the name shadows the builtin.
    def list(self, repo_path: str) -> list[str]:
        """List worktree paths in listing order, primary checkout included."""
        return [worktree.path for worktree in self.list_worktrees(repo_path)]
