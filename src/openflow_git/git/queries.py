"""Read-only repository queries: branch, HEAD, status, diff and log."""

import logging

from openflow_git.git.exceptions import CommandFailureError, ValidationFailureError
from openflow_git.git.runner import GitRunner
from openflow_git.models.commit_models import Commit
from openflow_git.models.diff_models import FileDiff
from openflow_git.utils.commit_parser import log_format_arg, parse_commits
from openflow_git.utils.diff_parser import parse_diff

logger = logging.getLogger(__name__)

DEFAULT_COMMIT_LIMIT = 50
DEFAULT_REMOTE = "origin"
NO_COMMITS_MARKER = "does not have any commits"


class RepositoryQueries:
    """Introspects a repository or worktree through the git binary.

    Every call reads fresh state; results are never cached.
    """

    def __init__(
        self,
        runner: GitRunner | None = None,
        default_commit_limit: int = DEFAULT_COMMIT_LIMIT,
    ) -> None:
        self.runner: GitRunner = runner or GitRunner()
        self.default_commit_limit: int = default_commit_limit

    def current_branch(self, path: str) -> str:
        """Return the checked-out branch name.

        Raises:
            CommandFailureError: If path is not a valid working tree.
        """
        result = self.runner.run_checked(
            ["rev-parse", "--abbrev-ref", "HEAD"], path, "get current branch"
        )
        branch = result.stdout.strip()
        logger.debug("Current branch: path=%s, branch=%s", path, branch)
        return branch

    def head_commit(self, path: str) -> str | None:
        """Return the HEAD commit hash, or None for a repository with no commits."""
        result = self.runner.run(["rev-parse", "HEAD"], path)
        if not result.ok:
            logger.debug("No HEAD commit (new repository): path=%s", path)
            return None
        return result.stdout.strip()

    def has_uncommitted_changes(self, path: str) -> bool:
        """True if ``git status --porcelain`` reports anything, untracked files included."""
        result = self.runner.run_checked(["status", "--porcelain"], path, "check git status")
        has_changes = bool(result.stdout.strip())
        logger.debug("Uncommitted changes check: path=%s, has_changes=%s", path, has_changes)
        return has_changes

    def get_diff(self, path: str) -> list[FileDiff]:
        """Return the working-tree diff against HEAD.

        Falls back to the staged diff probe for a repository without a HEAD
        commit; returns an empty list when neither is available.

        Args:
            path: Worktree or repository path.

        Returns:
            Parsed FileDiff list.
        """
        probe = self.runner.run(["diff", "HEAD", "--numstat", "--name-status"], path)
        if not probe.ok:
            logger.debug("HEAD diff failed (possibly new repo), trying cached: path=%s", path)
            cached = self.runner.run(["diff", "--cached", "--numstat"], path)
            if not cached.ok:
                logger.warning("No diff available (new repo with no staged changes): path=%s", path)
                return []

        result = self.runner.run(["diff", "HEAD", "--unified=3", "--no-color"], path)
        diffs = parse_diff(result.stdout)
        logger.info(
            "Got diff: path=%s, file_count=%d, files=[%s]",
            path, len(diffs), ", ".join(diff.path for diff in diffs[:5]),
        )
        return diffs

    def get_commits(
        self,
        path: str,
        limit: int | None = None,
        skip: int | None = None,
        ref_name: str | None = None,
    ) -> list[Commit]:
        """Return recent commits, newest first, with shortstat counts.

        Args:
            path: Worktree or repository path.
            limit: Maximum commits to return (default_commit_limit when None).
            skip: Number of commits to skip, for paging.
            ref_name: Branch or ref to read instead of HEAD.

        Raises:
            ValidationFailureError: If limit is negative or ref_name looks
                like an option.
            CommandFailureError: If git log fails for a reason other than an
                empty repository.
        """
        if limit is None:
            limit = self.default_commit_limit
        if limit < 0:
            raise ValidationFailureError(f"limit cannot be negative: {limit}")
        if ref_name and ref_name.startswith("-"):
            raise ValidationFailureError(f"Invalid ref name: {ref_name}")

        args = ["log", f"-{limit}"]
        if skip:
            args.append(f"--skip={skip}")
        args.extend([log_format_arg(), "--shortstat"])
        if ref_name:
            args.append(ref_name)
        # Revisions end here; a ref named like a file stays a revision.
        args.append("--")

        result = self.runner.run(args, path)
        if not result.ok:
            if NO_COMMITS_MARKER in result.stderr:
                logger.debug("No commits yet in repository: path=%s", path)
                return []
            logger.error("Failed to get commits: path=%s, stderr=%s", path, result.stderr.strip())
            raise CommandFailureError(
                f"Failed to get commits: {result.stderr.strip()}",
                stderr=result.stderr,
                args_vector=result.args,
                returncode=result.returncode,
            )

        commits = parse_commits(result.stdout)
        logger.info(
            "Got commits: path=%s, commit_count=%d, recent=[%s]",
            path,
            len(commits),
            ", ".join(f"{c.short_hash}:{c.message[:30]}" for c in commits[:3]),
        )
        return commits

    def push_branch(self, path: str, remote: str = DEFAULT_REMOTE) -> str:
        """Push the current branch and set its upstream.

        Returns:
            The pushed branch name.

        Raises:
            CommandFailureError: If the branch cannot be resolved or the push fails.
        """
        branch = self.current_branch(path)
        self.runner.run_checked(["push", "-u", remote, branch], path, "push branch")
        logger.info("Pushed branch: branch=%s, remote=%s, path=%s", branch, remote, path)
        return branch
