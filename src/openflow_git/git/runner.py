"""Subprocess runner for the git binary."""

import logging
import subprocess

from pydantic import BaseModel, ConfigDict, Field

from openflow_git.git.exceptions import CommandFailureError, GitIOError

logger = logging.getLogger(__name__)

DEFAULT_GIT_BINARY = "git"


class CommandResult(BaseModel):
    """Exit status and captured output of one git invocation."""

    model_config = ConfigDict(frozen=False)

    args: list[str] = Field(default_factory=list)
    cwd: str
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class GitRunner:
    """Runs ``git -C <cwd> <args...>`` and captures its output.

    One process per call; nothing is cached since other agent processes may
    change the repository between calls.
    """

    def __init__(
        self,
        git_binary: str = DEFAULT_GIT_BINARY,
        timeout_seconds: float | None = None,
    ) -> None:
        self.git_binary: str = git_binary
        self.timeout_seconds: float | None = timeout_seconds

    def run(self, args: list[str], cwd: str) -> CommandResult:
        """Run git with the given arguments scoped to ``cwd``.

        Args:
            args: Arguments after ``git -C <cwd>``.
            cwd: Repository or worktree path.

        Returns:
            CommandResult. A nonzero exit is reported, not raised.

        Raises:
            GitIOError: If the process cannot be spawned or times out.
        """
        command = [self.git_binary, "-C", str(cwd), *args]
        logger.debug("Running: %s", " ".join(command))
        try:
            completed = subprocess.run(
                command,
                capture_output=True,
                timeout=self.timeout_seconds,
            )
        except subprocess.TimeoutExpired as exc:
            raise GitIOError(
                f"git timed out after {self.timeout_seconds}s: {' '.join(args)}"
            ) from exc
        except OSError as exc:
            raise GitIOError(f"Failed to run {self.git_binary}: {exc}") from exc

        return CommandResult(
            args=list(args),
            cwd=str(cwd),
            returncode=completed.returncode,
            stdout=completed.stdout.decode("utf-8", errors="replace"),
            stderr=completed.stderr.decode("utf-8", errors="replace"),
        )

    def run_checked(self, args: list[str], cwd: str, action: str) -> CommandResult:
        """Run git and raise on a nonzero exit.

        Args:
            args: Arguments after ``git -C <cwd>``.
            cwd: Repository or worktree path.
            action: Human-readable action used in the error message,
                e.g. "create worktree".

        Raises:
            CommandFailureError: If git exits nonzero.
            GitIOError: If the process cannot be spawned.
        """
        result = self.run(args, cwd)
        if not result.ok:
            stderr = result.stderr.strip()
            logger.error("Failed to %s: cwd=%s, stderr=%s", action, cwd, stderr)
            raise CommandFailureError(
                f"Failed to {action}: {stderr}",
                stderr=result.stderr,
                args_vector=result.args,
                returncode=result.returncode,
            )
        return result
