import subprocess
from pathlib import Path

import pytest

from openflow_git.git.queries import RepositoryQueries
from openflow_git.git.runner import GitRunner
from openflow_git.git.worktrees import WorktreeManager


def run_git(repo: Path, *args: str) -> str:
    """Run git in repo and return stdout; fails the test on nonzero exit."""
    result = subprocess.run(
        ["git", "-C", str(repo), *args],
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


def _init_repo(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    run_git(path, "init")
    run_git(path, "symbolic-ref", "HEAD", "refs/heads/main")
    run_git(path, "config", "user.email", "test@example.com")
    run_git(path, "config", "user.name", "Test User")
    run_git(path, "config", "commit.gpgsign", "false")
    return path


@pytest.fixture
def empty_repo(tmp_path):
    """A git repository with no commits."""
    return _init_repo(tmp_path / "empty")


@pytest.fixture
def git_repo(tmp_path):
    """A git repository on branch main with one commit (README.md)."""
    repo = _init_repo(tmp_path / "repo")
    (repo / "README.md").write_text("# Test Repository\n")
    run_git(repo, "add", ".")
    run_git(repo, "commit", "-m", "Initial commit")
    return repo


@pytest.fixture
def runner():
    return GitRunner()


@pytest.fixture
def queries(runner):
    return RepositoryQueries(runner)


@pytest.fixture
def manager(runner):
    return WorktreeManager(runner)
