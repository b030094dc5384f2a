"""Unit tests for the CLI module (openflow_git.cli.main)."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from openflow_git.cli.main import (
    EXIT_COMMAND_FAILURE,
    EXIT_INVALID_INPUT,
    EXIT_IO_FAILURE,
    EXIT_KEYBOARD_INTERRUPT,
    EXIT_NOT_FOUND,
    EXIT_SUCCESS,
    EXIT_UNEXPECTED,
    build_parser,
    format_result_json,
    main,
)
from openflow_git.git.exceptions import GitIOError
from openflow_git.models import Commit, FileDiff

from conftest import run_git


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("OPENFLOW_WORKTREE_BASE", "OPENFLOW_COMMIT_LIMIT", "OPENFLOW_GIT_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


def _write_store(path: Path, repo_path: str, worktree_path: str | None = None) -> Path:
    chats = []
    if worktree_path:
        chats.append({"id": "c1", "task_id": "t1", "worktree_path": worktree_path, "workflow_step_index": 0})
    path.write_text(json.dumps({
        "tasks": [{"id": "t1", "project_id": "p1"}],
        "chats": chats,
        "projects": [{"id": "p1", "git_repo_path": repo_path}],
    }))
    return path


# ---------------------------------------------------------------------------
# TestBuildParser
# ---------------------------------------------------------------------------

class TestBuildParser:

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_global_flags(self):
        args = build_parser().parse_args(["--verbose", "--output-json", "list", "/repo"])
        assert args.verbose is True
        assert args.output_json is True
        assert args.command == "list"

    def test_create_defaults(self):
        args = build_parser().parse_args(["create", "/repo", "p1", "t1", "main"])
        assert args.base_branch == "main"
        assert args.base_path is None

    def test_task_commands_require_store(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["task-diff", "t1"])


# ---------------------------------------------------------------------------
# TestFormatResultJson
# ---------------------------------------------------------------------------

class TestFormatResultJson:

    def test_models_are_dumped(self):
        payload = json.loads(format_result_json([FileDiff(path="a.py", additions=1)]))
        assert payload[0]["path"] == "a.py"
        assert payload[0]["hunks"] == []

    def test_scalars_pass_through(self):
        assert json.loads(format_result_json("openflow/t/main")) == "openflow/t/main"
        assert json.loads(format_result_json(None)) is None

    def test_nested_dict(self):
        payload = json.loads(format_result_json({"commits": [Commit(hash="h", short_hash="h")]}))
        assert payload["commits"][0]["files_changed"] == 0


# ---------------------------------------------------------------------------
# TestMain
# ---------------------------------------------------------------------------

class TestMain:

    def test_branch_name(self, capsys):
        assert main(["branch-name", "task123", "Review"]) == EXIT_SUCCESS
        assert capsys.readouterr().out.strip() == "openflow/task123/review"

    def test_branch_name_empty_role_is_invalid(self, capsys):
        assert main(["branch-name", "task123", ""]) == EXIT_INVALID_INPUT
        assert "Invalid input" in capsys.readouterr().err

    def test_worktree_path_uses_env_base(self, monkeypatch, capsys):
        monkeypatch.setenv("OPENFLOW_WORKTREE_BASE", "/srv/wt")
        assert main(["worktree-path", "p1", "t1", "main"]) == EXIT_SUCCESS
        assert capsys.readouterr().out.strip() == "/srv/wt/p1/t1-main"

    def test_create_list_delete(self, git_repo, tmp_path, capsys):
        base = str(tmp_path / "worktrees")
        rc = main(["--output-json", "create", str(git_repo), "p1", "t1", "main", "--base-path", base])
        assert rc == EXIT_SUCCESS
        created = json.loads(capsys.readouterr().out)
        assert created == {"branch": "openflow/t1/main", "worktree_path": f"{base}/p1/t1-main"}

        assert main(["--output-json", "list", str(git_repo)]) == EXIT_SUCCESS
        listed = json.loads(capsys.readouterr().out)
        assert [w["branch"] for w in listed] == ["main", "openflow/t1/main"]

        assert main(["delete", str(git_repo), created["worktree_path"]]) == EXIT_SUCCESS
        assert not Path(created["worktree_path"]).exists()

    def test_create_duplicate_is_command_failure(self, git_repo, tmp_path, capsys):
        base = str(tmp_path / "worktrees")
        assert main(["create", str(git_repo), "p1", "t1", "main", "--base-path", base]) == EXIT_SUCCESS
        rc = main(["create", str(git_repo), "p2", "t1", "main", "--base-path", base])
        assert rc == EXIT_COMMAND_FAILURE
        assert "Git command failed" in capsys.readouterr().err

    def test_status_human(self, git_repo, capsys):
        (git_repo / "untracked.txt").write_text("x")
        assert main(["status", str(git_repo)]) == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert "Branch:      main" in out
        assert "Uncommitted: yes" in out

    def test_diff_summary_json(self, git_repo, capsys):
        (git_repo / "README.md").write_text("changed\n")
        assert main(["--output-json", "diff", str(git_repo), "--summary"]) == EXIT_SUCCESS
        payload = json.loads(capsys.readouterr().out)
        assert payload == [{"path": "README.md", "additions": 1, "deletions": 1, "change_type": "modified"}]

    def test_log_human(self, git_repo, capsys):
        assert main(["log", str(git_repo), "--limit", "5"]) == EXIT_SUCCESS
        assert "Initial commit" in capsys.readouterr().out

    def test_task_log_falls_back_to_project(self, git_repo, tmp_path, capsys):
        store = _write_store(tmp_path / "store.json", str(git_repo))
        assert main(["--output-json", "task-log", "t1", "--store", str(store)]) == EXIT_SUCCESS
        payload = json.loads(capsys.readouterr().out)
        assert [c["message"] for c in payload] == ["Initial commit"]

    def test_task_diff_reads_worktree(self, git_repo, tmp_path, capsys):
        worktree = tmp_path / "wt"
        run_git(git_repo, "worktree", "add", "-b", "openflow/t1/main", str(worktree), "main")
        (worktree / "new.txt").write_text("one\n")
        run_git(worktree, "add", "new.txt")
        store = _write_store(tmp_path / "store.json", str(git_repo), str(worktree))

        assert main(["task-diff", "t1", "--store", str(store)]) == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert "added" in out
        assert "new.txt" in out

    def test_task_not_found(self, git_repo, tmp_path, capsys):
        store = _write_store(tmp_path / "store.json", str(git_repo))
        assert main(["task-diff", "missing", "--store", str(store)]) == EXIT_NOT_FOUND
        assert "Not found" in capsys.readouterr().err

    def test_missing_store_file_is_io_failure(self, tmp_path):
        assert main(["task-diff", "t1", "--store", str(tmp_path / "nope.json")]) == EXIT_IO_FAILURE

    @patch("openflow_git.cli.main.run_command", side_effect=GitIOError("spawn failed"))
    def test_io_error(self, _mock):
        assert main(["list", "/repo"]) == EXIT_IO_FAILURE

    @patch("openflow_git.cli.main.run_command", side_effect=KeyboardInterrupt)
    def test_keyboard_interrupt(self, _mock):
        assert main(["list", "/repo"]) == EXIT_KEYBOARD_INTERRUPT

    @patch("openflow_git.cli.main.run_command", side_effect=RuntimeError("boom"))
    def test_unexpected_error(self, _mock, capsys):
        assert main(["--verbose", "list", "/repo"]) == EXIT_UNEXPECTED
        err = capsys.readouterr().err
        assert "Unexpected error: boom" in err
        assert "Traceback" in err
