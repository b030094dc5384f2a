"""CLI entry point for openflow-git."""
import argparse
from dotenv import load_dotenv
import json
import logging
import sys
import traceback

from pydantic import BaseModel

from openflow_git.config import GitSettings, clamp_commit_limit
from openflow_git.git.exceptions import (
    CommandFailureError,
    GitIOError,
    NotFoundError,
    ValidationFailureError,
)
from openflow_git.git.queries import RepositoryQueries
from openflow_git.git.runner import GitRunner
from openflow_git.git.worktrees import (
    WorktreeManager,
    generate_branch_name,
    generate_worktree_path,
)
from openflow_git.models import Commit, FileDiff, FileDiffSummary
from openflow_git.resolver.store import InMemoryTaskStore
from openflow_git.resolver.task_resolver import TaskWorktreeResolver

load_dotenv()

# Exit codes
EXIT_SUCCESS = 0
EXIT_INVALID_INPUT = 1
EXIT_COMMAND_FAILURE = 2
EXIT_IO_FAILURE = 3
EXIT_NOT_FOUND = 4
EXIT_UNEXPECTED = 5
EXIT_KEYBOARD_INTERRUPT = 130


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    parser = argparse.ArgumentParser(
        prog="openflow-git",
        description="Per-task git worktrees, diffs and commit logs",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--output-json", action="store_true", help="Output results as JSON"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    branch = sub.add_parser("branch-name", help="Print the branch name for a task role")
    branch.add_argument("task_id")
    branch.add_argument("role")

    wt_path = sub.add_parser("worktree-path", help="Print the worktree directory for a task role")
    wt_path.add_argument("project_id")
    wt_path.add_argument("task_id")
    wt_path.add_argument("role")
    wt_path.add_argument(
        "--base-path",
        default=None,
        help="Worktree root (default: OPENFLOW_WORKTREE_BASE or ~/.openflow/worktrees)",
    )

    create = sub.add_parser("create", help="Create a task worktree on a new branch")
    create.add_argument("repo_path")
    create.add_argument("project_id")
    create.add_argument("task_id")
    create.add_argument("role")
    create.add_argument("--base-branch", default="main", help="Branch to start from (default: main)")
    create.add_argument("--base-path", default=None, help="Worktree root override")

    delete = sub.add_parser("delete", help="Remove a worktree (forced if it has changes)")
    delete.add_argument("repo_path")
    delete.add_argument("worktree_path")

    list_cmd = sub.add_parser("list", help="List worktrees of a repository")
    list_cmd.add_argument("repo_path")

    diff = sub.add_parser("diff", help="Show the working-tree diff against HEAD")
    diff.add_argument("path")
    diff.add_argument("--summary", action="store_true", help="Omit hunk bodies")

    log = sub.add_parser("log", help="Show recent commits")
    log.add_argument("path")
    log.add_argument("--limit", type=int, default=None, help="Maximum commits to show")
    log.add_argument("--skip", type=int, default=None, help="Commits to skip")
    log.add_argument("--ref", default=None, help="Branch or ref to read")

    status = sub.add_parser("status", help="Show branch, HEAD and dirty state")
    status.add_argument("path")

    push = sub.add_parser("push", help="Push the current branch with upstream tracking")
    push.add_argument("path")
    push.add_argument("--remote", default=None, help="Remote name (default: origin)")

    for name, help_text in (
        ("task-diff", "Show the diff of a task's active worktree"),
        ("task-log", "Show the commits of a task's active worktree"),
    ):
        task_cmd = sub.add_parser(name, help=help_text)
        task_cmd.add_argument("task_id")
        task_cmd.add_argument(
            "--store", required=True, help="JSON snapshot with tasks, chats and projects"
        )
        if name == "task-log":
            task_cmd.add_argument("--limit", type=int, default=None)

    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _dump(value) -> object:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, list):
        return [_dump(item) for item in value]
    if isinstance(value, dict):
        return {key: _dump(item) for key, item in value.items()}
    return value


def format_result_json(result) -> str:
    """Serialize a result (models, lists, dicts or scalars) to JSON."""
    return json.dumps(_dump(result), indent=2)


def _print_diffs(diffs: list[FileDiff]) -> None:
    if not diffs:
        print("No changes.")
        return
    for diff in diffs:
        summary = FileDiffSummary.from_diff(diff)
        label = f"{diff.old_path} -> {diff.path}" if diff.old_path else diff.path
        print(f"{summary.change_type.value:<9} +{diff.additions:<5} -{diff.deletions:<5} {label}")


def _print_commits(commits: list[Commit]) -> None:
    if not commits:
        print("No commits.")
        return
    for commit in commits:
        print(
            f"{commit.short_hash} {commit.date} {commit.author}: {commit.message} "
            f"({commit.files_changed} files, +{commit.additions} -{commit.deletions})"
        )


def print_result_human(command: str, result) -> None:
    """Print a command result in human-readable format."""
    if command in ("diff", "task-diff"):
        _print_diffs(result)
    elif command in ("log", "task-log"):
        _print_commits(result)
    elif command == "status":
        print(f"Branch:      {result['branch']}")
        print(f"HEAD:        {result['head_commit'] or '(no commits)'}")
        print(f"Uncommitted: {'yes' if result['has_uncommitted_changes'] else 'no'}")
    elif isinstance(result, list):
        for item in result:
            print(item)
    elif result is not None:
        print(result)


def run_command(args: argparse.Namespace, settings: GitSettings):
    """Dispatch a parsed command and return its result."""
    runner = GitRunner(git_binary=settings.git_binary, timeout_seconds=settings.timeout_seconds)
    queries = RepositoryQueries(runner, default_commit_limit=settings.commit_limit)
    manager = WorktreeManager(runner)
    command = args.command

    if command == "branch-name":
        return generate_branch_name(args.task_id, args.role)
    if command == "worktree-path":
        return generate_worktree_path(
            args.base_path or settings.worktree_base, args.project_id, args.task_id, args.role
        )
    if command == "create":
        branch_name = generate_branch_name(args.task_id, args.role)
        worktree_path = generate_worktree_path(
            args.base_path or settings.worktree_base, args.project_id, args.task_id, args.role
        )
        manager.create(args.repo_path, branch_name, args.base_branch, worktree_path)
        return {"branch": branch_name, "worktree_path": worktree_path}
    if command == "delete":
        manager.delete(args.repo_path, args.worktree_path)
        return None
    if command == "list":
        if args.output_json:
            return manager.list_worktrees(args.repo_path)
        return manager.list(args.repo_path)
    if command == "diff":
        diffs = queries.get_diff(args.path)
        if args.summary:
            return [FileDiffSummary.from_diff(diff) for diff in diffs]
        return diffs
    if command == "log":
        limit = clamp_commit_limit(args.limit) if args.limit is not None else None
        return queries.get_commits(args.path, limit, skip=args.skip, ref_name=args.ref)
    if command == "status":
        return {
            "branch": queries.current_branch(args.path),
            "head_commit": queries.head_commit(args.path),
            "has_uncommitted_changes": queries.has_uncommitted_changes(args.path),
        }
    if command == "push":
        return queries.push_branch(args.path, args.remote or settings.default_remote)

    resolver = TaskWorktreeResolver(InMemoryTaskStore.from_json_file(args.store), queries)
    if command == "task-diff":
        return resolver.resolve_diff(args.task_id)
    if command == "task-log":
        return resolver.resolve_commits(args.task_id, args.limit)
    raise ValidationFailureError(f"Unknown command: {command}")


def _handle_error(label: str, exc: BaseException, verbose: bool, exit_code: int) -> int:
    """Print error message to stderr and return the exit code."""
    print(f"{label}: {exc}", file=sys.stderr)
    if verbose:
        traceback.print_exc(file=sys.stderr)
    return exit_code


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code integer.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        settings = GitSettings.from_env()
        result = run_command(args, settings)
        if args.output_json:
            print(format_result_json(result))
        else:
            print_result_human(args.command, result)
        return EXIT_SUCCESS

    except ValidationFailureError as exc:
        return _handle_error("Invalid input", exc, args.verbose, EXIT_INVALID_INPUT)

    except CommandFailureError as exc:
        return _handle_error("Git command failed", exc, args.verbose, EXIT_COMMAND_FAILURE)

    except (GitIOError, OSError) as exc:
        return _handle_error("I/O error", exc, args.verbose, EXIT_IO_FAILURE)

    except NotFoundError as exc:
        return _handle_error("Not found", exc, args.verbose, EXIT_NOT_FOUND)

    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_KEYBOARD_INTERRUPT

    except Exception as exc:
        return _handle_error("Unexpected error", exc, args.verbose, EXIT_UNEXPECTED)


if __name__ == "__main__":
    sys.exit(main())
