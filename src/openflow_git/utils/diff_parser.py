"""Parser for ``git diff`` unified output."""

from openflow_git.models.diff_models import DiffHunk, FileDiff

UNKNOWN_PATH = "unknown"
EXTENDED_HEADER_PREFIXES = (
    "new file mode",
    "deleted file mode",
    "rename from",
    "Binary files",
)


def _to_int(value: str, default: int) -> int:
    try:
        return int(value)
    except ValueError:
        return default


def parse_hunk_header(header: str) -> tuple[int, int, int, int]:
    """Parse the line ranges out of a hunk header.

    Args:
        header: A line such as ``"@@ -10,5 +15,8 @@ def foo():"``.

    Returns:
        (old_start, old_lines, new_start, new_lines). A count omitted from the
        header defaults to 1; an unparseable start defaults to 0.
    """
    old_start, old_lines, new_start, new_lines = 0, 1, 0, 1

    start = header.find("@@")
    if start == -1:
        return old_start, old_lines, new_start, new_lines
    end = header.find("@@", start + 2)
    if end == -1:
        return old_start, old_lines, new_start, new_lines

    for part in header[start + 2:end].split():
        sign, numbers = part[0], part[1:].split(",")
        if sign == "-":
            old_start = _to_int(numbers[0], 0)
            if len(numbers) > 1:
                old_lines = _to_int(numbers[1], 1)
        elif sign == "+":
            new_start = _to_int(numbers[0], 0)
            if len(numbers) > 1:
                new_lines = _to_int(numbers[1], 1)

    return old_start, old_lines, new_start, new_lines


def _path_from_header(line: str) -> str:
    parts = line.split()
    if len(parts) >= 4:
        return parts[3].removeprefix("b/")
    return UNKNOWN_PATH


def parse_diff(diff_text: str) -> list[FileDiff]:
    """Parse unified diff text into per-file change records.

    The parser is lenient: a malformed ``diff --git`` header yields a file
    with path ``"unknown"`` instead of aborting the rest of the diff.

    Args:
        diff_text: Output of ``git diff --unified=N --no-color``.

    Returns:
        FileDiff objects in the order they appear in the input.
    """
    diffs: list[FileDiff] = []
    current_file: FileDiff | None = None
    current_hunk: DiffHunk | None = None
    hunk_lines: list[str] = []

    def close_hunk() -> None:
        nonlocal current_hunk, hunk_lines
        if current_hunk is not None and current_file is not None:
            current_hunk.content = "\n".join(hunk_lines)
            current_file.hunks.append(current_hunk)
        current_hunk = None
        hunk_lines = []

    for line in diff_text.splitlines():
        if line.startswith("diff --git"):
            close_hunk()
            if current_file is not None:
                diffs.append(current_file)
            current_file = FileDiff(path=_path_from_header(line))
        elif line.startswith(EXTENDED_HEADER_PREFIXES):
            if current_file is not None:
                _apply_header(current_file, line)
        elif line.startswith("@@"):
            close_hunk()
            old_start, old_lines, new_start, new_lines = parse_hunk_header(line)
            current_hunk = DiffHunk(
                old_start=old_start,
                old_lines=old_lines,
                new_start=new_start,
                new_lines=new_lines,
            )
        elif current_hunk is not None:
            hunk_lines.append(line)
            if current_file is None:
                continue
            if line.startswith("+") and not line.startswith("+++"):
                current_file.additions += 1
            elif line.startswith("-") and not line.startswith("---"):
                current_file.deletions += 1

    close_hunk()
    if current_file is not None:
        diffs.append(current_file)

    return diffs


def _apply_header(file_diff: FileDiff, line: str) -> None:
    if line.startswith("new file mode"):
        file_diff.is_new = True
    elif line.startswith("deleted file mode"):
        file_diff.is_deleted = True
    elif line.startswith("rename from"):
        file_diff.is_renamed = True
        file_diff.old_path = line.removeprefix("rename from ")
    elif line.startswith("Binary files"):
        file_diff.is_binary = True
