"""Parser for ``git log --shortstat`` output."""

from openflow_git.models.commit_models import Commit

# Control characters cannot appear in subjects, names or emails, so records
# requested with these delimiters split unambiguously.
RECORD_SEPARATOR = "\x1e"
FIELD_SEPARATOR = "\x1f"
LOG_FORMAT = "%x1e%H%x1f%h%x1f%s%x1f%an%x1f%ae%x1f%aI"

# Legacy pipe-delimited format: a header is any line holding a pipe that is
# at least as long as a full SHA-1 hash.
LEGACY_SEPARATOR = "|"
LEGACY_HEADER_MIN_LENGTH = 40
HEADER_FIELD_COUNT = 6

STAT_KEYWORDS = ("file", "insertion", "deletion")

# str.strip() treats \x1e and \x1f as whitespace; only trim these.
LINE_PADDING = " \t\r\n"


def log_format_arg() -> str:
    """Return the ``--format=`` argument matching :func:`parse_commits`."""
    return f"--format={LOG_FORMAT}"


def parse_shortstat(line: str) -> tuple[int, int, int]:
    """Parse a shortstat summary line.

    Args:
        line: e.g. ``"3 files changed, 10 insertions(+), 2 deletions(-)"``.
            Any clause may be missing.

    Returns:
        (files_changed, additions, deletions), 0 for missing clauses.
    """
    files_changed = additions = deletions = 0
    for clause in line.split(","):
        clause = clause.strip()
        words = clause.split()
        if not words:
            continue
        try:
            count = int(words[0])
        except ValueError:
            count = 0
        if "file" in clause:
            files_changed = count
        elif "insertion" in clause:
            additions = count
        elif "deletion" in clause:
            deletions = count
    return files_changed, additions, deletions


def _split_header(line: str) -> list[str] | None:
    if line.startswith(RECORD_SEPARATOR):
        return line[len(RECORD_SEPARATOR):].split(FIELD_SEPARATOR, HEADER_FIELD_COUNT - 1)
    if LEGACY_SEPARATOR in line and len(line) >= LEGACY_HEADER_MIN_LENGTH:
        return line.split(LEGACY_SEPARATOR, HEADER_FIELD_COUNT - 1)
    return None


def parse_commits(log_text: str) -> list[Commit]:
    """Parse commit headers and their optional shortstat lines.

    Both the control-character format produced by :data:`LOG_FORMAT` and the
    legacy ``hash|short|subject|author|email|date`` format are accepted.

    Args:
        log_text: Raw ``git log --shortstat`` output.

    Returns:
        Commits in input order (newest first for plain ``git log``).
    """
    commits: list[Commit] = []
    current: Commit | None = None

    for raw_line in log_text.splitlines():
        line = raw_line.strip(LINE_PADDING)
        if not line:
            continue

        fields = _split_header(line)
        if fields is not None:
            if current is not None:
                commits.append(current)
                current = None
            if len(fields) >= HEADER_FIELD_COUNT:
                current = Commit(
                    hash=fields[0],
                    short_hash=fields[1],
                    message=fields[2],
                    author=fields[3],
                    author_email=fields[4],
                    date=fields[5],
                )
        elif any(keyword in line for keyword in STAT_KEYWORDS):
            if current is not None:
                (
                    current.files_changed,
                    current.additions,
                    current.deletions,
                ) = parse_shortstat(line)

    if current is not None:
        commits.append(current)

    return commits
