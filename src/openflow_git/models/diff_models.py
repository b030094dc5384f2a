"""Models for representing parsed working-tree diffs."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class DiffHunk(BaseModel):
    """A contiguous block of changed lines within one file diff."""

    model_config = ConfigDict(frozen=False)

    old_start: int  # 1-based start line in the old file
    old_lines: int = 1  # Omitted in the header means 1
    new_start: int
    new_lines: int = 1
    content: str = ""  # Raw hunk body, header excluded

    @property
    def is_addition_only(self) -> bool:
        return self.old_lines == 0 and self.new_lines > 0

    @property
    def is_deletion_only(self) -> bool:
        return self.old_lines > 0 and self.new_lines == 0


class FileDiff(BaseModel):
    """Changes to a single file, as reported by ``git diff``."""

    model_config = ConfigDict(frozen=False)

    path: str  # Current path, relative to the worktree root
    old_path: str | None = None  # Only set for renames
    hunks: list[DiffHunk] = Field(default_factory=list)
    additions: int = 0
    deletions: int = 0
    is_binary: bool = False
    is_new: bool = False
    is_deleted: bool = False
    is_renamed: bool = False

    @property
    def total_changes(self) -> int:
        return self.additions + self.deletions

    @property
    def has_changes(self) -> bool:
        return self.total_changes > 0 or self.is_new or self.is_deleted or self.is_renamed


class FileChangeType(str, Enum):
    """Kind of change applied to a file."""

    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"
    BINARY = "binary"


class FileDiffSummary(BaseModel):
    """Compact per-file change summary without hunk bodies."""

    model_config = ConfigDict(frozen=False)

    path: str
    additions: int
    deletions: int
    change_type: FileChangeType

    @classmethod
    def from_diff(cls, diff: FileDiff) -> "FileDiffSummary":
        """Summarise a FileDiff.

        Change type precedence is new, deleted, renamed, binary, then modified.
        """
        if diff.is_new:
            change_type = FileChangeType.ADDED
        elif diff.is_deleted:
            change_type = FileChangeType.DELETED
        elif diff.is_renamed:
            change_type = FileChangeType.RENAMED
        elif diff.is_binary:
            change_type = FileChangeType.BINARY
        else:
            change_type = FileChangeType.MODIFIED

        return cls(
            path=diff.path,
            additions=diff.additions,
            deletions=diff.deletions,
            change_type=change_type,
        )
