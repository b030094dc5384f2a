"""Commit-related models."""

from pydantic import BaseModel, ConfigDict


class Commit(BaseModel):
    """A single commit from ``git log`` with its shortstat counts."""

    model_config = ConfigDict(frozen=False)

    hash: str
    short_hash: str
    message: str = ""  # Subject line only
    author: str = ""
    author_email: str = ""
    date: str = ""  # ISO-8601, as printed by %aI
    files_changed: int = 0
    additions: int = 0
    deletions: int = 0

    @property
    def total_changes(self) -> int:
        return self.additions + self.deletions


class CommitSummary(BaseModel):
    """Compact commit representation for list views."""

    model_config = ConfigDict(frozen=False)

    short_hash: str
    message: str
    author: str
    date: str

    @classmethod
    def from_commit(cls, commit: Commit) -> "CommitSummary":
        return cls(
            short_hash=commit.short_hash,
            message=commit.message,
            author=commit.author,
            date=commit.date,
        )
