"""
Diff data models.

Models representing parsed unified diffs, their files and hunks.
"""

from typing import Optional

from pydantic import BaseModel, Field


class DiffHunk(BaseModel):
    """Represents a hunk (section of changes) in a diff."""

    old_start: int = Field(description="Starting line in the old file")
    old_lines: int = Field(description="Number of lines in the old file")
    new_start: int = Field(description="Starting line in the new file")
    new_lines: int = Field(description="Number of lines in the new file")
    lines: list[str] = Field(
        default_factory=list,
        description="Change lines prefixed with '+', '-' or ' '",
    )

    class Config:
        frozen = True

    @property
    def new_end(self) -> int:
        """Last line of the new file covered by this hunk."""
        return self.new_start + self.new_lines - 1

    def overlaps(self, start_line: int, end_line: int) -> bool:
        """Check if the hunk's new-file range overlaps [start_line, end_line]."""
        return start_line <= self.new_end and end_line >= self.new_start


class DiffFile(BaseModel):
    """Represents a single file in a diff."""

    old_path: Optional[str] = Field(
        default=None,
        description="Path before the change (None for added files)",
    )
    new_path: Optional[str] = Field(
        default=None,
        description="Path after the change (None for deleted files)",
    )
    is_new: bool = Field(default=False, description="File was added")
    is_deleted: bool = Field(default=False, description="File was deleted")
    hunks: list[DiffHunk] = Field(
        default_factory=list,
        description="Hunks in this file",
    )

    class Config:
        frozen = True

    @property
    def path(self) -> Optional[str]:
        """The current path of the file, falling back to the old path."""
        return self.new_path or self.old_path

    @property
    def added_lines(self) -> int:
        """Total lines added."""
        return sum(
            1 for hunk in self.hunks for line in hunk.lines if line.startswith("+")
        )

    @property
    def removed_lines(self) -> int:
        """Total lines removed."""
        return sum(
            1 for hunk in self.hunks for line in hunk.lines if line.startswith("-")
        )


class ParsedDiff(BaseModel):
    """All files of a parsed diff, in diff order."""

    files: list[DiffFile] = Field(default_factory=list)

    class Config:
        frozen = True
