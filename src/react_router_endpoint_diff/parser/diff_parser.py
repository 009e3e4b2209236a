"""
Diff parser using the unidiff library.

This module wraps the unidiff library to parse unified diff text into
per-file hunks, and slices the raw diff text back out for reporting.
"""

import logging
import re
from pathlib import Path
from typing import Optional

from unidiff import PatchSet, PatchedFile
from unidiff.patch import Hunk

from react_router_endpoint_diff.models.diff import (
    DiffFile,
    DiffHunk,
    ParsedDiff,
)

logger = logging.getLogger(__name__)

DEV_NULL = "/dev/null"

HUNK_HEADER_RE = re.compile(r"@@ -(\d+),?\d* \+(\d+),?\d* @@")


class DiffParseError(Exception):
    """Error during diff parsing."""
    pass


class DiffParser:
    """
    Parse unified diffs using the unidiff library.

    Supports parsing from strings or diff files, and extracting the part of
    a diff that belongs to one file or one line range of it.
    """

    @staticmethod
    def _strip_prefix(path: str) -> Optional[str]:
        """
        Normalize a diff header path.

        Args:
            path: Path from a `---` or `+++` header.

        Returns:
            The path without git's `a/` or `b/` prefix, or None for /dev/null.
        """
        if path == DEV_NULL:
            return None
        if path.startswith(("a/", "b/")):
            return path[2:]
        return path

    @staticmethod
    def _parse_hunk(hunk: Hunk) -> DiffHunk:
        """
        Parse a unidiff Hunk into our DiffHunk model.

        Args:
            hunk: A Hunk from unidiff.

        Returns:
            DiffHunk with each change line re-encoded as prefix + content.
        """
        lines: list[str] = []
        for line in hunk:
            if line.is_added:
                prefix = "+"
            elif line.is_removed:
                prefix = "-"
            elif line.is_context:
                prefix = " "
            else:
                # "\ No newline at end of file"
                continue
            content = line.value.rstrip("\n")
            lines.append(f"{prefix}{content}")

        return DiffHunk(
            old_start=hunk.source_start,
            old_lines=hunk.source_length,
            new_start=hunk.target_start,
            new_lines=hunk.target_length,
            lines=lines,
        )

    @classmethod
    def _parse_patched_file(cls, patched_file: PatchedFile) -> DiffFile:
        """
        Parse a PatchedFile into our DiffFile model.

        Args:
            patched_file: A PatchedFile from unidiff.

        Returns:
            DiffFile with all hunk information.
        """
        return DiffFile(
            old_path=cls._strip_prefix(patched_file.source_file),
            new_path=cls._strip_prefix(patched_file.target_file),
            is_new=patched_file.source_file == DEV_NULL,
            is_deleted=patched_file.target_file == DEV_NULL,
            hunks=[cls._parse_hunk(hunk) for hunk in patched_file],
        )

    @classmethod
    def parse(cls, diff_text: str) -> ParsedDiff:
        """
        Parse diff content from a string.

        Args:
            diff_text: The unified diff as a string.

        Returns:
            ParsedDiff with one DiffFile per file in the diff, in diff order.

        Raises:
            DiffParseError: If unidiff rejects the diff.
        """
        if not diff_text.strip():
            return ParsedDiff(files=[])

        try:
            patch_set = PatchSet(diff_text)
            files = [cls._parse_patched_file(f) for f in patch_set]
        except Exception as e:
            raise DiffParseError(f"Failed to parse diff: {e}") from e

        logger.debug("Parsed %d file(s) from diff", len(files))
        return ParsedDiff(files=files)

    @classmethod
    def parse_file(cls, diff_path: Path, encoding: str = "utf-8") -> ParsedDiff:
        """
        Parse a diff file.

        Args:
            diff_path: Path to the diff file.
            encoding: File encoding (default: utf-8).

        Returns:
            ParsedDiff for the file's content.

        Raises:
            DiffParseError: If the file cannot be read or parsed.
        """
        try:
            diff_text = diff_path.read_text(encoding=encoding)
        except OSError as e:
            raise DiffParseError(f"Failed to read diff file {diff_path}: {e}") from e
        return cls.parse(diff_text)

    @staticmethod
    def get_relevant_diff(
        diff_text: str,
        file_path: str,
        start_line: Optional[int] = None,
        end_line: Optional[int] = None,
    ) -> str:
        """
        Get the diff text for one file, optionally limited to a line range.

        A hunk is kept when its header's new-file start line falls inside
        [start_line, end_line]. Hunks that only overlap the range further
        down their body are not kept.

        Args:
            diff_text: The full unified diff.
            file_path: Path of the file whose diff block is wanted.
            start_line: First new-file line of interest (1-based).
            end_line: Last new-file line of interest (inclusive).

        Returns:
            The matching diff text, or "" if the file is not in the diff.
        """
        lines = diff_text.split("\n")

        file_start = next(
            (
                i for i, line in enumerate(lines)
                if line.startswith("---") and file_path in line
            ),
            None,
        )
        if file_start is None:
            return ""

        file_end = len(lines)
        for i in range(file_start + 1, len(lines)):
            if lines[i].startswith("--- ") and file_path not in lines[i]:
                file_end = i
                break

        if start_line is None or end_line is None:
            return "\n".join(lines[file_start:file_end])

        relevant_lines: list[str] = []
        in_relevant_hunk = False
        current_line = 0

        for line in lines[file_start:file_end]:
            if line.startswith("@@"):
                match = HUNK_HEADER_RE.match(line)
                if match:
                    current_line = int(match.group(2))
                    in_relevant_hunk = start_line <= current_line <= end_line

            if in_relevant_hunk or line.startswith(("---", "+++", "@@")):
                relevant_lines.append(line)

            if line.startswith(("+", " ")):
                current_line += 1

        return "\n".join(relevant_lines)
