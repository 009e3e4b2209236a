"""
Change correlator - maps diff hunks onto route entry points.

This module compares the line ranges of a file's diff hunks with the
line ranges of its `loader`/`action` declarations and decides, with two
independent heuristics, whether each entry point is new and whether its
request parameter handling changed.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from react_router_endpoint_diff.analyzer.diff_lines import (
    advances_new_file,
    contains_request_param_pattern,
    is_addition,
    is_deletion,
)
from react_router_endpoint_diff.models.diff import DiffFile, DiffHunk
from react_router_endpoint_diff.models.entry_point import EntryPointDescriptor
from react_router_endpoint_diff.models.report import ChangeKind, EndpointChange
from react_router_endpoint_diff.parser.diff_parser import DiffParser
from react_router_endpoint_diff.routing import route_path

logger = logging.getLogger(__name__)

# Fraction of in-range lines that must be additions (strictly more than)
DEFAULT_NEW_ENDPOINT_THRESHOLD = 0.8

# (file_path, routes_dir) -> URL path
RouteMapper = Callable[[str, str], str]


@dataclass(frozen=True)
class Classification:
    """Outcome of both heuristics for one entry point."""

    is_new_endpoint: bool = False
    has_parameter_change: bool = False


@dataclass(frozen=True)
class LineCounts:
    """Lines of a hunk that fall inside an entry point's range."""

    total: int = 0
    added: int = 0

    def __add__(self, other: "LineCounts") -> "LineCounts":
        return LineCounts(self.total + other.total, self.added + other.added)


class ChangeCorrelator:
    """
    Classify entry points of one changed file against its diff hunks.

    Hunk line numbers and entry point line numbers are both expressed in
    the new file's numbering: hunk lines are mapped with a pointer that
    starts at the hunk's new start and advances on added and context lines.
    """

    def __init__(
        self,
        routes_dir: str,
        new_endpoint_threshold: float = DEFAULT_NEW_ENDPOINT_THRESHOLD,
        route_mapper: RouteMapper = route_path,
    ) -> None:
        """
        Initialize the correlator.

        Args:
            routes_dir: Base directory containing route files.
            new_endpoint_threshold: Added-line ratio an entry point must
                exceed to be reported as new.
            route_mapper: Function mapping a file path to its URL path.
        """
        self.routes_dir = routes_dir
        self.new_endpoint_threshold = new_endpoint_threshold
        self.route_mapper = route_mapper

    @staticmethod
    def count_lines_in_range(entry_point: EntryPointDescriptor, hunk: DiffHunk) -> LineCounts:
        """
        Count the hunk lines that land inside the entry point.

        Every line is tested against the pointer before it advances, so a
        deletion is attributed to the new-file line that follows it.
        """
        total = added = 0
        current_line = hunk.new_start

        for line in hunk.lines:
            if entry_point.contains_line(current_line):
                total += 1
                if is_addition(line):
                    added += 1
            if advances_new_file(line):
                current_line += 1

        return LineCounts(total=total, added=added)

    def is_entirely_new(
        self,
        entry_point: EntryPointDescriptor,
        hunks: Sequence[DiffHunk],
    ) -> bool:
        """
        Check if most of an entry point's lines were added.

        Counts accumulate over every hunk overlapping the entry point.
        """
        counts = LineCounts()
        for hunk in hunks:
            if hunk.overlaps(entry_point.start_line, entry_point.end_line):
                counts = counts + self.count_lines_in_range(entry_point, hunk)

        if counts.total == 0:
            return False
        return counts.added / counts.total > self.new_endpoint_threshold

    @staticmethod
    def has_parameter_changes(
        entry_point: EntryPointDescriptor,
        hunks: Sequence[DiffHunk],
    ) -> bool:
        """Check if an added or removed line inside the entry point reads request parameters."""
        for hunk in hunks:
            if not hunk.overlaps(entry_point.start_line, entry_point.end_line):
                continue

            current_line = hunk.new_start
            for line in hunk.lines:
                if (
                    entry_point.contains_line(current_line)
                    and (is_addition(line) or is_deletion(line))
                    and contains_request_param_pattern(line)
                ):
                    return True
                if advances_new_file(line):
                    current_line += 1

        return False

    def classify(
        self,
        entry_point: EntryPointDescriptor,
        hunks: Sequence[DiffHunk],
    ) -> Classification:
        """Run both heuristics for an entry point of a modified file."""
        return Classification(
            is_new_endpoint=self.is_entirely_new(entry_point, hunks),
            has_parameter_change=self.has_parameter_changes(entry_point, hunks),
        )

    def _build_change(
        self,
        change_type: ChangeKind,
        entry_point: EntryPointDescriptor,
        file_path: str,
        relevant_diff: str,
        description: str,
    ) -> EndpointChange:
        return EndpointChange(
            change_type=change_type,
            route_path=self.route_mapper(file_path, self.routes_dir),
            entry_kind=entry_point.kind,
            file_path=file_path,
            relevant_diff=relevant_diff,
            description=description,
        )

    def correlate(
        self,
        diff_file: DiffFile,
        entry_points: Sequence[EntryPointDescriptor],
        diff_text: str,
    ) -> list[EndpointChange]:
        """
        Build the endpoint changes for one file.

        New endpoints come first, followed by parameter changes, each in
        entry point order.

        Args:
            diff_file: The parsed diff of the file.
            entry_points: Entry points found in the file's current content.
            diff_text: The full diff the file was parsed from.

        Returns:
            The detected changes, possibly empty.
        """
        file_path = diff_file.path
        if diff_file.is_deleted or not file_path:
            return []

        if diff_file.is_new:
            relevant_diff = DiffParser.get_relevant_diff(diff_text, file_path)
            changes = []
            for entry_point in entry_points:
                changes.append(
                    self._build_change(
                        ChangeKind.NEW_ENDPOINT,
                        entry_point,
                        file_path,
                        relevant_diff,
                        f"New {entry_point.kind.value} function in new file",
                    )
                )
                logger.debug("Found new %s in new file %s", entry_point.kind.value, file_path)
            return changes

        new_endpoints: list[EndpointChange] = []
        parameter_changes: list[EndpointChange] = []

        for entry_point in entry_points:
            classification = self.classify(entry_point, diff_file.hunks)
            if not (classification.is_new_endpoint or classification.has_parameter_change):
                continue

            relevant_diff = DiffParser.get_relevant_diff(
                diff_text,
                file_path,
                entry_point.start_line,
                entry_point.end_line,
            )
            kind = entry_point.kind.value

            if classification.is_new_endpoint:
                new_endpoints.append(
                    self._build_change(
                        ChangeKind.NEW_ENDPOINT,
                        entry_point,
                        file_path,
                        relevant_diff,
                        f"New {kind} function added to existing file",
                    )
                )
                logger.debug("Found new %s in existing file %s", kind, file_path)

            if classification.has_parameter_change:
                parameter_changes.append(
                    self._build_change(
                        ChangeKind.PARAMETER_CHANGE,
                        entry_point,
                        file_path,
                        relevant_diff,
                        f"Request parameter pattern changes detected in {kind} function",
                    )
                )
                logger.debug("Found parameter changes in %s of %s", kind, file_path)

        return new_endpoints + parameter_changes
