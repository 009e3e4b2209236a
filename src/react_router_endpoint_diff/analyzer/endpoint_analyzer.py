"""
Endpoint analyzer - runs entry point extraction and correlation per file.
"""

import logging
from pathlib import Path
from typing import Callable, Optional, Sequence

from react_router_endpoint_diff.analyzer.change_correlator import (
    DEFAULT_NEW_ENDPOINT_THRESHOLD,
    ChangeCorrelator,
)
from react_router_endpoint_diff.models.diff import DiffFile
from react_router_endpoint_diff.models.report import EndpointChange
from react_router_endpoint_diff.parser.entry_point_extractor import EntryPointExtractor

logger = logging.getLogger(__name__)

# Progress callback type: (current, total, description) -> None
ProgressCallback = Callable[[int, int, str], None]


class EndpointAnalyzer:
    """
    Detect endpoint changes across the files of a diff.

    Files are processed one at a time in diff order. A file that cannot be
    read is logged and skipped without affecting the other files.
    """

    def __init__(
        self,
        routes_dir: str,
        repo_root: Path = Path("."),
        new_endpoint_threshold: float = DEFAULT_NEW_ENDPOINT_THRESHOLD,
    ) -> None:
        """
        Initialize the analyzer.

        Args:
            routes_dir: Base directory containing route files.
            repo_root: Directory the diff's file paths are relative to.
            new_endpoint_threshold: See ChangeCorrelator.
        """
        self.repo_root = repo_root
        self.extractor = EntryPointExtractor()
        self.correlator = ChangeCorrelator(
            routes_dir=routes_dir,
            new_endpoint_threshold=new_endpoint_threshold,
        )

    def analyze_file(self, diff_file: DiffFile, diff_text: str) -> list[EndpointChange]:
        """
        Detect the endpoint changes of one file.

        Raises:
            FileNotFoundError: If the file's current content is missing.
        """
        file_path = diff_file.path
        if not file_path or diff_file.is_deleted:
            return []

        logger.debug("Analyzing file: %s", file_path)
        entry_points = self.extractor.extract(self.repo_root / file_path)
        logger.debug("Found %d entry point(s) in %s", len(entry_points), file_path)

        return self.correlator.correlate(diff_file, entry_points, diff_text)

    def analyze_changes(
        self,
        diff_files: Sequence[DiffFile],
        diff_text: str,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> tuple[list[EndpointChange], list[str]]:
        """
        Detect endpoint changes in every file.

        Args:
            diff_files: Files to analyze, usually pre-filtered to route files.
            diff_text: The full diff the files were parsed from.
            progress_callback: Optional progress reporter.

        Returns:
            Tuple of (changes in file order, per-file error messages).
        """
        changes: list[EndpointChange] = []
        errors: list[str] = []
        total = len(diff_files)

        for index, diff_file in enumerate(diff_files):
            if progress_callback:
                progress_callback(index, total, f"Analyzing {diff_file.path}")
            try:
                changes.extend(self.analyze_file(diff_file, diff_text))
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Error analyzing file %s: %s", diff_file.path, e)
                errors.append(f"{diff_file.path}: {e}")

        if progress_callback:
            progress_callback(total, total, "Analysis complete")

        return changes, errors
