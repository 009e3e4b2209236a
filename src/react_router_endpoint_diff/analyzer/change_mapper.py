"""
Change mapper - maps a git diff to affected route endpoints.

This module combines git diff execution, diff parsing, route file
filtering and endpoint analysis into a single analysis report.
"""

import logging
import time
from pathlib import Path
from typing import Optional

from react_router_endpoint_diff.analyzer.endpoint_analyzer import (
    EndpointAnalyzer,
    ProgressCallback,
)
from react_router_endpoint_diff.analyzer.file_filter import FileFilter
from react_router_endpoint_diff.config import Config
from react_router_endpoint_diff.git.diff_executor import GitDiffExecutor
from react_router_endpoint_diff.models.report import AnalysisReport
from react_router_endpoint_diff.parser.diff_parser import DiffParser

logger = logging.getLogger(__name__)


class AnalysisError(Exception):
    """Error that aborts an analysis run."""
    pass


class ChangeMapper:
    """
    Map code changes to affected route endpoints.

    This is the main orchestration class that:
    1. Validates the routes directory
    2. Obtains the diff (from git, or as given)
    3. Parses the diff and keeps the route files
    4. Detects new endpoints and parameter changes
    """

    def __init__(self, config: Optional[Config] = None) -> None:
        """
        Initialize the change mapper.

        Args:
            config: Optional configuration object.
        """
        self.config = config or Config()
        self.repo_root = self.config.git.git_dir
        self.file_filter = FileFilter(
            routes_dir=self.config.routes.routes_dir,
            extensions=self.config.routes.extensions,
        )
        self.git = GitDiffExecutor(git_dir=self.repo_root)
        self.analyzer = EndpointAnalyzer(
            routes_dir=self.config.routes.routes_dir,
            repo_root=self.repo_root,
            new_endpoint_threshold=self.config.analysis.new_endpoint_threshold,
        )

    def analyze(
        self,
        from_ref: Optional[str] = None,
        to_ref: Optional[str] = None,
        staged: bool = False,
        diff_text: Optional[str] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> AnalysisReport:
        """
        Run the full analysis.

        Args:
            from_ref: Reference to compare from (default from config).
            to_ref: Reference to compare to (default from config).
            staged: Compare staged changes with HEAD.
            diff_text: Use this diff instead of running git.
            progress_callback: Optional progress reporter.

        Returns:
            AnalysisReport with the detected changes.

        Raises:
            AnalysisError: If the routes directory, git or the diff is unusable.
        """
        from_ref = from_ref or self.config.git.from_ref
        to_ref = to_ref or self.config.git.to_ref
        start_time = time.perf_counter()

        report_fields = {
            "from_ref": from_ref,
            "to_ref": to_ref,
            "staged": staged,
            "routes_dir": self.config.routes.routes_dir,
        }

        try:
            logger.debug("Starting analysis...")
            self.file_filter.validate_routes_directory(self.repo_root)
            logger.debug("Routes directory validated: %s", self.config.routes.routes_dir)

            if diff_text is None:
                logger.debug(
                    "Getting diff from %s to %s%s",
                    from_ref,
                    to_ref,
                    " (staged)" if staged else "",
                )
                diff_text = self.git.execute(from_ref=from_ref, to_ref=to_ref, staged=staged)

            if not diff_text.strip():
                logger.debug("No diff found")
                return AnalysisReport(**report_fields)

            parsed = DiffParser.parse(diff_text)
            logger.debug("Found %d changed files", len(parsed.files))

            route_files = self.file_filter.filter(parsed.files)
            logger.debug("Filtered to %d relevant route files", len(route_files))

            changes, errors = self.analyzer.analyze_changes(
                route_files,
                diff_text,
                progress_callback=progress_callback,
            )
            logger.debug("Found %d endpoint changes", len(changes))
        except Exception as e:
            logger.debug("Analysis failed: %s", e)
            raise AnalysisError(f"Analysis failed: {e}") from e

        return AnalysisReport(
            **report_fields,
            changes=changes,
            total_files_changed=len(parsed.files),
            route_files_changed=len(route_files),
            analysis_duration_ms=(time.perf_counter() - start_time) * 1000,
            errors=errors,
        )
