"""
Data models for React Router Endpoint Diff.

This package contains Pydantic models for representing parsed diffs,
route entry points, endpoint changes, and analysis reports.
"""

from react_router_endpoint_diff.models.diff import (
    DiffFile,
    DiffHunk,
    ParsedDiff,
)
from react_router_endpoint_diff.models.entry_point import (
    EntryPointDescriptor,
    EntryPointKind,
    RouteModule,
)
from react_router_endpoint_diff.models.report import (
    AnalysisReport,
    ChangeKind,
    EndpointChange,
)

__all__ = [
    # Diff models
    "DiffFile",
    "DiffHunk",
    "ParsedDiff",
    # Entry point models
    "EntryPointDescriptor",
    "EntryPointKind",
    "RouteModule",
    # Report models
    "AnalysisReport",
    "ChangeKind",
    "EndpointChange",
]
