"""
Analyzer package for React Router Endpoint Diff.

This package contains the correlation of diff hunks with route entry
points, route file filtering, and the end-to-end change mapper.
"""

from react_router_endpoint_diff.analyzer.change_correlator import ChangeCorrelator, Classification
from react_router_endpoint_diff.analyzer.change_mapper import AnalysisError, ChangeMapper
from react_router_endpoint_diff.analyzer.endpoint_analyzer import EndpointAnalyzer
from react_router_endpoint_diff.analyzer.file_filter import FileFilter

__all__ = [
    "AnalysisError",
    "ChangeCorrelator",
    "ChangeMapper",
    "Classification",
    "EndpointAnalyzer",
    "FileFilter",
]
