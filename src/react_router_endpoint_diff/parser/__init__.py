"""
Parser package for React Router Endpoint Diff.

This package contains modules for:
- Diff text parsing (using unidiff)
- Route module entry point extraction (using tree-sitter)
"""

from react_router_endpoint_diff.parser.diff_parser import DiffParseError, DiffParser
from react_router_endpoint_diff.parser.entry_point_extractor import EntryPointExtractor

__all__ = [
    "DiffParseError",
    "DiffParser",
    "EntryPointExtractor",
]
