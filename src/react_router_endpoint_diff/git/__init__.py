"""
Git integration for React Router Endpoint Diff.
"""

from react_router_endpoint_diff.git.diff_executor import GitDiffError, GitDiffExecutor

__all__ = [
    "GitDiffError",
    "GitDiffExecutor",
]
