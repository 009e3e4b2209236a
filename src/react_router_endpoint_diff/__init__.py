"""
React Router Endpoint Diff

A CLI tool that analyzes git diffs of a file-based-routing application and
reports which `loader` and `action` endpoints were added or had their
request parameter handling changed.
"""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("react-router-endpoint-diff")
except PackageNotFoundError:
    __version__ = "0.1.1"

# Public API exports
__all__ = [
    "__version__",
]
