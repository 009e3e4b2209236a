"""
Output package for React Router Endpoint Diff.

This package contains formatters for displaying analysis results
in various formats (Markdown, JSON, YAML, text).
"""

from react_router_endpoint_diff.output.formatters import (
    BaseFormatter,
    format_git_ref,
    get_formatter,
)
from react_router_endpoint_diff.output.json_output import JsonFormatter
from react_router_endpoint_diff.output.markdown_output import MarkdownFormatter
from react_router_endpoint_diff.output.text_output import TextFormatter
from react_router_endpoint_diff.output.yaml_output import YamlFormatter

__all__ = [
    "BaseFormatter",
    "JsonFormatter",
    "MarkdownFormatter",
    "TextFormatter",
    "YamlFormatter",
    "format_git_ref",
    "get_formatter",
]
