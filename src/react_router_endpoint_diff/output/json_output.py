"""
JSON output formatter.
"""

import json

from react_router_endpoint_diff.models.entry_point import RouteModule
from react_router_endpoint_diff.models.report import AnalysisReport
from react_router_endpoint_diff.output.formatters import StructuredFormatter, register_formatter


@register_formatter("json")
class JsonFormatter(StructuredFormatter):
    """
    Format output as JSON.
    """

    def __init__(self, indent: int = 2) -> None:
        """
        Initialize the JSON formatter.

        Args:
            indent: JSON indentation level.
        """
        self.indent = indent

    def format(self, report: AnalysisReport) -> str:
        """Format an analysis report as JSON."""
        return json.dumps(self._report_to_dict(report), indent=self.indent, default=str)

    def format_route_modules(self, modules: list[RouteModule]) -> str:
        """Format route entry points as JSON."""
        return json.dumps(self._route_modules_to_dict(modules), indent=self.indent, default=str)
