"""
YAML output formatter.
"""

import yaml

from react_router_endpoint_diff.models.entry_point import RouteModule
from react_router_endpoint_diff.models.report import AnalysisReport
from react_router_endpoint_diff.output.formatters import StructuredFormatter, register_formatter


@register_formatter("yaml")
class YamlFormatter(StructuredFormatter):
    """
    Format output as YAML.
    """

    def format(self, report: AnalysisReport) -> str:
        """Format an analysis report as YAML."""
        return yaml.dump(
            self._report_to_dict(report),
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )

    def format_route_modules(self, modules: list[RouteModule]) -> str:
        """Format route entry points as YAML."""
        return yaml.dump(
            self._route_modules_to_dict(modules),
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
