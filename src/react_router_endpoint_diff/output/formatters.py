"""
Base formatter and formatter registry.
"""

import re
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from react_router_endpoint_diff.models.entry_point import RouteModule
    from react_router_endpoint_diff.models.report import AnalysisReport, EndpointChange

_COMMIT_HASH_RE = re.compile(r"^[a-f0-9]{7,40}$")


def format_git_ref(ref: str) -> str:
    """Shorten commit hashes to 8 characters; leave other references as is."""
    if _COMMIT_HASH_RE.match(ref) and len(ref) > 8:
        return ref[:8]
    return ref


class BaseFormatter(ABC):
    """
    Abstract base class for output formatters.

    Subclasses must implement format() and format_route_modules() methods.
    """

    @abstractmethod
    def format(self, report: "AnalysisReport") -> str:
        """
        Format an analysis report.

        Args:
            report: The analysis report to format.

        Returns:
            Formatted string representation.
        """
        pass

    @abstractmethod
    def format_route_modules(self, modules: list["RouteModule"]) -> str:
        """
        Format the entry points of a set of route modules.

        Args:
            modules: Route modules to format.

        Returns:
            Formatted string representation.
        """
        pass


class StructuredFormatter(BaseFormatter):
    """
    Shared dictionary layout for machine-readable formatters.

    The diff excerpt is left out to keep the output compact.
    """

    def _change_to_dict(self, change: "EndpointChange") -> dict[str, Any]:
        return {
            "type": change.change_type.value,
            "endpointPath": change.route_path,
            "functionType": change.entry_kind.value,
            "filePath": change.file_path,
            "description": change.description,
        }

    def _report_to_dict(self, report: "AnalysisReport") -> dict[str, Any]:
        return {
            "summary": {
                "fromRef": "staged" if report.staged else report.from_ref,
                "toRef": "HEAD" if report.staged else report.to_ref,
                "totalChanges": len(report.changes),
                "newEndpoints": len(report.new_endpoints),
                "modifiedEndpoints": len(report.modified_endpoints),
                "generatedAt": report.timestamp.isoformat(),
            },
            "changes": [self._change_to_dict(c) for c in report.changes],
            "errors": report.errors,
        }

    def _route_modules_to_dict(self, modules: list["RouteModule"]) -> dict[str, Any]:
        return {
            "total": sum(len(m.entry_points) for m in modules),
            "routes": [
                {
                    "filePath": module.file_path,
                    "routePath": module.route_path,
                    "entryPoints": [
                        {
                            "type": ep.kind.value,
                            "startLine": ep.start_line,
                            "endLine": ep.end_line,
                            "exported": ep.is_exported,
                            "parameterExpressions": ep.parameter_expressions,
                        }
                        for ep in module.entry_points
                    ],
                }
                for module in modules
            ],
        }


# Formatter registry
_FORMATTERS: dict[str, type[BaseFormatter]] = {}


def register_formatter(name: str) -> Callable[[type[BaseFormatter]], type[BaseFormatter]]:
    """
    Decorator to register a formatter.

    Args:
        name: The name to register the formatter under.

    Returns:
        Decorator function.
    """
    def decorator(cls: type[BaseFormatter]) -> type[BaseFormatter]:
        _FORMATTERS[name] = cls
        return cls
    return decorator


def get_formatter(name: str) -> BaseFormatter:
    """
    Get a formatter instance by name.

    Args:
        name: The formatter name (e.g., "markdown", "json", "yaml").

    Returns:
        An instance of the requested formatter.

    Raises:
        ValueError: If the formatter name is not recognized.
    """
    # Import formatters to ensure they're registered
    from react_router_endpoint_diff.output import (  # noqa: F401
        json_output,
        markdown_output,
        text_output,
        yaml_output,
    )

    if name not in _FORMATTERS:
        available = ", ".join(_FORMATTERS.keys())
        raise ValueError(f"Unknown formatter: {name}. Available: {available}")

    return _FORMATTERS[name]()
