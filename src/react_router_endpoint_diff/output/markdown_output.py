"""
Markdown output formatter.
"""

from react_router_endpoint_diff.models.entry_point import RouteModule
from react_router_endpoint_diff.models.report import AnalysisReport, EndpointChange
from react_router_endpoint_diff.output.formatters import (
    BaseFormatter,
    format_git_ref,
    register_formatter,
)

_MARKDOWN_SPECIAL_CHARS = ("\\", "*", "_", "`", "~", "|")


def escape_markdown(text: str) -> str:
    """Escape characters with a meaning in Markdown."""
    for char in _MARKDOWN_SPECIAL_CHARS:
        text = text.replace(char, f"\\{char}")
    return text


@register_formatter("markdown")
class MarkdownFormatter(BaseFormatter):
    """
    Format output as Markdown.
    """

    def _format_change(self, change: EndpointChange) -> str:
        """Format a single endpoint change section."""
        lines = []

        label = "New" if change.is_new_endpoint else "Modified"
        lines.append(f"### {label} `{change.entry_kind.value}` for `{change.route_path}`\n")
        lines.append(f"**File:** `{escape_markdown(change.file_path)}`\n")

        if change.description:
            lines.append(f"**Description:** {change.description}\n")

        if change.relevant_diff.strip():
            lines.append("**Relevant Diff:**")
            lines.append("```diff")
            lines.append(change.relevant_diff)
            lines.append("```\n")

        return "\n".join(lines)

    def _format_errors(self, report: AnalysisReport) -> list[str]:
        """Format the per-file errors section, empty when there were none."""
        if not report.errors:
            return []
        lines = ["## Errors\n"]
        lines.extend(f"- {error}" for error in report.errors)
        lines.append("")
        return lines

    def format(self, report: AnalysisReport) -> str:
        """Format an analysis report as Markdown."""
        lines = []

        # Header
        lines.append("# API Endpoint Change Report\n")
        if report.staged:
            lines.append("Comparing staged changes with `HEAD`\n")
        else:
            lines.append(
                f"Comparing `{format_git_ref(report.from_ref)}` and "
                f"`{format_git_ref(report.to_ref)}`\n"
            )

        if not report.changes:
            lines.append("**No API endpoint changes detected.**\n")
            lines.extend(self._format_errors(report))
            return "\n".join(lines)

        # Summary
        new_endpoints = report.new_endpoints
        modified_endpoints = report.modified_endpoints

        lines.append("## Summary\n")
        if new_endpoints:
            lines.append(f"- **{len(new_endpoints)}** new endpoint(s) detected")
        if modified_endpoints:
            lines.append(
                f"- **{len(modified_endpoints)}** endpoint(s) with potential parameter changes"
            )
        lines.append("")

        if new_endpoints:
            lines.append("## New Endpoints\n")
            for change in new_endpoints:
                lines.append(self._format_change(change))

        if modified_endpoints:
            lines.append("## Modified Endpoints (Request Parameter Change Suspected)\n")
            for change in modified_endpoints:
                lines.append(self._format_change(change))

        lines.extend(self._format_errors(report))

        return "\n".join(lines)

    def format_route_modules(self, modules: list[RouteModule]) -> str:
        """Format route entry points as a Markdown table."""
        if not any(m.entry_points for m in modules):
            return "_No entry points found._\n"

        lines = []
        lines.append("# Route Entry Points")
        lines.append("")
        lines.append("| Route | Type | File | Lines | Parameters |")
        lines.append("|-------|------|------|-------|------------|")

        for module in modules:
            for ep in module.entry_points:
                params = ", ".join(f"`{' '.join(p.split())}`" for p in ep.parameter_expressions)
                lines.append(
                    f"| `{module.route_path}` | `{ep.kind.value}` | "
                    f"`{escape_markdown(module.file_path)}` | "
                    f"{ep.start_line}-{ep.end_line} | {params} |"
                )

        lines.append("")
        return "\n".join(lines)
