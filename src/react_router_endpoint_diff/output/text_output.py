"""
Human-readable text output formatter.
"""

from io import StringIO

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from react_router_endpoint_diff.models.entry_point import RouteModule
from react_router_endpoint_diff.models.report import AnalysisReport, EndpointChange
from react_router_endpoint_diff.output.formatters import (
    BaseFormatter,
    format_git_ref,
    register_formatter,
)


@register_formatter("text")
class TextFormatter(BaseFormatter):
    """
    Format output as human-readable text using Rich.
    """

    def __init__(self, colorize: bool = True) -> None:
        """
        Initialize the text formatter.

        Args:
            colorize: Whether to use colors in output.
        """
        self.colorize = colorize

    def _print_change(self, console: Console, change: EndpointChange) -> None:
        style = "bold green" if change.is_new_endpoint else "bold yellow"
        if not self.colorize:
            style = "bold"
        console.print(f"    [{style}]{change.entry_kind.value} {change.route_path}[/{style}]")
        console.print(f"      File: {change.file_path}", markup=False)
        console.print(f"      {change.description}", markup=False)
        if change.relevant_diff.strip():
            console.print(Syntax(change.relevant_diff, "diff", theme="ansi_dark", padding=(0, 6)))
        console.print()

    def format(self, report: AnalysisReport) -> str:
        """Format an analysis report as text."""
        output = StringIO()
        console = Console(file=output, force_terminal=self.colorize, width=120)

        # Header
        console.print()
        console.print(
            Panel.fit(
                "[bold]React Router Endpoint Diff[/bold]\n"
                "API Endpoint Change Report",
                border_style="blue",
            )
        )
        console.print()

        # Summary
        if report.staged:
            comparison = "staged changes with HEAD"
        else:
            comparison = f"{format_git_ref(report.from_ref)} and {format_git_ref(report.to_ref)}"
        console.print("[bold]Summary[/bold]")
        console.print(f"  Comparing: {comparison}", markup=False)
        console.print(f"  Routes Directory: {report.routes_dir}", markup=False)
        console.print(f"  Files Changed: {report.total_files_changed} ({report.route_files_changed} route files)")
        console.print(f"  New Endpoints: {len(report.new_endpoints)}")
        console.print(f"  Modified Endpoints: {len(report.modified_endpoints)}")
        if report.analysis_duration_ms:
            console.print(f"  Analysis Time: {report.analysis_duration_ms:.2f}ms")
        console.print()

        if not report.changes:
            console.print("[green]No API endpoint changes detected.[/green]")
            console.print()

        if report.new_endpoints:
            console.print(f"  [bold]New Endpoints[/bold] ({len(report.new_endpoints)})")
            for change in report.new_endpoints:
                self._print_change(console, change)

        if report.modified_endpoints:
            console.print(
                f"  [bold]Modified Endpoints (Request Parameter Change Suspected)[/bold] "
                f"({len(report.modified_endpoints)})"
            )
            for change in report.modified_endpoints:
                self._print_change(console, change)

        if report.errors:
            console.print("[bold red]Errors[/bold red]")
            for error in report.errors:
                console.print(f"  ❌ {error}", markup=False)
            console.print()

        return output.getvalue()

    def format_route_modules(self, modules: list[RouteModule]) -> str:
        """Format route entry points as a table."""
        output = StringIO()
        console = Console(file=output, force_terminal=self.colorize, width=120)

        total = sum(len(m.entry_points) for m in modules)
        if total == 0:
            console.print("[dim]No entry points found.[/dim]")
            return output.getvalue()

        table = Table(title="Route Entry Points", show_header=True, header_style="bold")
        table.add_column("Route", style="green")
        table.add_column("Type", style="cyan")
        table.add_column("File", style="dim")
        table.add_column("Lines", justify="right")
        table.add_column("Parameters", style="yellow")

        for module in modules:
            for ep in module.entry_points:
                table.add_row(
                    module.route_path,
                    ep.kind.value,
                    module.file_path,
                    f"{ep.start_line}-{ep.end_line}",
                    ", ".join(" ".join(p.split()) for p in ep.parameter_expressions),
                )

        console.print(table)
        console.print(f"\nTotal: {total} entry points")

        return output.getvalue()
