"""
Command-line interface for React Router Endpoint Diff.

This module provides the CLI using Click framework for argument parsing
and orchestrates the analysis pipeline.
"""

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

from react_router_endpoint_diff import __version__
from react_router_endpoint_diff.config import Config, find_config_file, load_config

if TYPE_CHECKING:
    from react_router_endpoint_diff.output.formatters import BaseFormatter

console = Console()
err_console = Console(stderr=True)

FORMAT_CHOICES = ["markdown", "json", "yaml", "text"]


def configure_logging(verbose: bool) -> None:
    """Send library logging to stderr through Rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _make_formatter(output_format: str, config: Config, output: Optional[Path]) -> "BaseFormatter":
    from react_router_endpoint_diff.output.formatters import get_formatter
    from react_router_endpoint_diff.output.text_output import TextFormatter

    if output_format == "text":
        # No ANSI codes in files
        return TextFormatter(colorize=config.output.colorize and output is None)
    return get_formatter(output_format)


def _write_output(formatted_output: str, output: Optional[Path]) -> None:
    if output:
        output.write_text(formatted_output, encoding="utf-8")
        console.print(f"[green]Results written to:[/green] {output}")
    else:
        # Print directly to stdout to preserve ANSI codes from formatter
        sys.stdout.write(formatted_output)
        if not formatted_output.endswith("\n"):
            sys.stdout.write("\n")
        sys.stdout.flush()


@click.group()
@click.version_option(version=__version__, prog_name="react-router-endpoint-diff")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file (default: nearest .rrdiff.yaml).",
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[Path]) -> None:
    """React Router Endpoint Diff - Detect API endpoint changes from git diffs."""
    ctx.ensure_object(dict)
    config_path = config or find_config_file(Path.cwd())
    try:
        ctx.obj["config"] = load_config(config_path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise click.Abort()


@cli.command()
@click.option("--from", "from_ref", type=str, help="Git reference to compare from (default: HEAD~1).")
@click.option("--to", "to_ref", type=str, help="Git reference to compare to (default: HEAD).")
@click.option("--staged", is_flag=True, help="Compare staged changes with HEAD.")
@click.option("--routes-dir", type=str, help="Base directory containing route files (default: app/routes).")
@click.option(
    "--git-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Git repository path (default: current directory).",
)
@click.option(
    "--diff",
    "-d",
    "diff_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read the diff from a file instead of running git.",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(FORMAT_CHOICES),
    help="Output format (default: markdown).",
)
@click.option("--summary-only", is_flag=True, help="Output only the one line summary.")
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="Output file path. If not specified, prints to stdout.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging.")
@click.pass_context
def analyze(
    ctx: click.Context,
    from_ref: Optional[str],
    to_ref: Optional[str],
    staged: bool,
    routes_dir: Optional[str],
    git_dir: Optional[Path],
    diff_path: Optional[Path],
    output_format: Optional[str],
    summary_only: bool,
    output: Optional[Path],
    verbose: bool,
) -> None:
    """Analyze a git diff and report new or changed loader/action endpoints."""
    from react_router_endpoint_diff.analyzer.change_mapper import ChangeMapper

    config: Config = ctx.obj["config"]
    if routes_dir:
        config.routes.routes_dir = routes_dir
    if git_dir:
        config.git.git_dir = git_dir
    verbose = verbose or config.output.verbose
    output_format = output_format or config.output.format

    configure_logging(verbose)

    try:
        diff_text = diff_path.read_text(encoding="utf-8") if diff_path else None

        mapper = ChangeMapper(config=config)

        # Transient bar on stderr so piped reports stay clean
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=err_console,
            transient=True,
        ) as progress:
            task = progress.add_task("Analyzing...", total=None)

            def update_progress(current: int, total: int, description: str) -> None:
                progress.update(task, completed=current, total=total, description=description)

            report = mapper.analyze(
                from_ref=from_ref,
                to_ref=to_ref,
                staged=staged,
                diff_text=diff_text,
                progress_callback=update_progress,
            )

        if summary_only:
            formatted_output = report.summary
        else:
            formatted_output = _make_formatter(output_format, config, output).format(report)

        _write_output(formatted_output, output)

    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        if verbose:
            console.print_exception()
        raise click.Abort()


@cli.command("list")
@click.option("--routes-dir", type=str, help="Base directory containing route files (default: app/routes).")
@click.option(
    "--root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Project root the routes directory is relative to (default: git dir).",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(FORMAT_CHOICES),
    help="Output format (default: markdown).",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="Output file path. If not specified, prints to stdout.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging.")
@click.pass_context
def list_entry_points(
    ctx: click.Context,
    routes_dir: Optional[str],
    root: Optional[Path],
    output_format: Optional[str],
    output: Optional[Path],
    verbose: bool,
) -> None:
    """List the loader/action entry points of every route module."""
    from react_router_endpoint_diff.analyzer.file_filter import FileFilter
    from react_router_endpoint_diff.models.entry_point import RouteModule
    from react_router_endpoint_diff.parser.entry_point_extractor import EntryPointExtractor
    from react_router_endpoint_diff.routing import route_path

    config: Config = ctx.obj["config"]
    routes_dir = routes_dir or config.routes.routes_dir
    root = root or config.git.git_dir
    output_format = output_format or config.output.format

    configure_logging(verbose or config.output.verbose)

    try:
        file_filter = FileFilter(routes_dir=routes_dir, extensions=config.routes.extensions)
        file_filter.validate_routes_directory(root)

        extractor = EntryPointExtractor()
        modules = [
            RouteModule(
                file_path=file_path,
                route_path=route_path(file_path, routes_dir),
                entry_points=extractor.extract(root / file_path),
            )
            for file_path in file_filter.get_all_route_files(root)
        ]

        formatted_output = _make_formatter(output_format, config, output).format_route_modules(modules)
        _write_output(formatted_output, output)

    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        raise click.Abort()


def main() -> None:
    """Main entry point for the CLI."""
    cli(obj={})
