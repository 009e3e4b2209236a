"""
Configuration loading and validation for React Router Endpoint Diff.

Settings are read from an optional `.rrdiff.yaml` file. Every field has
a default, and command line options override the loaded values.
"""

from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError


class RoutesConfig(BaseModel):
    """Configuration for locating route modules."""

    routes_dir: str = Field(
        default="app/routes",
        description="Base directory containing route files.",
    )
    extensions: list[str] = Field(
        default=[".ts", ".tsx", ".js", ".jsx"],
        description="File extensions treated as route modules.",
    )


class GitConfig(BaseModel):
    """Configuration for obtaining the diff."""

    git_dir: Path = Field(
        default=Path("."),
        description="Path of the git repository.",
    )
    from_ref: str = Field(
        default="HEAD~1",
        description="Git reference to compare from.",
    )
    to_ref: str = Field(
        default="HEAD",
        description="Git reference to compare to.",
    )


class AnalysisConfig(BaseModel):
    """Configuration for the analysis engine."""

    new_endpoint_threshold: float = Field(
        default=0.8,
        ge=0.0,
        le=1.0,
        description="Share of added lines an entry point must exceed to count as new.",
    )


class OutputConfig(BaseModel):
    """Configuration for output formatting."""

    format: Literal["markdown", "json", "yaml", "text"] = Field(
        default="markdown",
        description="Default output format.",
    )
    colorize: bool = Field(
        default=True,
        description="Use colors in terminal output.",
    )
    verbose: bool = Field(
        default=False,
        description="Enable verbose logging.",
    )


class Config(BaseModel):
    """Root configuration model for React Router Endpoint Diff."""

    routes: RoutesConfig = Field(default_factory=RoutesConfig)
    git: GitConfig = Field(default_factory=GitConfig)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    class Config:
        """Pydantic model configuration."""

        extra = "forbid"


CONFIG_FILE_NAMES = (".rrdiff.yaml", ".rrdiff.yml")


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from a YAML file.

    Args:
        config_path: YAML file to read. None means built-in defaults.

    Returns:
        The validated configuration.

    Raises:
        FileNotFoundError: If config_path does not exist.
        ValueError: If the file is not valid YAML or not a valid configuration.
    """
    if config_path is None:
        return Config()

    if not config_path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_path}: {e}") from e

    try:
        return Config.model_validate(data or {})
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {config_path}: {e}") from e


def find_config_file(start_path: Path) -> Optional[Path]:
    """
    Find the nearest `.rrdiff.yaml` or `.rrdiff.yml`.

    The start directory is searched first, then each of its parents.
    """
    start = start_path.resolve()
    for directory in (start, *start.parents):
        for name in CONFIG_FILE_NAMES:
            candidate = directory / name
            if candidate.is_file():
                return candidate
    return None
