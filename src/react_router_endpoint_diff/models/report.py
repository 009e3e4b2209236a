"""
Report data models.

Models representing detected endpoint changes and analysis reports.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from react_router_endpoint_diff.models.entry_point import EntryPointKind


class ChangeKind(str, Enum):
    """Kind of endpoint change."""

    NEW_ENDPOINT = "new-api"
    PARAMETER_CHANGE = "param-change"


class EndpointChange(BaseModel):
    """A semantic change to one route endpoint."""

    change_type: ChangeKind = Field(description="What kind of change was detected")
    route_path: str = Field(description="URL path of the route")
    entry_kind: EntryPointKind = Field(description="loader or action")
    file_path: str = Field(description="Route module the change was found in")
    relevant_diff: str = Field(
        default="",
        description="Excerpt of the diff covering the entry point",
    )
    description: str = Field(default="", description="Human readable explanation")

    class Config:
        frozen = True

    @property
    def is_new_endpoint(self) -> bool:
        """Whether this change introduces a new endpoint."""
        return self.change_type == ChangeKind.NEW_ENDPOINT


class AnalysisReport(BaseModel):
    """Complete analysis report."""

    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the analysis was performed",
    )
    from_ref: str = Field(default="HEAD~1", description="Git reference compared from")
    to_ref: str = Field(default="HEAD", description="Git reference compared to")
    staged: bool = Field(default=False, description="Staged changes were compared with HEAD")
    routes_dir: str = Field(default="app/routes", description="Routes directory")
    changes: list[EndpointChange] = Field(
        default_factory=list,
        description="Detected endpoint changes, in diff order",
    )
    total_files_changed: int = Field(
        default=0,
        description="Total files in the diff",
    )
    route_files_changed: int = Field(
        default=0,
        description="Route files changed in the diff",
    )
    analysis_duration_ms: Optional[float] = Field(
        default=None,
        description="How long the analysis took in milliseconds",
    )
    errors: list[str] = Field(
        default_factory=list,
        description="Per-file errors encountered during analysis",
    )

    @property
    def new_endpoints(self) -> list[EndpointChange]:
        """Changes that introduce new endpoints."""
        return [c for c in self.changes if c.change_type == ChangeKind.NEW_ENDPOINT]

    @property
    def modified_endpoints(self) -> list[EndpointChange]:
        """Changes to request parameter handling of existing endpoints."""
        return [c for c in self.changes if c.change_type == ChangeKind.PARAMETER_CHANGE]

    @property
    def has_errors(self) -> bool:
        """Check if there were any errors."""
        return len(self.errors) > 0

    @property
    def summary(self) -> str:
        """One line summary of the detected changes."""
        if not self.changes:
            return "No API endpoint changes detected."

        parts = []
        if self.new_endpoints:
            parts.append(f"{len(self.new_endpoints)} new endpoint(s)")
        if self.modified_endpoints:
            parts.append(f"{len(self.modified_endpoints)} modified endpoint(s)")
        return f"Found {' and '.join(parts)}."
