"""
Entry point data models.

Models representing route module `loader` and `action` declarations.
"""

from enum import Enum

from pydantic import BaseModel, Field


class EntryPointKind(str, Enum):
    """Request handler exports recognized in a route module."""

    LOADER = "loader"
    ACTION = "action"


class EntryPointDescriptor(BaseModel):
    """A `loader` or `action` declaration found in a source file."""

    kind: EntryPointKind = Field(description="Which handler this is")
    name: str = Field(description="Identifier the handler is exported as")
    start_line: int = Field(description="First line of the declaration (1-based)")
    end_line: int = Field(description="Last line of the declaration (1-based, inclusive)")
    is_exported: bool = Field(default=True, description="Declaration is exported")
    parameter_expressions: list[str] = Field(
        default_factory=list,
        description="Request parameter accesses and destructuring patterns",
    )

    class Config:
        frozen = True

    def contains_line(self, line_number: int) -> bool:
        """Check if a line number falls inside the declaration."""
        return self.start_line <= line_number <= self.end_line


class RouteModule(BaseModel):
    """A route file together with the entry points it exports."""

    file_path: str = Field(description="Path of the route module")
    route_path: str = Field(description="URL path of the route")
    entry_points: list[EntryPointDescriptor] = Field(default_factory=list)

    class Config:
        frozen = True
