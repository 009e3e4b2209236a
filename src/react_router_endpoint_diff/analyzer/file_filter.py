"""
Route file filtering.
"""

import posixpath
from pathlib import Path
from typing import Iterable, Sequence

from react_router_endpoint_diff.models.diff import DiffFile

DEFAULT_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx")


class FileFilter:
    """
    Select the diff files that are route modules.

    A file is relevant when it still exists, lives under the routes
    directory, has a script extension, and is not a `_`-prefixed layout.
    """

    def __init__(
        self,
        routes_dir: str,
        extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    ) -> None:
        self.routes_dir = routes_dir
        self.extensions = tuple(extensions)

    def filter(self, files: Iterable[DiffFile]) -> list[DiffFile]:
        """Keep the relevant files, preserving order."""
        return [f for f in files if self.is_relevant_file(f)]

    def is_relevant_file(self, diff_file: DiffFile) -> bool:
        """Check a single diff file."""
        if diff_file.is_deleted or not diff_file.path:
            return False
        return self.is_route_path(diff_file.path)

    def is_route_path(self, file_path: str) -> bool:
        """Check a path against the routes directory, extension and layout rules."""
        normalized_file = posixpath.normpath(file_path.replace("\\", "/"))
        normalized_routes = posixpath.normpath(self.routes_dir.replace("\\", "/"))

        if normalized_routes not in normalized_file:
            return False

        if posixpath.splitext(normalized_file)[1] not in self.extensions:
            return False

        return not posixpath.basename(normalized_file).startswith("_")

    def validate_routes_directory(self, root: Path = Path(".")) -> None:
        """
        Check that the routes directory exists.

        Args:
            root: Directory the routes directory is relative to.

        Raises:
            FileNotFoundError: If the routes directory does not exist.
            NotADirectoryError: If the routes path is not a directory.
        """
        routes_path = root / self.routes_dir
        if not routes_path.exists():
            raise FileNotFoundError(f"Routes directory not found: {self.routes_dir}")
        if not routes_path.is_dir():
            raise NotADirectoryError(f"Routes path is not a directory: {self.routes_dir}")

    def get_all_route_files(self, root: Path = Path(".")) -> list[str]:
        """
        List every route module under the routes directory.

        Args:
            root: Directory the routes directory is relative to.

        Returns:
            Sorted paths relative to root, using forward slashes.
        """
        routes_path = root / self.routes_dir
        if not routes_path.is_dir():
            return []

        files = []
        for path in sorted(routes_path.rglob("*")):
            if not path.is_file():
                continue
            relative = path.relative_to(root).as_posix()
            if self.is_route_path(relative):
                files.append(relative)
        return files
