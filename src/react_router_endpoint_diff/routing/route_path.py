"""
Map route module file paths to URL paths.
"""

import posixpath
import re

_EXTENSION_RE = re.compile(r"\.(ts|tsx|js|jsx)$")
_DYNAMIC_SEGMENT_RE = re.compile(r"/\$([^/]+)")
_SPLAT_SEGMENT_RE = re.compile(r"/\$$")
_REPEATED_SLASH_RE = re.compile(r"/+")


def route_path(file_path: str, routes_dir: str) -> str:
    """
    Convert a route module path to its URL path.

    `users/$userId.tsx` becomes `/users/:userId`, a trailing `$` segment
    becomes `*`, and `index` modules map to their parent directory.

    Args:
        file_path: Path of the route module.
        routes_dir: Base directory containing route files.

    Returns:
        The URL path, always starting with "/".
    """
    normalized_file = posixpath.normpath(file_path.replace("\\", "/"))
    normalized_routes = posixpath.normpath(routes_dir.replace("\\", "/"))

    relative = posixpath.relpath(normalized_file, normalized_routes)
    relative = _EXTENSION_RE.sub("", relative)

    if relative == "index":
        relative = ""
    elif relative.endswith("/index"):
        relative = relative[: -len("/index")]

    if relative in ("", "/"):
        return "/"

    url_path = f"/{relative}"
    url_path = _DYNAMIC_SEGMENT_RE.sub(r"/:\1", url_path)
    url_path = _SPLAT_SEGMENT_RE.sub("/*", url_path)
    url_path = _REPEATED_SLASH_RE.sub("/", url_path)

    return url_path or "/"
