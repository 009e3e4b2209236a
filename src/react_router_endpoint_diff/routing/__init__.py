"""
Route path mapping for file-based routing.
"""

from react_router_endpoint_diff.routing.route_path import route_path

__all__ = [
    "route_path",
]
