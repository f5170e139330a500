"""Asynchronous HTTP request router with CORS policies, request helpers, static files and views."""

__version__ = "0.3.3"

__all__ = [
    "all_or_some",
    "cors",
    "messages",
    "method",
    "path_tree",
    "router",
    "server",
    "static_files",
    "view",
]