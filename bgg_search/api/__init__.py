"""
HTTP interface for the catalog search.
"""

from .app import create_app, SearchRequest

__all__ = [
    "create_app",
    "SearchRequest",
]
