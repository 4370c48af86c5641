"""
Command-line interface for the BGG search package.

This module provides CLI commands for:
- Searching BGG and caching the results
- Database management
- Serving the HTTP API
"""

from .main import main

__all__ = [
    "main",
]
