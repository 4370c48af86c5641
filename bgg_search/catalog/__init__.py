"""
Catalog module for querying BoardGameGeek.

This module handles:
- Calls to the BGG XML API2 search and thing endpoints
- Tolerant parsing of their XML responses
"""

from .client import CatalogClient
from .parser import parse_search_results, parse_game_details

__all__ = [
    "CatalogClient",
    "parse_search_results",
    "parse_game_details",
]
