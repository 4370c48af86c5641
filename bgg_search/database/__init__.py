"""
Database module for the local BGG game cache.

This module handles:
- Database schema and operations
- Get-or-create of games by BGG id
"""

from .operations import GamesDatabase
from .cache import GameCache

__all__ = [
    "GamesDatabase",
    "GameCache",
]
