"""
BGG Search Package - BoardGameGeek catalog search with a local game cache.

This package provides:
1. Searching the BoardGameGeek XML API and parsing its responses
2. Caching found games in a local database keyed by BGG id
3. An HTTP endpoint and a CLI exposing the search
"""

__version__ = "0.1.0"

# Main package imports for convenience
from .catalog import CatalogClient
from .database import GamesDatabase, GameCache
from .models import GameSummary, GameRecord, SearchResultItem, PersistedGame
from .errors import (
    BGGSearchError,
    InvalidArgument,
    UpstreamUnavailable,
    UpstreamTransportError,
    StorageError,
)
from .logging_config import setup_logging

__all__ = [
    "CatalogClient",
    "GamesDatabase",
    "GameCache",
    "GameSummary",
    "GameRecord",
    "SearchResultItem",
    "PersistedGame",
    "BGGSearchError",
    "InvalidArgument",
    "UpstreamUnavailable",
    "UpstreamTransportError",
    "StorageError",
    "setup_logging",
]
