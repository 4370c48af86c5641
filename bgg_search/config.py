"""
Configuration settings for the BGG catalog search service.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent  # Go up one level to workspace root
DATABASE_PATH = Path(os.environ.get("BGG_SEARCH_DB", PROJECT_ROOT / "bgg_games.db"))
# Logs directory for per-run logs
LOGS_DIR = PROJECT_ROOT / "bgg_search_cache" / "logs"

# BoardGameGeek XML API
BGG_API_BASE = os.environ.get("BGG_API_BASE", "https://boardgamegeek.com/xmlapi2").rstrip("/")
BGG_REQUEST_TIMEOUT = float(os.environ.get("BGG_REQUEST_TIMEOUT", "10"))
USER_AGENT = os.environ.get("BGG_USER_AGENT", "bgg-search/0.1 (board game session log)")

# Only the first N search hits are fetched in detail, in BGG's order
MAX_SEARCH_RESULTS = 10
SEARCH_TYPE = "boardgame"
BASE_GAME_TYPE = "boardgame"

# Per-record cache resolution runs on a small thread pool
RESOLVE_MAX_WORKERS = int(os.environ.get("RESOLVE_MAX_WORKERS", "4"))

# Inbound API
CORS_ALLOW_ORIGINS = ["*"]
CORS_ALLOW_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]
API_HOST = os.environ.get("BGG_SEARCH_HOST", "127.0.0.1")
API_PORT = int(os.environ.get("BGG_SEARCH_PORT", "8000"))
