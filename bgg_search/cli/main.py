"""
Main CLI entry point for the BGG search package.
"""

import argparse
import json
import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from ..catalog import CatalogClient
from ..config import API_HOST, API_PORT, DATABASE_PATH
from ..database import GameCache, GamesDatabase
from ..database.models import create_database
from ..error_handling import handle_errors
from ..errors import BGGSearchError, StorageError
from ..logging_config import setup_logging
from ..models import SearchResultItem

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bgg-search", description="Search BoardGameGeek and cache games locally")
    parser.add_argument("--db", type=Path, default=DATABASE_PATH, help="Database file path")
    parser.add_argument("--log-file", type=str, default=None, help="Custom log file name or absolute path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    search = subparsers.add_parser("search", help="Search BGG for a game")
    search.add_argument("query", help="Game name to search for")
    search.add_argument("--json", action="store_true", help="Print results as JSON")

    subparsers.add_parser("init-db", help="Create the games database")
    subparsers.add_parser("stats", help="Show cached game statistics")

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=API_HOST, help=f"Bind address (default: {API_HOST})")
    serve.add_argument("--port", type=int, default=API_PORT, help=f"Port (default: {API_PORT})")
    return parser


def print_results(results: List[SearchResultItem]) -> None:
    """Print search results as a table."""
    print("\n" + "=" * 60)
    print("SEARCH RESULTS")
    print("=" * 60)
    if not results:
        print("No games found.")
        return
    for item in results:
        record = item.record
        year = f" ({record.year_published})" if record.year_published is not None else ""
        players = ""
        if record.min_players is not None or record.max_players is not None:
            players = f" | {record.min_players or '?'}-{record.max_players or '?'} players"
        status = item.local_id if item.local_id else "NOT CACHED"
        print(f"#{record.upstream_id} {record.name}{year}{players}")
        print(f"  └─ Local id: {status}")
    print(f"\nTotal: {len(results)}")


@handle_errors(default_return={})
def get_statistics(db: GamesDatabase) -> dict:
    return db.get_statistics()


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.log_file:
        log_file = args.log_file
    else:
        ts = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = f"run_{ts}_{args.command}.log"
    setup_logging(log_file, logging.DEBUG if args.verbose else logging.INFO)

    try:
        if args.command == "init-db":
            try:
                create_database(args.db)
            except (sqlite3.Error, OSError) as e:
                raise StorageError(f"Could not create database at {args.db}: {e}") from e
            print(f"Database created successfully at {args.db}")
            return 0

        db = GamesDatabase(args.db)

        if args.command == "stats":
            stats = get_statistics(db)
            print("\n" + "=" * 60)
            print("CACHED GAMES")
            print("=" * 60)
            print(f"Total games in database: {stats.get('total_games_in_db', 0)}")
            print("=" * 60)
            return 0

        if args.command == "serve":
            import uvicorn

            from ..api import create_app

            client = CatalogClient(GameCache(db))
            uvicorn.run(create_app(client=client), host=args.host, port=args.port)
            return 0

        client = CatalogClient(GameCache(db))
        results = client.search(args.query)
        if args.json:
            print(json.dumps({"games": [item.to_dict() for item in results]}, indent=2))
        else:
            print_results(results)
        return 0

    except KeyboardInterrupt:
        print("\nProcess interrupted by user")
        return 130
    except BGGSearchError as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
