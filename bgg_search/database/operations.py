"""
Database operations for cached BGG game data.

This module is the storage collaborator of the catalog search: point lookups
by BGG id, conflict-safe inserts, and the by-local-id reads, updates and
deletes used by session editing.
"""

import logging
import sqlite3
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, Union

from ..errors import StorageError
from ..models import GameRecord, PersistedGame
from .models import create_database

logger = logging.getLogger(__name__)

# Columns a caller may change through update_game, mapped from PersistedGame fields
UPDATABLE_COLUMNS = {
    "name": "name",
    "description": "description",
    "image_url": "image_url",
    "min_players": "min_players",
    "max_players": "max_players",
    "playing_time_minutes": "playing_time",
    "year_published": "year_published",
}

_SELECT_COLUMNS = """
    id, bgg_id, name, year_published, min_players, max_players,
    playing_time, image_url, description, created_at
"""


class GamesDatabase:
    """
    Storage handle for the local games table.

    One instance is created by the hosting process and passed to the
    components that need it. Every operation opens its own connection, so the
    handle can be shared between worker threads.
    """

    def __init__(self, db_path: Union[str, Path], timeout: float = 5.0):
        """
        Initialize the games database handler.

        Args:
            db_path: Path to the sqlite database file
            timeout: Seconds to wait on a locked database
        """
        self.db_path = Path(db_path)
        self.timeout = timeout

        # Create database if it doesn't exist
        if not self.db_path.exists():
            logger.info(f"Database not found at {self.db_path}, creating it...")
            try:
                create_database(self.db_path)
            except (sqlite3.Error, OSError) as e:
                raise StorageError(f"Could not create database at {self.db_path}: {e}") from e

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        try:
            # IMMEDIATE takes the write lock up front so concurrent writers wait instead of deadlocking
            conn = sqlite3.connect(str(self.db_path), timeout=self.timeout,
                                   isolation_level="IMMEDIATE")
        except sqlite3.Error as e:
            raise StorageError(f"Could not open database {self.db_path}: {e}") from e
        try:
            conn.row_factory = sqlite3.Row
            yield conn
            conn.commit()
        except (sqlite3.Error, OverflowError) as e:
            conn.rollback()
            raise StorageError(f"Database error on {self.db_path}: {e}") from e
        finally:
            conn.close()

    def find_game_id(self, bgg_id: int) -> Optional[str]:
        """
        Look up the local id of a cached game.

        Args:
            bgg_id: BGG id of the game

        Returns:
            Local id, or None if the game is not cached
        """
        with self._connection() as conn:
            row = conn.execute("SELECT id FROM games WHERE bgg_id = ?", (bgg_id,)).fetchone()
        return row["id"] if row else None

    def insert_game(self, record: GameRecord) -> Optional[str]:
        """
        Insert a game unless a row with the same BGG id already exists.

        Args:
            record: Parsed BGG record

        Returns:
            The new local id, or None if another row already holds this BGG id
        """
        local_id = str(uuid.uuid4())
        with self._connection() as conn:
            cursor = conn.execute("""
                INSERT INTO games
                (id, bgg_id, name, year_published, min_players, max_players,
                 playing_time, image_url, description)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(bgg_id) DO NOTHING
            """, (
                local_id, record.upstream_id, record.name, record.year_published,
                record.min_players, record.max_players, record.playing_time_minutes,
                record.image_url, record.description,
            ))
            inserted = cursor.rowcount == 1
        return local_id if inserted else None

    def get_game(self, local_id: str) -> Optional[PersistedGame]:
        """
        Get a cached game by local id.

        Args:
            local_id: Local id of the game

        Returns:
            The stored game, or None if there is no such row
        """
        with self._connection() as conn:
            row = conn.execute(
                f"SELECT {_SELECT_COLUMNS} FROM games WHERE id = ?", (local_id,)
            ).fetchone()
        return self._row_to_game(row) if row else None

    def get_games(self, limit: Optional[int] = None) -> List[PersistedGame]:
        """
        Get cached games, most recently added first.

        Args:
            limit: Maximum number of games to return

        Returns:
            List of stored games
        """
        query = f"SELECT {_SELECT_COLUMNS} FROM games ORDER BY created_at DESC, name ASC"
        params = []
        if limit:
            query += " LIMIT ?"
            params.append(limit)

        with self._connection() as conn:
            rows = conn.execute(query, params).fetchall()

        games = [self._row_to_game(row) for row in rows]
        logger.info(f"Retrieved {len(games)} games from database")
        return games

    def update_game(self, local_id: str, **fields) -> bool:
        """
        Update columns of a cached game.

        Args:
            local_id: Local id of the game
            **fields: PersistedGame field names and their new values

        Returns:
            True if a row was updated
        """
        unknown = set(fields) - set(UPDATABLE_COLUMNS)
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")
        if not fields:
            return False

        assignments = ", ".join(f"{UPDATABLE_COLUMNS[key]} = ?" for key in fields)
        params = list(fields.values()) + [local_id]
        with self._connection() as conn:
            cursor = conn.execute(f"UPDATE games SET {assignments} WHERE id = ?", params)
            updated = cursor.rowcount > 0
        return updated

    def delete_game(self, local_id: str) -> bool:
        """
        Delete a cached game.

        Args:
            local_id: Local id of the game

        Returns:
            True if a row was deleted
        """
        with self._connection() as conn:
            cursor = conn.execute("DELETE FROM games WHERE id = ?", (local_id,))
            deleted = cursor.rowcount > 0
        return deleted

    def get_statistics(self) -> dict:
        """
        Get statistics about games in the database.

        Returns:
            Dictionary with statistics
        """
        with self._connection() as conn:
            total_games = conn.execute("SELECT COUNT(*) FROM games").fetchone()[0]

        return {
            'total_games_in_db': total_games,
        }

    @staticmethod
    def _row_to_game(row: sqlite3.Row) -> PersistedGame:
        return PersistedGame(
            local_id=row["id"],
            upstream_id=row["bgg_id"],
            name=row["name"],
            year_published=row["year_published"],
            min_players=row["min_players"],
            max_players=row["max_players"],
            playing_time_minutes=row["playing_time"],
            image_url=row["image_url"],
            description=row["description"],
            created_at=row["created_at"],
        )
