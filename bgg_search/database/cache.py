"""
Local cache of BGG games.

Resolves parsed BGG records to local ids, inserting a row the first time a
BGG id is seen. Cached rows are never refreshed from later searches.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Sequence

from ..config import RESOLVE_MAX_WORKERS
from ..error_handling import safe_execute
from ..errors import StorageError
from ..models import GameRecord, SearchResultItem
from .operations import GamesDatabase

logger = logging.getLogger(__name__)


class GameCache:
    """
    Get-or-create of games keyed by BGG id.
    """

    def __init__(self, db: GamesDatabase, max_workers: int = RESOLVE_MAX_WORKERS):
        """
        Args:
            db: Storage handle owned by the hosting process
            max_workers: Threads used by resolve_all
        """
        self.db = db
        self.max_workers = max(1, max_workers)

    def resolve(self, record: GameRecord) -> str:
        """
        Return the local id for a record, creating the row if needed.

        Args:
            record: Parsed BGG record

        Returns:
            Local id of the cached game

        Raises:
            StorageError: on any storage fault
        """
        existing_id = self.db.find_game_id(record.upstream_id)
        if existing_id is not None:
            logger.debug(f"Game {record.name} already exists with id {existing_id}")
            return existing_id

        local_id = self.db.insert_game(record)
        if local_id is not None:
            logger.info(f"Created new game {record.name} with id {local_id}")
            return local_id

        # Lost an insert race: another request cached this BGG id first
        local_id = self.db.find_game_id(record.upstream_id)
        if local_id is None:
            raise StorageError(f"Game {record.upstream_id} neither inserted nor found")
        logger.info(f"Game {record.name} was cached concurrently with id {local_id}")
        return local_id

    def resolve_all(self, records: Sequence[GameRecord]) -> List[SearchResultItem]:
        """
        Resolve records concurrently, keeping their order.

        A storage fault on one record is logged and gives that record a None
        local id; it does not affect the others.
        """
        if not records:
            return []

        def _resolve_one(record: GameRecord) -> SearchResultItem:
            local_id = safe_execute(
                self.resolve, record,
                default_return=None,
                error_msg=f"Failed to store game {record.name} (BGG id {record.upstream_id})",
                exceptions=(StorageError,),
            )
            return SearchResultItem(record=record, local_id=local_id)

        workers = min(self.max_workers, len(records))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            # map yields in submission order regardless of completion order
            return list(executor.map(_resolve_one, records))
