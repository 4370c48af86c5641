"""
BoardGameGeek catalog client.

A search is two sequential calls to the BGG XML API2: ``/search`` to find
candidate ids, then a single ``/thing`` call with the retained ids joined by
commas. The resulting records are cached locally and returned with their
local ids.
"""

import logging
from typing import List, Optional, Sequence

import requests

from ..config import (
    BGG_API_BASE,
    BGG_REQUEST_TIMEOUT,
    MAX_SEARCH_RESULTS,
    SEARCH_TYPE,
    USER_AGENT,
)
from ..database.cache import GameCache
from ..errors import InvalidArgument, UpstreamTransportError, UpstreamUnavailable
from ..models import GameRecord, GameSummary, SearchResultItem
from .parser import parse_game_details, parse_search_results

logger = logging.getLogger(__name__)


class CatalogClient:
    """
    Searches BGG and returns games augmented with local ids.
    """

    def __init__(self, cache: GameCache, session: Optional[requests.Session] = None,
                 base_url: str = BGG_API_BASE, timeout: float = BGG_REQUEST_TIMEOUT,
                 max_results: int = MAX_SEARCH_RESULTS):
        """
        Initialize the catalog client.

        Args:
            cache: Game cache used to resolve local ids
            session: HTTP session; a new one is created when omitted
            base_url: BGG XML API2 root
            timeout: Per-request timeout in seconds
            max_results: How many search hits are fetched in detail
        """
        self.cache = cache
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.max_results = max_results
        self.session = session or requests.Session()
        self.session.headers.update({'User-Agent': USER_AGENT})

    def search(self, query: str) -> List[SearchResultItem]:
        """
        Search BGG for base games matching a free-text query.

        Args:
            query: Search term

        Returns:
            Up to max_results games, in BGG's order, with local ids (None for
            games that could not be cached)

        Raises:
            InvalidArgument: if the query is not a non-blank string
            UpstreamUnavailable: on a non-success status, timeout or unreadable body
            UpstreamTransportError: on a network failure
        """
        if not isinstance(query, str) or not query.strip():
            raise InvalidArgument("Query parameter is required and must be a string")

        logger.info(f"Searching BGG for: {query}")
        summaries = self.search_summaries(query)
        if not summaries:
            logger.info("No games found in search")
            return []

        ids = select_ids(summaries, self.max_results)
        records = self.fetch_details(ids)
        logger.info(f"Found {len(records)} games")

        results = self.cache.resolve_all(records)
        unresolved = sum(1 for item in results if item.local_id is None)
        if unresolved:
            logger.warning(f"{unresolved}/{len(results)} games returned without a local id")
        return results

    def search_summaries(self, query: str) -> List[GameSummary]:
        """Call the BGG search endpoint and parse its hits."""
        body = self._get('search', {'query': query, 'type': SEARCH_TYPE})
        return parse_search_results(body)

    def fetch_details(self, ids: Sequence[int]) -> List[GameRecord]:
        """
        Fetch full records for BGG ids in a single request.

        Args:
            ids: BGG ids

        Returns:
            Parsed base-game records
        """
        if not ids:
            return []
        body = self._get('thing', {'id': ','.join(str(i) for i in ids), 'stats': 1})
        return parse_game_details(body)

    def _get(self, endpoint: str, params: dict) -> bytes:
        url = f"{self.base_url}/{endpoint}"
        logger.debug(f"GET {url} params={params}")
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.Timeout as e:
            raise UpstreamUnavailable(f"BGG {endpoint} timed out after {self.timeout}s") from e
        except requests.RequestException as e:
            raise UpstreamTransportError(f"BGG {endpoint} request failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise UpstreamUnavailable(
                f"BGG {endpoint} failed: {response.status_code}",
                status_code=response.status_code,
            )
        return response.content


def select_ids(summaries: Sequence[GameSummary], limit: int) -> List[int]:
    """
    First `limit` distinct ids in upstream order.

    BGG lists a game once per matching name, so the same id can repeat.
    """
    ids: List[int] = []
    for summary in summaries:
        if len(ids) >= limit:
            break
        if summary.upstream_id in ids:
            continue
        ids.append(summary.upstream_id)
    return ids
