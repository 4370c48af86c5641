"""
Shared data models for the BGG search package.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class GameSummary:
    """One hit from the BGG search endpoint."""
    upstream_id: int
    name: str


@dataclass(frozen=True)
class GameRecord:
    """A base game parsed from the BGG thing endpoint.

    Optional fields are None when BGG did not provide them.
    """
    upstream_id: int
    name: str
    year_published: Optional[int] = None
    min_players: Optional[int] = None
    max_players: Optional[int] = None
    playing_time_minutes: Optional[int] = None
    image_url: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class SearchResultItem:
    """A parsed game plus its local id (None when caching it failed)."""
    record: GameRecord
    local_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """JSON shape returned to API callers; absent fields are left out."""
        out: Dict[str, Any] = {}
        for key, value in asdict(self.record).items():
            if value is not None:
                out[_CAMEL_CASE[key]] = value
        out["localId"] = self.local_id
        return out


@dataclass
class PersistedGame:
    """A row of the local games table."""
    local_id: str
    upstream_id: int
    name: str
    year_published: Optional[int] = None
    min_players: Optional[int] = None
    max_players: Optional[int] = None
    playing_time_minutes: Optional[int] = None
    image_url: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[str] = None


_CAMEL_CASE = {
    "upstream_id": "upstreamId",
    "name": "name",
    "year_published": "yearPublished",
    "min_players": "minPlayers",
    "max_players": "maxPlayers",
    "playing_time_minutes": "playingTimeMinutes",
    "image_url": "imageUrl",
    "description": "description",
}
