from __future__ import annotations

from xml.sax.saxutils import quoteattr

import pytest


def search_xml(hits) -> str:
    """BGG search payload for (id, name) pairs."""
    items = "".join(
        f'<item type="boardgame" id="{gid}"><name type="primary" value={quoteattr(name)}/></item>'
        for gid, name in hits
    )
    return f'<?xml version="1.0" encoding="utf-8"?><items total="{len(hits)}" termsofuse="https://boardgamegeek.com/xmlapi/termsofuse">{items}</items>'


def thing_item(gid, name, item_type="boardgame", **fields) -> str:
    """One BGG thing item; numeric fields go in value attributes like the real API."""
    parts = [f'<item type="{item_type}" id="{gid}">']
    if "image" in fields:
        parts.append(f"<image>{fields.pop('image')}</image>")
    if name is not None:
        parts.append(f'<name type="primary" sortindex="1" value={quoteattr(name)}/>')
    if "description" in fields:
        parts.append(f"<description>{fields.pop('description')}</description>")
    for tag, value in fields.items():
        parts.append(f'<{tag} value="{value}"/>')
    parts.append("</item>")
    return "".join(parts)


def thing_xml(*items) -> str:
    return f'<?xml version="1.0" encoding="utf-8"?><items termsofuse="https://boardgamegeek.com/xmlapi/termsofuse">{"".join(items)}</items>'


class FakeResponse:
    def __init__(self, body: str, status_code: int = 200):
        self.status_code = status_code
        self.content = body.encode("utf-8")
        self.text = body


class FakeBGG:
    """Stands in for the BGG API by patching requests.Session.get."""

    def __init__(self):
        self.search_body = search_xml([])
        self.thing_body = thing_xml()
        self.search_status = 200
        self.thing_status = 200
        self.error: Exception | None = None
        self.calls: list[tuple[str, dict]] = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, dict(params or {})))
        if self.error is not None:
            raise self.error
        if url.endswith("/search"):
            return FakeResponse(self.search_body, self.search_status)
        if url.endswith("/thing"):
            return FakeResponse(self.thing_body, self.thing_status)
        raise AssertionError(f"unexpected url {url}")

    def endpoints(self) -> list[str]:
        return [url.rsplit("/", 1)[-1] for url, _ in self.calls]


@pytest.fixture
def fake_bgg(monkeypatch):
    bgg = FakeBGG()

    def fake_get(_session, url, params=None, timeout=None, **kwargs):
        return bgg.get(url, params=params, timeout=timeout)

    monkeypatch.setattr("requests.sessions.Session.get", fake_get)
    return bgg


@pytest.fixture
def db(tmp_path):
    from bgg_search.database import GamesDatabase

    return GamesDatabase(tmp_path / "games.db")


@pytest.fixture
def client(db):
    from bgg_search.catalog import CatalogClient
    from bgg_search.database import GameCache

    return CatalogClient(GameCache(db), base_url="https://bgg.test/xmlapi2")
