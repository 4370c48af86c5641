from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from conftest import search_xml, thing_item, thing_xml


@pytest.fixture
def api(client):
    from bgg_search.api import create_app

    return TestClient(create_app(client=client))


def test_preflight_succeeds_without_body(api):
    response = api.options("/bgg-search")

    assert response.status_code == 200
    assert response.content == b""
    assert response.headers["access-control-allow-origin"] == "*"
    assert "content-type" in response.headers["access-control-allow-headers"]


def test_search_returns_games(fake_bgg, api):
    fake_bgg.search_body = search_xml([(13, "Catan")])
    fake_bgg.thing_body = thing_xml(thing_item(13, "Catan", yearpublished=1995, minplayers=3, maxplayers=4))

    response = api.post("/bgg-search", json={"query": "Catan"})

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    [game] = response.json()["games"]
    assert game["upstreamId"] == 13
    assert game["yearPublished"] == 1995
    assert "playingTimeMinutes" not in game
    assert game["localId"]

    again = api.post("/bgg-search", json={"query": "Catan"}).json()["games"][0]
    assert again["localId"] == game["localId"]


@pytest.mark.parametrize("body", [{}, {"query": 5}, {"query": None}, ["Catan"]])
def test_invalid_query_is_client_error(fake_bgg, api, body):
    response = api.post("/bgg-search", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "Query parameter is required and must be a string"}
    assert fake_bgg.calls == []


def test_non_json_body_is_client_error(fake_bgg, api):
    response = api.post("/bgg-search", content=b"query=Catan", headers={"content-type": "text/plain"})

    assert response.status_code == 400
    assert "error" in response.json()


def test_blank_query_is_client_error(fake_bgg, api):
    response = api.post("/bgg-search", json={"query": "   "})

    assert response.status_code == 400
    assert fake_bgg.calls == []


def test_upstream_failure_is_server_error(fake_bgg, api):
    fake_bgg.search_status = 500

    response = api.post("/bgg-search", json={"query": "Catan"})

    assert response.status_code == 500
    body = response.json()
    assert "500" in body["error"]
    assert "UpstreamUnavailable" in body["details"]


def test_storage_failure_still_returns_games(fake_bgg, client, api, tmp_path):
    fake_bgg.search_body = search_xml([(13, "Catan")])
    fake_bgg.thing_body = thing_xml(thing_item(13, "Catan"))
    client.cache.db.db_path = tmp_path / "offline" / "games.db"

    response = api.post("/bgg-search", json={"query": "Catan"})

    assert response.status_code == 200
    assert response.json() == {"games": [{"upstreamId": 13, "name": "Catan", "localId": None}]}


def test_health(api):
    assert api.get("/health").json() == {"status": "ok"}
