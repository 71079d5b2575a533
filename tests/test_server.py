"""Tests for the overlay HTTP API."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from malstream.config import Config
from malstream.errors import FetchError, ParseError
from malstream.models import AggregateResult, ListEntry
from malstream.server import create_app

_RESULT = AggregateResult(
    items=[
        ListEntry(
            id=1,
            title="Vagabond",
            coverImage="https://x/1.jpg",
            status="READING",
            media="manga",
        )
    ],
    username="alice",
    scrollSpeed=60,
    media="manga",
)


def _client(config: Config | None = None) -> TestClient:
    app = create_app(config or Config(username="alice"), public_dir="does-not-exist")
    return TestClient(app)


def test_list_success() -> None:
    with patch("malstream.server.aggregate", new=AsyncMock(return_value=_RESULT)) as agg:
        resp = _client().get("/api/list", params={"status": "reading", "sort": "title"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["username"] == "alice"
    assert body["items"][0]["coverImage"] == "https://x/1.jpg"
    request = agg.await_args.args[0]
    assert request.status == "READING"
    assert request.sort == "title"


def test_media_kind_alias_and_both_flag() -> None:
    with patch("malstream.server.aggregate", new=AsyncMock(return_value=_RESULT)) as agg:
        _client().get("/api/list?mediaKind=anime&both&speed=90")

    request = agg.await_args.args[0]
    assert request.media == "anime"
    assert request.mixed is True
    assert request.speed == 90


def test_false_flag_and_unknown_sort() -> None:
    with patch("malstream.server.aggregate", new=AsyncMock(return_value=_RESULT)) as agg:
        _client().get("/api/list?mixed=false&sort=bogus")

    request = agg.await_args.args[0]
    assert request.mixed is False
    assert request.sort == "default"


def test_missing_username_is_400() -> None:
    resp = _client(Config()).get("/api/list")
    assert resp.status_code == 400
    assert "username not configured" in resp.json()["error"]


def test_fetch_error_is_500() -> None:
    error = FetchError("Failed to fetch list page: HTTP 404", url="u", status_code=404)
    with patch("malstream.server.aggregate", new=AsyncMock(side_effect=error)):
        resp = _client().get("/api/list", params={"status": "PLANNING", "media": "anime"})

    assert resp.status_code == 500
    assert "404" in resp.json()["error"]


def test_parse_error_is_500() -> None:
    with patch("malstream.server.aggregate", new=AsyncMock(side_effect=ParseError("no data"))):
        resp = _client().get("/api/manga")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to fetch list: no data"}


def test_anime_route_pins_media() -> None:
    with patch("malstream.server.aggregate", new=AsyncMock(return_value=_RESULT)) as agg:
        _client().get("/api/anime?status=WATCHING")
    assert agg.await_args.args[0].media == "anime"


def test_index_and_healthz() -> None:
    client = _client()
    assert "alice" in client.get("/").text
    assert client.get("/healthz").json() == {"status": "ok"}


def test_serves_overlay_when_present(tmp_path: Path) -> None:
    (tmp_path / "index.html").write_text("<html>overlay</html>")
    client = TestClient(create_app(Config(username="alice"), public_dir=tmp_path))
    assert "overlay" in client.get("/overlay/").text
    assert "/overlay/?media=manga" in client.get("/").text


def test_invalid_speed_falls_back_to_configured() -> None:
    with patch("malstream.server.aggregate", new=AsyncMock(return_value=_RESULT)) as agg:
        resp = _client().get("/api/list?speed=fast")

    assert resp.status_code == 200
    assert agg.await_args.args[0].speed is None


def test_manga_route_keeps_manga_key() -> None:
    with patch("malstream.server.aggregate", new=AsyncMock(return_value=_RESULT)):
        body = _client().get("/api/manga").json()
    assert body["manga"] == body["items"]
    assert body["manga"][0]["title"] == "Vagabond"
