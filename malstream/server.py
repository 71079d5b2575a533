"""HTTP API consumed by the browser overlay."""

from __future__ import annotations

import html
import logging
from pathlib import Path

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from malstream.aggregator import aggregate
from malstream.cache import ListCache
from malstream.config import Config
from malstream.errors import ConfigError
from malstream.models import ListRequest
from malstream.profiles import resolve

logger = logging.getLogger(__name__)

_SORT_KEYS = ("default", "title", "status", "progress", "random")
_FALSE_FLAGS = ("0", "false", "no", "off")


def _flag(*values: str | None) -> bool:
    """``?mixed``, ``?mixed=1`` and ``?both=true`` all switch a flag on."""
    return any(v is not None and v.strip().lower() not in _FALSE_FLAGS for v in values)


def _speed(value: str | None) -> int | None:
    """Parse ``?speed=``; anything that is not an integer means "use the configured speed"."""
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError:
        logger.debug("Ignoring invalid speed %r", value)
        return None


def _index_page(config: Config, has_overlay: bool) -> str:
    rows = []
    for kind in ("manga", "anime"):
        for status in (*resolve(kind).default_statuses, "ALL"):
            query = f"media={kind}&status={status}"
            target = f"/overlay/?{query}" if has_overlay else f"/api/list?{query}"
            rows.append(f'<li><a href="{target}">{kind} {status}</a></li>')
    rows.append('<li><a href="/api/list?mixed=1">manga + anime, all statuses</a></li>')
    return (
        "<html><head><title>MyAnimeList On Stream</title></head>"
        '<body style="font-family: Arial; padding: 20px;">'
        "<h1>MyAnimeList On Stream</h1>"
        "<p>Server is running! Add a browser source in OBS with one of these URLs:</p>"
        f"<ul>{''.join(rows)}</ul>"
        f"<p>Username: <strong>{html.escape(config.username)}</strong></p>"
        '<p style="color: #999; font-size: 12px;">Your MyAnimeList list must be '
        "public for scraping to work.</p>"
        "</body></html>"
    )


def create_app(config: Config, public_dir: str | Path = "public") -> FastAPI:
    app = FastAPI(title="malstream", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    cache = ListCache(config.cache_ttl)

    public_dir = Path(public_dir)
    has_overlay = public_dir.is_dir()
    if has_overlay:
        app.mount("/overlay", StaticFiles(directory=public_dir, html=True), name="overlay")

    async def _list(
        status: str,
        media: str,
        mixed: bool,
        sort: str,
        speed: str | None,
        legacy_key: str | None = None,
    ) -> JSONResponse:
        request = ListRequest(
            status=status,
            media=media,
            mixed=mixed,
            sort=sort if sort in _SORT_KEYS else "default",
            speed=_speed(speed),
        )
        try:
            result = await aggregate(request, config, cache=cache)
        except ConfigError as e:
            return JSONResponse({"error": str(e)}, status_code=400)
        except Exception as e:
            logger.error("Error fetching %s list: %s", request.media, e)
            return JSONResponse(
                {"error": f"Failed to fetch list: {e}"}, status_code=500
            )
        payload = result.model_dump()
        if legacy_key:
            # older overlay builds read the list from "manga"
            payload[legacy_key] = payload["items"]
        return JSONResponse(payload)

    @app.get("/api/list")
    async def get_list(
        status: str = "ALL",
        media: str | None = None,
        media_kind: str | None = Query(None, alias="mediaKind"),
        mixed: str | None = None,
        both: str | None = None,
        sort: str = "default",
        speed: str | None = None,
    ) -> JSONResponse:
        return await _list(status, media or media_kind or "manga", _flag(mixed, both), sort, speed)

    @app.get("/api/manga")
    async def get_manga(
        status: str = "ALL", sort: str = "default", speed: str | None = None
    ) -> JSONResponse:
        return await _list(status, "manga", False, sort, speed, legacy_key="manga")

    @app.get("/api/anime")
    async def get_anime(
        status: str = "ALL", sort: str = "default", speed: str | None = None
    ) -> JSONResponse:
        return await _list(status, "anime", False, sort, speed)

    @app.get("/", response_class=HTMLResponse)
    async def index() -> str:
        return _index_page(config, has_overlay)

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    return app
