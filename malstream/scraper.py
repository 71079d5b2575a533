"""MyAnimeList list page scraper."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx
from bs4 import BeautifulSoup

from malstream.cache import ListCache
from malstream.errors import ParseError
from malstream.models import UNKNOWN_STATUS, ListEntry, MediaProfile
from malstream.profiles import resolve
from malstream.utils.http import fetch_text
from malstream.utils.images import normalize_image_url

logger = logging.getLogger(__name__)

_DATA_ATTR = "data-items"

_MISSING_DATA_HINT = (
    "Could not find list data on the page. Make sure the username is correct, "
    "the list is public, and the MyAnimeList layout has not changed."
)


def extract_list_data(html: str) -> str:
    """Return the raw JSON carried in the list table's ``data-items`` attribute.

    The attribute normally sits on ``table.list-table``; some page states only
    have it on the first table.
    """
    soup = BeautifulSoup(html, "html.parser")
    for table in (soup.select_one("table.list-table"), soup.find("table")):
        if table is None:
            continue
        data = table.get(_DATA_ATTR)
        if data:
            return str(data)
    raise ParseError(_MISSING_DATA_HINT)


def decode_records(data: str) -> list[dict[str, Any]]:
    try:
        records = json.loads(data)
    except json.JSONDecodeError as e:
        raise ParseError(f"List data is not valid JSON: {e}") from e
    if not isinstance(records, list):
        raise ParseError("List data is not a JSON array.")
    return [r for r in records if isinstance(r, dict)]


def _as_int(value: Any, default: int | None = None) -> int | None:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def build_entry(
    record: dict[str, Any], profile: MediaProfile, requested_status: str | None
) -> ListEntry:
    """Map one raw ``data-items`` record to a :class:`ListEntry`."""
    raw_status = record.get("status")
    status = profile.code_to_status.get(str(raw_status)) if raw_status is not None else None
    if status is None:
        logger.debug(
            "Unmapped %s status code %r for id %r",
            profile.kind,
            raw_status,
            record.get(profile.id_field),
        )
        status = requested_status or UNKNOWN_STATUS

    title = record.get(profile.title_field)
    image = record.get(profile.image_field)
    return ListEntry(
        id=_as_int(record.get(profile.id_field)),
        title=str(title) if title is not None else "",
        coverImage=normalize_image_url(image if isinstance(image, str) else None),
        status=status,
        progress=max(_as_int(record.get(profile.progress_field), 0) or 0, 0),
        media=profile.kind,
    )


class ListScraper:
    """Fetch and normalize one MyAnimeList list page per call."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
        cache: ListCache | None = None,
    ) -> None:
        self.client = client
        self.timeout = timeout
        self.cache = cache if cache is not None else ListCache()

    async def scrape(self, username: str, status: str, media: str) -> list[ListEntry]:
        profile = resolve(media)
        status = profile.canonical_status((status or "ALL").strip().upper())
        key = (username, status, profile.kind)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        code = profile.status_to_code.get(status, profile.status_to_code["ALL"])
        url = profile.list_url(username, code)
        logger.debug("Fetching %s", url)

        html = await fetch_text(url, client=self.client, timeout=self.timeout)
        records = decode_records(extract_list_data(html))

        # "ALL" is a query, not a label
        label = None if status == "ALL" else status
        entries = [build_entry(r, profile, label) for r in records]
        self.cache.put(key, entries)
        return entries
