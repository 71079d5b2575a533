"""Fan out list scrapes, merge, deduplicate and sort them for the overlay."""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Iterable

from malstream.config import Config
from malstream.cache import ListCache
from malstream.errors import ConfigError
from malstream.models import (
    MIXED,
    AggregateResult,
    Branch,
    ListEntry,
    ListRequest,
)
from malstream.profiles import MEDIA_KINDS, resolve
from malstream.scraper import ListScraper
from malstream.utils.http import new_client

logger = logging.getLogger(__name__)

# Position of each status in "status" sort order; the kind's primary
# (READING / WATCHING) status always goes first.
_STATUS_ORDER = ("COMPLETED", "PAUSED", "DROPPED", "PLANNING")


def plan_branches(request: ListRequest) -> list[Branch]:
    """Every (status, media) pair one request needs to fetch."""
    kinds = MEDIA_KINDS if request.mixed else (resolve(request.media).kind,)
    branches: list[Branch] = []
    for kind in kinds:
        profile = resolve(kind)
        if request.status == "ALL":
            statuses = profile.default_statuses
        else:
            statuses = (profile.canonical_status(request.status),)
        branches.extend(Branch(status=s, media=kind) for s in statuses)
    return branches


def merge_entries(batches: Iterable[list[ListEntry]]) -> list[ListEntry]:
    """Concatenate batches, keeping the first entry seen for each (media, id).

    Entries without an id cannot be matched and are always kept.
    """
    seen: set[tuple[str, int]] = set()
    merged: list[ListEntry] = []
    for batch in batches:
        for entry in batch:
            if entry.id is not None:
                key = (entry.media, entry.id)
                if key in seen:
                    continue
                seen.add(key)
            merged.append(entry)
    return merged


def _status_rank(entry: ListEntry) -> int:
    if entry.status == resolve(entry.media).primary_status:
        return 0
    try:
        return _STATUS_ORDER.index(entry.status) + 1
    except ValueError:
        return len(_STATUS_ORDER) + 1


def sort_entries(entries: list[ListEntry], sort: str) -> list[ListEntry]:
    if sort == "title":
        return sorted(entries, key=lambda e: e.title)
    if sort == "status":
        return sorted(entries, key=_status_rank)
    if sort == "progress":
        return sorted(entries, key=lambda e: e.progress, reverse=True)
    if sort == "random":
        shuffled = list(entries)
        random.shuffle(shuffled)
        return shuffled
    return list(entries)


async def _settle(
    scraper: ListScraper, username: str, branches: list[Branch]
) -> list[list[ListEntry] | BaseException]:
    return await asyncio.gather(
        *(scraper.scrape(username, b.status, b.media) for b in branches),
        return_exceptions=True,
    )


async def aggregate(
    request: ListRequest,
    config: Config,
    scraper: ListScraper | None = None,
    cache: ListCache | None = None,
) -> AggregateResult:
    """Build the overlay payload for *request*.

    A request that needs a single fetch raises that fetch's error. With
    several branches, failed ones are logged and skipped; only when all of
    them fail is the first error raised.

    *cache* is handed to the scraper built here; a caller passing its own
    *scraper* configures that scraper's cache instead.
    """
    if scraper is not None and cache is not None:
        raise ValueError("Pass either scraper or cache, not both.")
    if not config.has_identity:
        raise ConfigError(
            "MyAnimeList username not configured. "
            "Please set malUsername in config.json or MALSTREAM_USERNAME."
        )

    branches = plan_branches(request)

    if scraper is None:
        async with new_client(config.http_timeout) as client:
            outcomes = await _settle(
                ListScraper(client=client, timeout=config.http_timeout, cache=cache),
                config.username,
                branches,
            )
    else:
        outcomes = await _settle(scraper, config.username, branches)

    batches: list[list[ListEntry]] = []
    errors: list[BaseException] = []
    for branch, outcome in zip(branches, outcomes):
        if isinstance(outcome, Exception):
            logger.warning("Error fetching %s: %s", branch, outcome)
            errors.append(outcome)
        elif isinstance(outcome, BaseException):
            raise outcome
        else:
            logger.debug("Fetched %d items for %s", len(outcome), branch)
            batches.append(outcome)

    if errors and not batches:
        raise errors[0]

    items = sort_entries(merge_entries(batches), request.sort)
    return AggregateResult(
        items=items,
        username=config.username,
        scrollSpeed=config.scroll_speed if request.speed is None else request.speed,
        media=MIXED if request.mixed else resolve(request.media).kind,
    )
