"""Exceptions raised by the scraping pipeline."""

from __future__ import annotations


class MalStreamError(Exception):
    """Base class; ``str(exc)`` is safe to show to the overlay user."""


class ConfigError(MalStreamError):
    """No usable MyAnimeList username is configured."""


class FetchError(MalStreamError):
    """The list page could not be fetched."""

    def __init__(self, message: str, *, url: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ParseError(MalStreamError):
    """The list page was fetched but its embedded data was missing or invalid."""
