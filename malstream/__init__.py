"""malstream: MyAnimeList list scraper for stream overlays."""

from __future__ import annotations

__version__ = "0.1.0"
