"""Configuration management for malstream."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

PLACEHOLDER_USERNAME = "YOUR_USERNAME"

# config.json keys (camelCase, as written by overlay users) -> Config fields
_FILE_KEYS = {
    "malUsername": "username",
    "host": "host",
    "port": "port",
    "scrollSpeed": "scroll_speed",
    "debug": "debug",
    "httpTimeout": "http_timeout",
    "cacheTtl": "cache_ttl",
}


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Config:
    """Process-wide settings, read once at startup."""

    username: str = PLACEHOLDER_USERNAME
    host: str = "127.0.0.1"
    port: int = 3000
    scroll_speed: int = 60
    debug: bool = False
    http_timeout: float = 30.0
    cache_ttl: float = 0.0

    @property
    def has_identity(self) -> bool:
        return bool(self.username) and self.username != PLACEHOLDER_USERNAME

    @classmethod
    def from_file(cls, path: str | Path) -> Config:
        """Load a ``config.json``; a missing file yields the defaults."""
        path = Path(path)
        try:
            raw: dict[str, Any] = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.warning(
                "%s not found, using defaults. Create it from config.example.json.", path
            )
            return cls()

        values: dict[str, Any] = {}
        for key, value in raw.items():
            name = _FILE_KEYS.get(key)
            if name is None or value is None:
                logger.debug("Ignoring config key %s", key)
                continue
            values[name] = value
        return cls(**values)

    @classmethod
    def from_env(cls, base: Config | None = None) -> Config:
        base = base or cls()
        overrides: dict[str, Any] = {}
        if os.getenv("MALSTREAM_USERNAME"):
            overrides["username"] = os.environ["MALSTREAM_USERNAME"]
        if os.getenv("MALSTREAM_HOST"):
            overrides["host"] = os.environ["MALSTREAM_HOST"]
        if os.getenv("MALSTREAM_PORT"):
            overrides["port"] = int(os.environ["MALSTREAM_PORT"])
        if os.getenv("MALSTREAM_SCROLL_SPEED"):
            overrides["scroll_speed"] = int(os.environ["MALSTREAM_SCROLL_SPEED"])
        if os.getenv("MALSTREAM_DEBUG"):
            overrides["debug"] = _env_bool(os.environ["MALSTREAM_DEBUG"])
        if os.getenv("MALSTREAM_TIMEOUT"):
            overrides["http_timeout"] = float(os.environ["MALSTREAM_TIMEOUT"])
        if os.getenv("MALSTREAM_CACHE_TTL"):
            overrides["cache_ttl"] = float(os.environ["MALSTREAM_CACHE_TTL"])
        return replace(base, **overrides)

    @classmethod
    def load(cls, path: str | Path | None = None) -> Config:
        """File (if given) first, then environment overrides."""
        base = cls.from_file(path) if path else cls()
        return cls.from_env(base)
