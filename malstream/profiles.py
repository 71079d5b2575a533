"""Per-media-kind lookup table for MyAnimeList list pages."""

from __future__ import annotations

from malstream.models import MediaProfile

DEFAULT_KIND = "manga"

_LIST_URL = "https://myanimelist.net/{kind}list/{{username}}?status={{code}}"

_PROFILES: dict[str, MediaProfile] = {
    "manga": MediaProfile(
        kind="manga",
        status_to_code={
            "READING": "1",
            "COMPLETED": "2",
            "PAUSED": "3",
            "DROPPED": "4",
            "PLANNING": "6",
            "ALL": "7",
        },
        default_statuses=("READING", "COMPLETED", "PAUSED", "DROPPED", "PLANNING"),
        primary_status="READING",
        id_field="manga_id",
        title_field="manga_title",
        image_field="manga_image_path",
        progress_field="num_read_chapters",
        url_template=_LIST_URL.format(kind="manga"),
    ),
    "anime": MediaProfile(
        kind="anime",
        status_to_code={
            "WATCHING": "1",
            "COMPLETED": "2",
            "PAUSED": "3",
            "DROPPED": "4",
            "PLANNING": "6",
            "ALL": "7",
        },
        default_statuses=("WATCHING", "COMPLETED", "PAUSED", "DROPPED", "PLANNING"),
        primary_status="WATCHING",
        id_field="anime_id",
        title_field="anime_title",
        image_field="anime_image_path",
        progress_field="num_watched_episodes",
        url_template=_LIST_URL.format(kind="anime"),
    ),
}

MEDIA_KINDS: tuple[str, ...] = tuple(_PROFILES)


def resolve(kind: str | None) -> MediaProfile:
    """Return the profile for *kind*, falling back to manga for anything unknown."""
    return _PROFILES.get((kind or "").strip().lower(), _PROFILES[DEFAULT_KIND])
