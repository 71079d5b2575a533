"""Cover image URL normalization."""

from __future__ import annotations

PLACEHOLDER_IMAGE = "https://cdn.myanimelist.net/images/qm_50.gif"
CDN_ORIGIN = "https://cdn.myanimelist.net"

_THUMBNAIL_SEGMENTS = ("/r/96x136", "/r/50x70")


def normalize_image_url(path: str | None) -> str:
    """Turn a list-page image path into an absolute, full-size URL."""
    if not path:
        return PLACEHOLDER_IMAGE

    url = path
    for segment in _THUMBNAIL_SEGMENTS:
        url = url.replace(segment, "")

    if url.startswith("//"):
        return f"https:{url}"
    if not url.startswith("http"):
        if not url.startswith("/"):
            url = f"/{url}"
        return f"{CDN_ORIGIN}{url}"
    return url
