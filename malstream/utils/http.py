"""HTTP utilities for malstream."""

from __future__ import annotations

import httpx

from malstream.errors import FetchError

_DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/125.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}


def new_client(
    timeout: float = 30.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Client shared by every fetch of one fan-out."""
    return httpx.AsyncClient(
        timeout=timeout,
        follow_redirects=True,
        headers=_DEFAULT_HEADERS,
        transport=transport,
    )


async def fetch_text(
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    headers: dict[str, str] | None = None,
    timeout: float = 30.0,
) -> str:
    """GET *url* and return the body, raising :class:`FetchError` on any failure."""
    merged = {**_DEFAULT_HEADERS, **(headers or {})}
    try:
        if client is None:
            async with new_client(timeout) as own:
                resp = await own.get(url, headers=merged)
        else:
            resp = await client.get(url, headers=merged, timeout=timeout)
    except httpx.TransportError as e:
        raise FetchError(f"Failed to fetch list page: {e!r}", url=url) from e

    if not resp.is_success:
        raise FetchError(
            f"Failed to fetch list page: HTTP {resp.status_code}",
            url=url,
            status_code=resp.status_code,
        )
    return resp.text
