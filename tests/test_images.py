"""Tests for cover image URL normalization."""

from __future__ import annotations

import pytest

from malstream.utils.images import CDN_ORIGIN, PLACEHOLDER_IMAGE, normalize_image_url


class TestNormalizeImageUrl:
    @pytest.mark.parametrize("path", [None, ""])
    def test_missing_path_gives_placeholder(self, path: str | None) -> None:
        assert normalize_image_url(path) == PLACEHOLDER_IMAGE

    @pytest.mark.parametrize("segment", ["/r/96x136", "/r/50x70"])
    def test_strips_thumbnail_segment(self, segment: str) -> None:
        url = f"https://cdn.myanimelist.net{segment}/images/manga/3/258224.jpg"
        assert normalize_image_url(url) == "https://cdn.myanimelist.net/images/manga/3/258224.jpg"

    def test_protocol_relative(self) -> None:
        assert (
            normalize_image_url("//cdn.myanimelist.net/images/anime/1/1.jpg")
            == "https://cdn.myanimelist.net/images/anime/1/1.jpg"
        )

    def test_path_only_gets_cdn_origin(self) -> None:
        assert (
            normalize_image_url("/r/50x70/images/manga/1/1.jpg")
            == f"{CDN_ORIGIN}/images/manga/1/1.jpg"
        )

    def test_absolute_url_unchanged(self) -> None:
        url = "https://example.com/cover.png"
        assert normalize_image_url(url) == url

    @pytest.mark.parametrize(
        "path",
        ["images/a.jpg", "/images/a.jpg", "//x/a.jpg", "/r/96x136", "http://x/a.jpg"],
    )
    def test_never_relative(self, path: str) -> None:
        assert normalize_image_url(path).startswith("http")
