"""Core data models for malstream."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

MIXED = "mixed"
UNKNOWN_STATUS = "UNKNOWN"

# Per-kind names for "currently consuming"; interchangeable in requests
PRIMARY_STATUSES = ("READING", "WATCHING")

SortKey = Literal["default", "title", "status", "progress", "random"]


class MediaProfile(BaseModel, frozen=True):
    """Field names and status codes for one MyAnimeList media kind."""

    kind: str
    status_to_code: dict[str, str]
    default_statuses: tuple[str, ...]
    primary_status: str
    id_field: str
    title_field: str
    image_field: str
    progress_field: str
    url_template: str

    @property
    def code_to_status(self) -> dict[str, str]:
        return {self.status_to_code[s]: s for s in self.default_statuses}

    def canonical_status(self, status: str) -> str:
        """Map the other kind's "in progress" name (READING / WATCHING) onto ours."""
        if status not in self.status_to_code and status in PRIMARY_STATUSES:
            return self.primary_status
        return status

    def list_url(self, username: str, code: str) -> str:
        return self.url_template.format(username=username, code=code)


class ListEntry(BaseModel, frozen=True):
    """A single title on a user's list, as sent to the overlay."""

    id: int | None = None
    title: str = ""
    coverImage: str
    status: str
    progress: int = Field(default=0, ge=0)
    media: str


class ListRequest(BaseModel, frozen=True):
    """What the overlay asked for."""

    status: str = "ALL"
    media: str = "manga"
    mixed: bool = False
    sort: SortKey = "default"
    speed: int | None = None

    @field_validator("status")
    @classmethod
    def _upper_status(cls, v: str) -> str:
        return (v or "ALL").strip().upper()

    @field_validator("media")
    @classmethod
    def _lower_media(cls, v: str) -> str:
        return (v or "manga").strip().lower()


class Branch(BaseModel, frozen=True):
    """One (status, media) fetch within a fan-out."""

    status: str
    media: str

    def __str__(self) -> str:
        return f"{self.media}/{self.status}"


class AggregateResult(BaseModel, frozen=True):
    """Response payload for the overlay."""

    items: list[ListEntry] = Field(default_factory=list)
    username: str
    scrollSpeed: int
    media: str
