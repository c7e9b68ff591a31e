"""
Chapter (episode / audio chapter) models.
"""

from __future__ import annotations

from content_admin.models.base import Base, CommonSchema, SoftDeleteMixin


class ChapterMetaData(Base):
    """Editable chapter columns. A chapter belongs to a project."""

    project_id: str | None = None
    title: str | None = None
    content_type: str | None = None
    content_url: str | None = None
    platform: str | None = None
    episode_number: int | None = None
    season_number: int | None = None
    description: str | None = None
    thumbnail_url: str | None = None
    rating: str | None = None
    runtime_minutes: int | None = None
    release_year: int | None = None
    youtube_id: str | None = None
    order_index: int | None = None


class Chapter(CommonSchema, SoftDeleteMixin, ChapterMetaData):
    pass


class ChapterFormData(ChapterMetaData):
    pass


class Content(CommonSchema, SoftDeleteMixin, ChapterMetaData):
    """Standalone episode or audio item; same columns as a chapter."""


class ContentFormData(ChapterMetaData):
    pass
