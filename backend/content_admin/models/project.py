"""
Catalog item ("project") models.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field

from content_admin.models.base import Base, CommonSchema, SoftDeleteMixin
from shared.utils.validators import is_truthy_flag, to_string_list


class ProjectMetaData(Base):
    """Editable project columns."""

    title: str | None = None
    # content_type and status arrive as scalar, array, JSON or comma strings
    content_type: Any = None
    status: Any = None
    poster_url: str | None = None
    preview_url: str | None = None
    platform: str | None = None
    platform_url: str | None = None
    release_year: int | None = None
    runtime_minutes: int | None = None
    synopsis: str | None = None
    notes: str | None = None
    genres: Any = None
    vibe_tags: Any = None
    order_index: int | None = None

    in_hero_carousel: bool | None = None
    in_now_playing: bool | None = None
    in_coming_soon: bool | None = None
    in_latest_releases: bool | None = None


class Project(CommonSchema, SoftDeleteMixin, ProjectMetaData):
    """A catalog item as stored by the backend."""

    def content_types(self) -> list[str]:
        return to_string_list(self.content_type)

    def statuses(self) -> list[str]:
        return to_string_list(self.status)

    def tags(self) -> list[str]:
        return to_string_list(self.vibe_tags)

    def has_flag(self, column: str) -> bool:
        return is_truthy_flag(self.get(column))


class ProjectFormData(ProjectMetaData):
    """
    Create/update payload for projects.

    Genres typed as free text go in comma_separated_genres and are split
    into the genres list before writing.
    """

    comma_separated_genres: str | None = Field(default=None, alias="commaSeperatedGenres")
