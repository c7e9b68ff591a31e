"""
Recipe models.
"""

from __future__ import annotations

from typing import Any

from content_admin.models.base import Base, CommonSchema, SoftDeleteMixin
from shared.utils.validators import to_string_list


class RecipeMetaData(Base):
    """Editable recipe columns."""

    title: str | None = None
    slug: str | None = None
    image_url: str | None = None
    short_description: str | None = None
    ingredients: str | None = None
    instructions: str | None = None
    download_url: str | None = None
    category: str | None = None
    cook_time_estimate: str | None = None
    preview_url: str | None = None
    video_url: str | None = None
    suggested_pairings: str | None = None
    flavor_tags: Any = None


class Recipe(CommonSchema, SoftDeleteMixin, RecipeMetaData):
    """A recipe as stored by the backend."""

    def tags(self) -> list[str]:
        return to_string_list(self.flavor_tags)


class RecipeFormData(RecipeMetaData):
    """
    Create/update payload for recipes.

    paired_project_id is a form-only field used to create a pairing
    after the recipe exists; it is never written to the recipes table.
    """

    paired_project_id: str | None = None
