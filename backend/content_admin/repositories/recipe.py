"""
Recipe Repository - Data access for recipes.
"""

from typing import Any

from content_admin.models import Recipe, RecipeFormData
from content_admin.services.crud import CRUDWrapper, GetTableOpts
from shared.config.constants import Tables
from shared.infrastructure.backend import BackendClient


class RecipeRepository(CRUDWrapper[Recipe, RecipeFormData, GetTableOpts]):
    """
    Repository for the recipes table.

    paired_project_id only exists on the form; the pairing itself is
    created separately once the recipe has an id.
    """

    def __init__(self, backend: BackendClient):
        super().__init__(Tables.RECIPES, Recipe, backend)

    def prepare_payload(self, payload: dict[str, Any], *, creating: bool) -> dict[str, Any]:
        payload.pop("paired_project_id", None)
        return payload


def get_recipe_repository(backend: BackendClient) -> RecipeRepository:
    """Factory function for dependency injection."""
    return RecipeRepository(backend)
