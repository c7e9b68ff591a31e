"""
Per-table repositories.

Usage:
    from content_admin.repositories import get_project_repository

    projects = get_project_repository(backend)
    response = await projects.get(GetTableOpts(eq=[EqFilter("is_deleted", False)]))
"""

from .project import ProjectRepository, get_project_repository
from .recipe import RecipeRepository, get_recipe_repository
from .tables import (
    get_chapter_repository,
    get_content_repository,
    get_content_row_repository,
    get_email_capture_settings_repository,
    get_footer_repository,
    get_footer_settings_repository,
    get_page_settings_repository,
    get_pairing_repository,
    get_shop_repository,
)

__all__ = [
    # Project
    "ProjectRepository",
    "get_project_repository",
    # Recipe
    "RecipeRepository",
    "get_recipe_repository",
    # Plain tables
    "get_chapter_repository",
    "get_content_repository",
    "get_content_row_repository",
    "get_email_capture_settings_repository",
    "get_footer_repository",
    "get_footer_settings_repository",
    "get_page_settings_repository",
    "get_pairing_repository",
    "get_shop_repository",
]
