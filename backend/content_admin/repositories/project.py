"""
Project Repository - Data access for catalog items.

Write rules:
- Genres typed as free text are split into the genres list
- status is always written as a list
- A new item cannot be both "coming soon" and "now playing"
"""

from typing import Any

from content_admin.models import Project, ProjectFormData
from content_admin.services.crud import CRUDWrapper, GetTableOpts, TableBehaviour
from shared.config.constants import Tables
from shared.infrastructure.backend import BackendClient
from shared.utils.validators import canonical_list, is_truthy_flag, split_filter_value

# Form-only genre fields, snake_case and legacy camelCase spelling
GENRE_TEXT_FIELDS = ("comma_separated_genres", "commaSeperatedGenres")


class ProjectRepository(CRUDWrapper[Project, ProjectFormData, GetTableOpts]):
    """Repository for the projects table."""

    def __init__(self, backend: BackendClient):
        super().__init__(
            Tables.PROJECTS,
            Project,
            backend,
            behaviour=TableBehaviour(supports_soft_deletion=True),
        )

    def prepare_payload(self, payload: dict[str, Any], *, creating: bool) -> dict[str, Any]:
        genres_text = None
        for name in GENRE_TEXT_FIELDS:
            if name in payload:
                genres_text = payload.pop(name)
        if genres_text is not None:
            payload["genres"] = split_filter_value(genres_text)

        if payload.get("status") is not None:
            payload["status"] = canonical_list(payload["status"])
        return payload

    def validate_payload(self, payload: dict[str, Any], *, creating: bool) -> str | None:
        if creating and is_truthy_flag(payload.get("in_coming_soon")) and is_truthy_flag(
            payload.get("in_now_playing")
        ):
            return "An item cannot be both Coming Soon and Now Playing."
        return None


def get_project_repository(backend: BackendClient) -> ProjectRepository:
    """Factory function for dependency injection."""
    return ProjectRepository(backend)
