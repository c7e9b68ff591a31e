"""
Archive Service - soft-deleted items across archivable tables.

This service provides functions to:
- List archived rows of every archivable table
- Restore an archived row
- Permanently purge an archived row
"""

from __future__ import annotations

import asyncio
from typing import Any

from content_admin.repositories import (
    get_footer_repository,
    get_project_repository,
    get_recipe_repository,
)
from content_admin.services.crud import CRUDWrapper, EqFilter, GetTableOpts, Response
from shared.config.constants import Tables
from shared.config.logging import get_logger
from shared.infrastructure.backend import BackendClient
from shared.utils.exceptions import ValidationError

logger = get_logger(__name__)

# Columns searched on the archive screen, per table
ARCHIVE_SEARCH_FIELDS: dict[str, tuple[str, ...]] = {
    Tables.PROJECTS: ("title", "content_type"),
    Tables.RECIPES: ("title",),
    Tables.FOOTER: ("title",),
}


class ArchiveService:
    """Service for the archive screen."""

    def __init__(self, backend: BackendClient):
        # Table mapping for restore / purge
        self.repositories: dict[str, CRUDWrapper] = {
            Tables.PROJECTS: get_project_repository(backend),
            Tables.RECIPES: get_recipe_repository(backend),
            Tables.FOOTER: get_footer_repository(backend),
        }

    def get_repository(self, table: str) -> CRUDWrapper:
        """
        Repository for an archivable table.

        Raises:
            ValidationError: If the table is not archivable.
        """
        repo = self.repositories.get(table.lower())
        if repo is None:
            raise ValidationError(f"Table '{table}' has no archive", table=table)
        return repo

    async def list_archived(self, search: str | None = None) -> dict[str, list[Any]]:
        """
        Archived rows per table, newest first.

        Raises:
            BackendAPIError: If any table cannot be read.
        """
        tables = list(Tables.ARCHIVABLE)
        responses = await asyncio.gather(
            *(self._archived(table, search) for table in tables)
        )
        return {table: response.unwrap() or [] for table, response in zip(tables, responses)}

    async def restore(self, table: str, entity_id: str) -> Response[Any]:
        return await self.get_repository(table).toggle_soft_delete(entity_id, False)

    async def purge(self, table: str, entity_id: str) -> Response[None]:
        response = await self.get_repository(table).delete_one_by_id_permanent(entity_id)
        if response.ok:
            logger.info("Archived row purged", table=table, entity_id=entity_id)
        return response

    async def _archived(self, table: str, search: str | None) -> Response[Any]:
        return await self.get_repository(table).get(
            GetTableOpts(
                eq=[EqFilter("is_deleted", True)],
                search=search or None,
                search_fields=ARCHIVE_SEARCH_FIELDS[table],
                sort="created_at",
                sort_by="desc",
            )
        )
