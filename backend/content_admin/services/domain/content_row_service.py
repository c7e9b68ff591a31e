"""
Content Row Service - shelves and the catalog items on them.

Uses the row matcher for selection and the repositories for data access.

Usage:
    from content_admin.services.domain import ContentRowService

    service = ContentRowService(backend)
    shelves = await service.fetch_content_rows_with_projects("home")
    for shelf in shelves:
        print(shelf.row.label, len(shelf.projects))
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Mapping

from pydantic import BaseModel

from content_admin.models import ContentRow, ContentRowFormData, Project
from content_admin.repositories import get_content_row_repository, get_project_repository
from content_admin.services.catalog.row_matching import (
    build_row_query,
    infer_filter_type,
    item_matches_row,
    refine_items,
)
from content_admin.services.crud import EqFilter, GetTableOpts, Response, filter_active
from shared.config.logging import get_logger
from shared.infrastructure.backend import BackendClient

logger = get_logger(__name__)

ROW_SEARCH_FIELDS = ("label", "filter_value")


@dataclass
class RowWithProjects:
    row: ContentRow
    projects: list[Project] = field(default_factory=list)


@dataclass
class RowWithCount:
    row: ContentRow
    match_count: int = 0


class ContentRowService:
    """
    Service for content row management.

    Business rules:
    - A row shows live, non-deleted items matching its filter
    - max_items truncates after refinement, never before
    - Rows that cannot match anything are hidden from page listings
    - filter_type is inferred from filter_value when not given
    """

    def __init__(self, backend: BackendClient):
        self.rows = get_content_row_repository(backend)
        self.projects = get_project_repository(backend)

    # =========================================================================
    # Query Methods
    # =========================================================================

    async def fetch_projects_by_content_row(self, row: ContentRow) -> list[Project]:
        """
        Items shown on row, in order_index order, capped at max_items.

        Failures are logged and yield an empty shelf.
        """
        projects = await self._matching_projects(row)
        if row.max_items and row.max_items > 0:
            projects = projects[: row.max_items]
        return projects

    async def fetch_content_rows_with_projects(
        self,
        page: str,
        *,
        include_empty: bool = False,
    ) -> list[RowWithProjects]:
        """Active rows of page with their items. Empty rows are dropped unless include_empty."""
        response = await self.rows.get(
            GetTableOpts(
                eq=[EqFilter("page", page), EqFilter("is_active", True)],
                sort="order_index",
                sort_by="asc",
            )
        )
        if not response.ok:
            logger.error(
                "Failed to fetch content rows",
                page=page,
                error=response.error_message(),
            )
            return []

        rows: list[ContentRow] = response.as_list()
        shelves = await asyncio.gather(*(self.fetch_projects_by_content_row(row) for row in rows))

        result = [RowWithProjects(row, projects) for row, projects in zip(rows, shelves)]
        if include_empty:
            return result
        return [shelf for shelf in result if shelf.projects]

    async def list_rows(
        self,
        page: str | None = None,
        search: str | None = None,
    ) -> list[RowWithCount]:
        """
        Rows for the management screen with their full match counts.

        Raises:
            BackendAPIError: If the rows cannot be loaded.
        """
        opts = GetTableOpts(
            sort="order_index",
            sort_by="asc",
            search=search or None,
            search_fields=ROW_SEARCH_FIELDS,
        )
        if page:
            opts.eq.append(EqFilter("page", page))

        rows: list[ContentRow] = (await self.rows.get(opts)).unwrap() or []
        counts = await asyncio.gather(*(self._matching_projects(row) for row in rows))
        return [RowWithCount(row, len(projects)) for row, projects in zip(rows, counts)]

    async def rows_for_item(
        self,
        item: Project | Mapping[str, Any],
        page: str | None = None,
    ) -> list[ContentRow]:
        """Active rows the item currently appears on."""
        opts = GetTableOpts(eq=[EqFilter("is_active", True)], sort="order_index", sort_by="asc")
        if page:
            opts.eq.append(EqFilter("page", page))

        rows: list[ContentRow] = (await self.rows.get(opts)).unwrap() or []
        return [row for row in rows if item_matches_row(item, row)]

    # =========================================================================
    # Command Methods
    # =========================================================================

    async def create_row(self, data: ContentRowFormData | Mapping[str, Any]) -> Response[ContentRow]:
        return await self.rows.create_one(self._with_filter_type(data))

    async def update_row(
        self,
        row_id: str,
        data: ContentRowFormData | Mapping[str, Any],
    ) -> Response[ContentRow]:
        return await self.rows.update_one_by_id(row_id, self._with_filter_type(data))

    async def toggle_active(self, row: ContentRow) -> Response[ContentRow]:
        return await self.rows.update_one_by_id(row.id, {"is_active": not row.is_active})

    async def delete_row(self, row_id: str) -> Response[None]:
        return await self.rows.delete_one_by_id_permanent(row_id)

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _matching_projects(self, row: ContentRow) -> list[Project]:
        opts = build_row_query(row)
        if opts is None:
            logger.warning(
                "Content row cannot select items",
                row_id=row.id,
                filter_type=row.filter_type,
                filter_value=row.filter_value,
            )
            return []

        response = await self.projects.get(opts)
        if not response.ok:
            logger.error(
                "Failed to fetch projects for content row",
                label=row.label,
                error=response.error_message(),
            )
            return []

        return refine_items(filter_active(response.as_list()), row)

    @staticmethod
    def _with_filter_type(data: ContentRowFormData | Mapping[str, Any]) -> dict[str, Any]:
        if isinstance(data, BaseModel):
            payload = data.model_dump(exclude_unset=True)
        else:
            payload = dict(data)
        if payload.get("filter_value") and not payload.get("filter_type"):
            payload["filter_type"] = infer_filter_type(payload["filter_value"])
        return payload
