"""
Media Service - catalog library helpers and object storage uploads.

Usage:
    from content_admin.services.domain import MediaService

    service = MediaService(backend)
    url = await service.upload_file("Thumbnails", "Film", "poster art.png", data, "image/png")
    statuses = await service.fetch_unique_statuses()
"""

from __future__ import annotations

import time
from typing import Any, Iterable, Mapping

from pydantic import BaseModel

from content_admin.models import Project
from content_admin.repositories import get_project_repository
from content_admin.services.crud import ArrayFilter, EqFilter, GetTableOpts, Response
from shared.config.constants import DEFAULT_DISPLAY_FIELDS, HIDDEN_DISPLAY_FIELDS
from shared.config.logging import get_logger
from shared.config.settings import Settings, get_settings
from shared.infrastructure.backend import BackendClient
from shared.utils.validators import sanitize_filename, to_string_list

logger = get_logger(__name__)

LIBRARY_SEARCH_FIELDS = ("title", "platform", "notes")
ALL = "all"


def build_upload_path(
    category: str,
    subcategory: str | None,
    filename: str,
    timestamp_ms: int | None = None,
) -> str:
    """<Category>/<subcategory>/<epoch millis>-<filename with whitespace as _>."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"{category}/{subcategory or 'generic'}/{timestamp_ms}-{sanitize_filename(filename)}"


def infer_display_fields(rows: Iterable[Any]) -> list[str]:
    """
    Table columns for the library view.

    Taken from the first row's keys minus internal columns; a fixed
    default list when there are no rows.
    """
    for row in rows:
        if isinstance(row, BaseModel):
            keys = row.model_dump().keys()
        elif isinstance(row, Mapping):
            keys = row.keys()
        else:
            continue
        return [key for key in keys if key not in HIDDEN_DISPLAY_FIELDS]
    return list(DEFAULT_DISPLAY_FIELDS)


class MediaService:
    """Service for the content library screen."""

    def __init__(self, backend: BackendClient, settings: Settings | None = None):
        self._backend = backend
        self._settings = settings or get_settings()
        self.projects = get_project_repository(backend)

    async def fetch_all(
        self,
        search: str | None = None,
        status: str | None = None,
        content_type: str | None = None,
    ) -> Response[list[Project]]:
        """Library listing, newest first. "all" disables a filter."""
        opts = GetTableOpts(
            search=search,
            search_fields=LIBRARY_SEARCH_FIELDS,
            sort="created_at",
            sort_by="desc",
        )
        if status and status != ALL:
            opts.contains.append(ArrayFilter("status", [status]))
        if content_type and content_type != ALL:
            opts.eq.append(EqFilter("content_type", content_type))
        return await self.projects.get(opts)

    async def upload_file(
        self,
        category: str,
        subcategory: str | None,
        filename: str,
        content: bytes,
        content_type: str | None = None,
    ) -> str:
        """
        Upload a file to the media bucket and return its public URL.

        Raises:
            BackendAPIError: If storage rejects the upload.
        """
        bucket = self._settings.storage_bucket
        path = build_upload_path(category, subcategory, filename)
        stored_path = await self._backend.upload(
            bucket,
            path,
            content,
            content_type=content_type,
            upsert=True,
            cache_control=self._settings.storage_cache_control,
        )
        logger.info("File uploaded", bucket=bucket, path=stored_path, size=len(content))
        return self._backend.public_url(bucket, stored_path)

    async def fetch_unique_statuses(self) -> list[str]:
        """Sorted distinct status values across all projects."""
        return await self._unique_values("status")

    async def fetch_unique_content_types(self) -> list[str]:
        """Sorted distinct content types across all projects."""
        return await self._unique_values("content_type")

    async def _unique_values(self, column: str) -> list[str]:
        rows = await self._backend.select(self.projects.table_name, [("select", column)])
        values: set[str] = set()
        for row in rows:
            values.update(to_string_list(row.get(column)))
        return sorted(values)
