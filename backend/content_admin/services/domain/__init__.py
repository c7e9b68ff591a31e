"""
Domain services.

Usage:
    from content_admin.services.domain import ContentRowService, PairingService

    rows = ContentRowService(backend)
    shelves = await rows.fetch_content_rows_with_projects("home")
"""

from .archive_service import ArchiveService
from .content_row_service import ContentRowService, RowWithCount, RowWithProjects
from .media_service import MediaService, build_upload_path, infer_display_fields
from .pairing_service import PairedItems, PairingService

__all__ = [
    "ArchiveService",
    "ContentRowService",
    "RowWithCount",
    "RowWithProjects",
    "MediaService",
    "build_upload_path",
    "infer_display_fields",
    "PairedItems",
    "PairingService",
]
