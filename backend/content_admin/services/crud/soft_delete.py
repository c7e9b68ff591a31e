"""
Soft delete helpers for consistent archive/restore writes across tables.

This module provides functions to:
- Build the paired is_deleted/deleted_at update payload
- Split row sets into active and archived rows
"""

from datetime import datetime, timezone
from typing import Any, Iterable

from shared.utils.validators import is_truthy_flag


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


def soft_delete_payload(is_deleted: bool, now: str | None = None) -> dict[str, Any]:
    """
    Update payload for archiving (True) or restoring (False) a row.

    Both columns are always written together so that deleted_at is null
    exactly when is_deleted is false.
    """
    return {
        "is_deleted": is_deleted,
        "deleted_at": (now or utc_now_iso()) if is_deleted else None,
    }


def is_soft_deleted(row: Any) -> bool:
    """True for rows (models or dicts) flagged as deleted."""
    if isinstance(row, dict):
        return is_truthy_flag(row.get("is_deleted"))
    return is_truthy_flag(getattr(row, "is_deleted", False))


def filter_active(rows: Iterable[Any]) -> list[Any]:
    """Drop soft-deleted rows."""
    return [row for row in rows if not is_soft_deleted(row)]
