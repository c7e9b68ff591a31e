"""
Base classes for backend row models.

Rows are plain JSON objects owned by the hosted backend. Models declare
the columns the admin relies on and keep every other column as an extra
attribute, so flag columns added on the backend survive a round trip.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class Base(BaseModel):
    """Base class for all row and form models."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def get(self, name: str, default: Any = None) -> Any:
        """Column access that also covers extra columns."""
        return getattr(self, name, default)


class CommonSchema(Base):
    """Columns present on every table."""

    id: str | int
    created_at: str | None = None
    updated_at: str | None = None


class SoftDeleteMixin(Base):
    """
    Soft delete columns.

    deleted_at is null exactly when is_deleted is false; the repository
    writes both columns together.
    """

    is_deleted: bool = False
    deleted_at: str | None = None

    @property
    def is_archived(self) -> bool:
        return self.is_deleted
