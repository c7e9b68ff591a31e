"""
Content row ("shelf") models.

A content row is a saved query over projects: which page it is shown on,
how items are selected (filter_type + filter_value) and in which order.
Content rows are hard-deleted only.
"""

from __future__ import annotations

from content_admin.models.base import Base, CommonSchema
from shared.config.constants import FilterType, Page
from shared.utils.validators import split_filter_value


class ContentRowMetaData(Base):
    """Editable content row columns."""

    label: str = ""
    page: str = Page.HOME
    filter_type: str = FilterType.FLAG
    filter_value: str = ""
    order_index: int = 0
    is_active: bool = True
    max_items: int | None = None

    def filter_values(self) -> list[str]:
        """filter_value split on commas; more than one value means "any of"."""
        return split_filter_value(self.filter_value)


class ContentRow(CommonSchema, ContentRowMetaData):
    pass


class ContentRowFormData(ContentRowMetaData):
    pass
