"""
Catalog rules that need no backend access.
"""

from .row_matching import (
    RowTarget,
    apply_row_template,
    build_row_query,
    infer_filter_type,
    item_matches_row,
    refine_items,
    remove_row_template,
    resolve_flag_column,
    row_targets,
)

__all__ = [
    "RowTarget",
    "apply_row_template",
    "build_row_query",
    "infer_filter_type",
    "item_matches_row",
    "refine_items",
    "remove_row_template",
    "resolve_flag_column",
    "row_targets",
]
