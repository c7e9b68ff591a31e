"""
Content row ("shelf") matching.

A content row selects catalog items through filter_type + filter_value.
Everything here is pure: the same row definition drives

- item_matches_row(): does an item belong on the shelf?
- build_row_query(): the backend query that pre-selects candidates
- apply_row_template() / remove_row_template(): edit a draft item so it
  does / does not belong on the shelf

Each row is reduced to a list of targets, a (column, required value)
pair. An item is on the shelf when it satisfies any target.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from content_admin.models import ContentRowMetaData
from content_admin.services.crud.query import (
    ArrayFilter,
    EqFilter,
    GetTableOpts,
    IlikeFilter,
    quote_value,
)
from shared.config.constants import (
    COMING_SOON_ALIAS,
    CONTENT_TYPE_KEYWORDS,
    FLAG_COLUMNS,
    LIST_COLUMNS,
    STATUS_KEYWORDS,
    ContentType,
    FilterType,
)
from shared.config.logging import get_logger
from shared.utils.validators import (
    canonical_list,
    canonical_token,
    contains_token,
    is_truthy_flag,
    to_snake_case,
)

logger = get_logger(__name__)

RowLike = ContentRowMetaData | Mapping[str, Any]


@dataclass(frozen=True)
class RowTarget:
    """
    One condition a row can be satisfied by.

    value is None for boolean flag columns (column must be true);
    otherwise the list-valued column must contain value.
    """

    column: str
    value: str | None = None

    @property
    def is_flag(self) -> bool:
        return self.value is None

    def same_as(self, other: RowTarget) -> bool:
        if self.column != other.column or self.is_flag != other.is_flag:
            return False
        return self.is_flag or canonical_token(self.value) == canonical_token(other.value)


# =============================================================================
# Field access
# =============================================================================


def _as_row(row: RowLike) -> ContentRowMetaData:
    if isinstance(row, ContentRowMetaData):
        return row
    return ContentRowMetaData.model_validate(dict(row))


def _field(item: Any, name: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def _satisfies(item: Any, target: RowTarget) -> bool:
    value = _field(item, target.column)
    if target.is_flag:
        return is_truthy_flag(value)
    return contains_token(value, [target.value])


# =============================================================================
# Flag resolution
# =============================================================================


def resolve_flag_column(filter_value: str, label: str | None = None) -> str:
    """
    Column a flag row points at.

    An exact known flag column wins. A value or label of "coming soon"
    (any spelling) resolves to the status alias. Anything else becomes
    in_<snake_case value>.
    """
    value = filter_value.strip()
    if value in FLAG_COLUMNS:
        return value

    snake = to_snake_case(value)
    if snake in FLAG_COLUMNS:
        return snake
    if snake == COMING_SOON_ALIAS or (label and to_snake_case(label) == COMING_SOON_ALIAS):
        return COMING_SOON_ALIAS
    return snake if snake.startswith("in_") else f"in_{snake}"


def _flag_target(value: str, label: str | None) -> RowTarget:
    column = resolve_flag_column(value, label)
    if column == COMING_SOON_ALIAS:
        return RowTarget("status", COMING_SOON_ALIAS)
    return RowTarget(column)


# =============================================================================
# Targets
# =============================================================================


def row_targets(row: RowLike) -> list[RowTarget] | None:
    """
    Targets for a row, or None when the filter type is custom or unknown.
    """
    row = _as_row(row)
    filter_type = canonical_token(row.filter_type or "")
    values = row.filter_values()

    if filter_type == canonical_token(FilterType.STATUS):
        return [RowTarget("status", v) for v in values]
    if filter_type == canonical_token(FilterType.CONTENT_TYPE):
        return [RowTarget("content_type", v) for v in values]
    if filter_type == canonical_token(FilterType.FLAG):
        return [_flag_target(v, row.label) for v in values]
    if filter_type == canonical_token(FilterType.AUDIOBOOK):
        return [RowTarget("content_type", ContentType.AUDIOBOOK)]
    if filter_type == canonical_token(FilterType.SONG):
        return [RowTarget("content_type", ContentType.SONG)]
    if filter_type == canonical_token(FilterType.LISTEN):
        return [RowTarget("content_type", t) for t in ContentType.LISTEN]
    for tag_type in FilterType.TAG_TYPES:
        if filter_type == canonical_token(tag_type):
            return [RowTarget(tag_type, v) for v in values]
    return None


def item_matches_row(item: Any, row: RowLike) -> bool:
    """
    Whether item belongs on row.

    Custom and unknown filter types never match; they are logged, not raised.
    """
    targets = row_targets(row)
    if targets is None:
        row = _as_row(row)
        logger.warning(
            "Unsupported content row filter type",
            filter_type=row.filter_type,
            filter_value=row.filter_value,
        )
        return False
    return any(_satisfies(item, target) for target in targets)


# =============================================================================
# Backend query
# =============================================================================


def _ilike_clause(column: str, value: str) -> str:
    return f"{column}.ilike.{quote_value(f'%{value}%')}"


def build_row_query(row: RowLike) -> GetTableOpts | None:
    """
    Backend query pre-selecting candidates for row, ordered by order_index.

    Results still need item_matches_row() refinement: ilike on
    content_type is a substring match. Returns None for rows that can
    never match (custom, unknown or an empty filter value).
    """
    targets = row_targets(row)
    if not targets:
        return None

    opts = GetTableOpts(sort="order_index", sort_by="asc")
    columns = {t.column for t in targets}

    if columns == {"status"}:
        values = [t.value for t in targets]
        if len(values) == 1:
            opts.contains.append(ArrayFilter("status", values))
        else:
            opts.overlaps.append(ArrayFilter("status", values))
    elif columns == {"content_type"}:
        if len(targets) == 1:
            opts.ilike.append(IlikeFilter("content_type", f"%{targets[0].value}%"))
        else:
            opts.or_ = ",".join(_ilike_clause("content_type", t.value) for t in targets)
    elif all(t.is_flag for t in targets):
        if len(targets) == 1:
            opts.eq.append(EqFilter(targets[0].column, True))
        else:
            opts.or_ = ",".join(f"{t.column}.eq.true" for t in targets)
    elif all(t.is_flag or t.column == "status" for t in targets):
        # Flag row mixing boolean columns with the coming-soon alias
        opts.or_ = ",".join(
            f"{t.column}.eq.true" if t.is_flag else f"status.cs.{{{quote_value(t.value)}}}"
            for t in targets
        )
    # Tag columns are refined client-side only

    return opts


def refine_items(items: Iterable[Any], row: RowLike) -> list[Any]:
    """Keep the items that really belong on row."""
    return [item for item in items if item_matches_row(item, row)]


# =============================================================================
# Templates
# =============================================================================


def _stored_like(original: Any, values: list[str], column: str) -> Any:
    """
    values written back in the shape original was stored in.

    Lists stay lists, JSON and array-literal strings keep their syntax,
    plain strings stay comma strings. An emptied string field is cleared
    to None. A field with no previous value takes the column's own shape.
    """
    if isinstance(original, (list, tuple)):
        return list(values)
    if isinstance(original, str) and original.strip():
        if not values:
            return None
        text = original.strip()
        if text.startswith("["):
            return json.dumps(values)
        if text.startswith("{"):
            return "{" + ",".join(values) + "}"
        return ", ".join(values)
    if column in LIST_COLUMNS:
        return list(values)
    if not values:
        return None
    return values[0] if len(values) == 1 else list(values)


def apply_row_template(draft: Mapping[str, Any], row: RowLike) -> dict[str, Any]:
    """
    Return a copy of draft edited so that it belongs on row.

    Merge semantics: unrelated fields are untouched, a multi-valued field
    only gains the row's first value when none of its values is present,
    and keeps the shape it was stored in.
    """
    result = dict(draft)
    targets = row_targets(row)
    if not targets or any(_satisfies(result, t) for t in targets):
        return result

    target = targets[0]
    if target.is_flag:
        result[target.column] = True
    else:
        existing = result.get(target.column)
        result[target.column] = _stored_like(
            existing, canonical_list(existing) + [target.value], target.column
        )
    return result


def remove_row_template(
    draft: Mapping[str, Any],
    row: RowLike,
    other_rows: Iterable[RowLike] = (),
) -> dict[str, Any]:
    """
    Return a copy of draft with exactly the fields row controls unset.

    Flags become False and the row's values are taken out of multi-valued
    fields, which keep their shape. Cleared values are written explicitly
    so the draft can be sent as an update. A field is kept when another
    active row in other_rows that the draft currently matches requires
    the same value.
    """
    result = dict(draft)
    targets = row_targets(row)
    if not targets:
        return result

    row_id = _field(row, "id")
    protected: list[RowTarget] = []
    for other in other_rows:
        other_row = _as_row(other)
        if row_id is not None and other_row.get("id") == row_id:
            continue
        if not other_row.is_active or not item_matches_row(draft, other_row):
            continue
        protected.extend(row_targets(other_row) or ())

    for target in targets:
        if any(target.same_as(p) for p in protected):
            continue
        if target.is_flag:
            result[target.column] = False
        elif target.column in result:
            wanted = canonical_token(target.value)
            existing = result[target.column]
            remaining = [v for v in canonical_list(existing) if canonical_token(v) != wanted]
            result[target.column] = _stored_like(existing, remaining, target.column)
    return result



# =============================================================================
# Filter type inference
# =============================================================================


def infer_filter_type(filter_value: str) -> str:
    """
    Guess a row's filter type from its value.

    Content type keywords win, then exact status words; anything else is
    treated as a flag column (in_now_playing, is_trending, ...).
    """
    lowered = filter_value.strip().lower()
    if any(keyword in lowered for keyword in CONTENT_TYPE_KEYWORDS):
        return FilterType.CONTENT_TYPE
    if lowered in STATUS_KEYWORDS:
        return FilterType.STATUS
    return FilterType.FLAG
