"""
Declarative query options for CRUDWrapper.get().

GetTableOpts describes filters, search, sort, limit and result shape;
to_params() renders it as PostgREST query parameters.

Usage:
    opts = GetTableOpts(
        eq=[EqFilter("page", "home"), EqFilter("is_active", True)],
        sort="order_index",
        sort_by="asc",
    )
    response = await content_rows.get(opts)
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from shared.config.constants import DEFAULT_SEARCH_FIELDS

# Characters that force a value to be double-quoted inside PostgREST lists
_RESERVED_CHARS = frozenset(',.:()"\\ ')


@dataclass(frozen=True)
class EqFilter:
    """column = value. None renders as IS NULL."""

    key: str
    value: Any


@dataclass(frozen=True)
class InFilter:
    """column IN (values)."""

    key: str
    value: Sequence[Any]


@dataclass(frozen=True)
class IlikeFilter:
    """Case-insensitive LIKE; pattern uses % wildcards."""

    key: str
    pattern: str


@dataclass(frozen=True)
class ArrayFilter:
    """Array column operator value for contains / overlaps."""

    key: str
    value: Sequence[Any]


def _coerce(filters: Sequence[Any] | None, cls: type) -> list[Any]:
    """Accept filter objects, (key, value) tuples or {"key", "value"} mappings."""
    result = []
    for item in filters or ():
        if isinstance(item, cls):
            result.append(item)
        elif isinstance(item, Mapping):
            result.append(cls(item["key"], item.get("value", item.get("pattern"))))
        else:
            result.append(cls(*item))
    return result


def format_value(value: Any) -> str:
    """Render a Python value the way PostgREST expects it."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def quote_value(value: Any) -> str:
    """Double-quote a list/or-filter value when it contains reserved characters."""
    text = format_value(value)
    if any(ch in _RESERVED_CHARS for ch in text):
        escaped = text.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return text


@dataclass
class GetTableOpts:
    """
    Query options.

    eq filters are ANDed. in_value is a single membership constraint and
    is skipped when its list is empty. or_ is a raw disjunction in backend
    syntax; search builds a second disjunction over search_fields. Both
    are ANDed with everything else. single demands exactly one row,
    maybe_single returns None on zero rows; setting both is rejected.
    """

    eq: list[EqFilter] = field(default_factory=list)
    in_value: InFilter | None = None
    or_: str | None = None
    search: str | None = None
    search_fields: Sequence[str] | None = None
    ilike: list[IlikeFilter] = field(default_factory=list)
    contains: list[ArrayFilter] = field(default_factory=list)
    overlaps: list[ArrayFilter] = field(default_factory=list)
    sort: str | None = None
    # Ascending only for "asc"; anything else ("desc", legacy "dec") sorts descending
    sort_by: str = "asc"
    limit: int | None = None
    single: bool = False
    maybe_single: bool = False

    def __post_init__(self):
        self.eq = _coerce(self.eq, EqFilter)
        self.ilike = _coerce(self.ilike, IlikeFilter)
        self.contains = _coerce(self.contains, ArrayFilter)
        self.overlaps = _coerce(self.overlaps, ArrayFilter)
        if isinstance(self.in_value, Mapping):
            self.in_value = InFilter(self.in_value["key"], self.in_value["value"])
        elif isinstance(self.in_value, tuple):
            self.in_value = InFilter(*self.in_value)

    def validate(self) -> str | None:
        """Return a problem description, or None if the options are usable."""
        if self.single and self.maybe_single:
            return "single and maybe_single are mutually exclusive"
        if self.sort_by not in ("asc", "desc", "dec"):
            return f"Unknown sort direction '{self.sort_by}'"
        return None

    @property
    def ascending(self) -> bool:
        return self.sort_by == "asc"

    def search_clause(self) -> str | None:
        """Disjunction of ilike filters for search, or None if search is blank."""
        if not self.search or not self.search.strip():
            return None
        fields = list(self.search_fields) if self.search_fields else list(DEFAULT_SEARCH_FIELDS)
        pattern = quote_value(f"%{self.search.strip()}%")
        return ",".join(f"{name}.ilike.{pattern}" for name in fields)

    def to_params(self) -> list[tuple[str, str]]:
        """Render as ordered PostgREST query parameters."""
        params: list[tuple[str, str]] = [("select", "*")]

        for flt in self.eq:
            if flt.value is None:
                params.append((flt.key, "is.null"))
            else:
                params.append((flt.key, f"eq.{format_value(flt.value)}"))

        if self.in_value is not None and self.in_value.key and self.in_value.value:
            values = ",".join(quote_value(v) for v in self.in_value.value)
            params.append((self.in_value.key, f"in.({values})"))

        for flt in self.ilike:
            params.append((flt.key, f"ilike.{flt.pattern}"))

        for flt in self.contains:
            values = ",".join(quote_value(v) for v in flt.value)
            params.append((flt.key, f"cs.{{{values}}}"))

        for flt in self.overlaps:
            values = ",".join(quote_value(v) for v in flt.value)
            params.append((flt.key, f"ov.{{{values}}}"))

        if self.or_:
            params.append(("or", f"({self.or_})"))

        search = self.search_clause()
        if search:
            params.append(("or", f"({search})"))

        if self.sort:
            params.append(("order", f"{self.sort}.{'asc' if self.ascending else 'desc'}"))

        if isinstance(self.limit, int) and self.limit > 0:
            params.append(("limit", str(self.limit)))

        return params
