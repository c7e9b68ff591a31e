"""
Shared normalization helpers for loosely-typed backend values.

Columns such as status, content_type and the tag columns come back as a
scalar, an array, a JSON-encoded array or a comma-separated string
depending on how the row was written. Every read goes through
to_string_list(); every write of a list-valued column goes through
canonical_list().
"""

import json
import re
from collections.abc import Iterable, Mapping
from typing import Any

_WHITESPACE_RE = re.compile(r"\s+")
_SNAKE_RE = re.compile(r"[\s\-]+")


def to_string_list(value: Any) -> list[str]:
    """
    Normalize a multi-shape column value into an ordered list of strings.

    Accepts None, scalars, lists/tuples/sets, JSON array strings
    ('["a","b"]'), array literals ('{a,b}') and comma strings ('a, b').
    Blank entries are dropped.
    """
    if value is None:
        return []

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return []
        if text.startswith("[") and text.endswith("]"):
            try:
                parsed = json.loads(text)
            except ValueError:
                return [text]
            return to_string_list(parsed) if isinstance(parsed, list) else [text]
        if text.startswith("{") and text.endswith("}"):
            text = text[1:-1]
            return [part.strip().strip('"') for part in text.split(",") if part.strip().strip('"')]
        if "," in text:
            return [part.strip() for part in text.split(",") if part.strip()]
        return [text]

    if isinstance(value, Mapping):
        return [str(value)]

    if isinstance(value, Iterable):
        result = []
        for item in value:
            if item is None:
                continue
            item_str = str(item).strip()
            if item_str:
                result.append(item_str)
        return result

    return [str(value)]


def canonical_list(value: Any) -> list[str]:
    """Canonical on-write form: de-duplicated list, first occurrence wins."""
    seen: set[str] = set()
    result = []
    for item in to_string_list(value):
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


def canonical_token(value: str) -> str:
    """
    Comparison key for enum-like values.

    "TV Show", "tv_show" and "tvShow" all compare equal.
    """
    return re.sub(r"[\s_\-]+", "", value).lower()


def contains_token(values: Any, wanted: Iterable[str]) -> bool:
    """True if any normalized entry of values equals any wanted value."""
    have = {canonical_token(v) for v in to_string_list(values)}
    return any(canonical_token(w) in have for w in wanted)


def split_filter_value(value: str | None) -> list[str]:
    """Split a comma-separated filter value into trimmed, non-empty parts."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def to_snake_case(value: str) -> str:
    """'Now Playing' -> 'now_playing', 'hero-carousel' -> 'hero_carousel'."""
    text = value.strip()
    text = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", text)
    return _SNAKE_RE.sub("_", text).lower()


def is_truthy_flag(value: Any) -> bool:
    """Boolean flag columns may come back as bools or 'true'/'false' strings."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False


def strip_unwanted_values(
    payload: Mapping[str, Any],
    *,
    drop_none: bool = False,
) -> dict[str, Any]:
    """
    Remove blank strings (and optionally None) from a write payload.

    None is an explicit "clear this column" on update, so it is kept
    unless drop_none is set.
    """
    result: dict[str, Any] = {}
    for key, value in payload.items():
        if isinstance(value, str) and not value.strip():
            continue
        if value is None and drop_none:
            continue
        result[key] = value
    return result


def sanitize_filename(filename: str) -> str:
    """Replace whitespace runs with underscores for storage paths."""
    return _WHITESPACE_RE.sub("_", filename.strip())
