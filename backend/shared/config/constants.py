"""
Centralized constants for the admin backend.
Avoid magic strings for table names, filter types and flag columns.

Usage:
    from shared.config.constants import Tables, FilterType, FLAG_COLUMNS

    if row.filter_type == FilterType.FLAG:
        ...
"""

from typing import Final


# =============================================================================
# Backend Tables
# =============================================================================


class Tables:
    """Table names exposed by the hosted backend."""

    PROJECTS: Final[str] = "projects"
    RECIPES: Final[str] = "recipes"
    CHAPTERS: Final[str] = "chapters"
    CONTENTS: Final[str] = "contents"
    PAIRINGS: Final[str] = "pairings"
    CONTENT_ROWS: Final[str] = "content_rows"
    FOOTER: Final[str] = "footer"
    FOOTER_SETTINGS: Final[str] = "footer_settings"
    PAGE_SETTINGS: Final[str] = "page_settings"
    EMAIL_CAPTURE_SETTINGS: Final[str] = "email_capture_settings"
    SHOP: Final[str] = "shop"

    # Tables listed on the archive screen
    ARCHIVABLE: Final[list[str]] = [PROJECTS, RECIPES, FOOTER]


# =============================================================================
# Catalog Values
# =============================================================================


class ContentType:
    """Catalog item content types as stored by the backend."""

    FILM: Final[str] = "Film"
    TV_SHOW: Final[str] = "TV Show"
    SONG: Final[str] = "Song"
    AUDIOBOOK: Final[str] = "Audiobook"
    COMIC: Final[str] = "Comic"
    BOOK: Final[str] = "Book"

    ALL: Final[list[str]] = [FILM, TV_SHOW, SONG, AUDIOBOOK, COMIC, BOOK]
    LISTEN: Final[list[str]] = [AUDIOBOOK, SONG]


class ProjectStatus:
    """Catalog item status values."""

    RELEASED: Final[str] = "released"
    COMING_SOON: Final[str] = "coming_soon"
    WATCHED: Final[str] = "watched"
    IN_PROGRESS: Final[str] = "in_progress"
    IN_PRODUCTION: Final[str] = "in_production"


class Page:
    """Pages a content row can be shown on."""

    HOME: Final[str] = "home"
    WATCH: Final[str] = "watch"
    LISTEN: Final[str] = "listen"
    READ: Final[str] = "read"
    MY_LIST: Final[str] = "mylist"

    ALL: Final[list[str]] = [HOME, WATCH, LISTEN, READ, MY_LIST]


class FilterType:
    """Content row filter types."""

    STATUS: Final[str] = "status"
    CONTENT_TYPE: Final[str] = "content_type"
    FLAG: Final[str] = "flag"
    CUSTOM: Final[str] = "custom"
    # Legacy single-type shortcuts
    AUDIOBOOK: Final[str] = "Audiobook"
    SONG: Final[str] = "Song"
    LISTEN: Final[str] = "Listen"
    # Tag columns
    GENRE: Final[str] = "genres"
    VIBE_TAGS: Final[str] = "vibe_tags"
    FLAVOR_TAGS: Final[str] = "flavor_tags"

    TAG_TYPES: Final[list[str]] = [GENRE, VIBE_TAGS, FLAVOR_TAGS]


class PairingRef:
    """Type tags stored on each end of a pairing."""

    FILM: Final[str] = "Film"
    TV_SHOW: Final[str] = "TV Show"
    SONG: Final[str] = "Song"
    AUDIOBOOK: Final[str] = "Audiobook"
    RECIPE: Final[str] = "Recipe"

    PROJECT_REFS: Final[list[str]] = [FILM, TV_SHOW, SONG, AUDIOBOOK]


# Boolean columns on projects that drive shelf membership
FLAG_COLUMNS: Final[frozenset[str]] = frozenset({
    "in_hero_carousel",
    "in_now_playing",
    "in_coming_soon",
    "in_latest_releases",
})

# Project columns written as arrays; content_type is a scalar column
LIST_COLUMNS: Final[frozenset[str]] = frozenset({
    "status",
    "genres",
    "vibe_tags",
    "flavor_tags",
})

# Flag values that are an alias for status membership rather than a column
COMING_SOON_ALIAS: Final[str] = ProjectStatus.COMING_SOON


# =============================================================================
# Query Defaults
# =============================================================================

DEFAULT_SEARCH_FIELDS: Final[tuple[str, ...]] = ("title", "platform", "notes")

# Columns hidden when inferring display fields from fetched rows
HIDDEN_DISPLAY_FIELDS: Final[frozenset[str]] = frozenset({
    "id",
    "poster_url",
    "preview_url",
    "platform_url",
    "order_index",
    "created_at",
    "updated_at",
})

DEFAULT_DISPLAY_FIELDS: Final[tuple[str, ...]] = (
    "title",
    "content_type",
    "status",
    "release_year",
    "platform",
    "vibe_tags",
)

# Words used to infer a row's filter type from its filter value
CONTENT_TYPE_KEYWORDS: Final[tuple[str, ...]] = (
    "film", "tv show", "song", "audiobook", "episode", "season",
)
STATUS_KEYWORDS: Final[frozenset[str]] = frozenset({
    "released", "draft", "archived", "scheduled",
})

# Key under which the admin session is persisted
SESSION_STORAGE_KEY: Final[str] = "admin-auth-storage"
