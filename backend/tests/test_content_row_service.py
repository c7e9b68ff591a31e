"""
Tests for ContentRowService.

Tests cover:
- Fetching the items on a row (refinement, soft delete, max_items)
- Page listings with empty rows hidden
- Match counts and rows for an item
- Row create / update with filter type inference
"""

import pytest

from content_admin.models import ContentRow
from content_admin.services.crud import Flag
from content_admin.services.domain import ContentRowService


@pytest.fixture
def service(backend):
    return ContentRowService(backend)


@pytest.fixture
def catalog(fake_backend):
    """A small catalog covering several shelves."""
    return fake_backend.seed(
        "projects",
        {"title": "Arrival", "content_type": "Film", "status": ["released"], "in_now_playing": True, "order_index": 2},
        {"title": "Dune", "content_type": "Film", "status": ["coming_soon"], "in_now_playing": False, "order_index": 1},
        {"title": "Severance", "content_type": "TV Show", "status": ["released"], "in_now_playing": True, "order_index": 3},
        {"title": "Songbook", "content_type": "Songbook", "status": ["released"], "order_index": 4},
        {"title": "Lullaby", "content_type": "Song", "status": ["released"], "order_index": 5},
        {"title": "Old Film", "content_type": "Film", "status": ["released"], "in_now_playing": True, "is_deleted": True},
    )


def make_row(filter_type, filter_value, **extra):
    values = {
        "id": extra.pop("id", "row-1"),
        "label": extra.pop("label", "Row"),
        "page": extra.pop("page", "home"),
        "filter_type": filter_type,
        "filter_value": filter_value,
    }
    values.update(extra)
    return ContentRow(**values)


class TestFetchProjectsByContentRow:
    """Tests for ContentRowService.fetch_projects_by_content_row()"""

    @pytest.mark.asyncio
    async def test_flag_row_in_order(self, service, catalog):
        """Live items with the flag set, ordered by order_index."""
        projects = await service.fetch_projects_by_content_row(make_row("flag", "now_playing"))

        assert [p.title for p in projects] == ["Arrival", "Severance"]

    @pytest.mark.asyncio
    async def test_content_type_refined_client_side(self, service, catalog):
        """ilike pre-selects "Songbook" but refinement drops it."""
        projects = await service.fetch_projects_by_content_row(make_row("content_type", "Song"))

        assert [p.title for p in projects] == ["Lullaby"]

    @pytest.mark.asyncio
    async def test_multi_value_content_type(self, service, catalog):
        projects = await service.fetch_projects_by_content_row(make_row("content_type", "Film,TV Show"))

        assert [p.title for p in projects] == ["Dune", "Arrival", "Severance"]

    @pytest.mark.asyncio
    async def test_coming_soon_alias(self, service, catalog):
        projects = await service.fetch_projects_by_content_row(make_row("flag", "Coming Soon"))

        assert [p.title for p in projects] == ["Dune"]

    @pytest.mark.asyncio
    async def test_max_items_truncates(self, service, catalog):
        projects = await service.fetch_projects_by_content_row(make_row("status", "released", max_items=2))

        assert [p.title for p in projects] == ["Arrival", "Severance"]

    @pytest.mark.asyncio
    async def test_custom_row_is_empty_without_request(self, service, catalog, fake_backend):
        projects = await service.fetch_projects_by_content_row(make_row("custom", "anything"))

        assert projects == []
        assert fake_backend.requests == []

    @pytest.mark.asyncio
    async def test_backend_failure_yields_empty_shelf(self, service, catalog, fake_backend):
        fake_backend.fail("projects")

        assert await service.fetch_projects_by_content_row(make_row("flag", "now_playing")) == []


class TestFetchContentRowsWithProjects:
    """Tests for ContentRowService.fetch_content_rows_with_projects()"""

    @pytest.fixture
    def rows(self, fake_backend):
        return fake_backend.seed(
            "content_rows",
            {"label": "Now Playing", "page": "home", "filter_type": "flag", "filter_value": "now_playing", "order_index": 1, "is_active": True},
            {"label": "Comics", "page": "home", "filter_type": "content_type", "filter_value": "Comic", "order_index": 2, "is_active": True},
            {"label": "Hidden", "page": "home", "filter_type": "status", "filter_value": "released", "order_index": 3, "is_active": False},
            {"label": "Listen", "page": "listen", "filter_type": "Listen", "filter_value": "", "order_index": 1, "is_active": True},
        )

    @pytest.mark.asyncio
    async def test_active_rows_of_page_with_items(self, service, catalog, rows):
        """Inactive rows, other pages and empty rows are left out."""
        shelves = await service.fetch_content_rows_with_projects("home")

        assert [s.row.label for s in shelves] == ["Now Playing"]
        assert [p.title for p in shelves[0].projects] == ["Arrival", "Severance"]

    @pytest.mark.asyncio
    async def test_include_empty(self, service, catalog, rows):
        shelves = await service.fetch_content_rows_with_projects("home", include_empty=True)

        assert [s.row.label for s in shelves] == ["Now Playing", "Comics"]
        assert shelves[1].projects == []

    @pytest.mark.asyncio
    async def test_rows_failure_yields_nothing(self, service, catalog, rows, fake_backend):
        fake_backend.fail("content_rows")

        assert await service.fetch_content_rows_with_projects("home") == []


class TestListRows:
    """Tests for ContentRowService.list_rows()"""

    @pytest.mark.asyncio
    async def test_match_counts_ignore_max_items(self, service, catalog, fake_backend):
        fake_backend.seed(
            "content_rows",
            {"label": "Released", "page": "home", "filter_type": "status", "filter_value": "released", "order_index": 1, "max_items": 1},
            {"label": "Films", "page": "watch", "filter_type": "content_type", "filter_value": "Film", "order_index": 2},
        )

        listing = await service.list_rows()

        assert [(r.row.label, r.match_count) for r in listing] == [("Released", 4), ("Films", 2)]

    @pytest.mark.asyncio
    async def test_page_and_search_filters(self, service, catalog, fake_backend):
        fake_backend.seed(
            "content_rows",
            {"label": "Released", "page": "home", "filter_type": "status", "filter_value": "released", "order_index": 1},
            {"label": "Films", "page": "watch", "filter_type": "content_type", "filter_value": "Film", "order_index": 2},
            {"label": "Shows", "page": "watch", "filter_type": "content_type", "filter_value": "TV Show", "order_index": 3},
        )

        listing = await service.list_rows(page="watch", search="film")

        assert [r.row.label for r in listing] == ["Films"]


class TestRowsForItem:
    """Tests for ContentRowService.rows_for_item()"""

    @pytest.mark.asyncio
    async def test_rows_claiming_an_item(self, service, fake_backend):
        fake_backend.seed(
            "content_rows",
            {"label": "Now Playing", "page": "home", "filter_type": "flag", "filter_value": "now_playing", "order_index": 1, "is_active": True},
            {"label": "Films", "page": "watch", "filter_type": "content_type", "filter_value": "Film", "order_index": 2, "is_active": True},
            {"label": "Songs", "page": "listen", "filter_type": "Song", "filter_value": "", "order_index": 3, "is_active": True},
        )
        item = {"content_type": "Film", "in_now_playing": True}

        assert [r.label for r in await service.rows_for_item(item)] == ["Now Playing", "Films"]
        assert [r.label for r in await service.rows_for_item(item, page="watch")] == ["Films"]


class TestRowCommands:
    """Tests for row create / update / toggle / delete."""

    @pytest.mark.asyncio
    async def test_create_infers_filter_type(self, service, fake_backend):
        response = await service.create_row({"label": "Films", "page": "watch", "filter_value": "Film"})

        assert response.flag == Flag.SUCCESS
        assert response.data.filter_type == "content_type"

    @pytest.mark.asyncio
    async def test_explicit_filter_type_is_kept(self, service):
        response = await service.create_row(
            {"label": "Listen", "page": "listen", "filter_type": "Listen", "filter_value": "Song"}
        )

        assert response.data.filter_type == "Listen"

    @pytest.mark.asyncio
    async def test_update_reinfers_on_new_value(self, service, fake_backend):
        (row,) = fake_backend.seed(
            "content_rows",
            {"label": "X", "page": "home", "filter_type": "flag", "filter_value": "now_playing"},
        )

        response = await service.update_row(row["id"], {"filter_value": "released"})

        assert response.data.filter_type == "status"

    @pytest.mark.asyncio
    async def test_toggle_active_and_delete(self, service, fake_backend):
        (row,) = fake_backend.seed(
            "content_rows",
            {"label": "X", "page": "home", "filter_type": "flag", "filter_value": "now_playing", "is_active": True},
        )

        toggled = await service.toggle_active(ContentRow(**row))
        assert toggled.data.is_active is False

        deleted = await service.delete_row(row["id"])
        assert deleted.ok
        assert fake_backend.tables["content_rows"] == []
