"""
Tests for PairingService.

Tests cover:
- other_endpoint resolution in both orientations
- Pairing creation guards (self, duplicate in either orientation)
- Listing pairings and paired items
- Inherited tag search for projects and recipes
"""

import pytest

from content_admin.models import Endpoint, Pairing, other_endpoint
from content_admin.services.crud import Flag
from content_admin.services.domain import PairingService
from shared.config.constants import PairingRef
from shared.utils.exceptions import BackendAPIError


@pytest.fixture
def service(backend):
    return PairingService(backend)


def pairing(source, target, **extra):
    return Pairing(
        id=extra.pop("id", "pairings-x"),
        source_id=source.id,
        source_ref=source.ref,
        target_id=target.id,
        target_ref=target.ref,
        **extra,
    )


class TestOtherEndpoint:
    """Tests for other_endpoint()"""

    def test_either_orientation(self):
        film = Endpoint("p1", PairingRef.FILM)
        recipe = Endpoint("r1", PairingRef.RECIPE)

        assert other_endpoint(pairing(film, recipe), film) == recipe
        assert other_endpoint(pairing(recipe, film), film) == recipe
        assert other_endpoint(pairing(recipe, film), recipe) == film

    def test_unrelated_endpoint(self):
        p = pairing(Endpoint("p1", PairingRef.FILM), Endpoint("r1", PairingRef.RECIPE))

        assert other_endpoint(p, Endpoint("p2", PairingRef.FILM)) is None

    def test_same_id_different_type_is_not_the_same_end(self):
        p = pairing(Endpoint("7", PairingRef.FILM), Endpoint("7", PairingRef.RECIPE))

        assert other_endpoint(p, Endpoint("7", PairingRef.RECIPE)) == Endpoint("7", PairingRef.FILM)


class TestCreatePairing:
    """Tests for PairingService.create_pairing()"""

    @pytest.mark.asyncio
    async def test_creates_pairing(self, service, fake_backend):
        response = await service.create_pairing(
            Endpoint("recipes-1", PairingRef.RECIPE),
            Endpoint("projects-1", PairingRef.FILM),
            flavor_tags=["spicy"],
        )

        assert response.flag == Flag.SUCCESS
        assert response.data.source_ref == PairingRef.RECIPE
        assert fake_backend.tables["pairings"][0]["flavor_tags"] == ["spicy"]

    @pytest.mark.asyncio
    async def test_self_pairing_rejected(self, service, fake_backend):
        film = Endpoint("projects-1", PairingRef.FILM)

        response = await service.create_pairing(film, film)

        assert response.flag == Flag.VALIDATION_ERROR
        assert fake_backend.tables["pairings"] == []

    @pytest.mark.asyncio
    async def test_duplicate_in_reverse_orientation_rejected(self, service, fake_backend):
        """An existing target->source pairing blocks source->target."""
        fake_backend.seed(
            "pairings",
            {"source_id": "projects-1", "source_ref": "Film", "target_id": "recipes-1", "target_ref": "Recipe"},
        )

        response = await service.create_pairing(
            Endpoint("recipes-1", PairingRef.RECIPE),
            Endpoint("projects-1", PairingRef.FILM),
        )

        assert response.flag == Flag.VALIDATION_ERROR
        assert response.error_message() == "Already paired"
        assert len(fake_backend.tables["pairings"]) == 1

    @pytest.mark.asyncio
    async def test_archived_pairing_does_not_block(self, service, fake_backend):
        fake_backend.seed(
            "pairings",
            {"source_id": "projects-1", "source_ref": "Film", "target_id": "recipes-1", "target_ref": "Recipe", "is_deleted": True},
        )

        response = await service.create_pairing(
            Endpoint("projects-1", PairingRef.FILM),
            Endpoint("recipes-1", PairingRef.RECIPE),
        )

        assert response.ok


class TestPairedItems:
    """Tests for list_pairings(), paired_items() and remove_pairing()"""

    @pytest.fixture
    def graph(self, fake_backend):
        projects = fake_backend.seed(
            "projects",
            {"title": "Arrival", "content_type": "Film"},
            {"title": "Severance", "content_type": "TV Show"},
            {"title": "Gone", "content_type": "Film", "is_deleted": True},
        )
        recipes = fake_backend.seed("recipes", {"title": "Ramen"}, {"title": "Tacos"})
        arrival, severance, gone = (p["id"] for p in projects)
        ramen, tacos = (r["id"] for r in recipes)
        pairings = fake_backend.seed(
            "pairings",
            {"source_id": ramen, "source_ref": "Recipe", "target_id": arrival, "target_ref": "Film"},
            {"source_id": severance, "source_ref": "TV Show", "target_id": ramen, "target_ref": "Recipe"},
            {"source_id": ramen, "source_ref": "Recipe", "target_id": gone, "target_ref": "Film"},
            {"source_id": tacos, "source_ref": "Recipe", "target_id": arrival, "target_ref": "Film"},
        )
        return {"arrival": arrival, "ramen": ramen, "tacos": tacos, "pairings": pairings}

    @pytest.mark.asyncio
    async def test_list_pairings_both_orientations(self, service, graph):
        response = await service.list_pairings(Endpoint(graph["ramen"], PairingRef.RECIPE))

        assert response.ok
        assert len(response.data) == 3

    @pytest.mark.asyncio
    async def test_paired_items_skip_deleted(self, service, graph):
        items = await service.paired_items(Endpoint(graph["ramen"], PairingRef.RECIPE))

        assert sorted(p.title for p in items.projects) == ["Arrival", "Severance"]
        assert items.recipes == []

    @pytest.mark.asyncio
    async def test_paired_recipes_of_project(self, service, graph):
        items = await service.paired_items(Endpoint(graph["arrival"], PairingRef.FILM))

        assert sorted(r.title for r in items.recipes) == ["Ramen", "Tacos"]

    @pytest.mark.asyncio
    async def test_remove_pairing_archives(self, service, graph, fake_backend):
        first = graph["pairings"][0]["id"]

        response = await service.remove_pairing(first)

        assert response.data.is_deleted is True
        remaining = await service.list_pairings(Endpoint(graph["ramen"], PairingRef.RECIPE))
        assert first not in [p.id for p in remaining.data]


class TestInheritedTagSearch:
    """Tests for the two-hop tag inheritance searches."""

    @pytest.fixture
    def tagged(self, fake_backend):
        projects = fake_backend.seed(
            "projects",
            {"title": "Hot Film", "vibe_tags": ["spicy", "bold"]},
            {"title": "Paired Film", "vibe_tags": ["calm"]},
            {"title": "Edge Film", "vibe_tags": []},
            {"title": "Unrelated", "vibe_tags": ["calm"]},
            {"title": "Archived Spicy", "vibe_tags": ["spicy"], "is_deleted": True},
        )
        recipes = fake_backend.seed(
            "recipes",
            {"title": "Chili", "flavor_tags": ["Spicy"]},
            {"title": "Salad", "flavor_tags": ["fresh"]},
            {"title": "Curry", "flavor_tags": []},
        )
        ids = {row["title"]: row["id"] for row in projects + recipes}
        fake_backend.seed(
            "pairings",
            # Film end is the source here, the recipe end the target
            {"source_id": ids["Paired Film"], "source_ref": "Film", "target_id": ids["Chili"], "target_ref": "Recipe"},
            # Pairing tagged directly
            {"source_id": ids["Salad"], "source_ref": "Recipe", "target_id": ids["Edge Film"], "target_ref": "Film", "vibe_tags": ["spicy"]},
            # Recipe inherits from a tagged project
            {"source_id": ids["Curry"], "source_ref": "Recipe", "target_id": ids["Hot Film"], "target_ref": "Film"},
        )
        return ids

    @pytest.mark.asyncio
    async def test_projects_direct_paired_and_pairing_tagged(self, service, tagged):
        """Direct matches first; unrelated and archived items are excluded."""
        results = await service.search_projects_by_inherited_tag("  SPICY ")
        titles = [p.title for p in results]

        assert titles[0] == "Hot Film"
        assert sorted(titles) == ["Edge Film", "Hot Film", "Paired Film"]

    @pytest.mark.asyncio
    async def test_recipes_direct_and_inherited(self, service, tagged):
        results = await service.search_recipes_by_inherited_tag("spicy")
        titles = [r.title for r in results]

        assert titles[0] == "Chili"
        assert sorted(titles) == ["Chili", "Curry"]

    @pytest.mark.asyncio
    async def test_results_are_unique(self, service, tagged, fake_backend):
        """An item found twice is returned once."""
        fake_backend.seed(
            "pairings",
            {"source_id": tagged["Chili"], "source_ref": "Recipe", "target_id": tagged["Hot Film"], "target_ref": "Film"},
        )

        results = await service.search_projects_by_inherited_tag("spicy")

        assert [p.title for p in results].count("Hot Film") == 1

    @pytest.mark.asyncio
    async def test_no_matches(self, service, tagged):
        assert await service.search_projects_by_inherited_tag("sweet") == []

    @pytest.mark.asyncio
    async def test_backend_failure_raises(self, service, tagged, fake_backend):
        fake_backend.fail("pairings")

        with pytest.raises(BackendAPIError):
            await service.search_projects_by_inherited_tag("spicy")

    @pytest.mark.asyncio
    async def test_project_paired_with_tagged_project(self, service, fake_backend):
        """A project inherits the tag from a project it is paired with."""
        projects = fake_backend.seed(
            "projects",
            {"title": "Spicy Film", "content_type": "Film", "vibe_tags": ["spicy"]},
            {"title": "Companion Song", "content_type": "Song", "vibe_tags": ["calm"]},
        )
        film, song = (p["id"] for p in projects)
        fake_backend.seed(
            "pairings",
            {"source_id": film, "source_ref": "Film", "target_id": song, "target_ref": "Song"},
        )

        results = await service.search_projects_by_inherited_tag("spicy")

        assert sorted(p.title for p in results) == ["Companion Song", "Spicy Film"]
        assert results[0].title == "Spicy Film"

    @pytest.mark.asyncio
    async def test_recipe_paired_with_tagged_recipe(self, service, fake_backend):
        recipes = fake_backend.seed(
            "recipes",
            {"title": "Mole", "flavor_tags": ["smoky"]},
            {"title": "Tortillas", "flavor_tags": []},
        )
        mole, tortillas = (r["id"] for r in recipes)
        fake_backend.seed(
            "pairings",
            {"source_id": tortillas, "source_ref": "Recipe", "target_id": mole, "target_ref": "Recipe"},
        )

        results = await service.search_recipes_by_inherited_tag("Smoky")

        assert [r.title for r in results] == ["Mole", "Tortillas"]

    @pytest.mark.asyncio
    async def test_tag_columns_stored_as_strings(self, service, fake_backend):
        fake_backend.seed(
            "projects",
            {"title": "Json Tags", "vibe_tags": '["Cozy", "warm"]'},
            {"title": "Comma Tags", "vibe_tags": "bright, cozy"},
            {"title": "No Tags", "vibe_tags": None},
        )

        results = await service.search_projects_by_inherited_tag("cozy")

        assert sorted(p.title for p in results) == ["Comma Tags", "Json Tags"]
