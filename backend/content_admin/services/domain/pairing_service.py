"""
Pairing Service - links between catalog items and recipes.

Pairings are undirected: either end may be the recipe. Every traversal
resolves the far end with other_endpoint().

Usage:
    from content_admin.services.domain import PairingService

    service = PairingService(backend)
    projects = await service.search_projects_by_inherited_tag("cozy")
    recipes = await service.search_recipes_by_inherited_tag("spicy")
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from content_admin.models import Endpoint, Pairing, Project, Recipe, other_endpoint
from content_admin.repositories import (
    get_pairing_repository,
    get_project_repository,
    get_recipe_repository,
)
from content_admin.services.crud import (
    CRUDWrapper,
    EqFilter,
    GetTableOpts,
    InFilter,
    Response,
)
from content_admin.services.crud.query import quote_value
from shared.config.logging import get_logger
from shared.infrastructure.backend import BackendClient
from shared.utils.exceptions import DuplicatePairingError, SelfPairingError, ValidationError
from shared.utils.validators import to_string_list

logger = get_logger(__name__)

NOT_DELETED = EqFilter("is_deleted", False)


@dataclass
class PairedItems:
    projects: list[Project] = field(default_factory=list)
    recipes: list[Recipe] = field(default_factory=list)


@dataclass(frozen=True)
class _Side:
    """One entity kind taking part in tag inheritance."""

    repo: CRUDWrapper
    tag_column: str
    owns: Callable[[Endpoint], bool]


def _is_project_end(endpoint: Endpoint) -> bool:
    return not endpoint.is_recipe


def _is_recipe_end(endpoint: Endpoint) -> bool:
    return endpoint.is_recipe


def _dedupe_by_id(rows: Iterable[Any]) -> list[Any]:
    """First occurrence of each id wins, order preserved."""
    seen: set[str] = set()
    result = []
    for row in rows:
        key = str(row.id)
        if key not in seen:
            seen.add(key)
            result.append(row)
    return result


def _has_tag(row: Any, column: str, needle: str) -> bool:
    """Case-insensitive substring match over the tags stored in column."""
    return any(needle in tag.lower() for tag in to_string_list(row.get(column)))


class PairingService:
    """
    Service for pairing management and tag inheritance search.

    Business rules:
    - An entity cannot be paired with itself
    - Two entities are paired at most once, in either orientation
    - Removing a pairing archives it
    - Tag search failures raise instead of returning partial results
    """

    def __init__(self, backend: BackendClient):
        self.pairings = get_pairing_repository(backend)
        self.projects = get_project_repository(backend)
        self.recipes = get_recipe_repository(backend)

        self._project_side = _Side(self.projects, "vibe_tags", _is_project_end)
        self._recipe_side = _Side(self.recipes, "flavor_tags", _is_recipe_end)

    # =========================================================================
    # Query Methods
    # =========================================================================

    async def list_pairings(self, endpoint: Endpoint) -> Response[list[Pairing]]:
        """Live pairings touching endpoint, in either orientation."""
        response = await self.pairings.get(
            GetTableOpts(
                eq=[NOT_DELETED],
                or_=f"source_id.eq.{quote_value(endpoint.id)},target_id.eq.{quote_value(endpoint.id)}",
                sort="created_at",
                sort_by="asc",
            )
        )
        if not response.ok:
            return response
        touching = [p for p in response.as_list() if other_endpoint(p, endpoint) is not None]
        return Response.success(touching)

    async def paired_items(self, endpoint: Endpoint) -> PairedItems:
        """
        Live entities paired with endpoint, split by kind.

        Raises:
            BackendAPIError: If any lookup fails.
        """
        pairings = (await self.list_pairings(endpoint)).unwrap() or []
        far_ends = [other_endpoint(p, endpoint) for p in pairings]

        project_ids = [e.id for e in far_ends if e is not None and not e.is_recipe]
        recipe_ids = [e.id for e in far_ends if e is not None and e.is_recipe]

        return PairedItems(
            projects=await self._fetch_live(self.projects, project_ids),
            recipes=await self._fetch_live(self.recipes, recipe_ids),
        )

    async def search_projects_by_inherited_tag(self, tag: str) -> list[Project]:
        """
        Projects carrying tag directly or through a pairing.

        Direct matches come first, then projects on pairings tagged with
        tag, then projects paired with a recipe or project tagged with it.

        Raises:
            BackendAPIError: If any lookup fails.
        """
        return await self._search_by_inherited_tag(tag, own=self._project_side, other=self._recipe_side)

    async def search_recipes_by_inherited_tag(self, tag: str) -> list[Recipe]:
        """
        Recipes carrying tag directly or through a pairing.

        Mirror of search_projects_by_inherited_tag() with flavor_tags.

        Raises:
            BackendAPIError: If any lookup fails.
        """
        return await self._search_by_inherited_tag(tag, own=self._recipe_side, other=self._project_side)

    # =========================================================================
    # Command Methods
    # =========================================================================

    async def create_pairing(
        self,
        source: Endpoint,
        target: Endpoint,
        *,
        vibe_tags: list[str] | None = None,
        flavor_tags: list[str] | None = None,
    ) -> Response[Pairing]:
        """Pair two entities. Self-pairing and duplicates are validation errors."""
        existing = await self.list_pairings(source)
        if not existing.ok:
            return existing

        try:
            self._ensure_pairable(source, target, existing.as_list())
        except ValidationError as exc:
            return Response.validation_error(exc.detail)

        payload: dict[str, Any] = {
            "source_id": source.id,
            "source_ref": source.ref,
            "target_id": target.id,
            "target_ref": target.ref,
        }
        if vibe_tags:
            payload["vibe_tags"] = vibe_tags
        if flavor_tags:
            payload["flavor_tags"] = flavor_tags
        return await self.pairings.create_one(payload)

    async def remove_pairing(self, pairing_id: str) -> Response[Pairing]:
        return await self.pairings.toggle_soft_delete(pairing_id, True)

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _ensure_pairable(source: Endpoint, target: Endpoint, existing: list[Pairing]) -> None:
        if source.same_entity(target):
            raise SelfPairingError(source.id)
        if any(p.connects(source, target) for p in existing):
            raise DuplicatePairingError(source.id, target.id)

    async def _search_by_inherited_tag(self, tag: str, *, own: _Side, other: _Side) -> list[Any]:
        needle = tag.strip().lower()
        live = GetTableOpts(eq=[NOT_DELETED])

        # Tag columns may be arrays, so matching happens here rather than with ilike
        own_response, other_response, pairing_response = await asyncio.gather(
            own.repo.get(live),
            other.repo.get(live),
            self.pairings.get(live),
        )
        own_rows = own_response.unwrap() or []
        other_rows = other_response.unwrap() or []
        pairings = pairing_response.unwrap() or []

        direct = [row for row in own_rows if _has_tag(row, own.tag_column, needle)]

        # Tagged entities of either kind lend the tag to whatever they are paired with
        carriers = [
            (own.owns, {str(row.id) for row in direct}),
            (other.owns, {str(row.id) for row in other_rows if _has_tag(row, other.tag_column, needle)}),
        ]

        inherited_ids: list[str] = []
        for pairing in pairings:
            if _has_tag(pairing, own.tag_column, needle):
                inherited_ids.extend(str(end.id) for end in pairing.endpoints() if own.owns(end))
            for end in pairing.endpoints():
                if not any(owns(end) and str(end.id) in ids for owns, ids in carriers):
                    continue
                far = other_endpoint(pairing, end)
                if far is not None and own.owns(far):
                    inherited_ids.append(str(far.id))

        by_id = {str(row.id): row for row in own_rows}
        inherited = [by_id[i] for i in inherited_ids if i in by_id]
        result = _dedupe_by_id([*direct, *inherited])

        logger.debug(
            "Inherited tag search",
            table=own.repo.table_name,
            tag=tag,
            direct=len(direct),
            total=len(result),
        )
        return result

    @staticmethod
    async def _fetch_live(repo: CRUDWrapper, ids: Iterable[str]) -> list[Any]:
        """Live rows with the given ids; no request when ids is empty."""
        unique_ids = list(dict.fromkeys(str(i) for i in ids))
        if not unique_ids:
            return []
        response = await repo.get(GetTableOpts(eq=[NOT_DELETED], in_value=InFilter("id", unique_ids)))
        return response.unwrap() or []
