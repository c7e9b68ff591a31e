"""
Pairing models.

A pairing is an edge between two entities, each end given as an
(id, type tag) endpoint. Either end may be the project or the recipe,
so traversals always go through other_endpoint() instead of assuming
an orientation.
"""

from __future__ import annotations

from typing import Any, NamedTuple

from content_admin.models.base import Base, CommonSchema, SoftDeleteMixin
from shared.config.constants import PairingRef


class Endpoint(NamedTuple):
    """One end of a pairing."""

    id: str
    ref: str | None = None

    @property
    def is_recipe(self) -> bool:
        return self.ref == PairingRef.RECIPE

    def same_entity(self, other: Endpoint) -> bool:
        """Same id, and same type tag when both are known."""
        if str(self.id) != str(other.id):
            return False
        return self.ref is None or other.ref is None or self.ref == other.ref


class PairingMetaData(Base):
    """Editable pairing columns."""

    source_id: str
    source_ref: str
    target_id: str
    target_ref: str
    vibe_tags: Any = None
    flavor_tags: Any = None


class Pairing(CommonSchema, SoftDeleteMixin, PairingMetaData):
    """A pairing as stored by the backend."""

    @property
    def source(self) -> Endpoint:
        return Endpoint(str(self.source_id), self.source_ref)

    @property
    def target(self) -> Endpoint:
        return Endpoint(str(self.target_id), self.target_ref)

    def endpoints(self) -> tuple[Endpoint, Endpoint]:
        return self.source, self.target

    def connects(self, a: Endpoint, b: Endpoint) -> bool:
        """True if this pairing links a and b in either orientation."""
        return (self.source.same_entity(a) and self.target.same_entity(b)) or (
            self.source.same_entity(b) and self.target.same_entity(a)
        )


class PairingFormData(PairingMetaData):
    pass


def other_endpoint(pairing: Pairing, known: Endpoint) -> Endpoint | None:
    """
    Resolve the far end of a pairing given one of its ends.

    Returns None when known is on neither end.
    """
    if pairing.source.same_entity(known):
        return pairing.target
    if pairing.target.same_entity(known):
        return pairing.source
    return None
