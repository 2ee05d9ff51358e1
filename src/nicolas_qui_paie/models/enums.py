"""Canonical enumerations shared by models, services and API schemas."""

from __future__ import annotations

import enum


class VoteType(str, enum.Enum):
    """Direction of a vote on a proposal."""

    AGAINST = "against"
    FOR = "for"


class ProposalStatus(str, enum.Enum):
    """Lifecycle state of a proposal."""

    DRAFT = "draft"
    ACTIVE = "active"
    CLOSED = "closed"
    ARCHIVED = "archived"


class ContributionLevel(str, enum.Enum):
    """Badge tier derived from a user's reputation score.

    Members are declared from the lowest tier to the highest; ``rank`` exposes
    that order for comparisons.
    """

    PETIT_NICOLAS = "PetitNicolas"
    GROS_MOYEN_NICOLAS = "GrosMoyenNicolas"
    GROS_NICOLAS = "GrosNicolas"
    NICOLAS_SUPREME = "NicolasSupreme"

    @property
    def rank(self) -> int:
        return list(ContributionLevel).index(self)
