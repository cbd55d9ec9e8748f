"""Resolved party identity."""

from __future__ import annotations

from enum import StrEnum

from partysync.models._base import PartySyncModel


class IdentityKind(StrEnum):
    NONE = "none"
    UNCHANGED = "unchanged"
    LEADER_CHANGED = "leader_changed"
    FOREIGN_PARTY = "foreign_party"


class PartyIdentity(PartySyncModel):
    """Outcome of a party identity resolution.

    * ``NONE``: no detectable party.
    * ``UNCHANGED``: leader-derived identity, canonical-shaped.
    * ``LEADER_CHANGED``: the leader differs from the previously cached
      leader; every observer should resynchronize.
    * ``FOREIGN_PARTY``: the leader-derived name is not canonical-shaped,
      so the local actor is presumed to be in a hub not managed here.
    """

    kind: IdentityKind = IdentityKind.NONE
    name: str | None = None

    @classmethod
    def none(cls) -> PartyIdentity:
        return cls()

    @classmethod
    def unchanged(cls, name: str) -> PartyIdentity:
        return cls(kind=IdentityKind.UNCHANGED, name=name)

    @classmethod
    def leader_changed(cls, name: str) -> PartyIdentity:
        return cls(kind=IdentityKind.LEADER_CHANGED, name=name)

    @classmethod
    def foreign(cls, name: str) -> PartyIdentity:
        return cls(kind=IdentityKind.FOREIGN_PARTY, name=name)

    @property
    def is_none(self) -> bool:
        return self.kind == IdentityKind.NONE
