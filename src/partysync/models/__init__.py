"""Pydantic models for team signals, rosters, party hubs and identities."""

from partysync.models.group import GroupTarget, canonical_group_name, is_canonical
from partysync.models.identity import IdentityKind, PartyIdentity
from partysync.models.roster import RosterSnapshot
from partysync.models.team import TeamStatus

__all__ = [
    "GroupTarget",
    "IdentityKind",
    "PartyIdentity",
    "RosterSnapshot",
    "TeamStatus",
    "canonical_group_name",
    "is_canonical",
]
