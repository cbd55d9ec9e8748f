"""Party hub names."""

from __future__ import annotations

from pydantic import computed_field, field_validator

from partysync._constants import CANONICAL_GROUP_PATTERN
from partysync.models._base import PartySyncModel


def is_canonical(name: str | None) -> bool:
    """Return ``True`` when *name* has the ``<world><LEADER>`` shape.

    Example: ``416JOHNCENA`` is canonical, ``my hub`` is not.
    """
    if not name or len(name) < 4:
        return False
    return CANONICAL_GROUP_PATTERN.match(name) is not None


def canonical_group_name(world_id: int, leader_name: str) -> str:
    """Build the party hub name for a leader on a world."""
    return f"{world_id}{leader_name.upper()}"


class GroupTarget(PartySyncModel):
    """A party hub the local actor is in, or is about to join."""

    name: str

    @field_validator("name")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("group name must be non-empty")
        return value

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_canonical(self) -> bool:
        return is_canonical(self.name)

    @classmethod
    def for_leader(cls, world_id: int, leader_name: str) -> GroupTarget:
        return cls(name=canonical_group_name(world_id, leader_name))

    def matches(self, other: GroupTarget | str | None) -> bool:
        """Case-insensitive name comparison."""
        if other is None:
            return False
        other_name = other.name if isinstance(other, GroupTarget) else other
        return self.name.casefold() == other_name.casefold()
