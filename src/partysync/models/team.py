"""Team-membership signal snapshot."""

from __future__ import annotations

from pydantic import Field, computed_field

from partysync.models._base import PartySyncModel


class TeamStatus(PartySyncModel):
    """Raw team flags as polled from the host, plus the derived status.

    ``raw_flag_a`` is the team-active field and ``raw_flag_b`` the
    team-composition field. A failed poll is represented by both flags
    being ``0``.
    """

    raw_flag_a: int = Field(default=0, description="Team-active field value")
    raw_flag_b: int = Field(default=0, description="Team-composition field value")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def in_team(self) -> bool:
        return self.raw_flag_a > 0 or self.raw_flag_b > 0

    def same_flags(self, other: TeamStatus) -> bool:
        return self.raw_flag_a == other.raw_flag_a and self.raw_flag_b == other.raw_flag_b
