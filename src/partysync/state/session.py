"""Mutable state owned by the controller and the resolver."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from partysync.models.group import GroupTarget
from partysync.models.team import TeamStatus


class ControllerPhase(StrEnum):
    IDLE = "idle"
    MONITORING = "monitoring"
    AWAITING_CONFIRMATION = "awaiting_confirmation"


class LeaderCache(BaseModel):
    """Last resolved leader. Owned exclusively by the resolver.

    ``last_checked_at`` is a monotonic timestamp in seconds, ``None``
    when the roster has never been checked. ``previous_leader_name``
    holds ``leader_name`` as it was immediately before the latest change.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    leader_name: str | None = None
    last_checked_at: float | None = None
    awaiting_refresh: bool = False
    previous_leader_name: str | None = None

    def record(self, leader_name: str | None, checked_at: float) -> None:
        if leader_name != self.leader_name:
            self.previous_leader_name = self.leader_name
            self.leader_name = leader_name
        self.last_checked_at = checked_at
        self.awaiting_refresh = False

    def clear(self) -> None:
        self.leader_name = None
        self.last_checked_at = None
        self.awaiting_refresh = False
        self.previous_leader_name = None


class SessionState(BaseModel):
    """Process-wide session state. Owned exclusively by the controller."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    phase: ControllerPhase = ControllerPhase.IDLE
    current_group: GroupTarget | None = None
    pending_join: GroupTarget | None = None
    is_in_team_context: bool = False
    suppress_notifications: bool = False
    tick_counter: int = 0
    last_status: TeamStatus | None = None

    def reset(self) -> None:
        """Clear every optional field and zero the counters."""
        self.phase = ControllerPhase.IDLE
        self.current_group = None
        self.pending_join = None
        self.is_in_team_context = False
        self.suppress_notifications = False
        self.tick_counter = 0
        self.last_status = None
