"""Normalized host events.

Every host trigger (field changes, ticks, lifecycle callbacks) and the
controller's own deferred joins are converted into these events and fed
through a single queue, so they are processed strictly one at a time.
"""

from __future__ import annotations

import time
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from partysync.models.group import GroupTarget


class EventKind(StrEnum):
    FIELD_CHANGED = "field_changed"
    TICK = "tick"
    TEAM_ENTERED = "team_entered"
    TEAM_EXITED = "team_exited"
    RESET = "reset"
    JOIN_DUE = "join_due"


class HostEvent(BaseModel):
    """A single input to the convergence controller."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: EventKind
    field_id: int | None = Field(default=None, description="Changed host field, for FIELD_CHANGED")
    target: GroupTarget | None = Field(default=None, description="Deferred join target, for JOIN_DUE")
    suppress_notifications: bool = False
    created_at: float = Field(default_factory=time.monotonic)

    @model_validator(mode="after")
    def _check_payload(self) -> HostEvent:
        if self.kind == EventKind.FIELD_CHANGED and self.field_id is None:
            raise ValueError("FIELD_CHANGED events require field_id")
        if self.kind == EventKind.JOIN_DUE and self.target is None:
            raise ValueError("JOIN_DUE events require target")
        return self

    @classmethod
    def field_changed(cls, field_id: int) -> HostEvent:
        return cls(kind=EventKind.FIELD_CHANGED, field_id=field_id)

    @classmethod
    def tick(cls) -> HostEvent:
        return cls(kind=EventKind.TICK)

    @classmethod
    def team_entered(cls) -> HostEvent:
        return cls(kind=EventKind.TEAM_ENTERED)

    @classmethod
    def team_exited(cls) -> HostEvent:
        return cls(kind=EventKind.TEAM_EXITED)

    @classmethod
    def reset(cls) -> HostEvent:
        return cls(kind=EventKind.RESET)

    @classmethod
    def join_due(cls, target: GroupTarget, *, suppress_notifications: bool = False) -> HostEvent:
        return cls(kind=EventKind.JOIN_DUE, target=target, suppress_notifications=suppress_notifications)
