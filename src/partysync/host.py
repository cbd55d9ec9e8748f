"""Structural interfaces for the host client runtime.

The host owns the game client, the roster widget, the party service and
the chat box. partysync only consumes these contracts, which keeps the
production integration concrete and makes it easy to pass test doubles.
"""

from __future__ import annotations

from typing import Protocol


class TeamHost(Protocol):
    """Read-only view of the host client state."""

    def poll_field(self, field_id: int) -> int:
        """Current value of a host field (varbit). May raise on failure."""
        ...

    def read_display_text(self, widget_id: str) -> str | None:
        """Text of a display widget, or ``None`` when hidden or absent."""
        ...

    def current_world_id(self) -> int:
        ...

    def local_actor_name(self) -> str | None:
        ...


class GroupTransport(Protocol):
    """Creates, joins or leaves a named party hub."""

    async def change_group(self, name: str | None) -> None:
        """Join ``name``, or leave the current group when ``name`` is ``None``.

        Failures are reported by raising.
        """
        ...


class Notifier(Protocol):
    def emit_message(self, text: str) -> None:
        ...
