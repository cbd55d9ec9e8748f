"""Group transport wrapper that normalizes host failures."""

from __future__ import annotations

import logging

from partysync.exceptions import TransportError
from partysync.host import GroupTransport

_logger = logging.getLogger(__name__)


class GuardedTransport:
    """Issues join/leave calls and maps any host failure to :class:`TransportError`.

    Calls are fire-once: there is no retry, a failure is terminal for
    that attempt.
    """

    def __init__(self, transport: GroupTransport) -> None:
        self._transport = transport

    async def _change_group(self, name: str | None) -> None:
        _logger.debug("change_group(%r)", name)
        try:
            await self._transport.change_group(name)
        except Exception as exc:
            action = f"join party hub {name}" if name is not None else "leave party hub"
            raise TransportError(f"Failed to {action}: {exc}", target=name) from exc

    async def join(self, name: str) -> None:
        await self._change_group(name)

    async def leave(self) -> None:
        await self._change_group(None)
