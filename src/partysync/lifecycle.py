"""Lifecycle Guard: leave a managed party hub on teardown."""

from __future__ import annotations

import logging

from partysync._transport import GuardedTransport
from partysync.exceptions import TransportError
from partysync.state.policy import should_leave_on_teardown
from partysync.state.session import SessionState

_logger = logging.getLogger(__name__)


class LifecycleGuard:
    """Leaves a canonical party hub when the plugin shuts down.

    Foreign (non-canonical) hubs were not created by partysync and are
    left alone.
    """

    def __init__(self, transport: GuardedTransport) -> None:
        self._transport = transport

    async def teardown(self, session: SessionState) -> bool:
        """Issue at most one leave. Returns ``True`` when a leave was attempted."""
        group = session.current_group
        if not should_leave_on_teardown(group):
            return False
        assert group is not None  # noqa: S101
        _logger.info("Leaving party hub '%s' on shutdown", group.name)
        try:
            await self._transport.leave()
        except TransportError as exc:
            _logger.error("Failed to leave party hub %s on shutdown: %s", group.name, exc)
        session.current_group = None
        return True
