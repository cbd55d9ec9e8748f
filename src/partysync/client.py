"""High-level facade wiring the party sync components to a host."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

from partysync._transport import GuardedTransport
from partysync.config import PartySyncConfig
from partysync.controller import ConvergenceController
from partysync.exceptions import PartySyncError
from partysync.host import GroupTransport, Notifier, TeamHost
from partysync.lifecycle import LifecycleGuard
from partysync.models.group import GroupTarget
from partysync.resolver import PartyIdentityResolver
from partysync.signals import SignalReader
from partysync.state.events import HostEvent
from partysync.state.session import SessionState

_logger = logging.getLogger(__name__)


class PartySync:
    """Keeps the local player in the raid team's party hub.

    Usage::

        async with PartySync(config, host=host, transport=party, notifier=chat) as sync:
            sync.on_field_changed(6441)
            sync.on_tick()

    The ``on_*`` callbacks never block: they enqueue an event for the
    controller and return immediately. Call them from the event loop
    thread, or pass ``threadsafe=True`` from any other thread.
    """

    def __init__(
        self,
        config: PartySyncConfig | None = None,
        *,
        host: TeamHost,
        transport: GroupTransport,
        notifier: Notifier,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config or PartySyncConfig()
        guarded = GuardedTransport(transport)
        self._reader = SignalReader(host, self._config)
        self._resolver = PartyIdentityResolver(host, self._config, clock=clock)
        self._controller = ConvergenceController(
            self._config,
            host=host,
            transport=guarded,
            notifier=notifier,
            reader=self._reader,
            resolver=self._resolver,
        )
        self._guard = LifecycleGuard(guarded)

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> PartySync:
        await self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop()

    async def start(self) -> None:
        _logger.info("Party sync started")
        self._controller.start()

    async def stop(self) -> None:
        """Stop processing events and leave a managed party hub."""
        if not self._controller.is_running:
            return
        await self._controller.stop()
        await self._guard.teardown(self._controller.session)
        _logger.info("Party sync stopped")

    async def drain(self) -> None:
        """Wait until every submitted event has been fully processed."""
        await self._controller.drain()

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def config(self) -> PartySyncConfig:
        return self._config

    @property
    def session(self) -> SessionState:
        """A copy of the current session state."""
        return self._controller.session.model_copy(deep=True)

    @property
    def current_group(self) -> GroupTarget | None:
        return self._controller.session.current_group

    # ------------------------------------------------------------------
    # Host callbacks
    # ------------------------------------------------------------------

    def _submit(self, event: HostEvent, threadsafe: bool) -> None:
        if not self._controller.is_running:
            raise PartySyncError("PartySync not started. Use 'async with PartySync(...) as sync:'")
        if threadsafe:
            self._controller.submit_threadsafe(event)
        else:
            self._controller.submit(event)

    def on_field_changed(self, field_id: int, *, threadsafe: bool = False) -> None:
        self._submit(HostEvent.field_changed(field_id), threadsafe)

    def on_tick(self, *, threadsafe: bool = False) -> None:
        self._submit(HostEvent.tick(), threadsafe)

    def on_team_context_entered(self, *, threadsafe: bool = False) -> None:
        self._submit(HostEvent.team_entered(), threadsafe)

    def on_team_context_exited(self, *, threadsafe: bool = False) -> None:
        self._submit(HostEvent.team_exited(), threadsafe)

    def on_reset(self, *, threadsafe: bool = False) -> None:
        """Logout or world change."""
        self._submit(HostEvent.reset(), threadsafe)
