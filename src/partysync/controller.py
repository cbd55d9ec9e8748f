"""Convergence Controller.

A single serialized actor over :class:`SessionState`. Field changes,
ticks, lifecycle callbacks and the controller's own deferred joins all
arrive as :class:`HostEvent` on one queue and are handled one at a time
by one worker task, so a join or leave in flight can never interleave
with another decision.

Phases::

    IDLE --team entered--> MONITORING --transition--> AWAITING_CONFIRMATION
      ^                        ^                              |
      |                        +-------forced resolve---------+
      +------------team exited (MONITORING or AWAITING)-------+
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time

from partysync._constants import RECHECK_COUNTDOWN_TICKS
from partysync._transport import GuardedTransport
from partysync.config import PartySyncConfig
from partysync.exceptions import PartySyncError, TransportError
from partysync.host import Notifier, TeamHost
from partysync.models.group import GroupTarget, canonical_group_name
from partysync.models.identity import IdentityKind, PartyIdentity
from partysync.resolver import PartyIdentityResolver
from partysync.signals import SignalReader
from partysync.state.events import EventKind, HostEvent
from partysync.state.policy import (
    is_recheck_due,
    is_valid_world,
    should_block_join,
    should_leave_on_exit,
    ticks_until_recheck,
)
from partysync.state.session import ControllerPhase, SessionState

_logger = logging.getLogger(__name__)


class ConvergenceController:
    """Decides when the local actor joins, switches or leaves a party hub."""

    def __init__(
        self,
        config: PartySyncConfig,
        *,
        host: TeamHost,
        transport: GuardedTransport,
        notifier: Notifier,
        reader: SignalReader,
        resolver: PartyIdentityResolver,
    ) -> None:
        self._config = config
        self._host = host
        self._transport = transport
        self._notifier = notifier
        self._reader = reader
        self._resolver = resolver
        self._session = SessionState()
        self._queue: asyncio.Queue[HostEvent] = asyncio.Queue()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._worker: asyncio.Task[None] | None = None
        self._join_timers: set[asyncio.Task[None]] = set()

    @property
    def session(self) -> SessionState:
        return self._session

    @property
    def is_running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    # ------------------------------------------------------------------
    # Actor lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the worker and run the startup status check."""
        if self.is_running:
            return
        self._loop = asyncio.get_running_loop()
        self._worker = self._loop.create_task(self._run(), name="partysync-controller")

        status = self._reader.poll()
        self._session.last_status = status
        if status.in_team:
            _logger.debug("Already in a team at startup")
            self.submit(HostEvent.team_entered())

    async def stop(self) -> None:
        """Process queued events, then cancel deferred joins and stop the worker."""
        worker = self._worker
        if worker is not None:
            await self._queue.join()
        await self._cancel_join_timers()
        if worker is None:
            return
        worker.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await worker
        self._worker = None
        self._loop = None

    async def _cancel_join_timers(self) -> None:
        timers = list(self._join_timers)
        for timer in timers:
            timer.cancel()
        if timers:
            await asyncio.gather(*timers, return_exceptions=True)
        self._session.pending_join = None
        self._session.suppress_notifications = False

    def submit(self, event: HostEvent) -> None:
        """Enqueue an event. Must be called from the event loop thread."""
        self._queue.put_nowait(event)

    def submit_threadsafe(self, event: HostEvent) -> None:
        """Enqueue an event from a thread other than the event loop's."""
        loop = self._loop
        if loop is None:
            raise PartySyncError("Controller not started")
        loop.call_soon_threadsafe(self._queue.put_nowait, event)

    async def drain(self) -> None:
        """Wait until queued events and deferred joins have been processed."""
        while True:
            await self._queue.join()
            pending = [timer for timer in self._join_timers if not timer.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    async def _run(self) -> None:
        while True:
            event = await self._queue.get()
            try:
                await self._dispatch(event)
            except Exception:
                _logger.exception("Unhandled error while processing %s event", event.kind)
            finally:
                self._queue.task_done()

    async def _dispatch(self, event: HostEvent) -> None:
        if event.kind == EventKind.FIELD_CHANGED:
            assert event.field_id is not None  # noqa: S101
            await self._on_field_changed(event.field_id)
        elif event.kind == EventKind.TICK:
            await self._on_tick()
        elif event.kind == EventKind.TEAM_ENTERED:
            await self._on_team_entered()
        elif event.kind == EventKind.TEAM_EXITED:
            await self._on_team_exited()
        elif event.kind == EventKind.RESET:
            self._on_reset()
        elif event.kind == EventKind.JOIN_DUE:
            await self._on_join_due(event)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    async def _on_field_changed(self, field_id: int) -> None:
        if not self._reader.is_relevant_field(field_id):
            return

        session = self._session
        previous = session.last_status
        was_in_team = session.is_in_team_context
        status = self._reader.poll()
        transitioned = self._reader.has_transitioned(previous, status)
        session.last_status = status

        if status.in_team:
            if not was_in_team:
                _logger.debug("Team context entered via field %s", field_id)
                self._enter_team_context()
                await self._confirm()
            elif transitioned or self._reader.is_composition_field(field_id):
                _logger.debug("Team change detected via field %s", field_id)
                await self._confirm()
        elif was_in_team:
            _logger.debug("Team context exited via field %s", field_id)
            await self._exit_team_context()

    async def _on_team_entered(self) -> None:
        if self._session.is_in_team_context:
            _logger.debug("Already in team context")
            return
        self._enter_team_context()
        await self._confirm()

    async def _on_team_exited(self) -> None:
        if not self._session.is_in_team_context:
            return
        await self._exit_team_context()

    async def _on_tick(self) -> None:
        session = self._session
        if session.phase == ControllerPhase.IDLE:
            session.tick_counter = 0
            return

        session.tick_counter += 1
        interval = self._config.recheck_interval_ticks
        remaining = ticks_until_recheck(session.tick_counter, interval)
        if 0 < remaining <= RECHECK_COUNTDOWN_TICKS:
            _logger.debug("Checking party change in %s ticks", remaining)
        if not is_recheck_due(session.tick_counter, interval):
            return

        session.tick_counter = 0
        _logger.debug("Periodic party leader check")
        identity = self._resolve(force_refresh=True)
        if identity.kind == IdentityKind.LEADER_CHANGED:
            _logger.info("Leader change detected via periodic check - joining party hub for '%s'", identity.name)
            await self._apply_identity(identity)
        elif identity.name is not None:
            _logger.debug("Party leader '%s' unchanged, no action needed", identity.name)
        else:
            _logger.debug("No party leader detected (roster empty or not ready)")

    def _on_reset(self) -> None:
        _logger.info("Resetting party sync state")
        self._session.reset()
        self._resolver.reset()

    async def _on_join_due(self, event: HostEvent) -> None:
        session = self._session
        target = event.target
        assert target is not None  # noqa: S101
        if session.pending_join is None or not target.matches(session.pending_join):
            _logger.debug(
                "Discarding superseded join of party hub %s (scheduled %.2fs ago)",
                target.name,
                time.monotonic() - event.created_at,
            )
            if session.pending_join is None:
                session.suppress_notifications = False
            return

        session.pending_join = None
        previous = session.current_group
        try:
            await self._transport.join(target.name)
        except TransportError as exc:
            _logger.error("Failed to change to party hub %s: %s", target.name, exc)
            session.current_group = previous
            session.suppress_notifications = False
            return

        session.current_group = target
        _logger.info("Joined party hub: %s", target.name)
        if not event.suppress_notifications:
            self._notify(f"You have joined party hub {target.name}")
        session.suppress_notifications = False

    # ------------------------------------------------------------------
    # Team context transitions
    # ------------------------------------------------------------------

    def _enter_team_context(self) -> None:
        session = self._session
        session.is_in_team_context = True
        session.phase = ControllerPhase.MONITORING
        session.tick_counter = 0
        _logger.info(
            "Started team monitoring - checking immediately and every %s ticks",
            self._config.recheck_interval_ticks,
        )

    async def _confirm(self) -> None:
        """A relevant transition fired: the next resolve must re-read the roster."""
        self._session.phase = ControllerPhase.AWAITING_CONFIRMATION
        self._resolver.mark_awaiting_refresh()
        identity = self._resolve(force_refresh=True)
        await self._apply_identity(identity)

    async def _exit_team_context(self) -> None:
        session = self._session
        group = session.current_group
        if should_leave_on_exit(self._config, group):
            assert group is not None  # noqa: S101
            _logger.info("Leaving party hub '%s' after exiting the team", group.name)
            await self._leave(suppress=False)
        elif group is not None and self._config.auto_leave_on_exit:
            _logger.info("Staying in non-canonical party hub '%s' after exiting the team (force join disabled)", group.name)

        session.is_in_team_context = False
        session.phase = ControllerPhase.IDLE
        session.tick_counter = 0
        session.pending_join = None
        session.suppress_notifications = False
        self._resolver.reset()

    # ------------------------------------------------------------------
    # Convergence
    # ------------------------------------------------------------------

    def _resolve(self, *, force_refresh: bool) -> PartyIdentity:
        identity = self._resolver.resolve(force_refresh=force_refresh)
        if force_refresh and self._session.phase == ControllerPhase.AWAITING_CONFIRMATION:
            self._session.phase = ControllerPhase.MONITORING
        return identity

    def _local_context(self) -> tuple[int, str] | None:
        try:
            world_id = self._host.current_world_id()
            local_name = self._host.local_actor_name()
        except Exception as exc:
            _logger.warning("Cannot read local player context: %s", exc)
            return None
        if not local_name:
            _logger.warning("Cannot join party hub - local player is unknown")
            return None
        if not is_valid_world(world_id):
            _logger.warning("Cannot join party hub - invalid world: %s", world_id)
            return None
        return world_id, local_name

    async def _apply_identity(self, identity: PartyIdentity) -> None:
        context = self._local_context()
        if context is None:
            return
        world_id, local_name = context
        session = self._session

        _logger.debug(
            "Party state: tracked=%r detected=%s(%r) force_join=%s",
            session.current_group.name if session.current_group else None,
            identity.kind,
            identity.name,
            self._config.force_join_mode,
        )

        suppress = False
        if identity.kind == IdentityKind.LEADER_CHANGED:
            self._notify(f"Team refreshed - new leader: {identity.name}")
            suppress = True

        leader_name = identity.name or local_name
        if identity.name is None:
            _logger.debug("No party leader found, using local player '%s' for the hub name", local_name)

        if should_block_join(self._config, identity, session.current_group):
            suggested = canonical_group_name(world_id, leader_name)
            current = session.current_group
            if current is not None and not current.is_canonical:
                self._notify(
                    f"You are in non-canonical party hub '{current.name}'. To join raid team party hub "
                    f'"{suggested}", enable force join in settings or manually join the group'
                )
                _logger.info("Blocked - in non-canonical party hub '%s'", current.name)
            else:
                self._notify(
                    f'Party hub "{suggested}" is non-canonical. To join it, '
                    "enable force join in settings or manually join the group"
                )
                _logger.info("Blocked - leader's party hub '%s' is non-canonical", suggested)
            return

        target = GroupTarget.for_leader(world_id, leader_name)
        if target.matches(session.current_group):
            _logger.debug("Already in correct party hub: %s", target.name)
            return
        if target.matches(session.pending_join):
            _logger.debug("Join of party hub %s already scheduled", target.name)
            return

        _logger.info("Switching to party hub: %s", target.name)
        if session.current_group is not None:
            await self._leave(suppress=suppress)
        self._schedule_join(target, suppress=suppress)

    def _schedule_join(self, target: GroupTarget, *, suppress: bool) -> None:
        session = self._session
        session.pending_join = target
        session.suppress_notifications = suppress
        event = HostEvent.join_due(target, suppress_notifications=suppress)

        delay = self._config.join_grace_delay
        if delay <= 0:
            self.submit(event)
            return
        loop = self._loop or asyncio.get_running_loop()
        timer = loop.create_task(self._submit_later(event, delay))
        self._join_timers.add(timer)
        timer.add_done_callback(self._join_timers.discard)

    async def _submit_later(self, event: HostEvent, delay: float) -> None:
        await asyncio.sleep(delay)
        self.submit(event)

    async def _leave(self, *, suppress: bool) -> None:
        session = self._session
        group = session.current_group
        if group is None:
            return
        _logger.info("Leaving party hub: %s", group.name)
        try:
            await self._transport.leave()
        except TransportError as exc:
            _logger.error("Failed to leave party hub %s: %s", group.name, exc)
        else:
            if not suppress:
                self._notify("You have left the party")
        session.current_group = None

    def _notify(self, message: str) -> None:
        if not self._config.enable_notifications:
            return
        try:
            self._notifier.emit_message(f"{message}.")
        except Exception:
            _logger.debug("Notifier failed", exc_info=True)
