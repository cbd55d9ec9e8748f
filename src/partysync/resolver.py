"""Party Identity Resolver.

Decides, from the cached leader, the freshness window and the current
roster display, which party hub the raid team maps to.

The roster display is updated by the host some time after the team
fields change, so a freshly observed transition marks the cache as
``awaiting_refresh``: until a forced resolve re-reads the roster, callers
get the last known identity instead of a half-updated one.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from partysync._constants import ROSTER_WIDGET_ID
from partysync.config import PartySyncConfig
from partysync.exceptions import RosterParseError
from partysync.host import TeamHost
from partysync.leader import leader_from_snapshot
from partysync.models.group import canonical_group_name, is_canonical
from partysync.models.identity import PartyIdentity
from partysync.models.roster import RosterSnapshot
from partysync.state.policy import is_fresh
from partysync.state.session import LeaderCache

_logger = logging.getLogger(__name__)


class PartyIdentityResolver:
    """Resolves the current :class:`PartyIdentity` and owns the leader cache."""

    def __init__(
        self,
        host: TeamHost,
        config: PartySyncConfig,
        *,
        clock: Callable[[], float] = time.monotonic,
        widget_id: str = ROSTER_WIDGET_ID,
    ) -> None:
        self._host = host
        self._ttl = config.leader_cache_ttl
        self._clock = clock
        self._widget_id = widget_id
        self._cache = LeaderCache()

    @property
    def cache(self) -> LeaderCache:
        """A copy of the leader cache, for inspection."""
        return self._cache.model_copy()

    def current_leader(self) -> str | None:
        return self._cache.leader_name

    def mark_awaiting_refresh(self) -> None:
        """A relevant transition was observed; the display may be stale."""
        self._cache.awaiting_refresh = True
        self._cache.last_checked_at = self._clock()

    def reset(self) -> None:
        self._cache.clear()

    def _classify(self, leader_name: str) -> PartyIdentity:
        try:
            world_id = self._host.current_world_id()
        except Exception as exc:
            _logger.error("Error reading current world: %s", exc)
            return PartyIdentity.none()
        group_name = canonical_group_name(world_id, leader_name)
        if is_canonical(group_name):
            _logger.debug("Expected party hub '%s' is canonical", group_name)
            return PartyIdentity.unchanged(leader_name)
        _logger.info("Non-canonical party hub '%s' - assuming a custom party hub", group_name)
        return PartyIdentity.foreign(leader_name)

    def _cached_identity(self) -> PartyIdentity:
        leader_name = self._cache.leader_name
        if leader_name is None:
            return PartyIdentity.none()
        return self._classify(leader_name)

    def _read_roster(self) -> RosterSnapshot:
        try:
            text = self._host.read_display_text(self._widget_id)
        except Exception as exc:
            raise RosterParseError(f"Could not read roster display: {exc}") from exc
        if text is None:
            return RosterSnapshot()
        return RosterSnapshot.from_text(text)

    def resolve(self, *, force_refresh: bool = False) -> PartyIdentity:
        """Resolve the party identity, re-reading the roster when needed."""
        cache = self._cache
        if not force_refresh and cache.awaiting_refresh:
            _logger.debug("Waiting for roster display update (force a refresh to check now)")
            return self._cached_identity()

        now = self._clock()
        if not force_refresh and is_fresh(last_checked_at=cache.last_checked_at, now=now, ttl=self._ttl):
            _logger.debug("Using cached party leader: %r", cache.leader_name)
            return self._cached_identity()

        try:
            roster = self._read_roster()
        except RosterParseError as exc:
            _logger.error("Error getting current party identity: %s", exc)
            return PartyIdentity.none()

        if roster.is_empty:
            if cache.leader_name is None:
                cache.record(None, now)
                _logger.debug("No party detected")
            else:
                _logger.debug("Roster display shows empty team or is still loading")
            return PartyIdentity.none()

        leader_name = leader_from_snapshot(roster)
        if leader_name is None:
            return PartyIdentity.none()

        previous = cache.leader_name
        cache.record(leader_name, now)
        if previous is not None and previous != leader_name:
            _logger.info("Team leader changed from '%s' to '%s'", previous, leader_name)
            return PartyIdentity.leader_changed(leader_name)

        _logger.debug("Party leader detected: '%s'", leader_name)
        return self._classify(leader_name)
