"""Leader Extractor: the first roster slot names the party hub."""

from __future__ import annotations

import logging

from partysync._constants import EMPTY_SLOT, LEADER_NAME_MAX_LENGTH, LEADER_NAME_MIN_LENGTH
from partysync.exceptions import InvalidLeaderNameError, RosterParseError
from partysync.models.roster import RosterSnapshot

_logger = logging.getLogger(__name__)


def validate_leader_name(candidate: str) -> str:
    """Return the trimmed leader name or raise :class:`InvalidLeaderNameError`."""
    name = candidate.strip()
    if not name or name == EMPTY_SLOT:
        raise InvalidLeaderNameError("Leader slot is empty", candidate=candidate)
    if not LEADER_NAME_MIN_LENGTH <= len(name) <= LEADER_NAME_MAX_LENGTH:
        raise InvalidLeaderNameError(
            f"Leader name must be {LEADER_NAME_MIN_LENGTH}-{LEADER_NAME_MAX_LENGTH} characters, got {len(name)}",
            candidate=candidate,
        )
    return name


def leader_from_snapshot(roster: RosterSnapshot) -> str | None:
    """Leader of an already parsed roster, or ``None``.

    Invalid candidates are treated as transient and logged as a warning.
    """
    if roster.is_empty:
        return None
    candidate = roster.leader_slot
    if candidate is None:
        return None
    try:
        return validate_leader_name(candidate)
    except InvalidLeaderNameError as exc:
        _logger.warning("Invalid leader name %r: %s", exc.candidate, exc)
        return None


def extract_leader(roster_text: str | None) -> str | None:
    """Return the team leader named by *roster_text*, or ``None``.

    Missing, blank and all-placeholder rosters yield ``None``.
    """
    try:
        roster = RosterSnapshot.from_text(roster_text)
    except RosterParseError as exc:
        _logger.debug("No roster yet: %s", exc)
        return None
    return leader_from_snapshot(roster)
