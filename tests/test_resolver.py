from __future__ import annotations

import logging

import pytest

from partysync.config import PartySyncConfig
from partysync.models.group import canonical_group_name, is_canonical
from partysync.models.identity import IdentityKind, PartyIdentity
from partysync.resolver import PartyIdentityResolver


def _roster(*names: str) -> str:
    return "<br>".join(list(names) + ["-"] * (5 - len(names)))


@pytest.fixture
def resolver(host, clock) -> PartyIdentityResolver:
    return PartyIdentityResolver(host, PartySyncConfig(), clock=clock)


def test_fresh_roster_resolves_canonical_leader(host, resolver: PartyIdentityResolver) -> None:
    host.world_id = 416
    host.roster_text = "JOHNCENA<br>-<br>-<br>-<br>-"

    identity = resolver.resolve(force_refresh=True)

    assert identity == PartyIdentity.unchanged("JOHNCENA")
    assert canonical_group_name(host.world_id, identity.name) == "416JOHNCENA"
    assert is_canonical("416JOHNCENA")


def test_leader_change_detected(host, resolver: PartyIdentityResolver) -> None:
    host.roster_text = _roster("ALICE", "Bob")
    resolver.resolve(force_refresh=True)

    host.roster_text = _roster("BOB", "ALICE")
    identity = resolver.resolve(force_refresh=True)

    assert identity == PartyIdentity.leader_changed("BOB")
    assert resolver.cache.leader_name == "BOB"
    assert resolver.cache.previous_leader_name == "ALICE"


def test_same_leader_is_unchanged(host, resolver: PartyIdentityResolver) -> None:
    host.roster_text = _roster("ALICE")
    resolver.resolve(force_refresh=True)
    host.roster_text = _roster("ALICE", "Bob")

    assert resolver.resolve(force_refresh=True) == PartyIdentity.unchanged("ALICE")
    assert resolver.cache.previous_leader_name is None


def test_cached_within_staleness_window(host, clock, resolver: PartyIdentityResolver) -> None:
    host.roster_text = _roster("ALICE")
    resolver.resolve(force_refresh=True)
    checked_at = resolver.cache.last_checked_at
    clock.advance(5)

    first = resolver.resolve()
    second = resolver.resolve()

    assert first == second == PartyIdentity.unchanged("ALICE")
    assert resolver.cache.last_checked_at == checked_at
    assert host.roster_reads == 1


def test_stale_cache_rereads_roster(host, clock, resolver: PartyIdentityResolver) -> None:
    host.roster_text = _roster("ALICE")
    resolver.resolve(force_refresh=True)
    clock.advance(10.5)
    host.roster_text = _roster("BOB")

    assert resolver.resolve() == PartyIdentity.leader_changed("BOB")
    assert host.roster_reads == 2


def test_awaiting_refresh_returns_cached_identity_until_forced(host, clock, resolver: PartyIdentityResolver) -> None:
    host.roster_text = _roster("ALICE")
    resolver.resolve(force_refresh=True)
    resolver.mark_awaiting_refresh()
    host.roster_text = _roster("BOB")
    clock.advance(60)

    assert resolver.resolve() == PartyIdentity.unchanged("ALICE")
    assert host.roster_reads == 1

    assert resolver.resolve(force_refresh=True) == PartyIdentity.leader_changed("BOB")
    assert resolver.cache.awaiting_refresh is False


def test_empty_roster_keeps_cached_leader(host, clock, resolver: PartyIdentityResolver) -> None:
    host.roster_text = _roster("ALICE")
    resolver.resolve(force_refresh=True)
    checked_at = resolver.cache.last_checked_at
    clock.advance(1)
    host.roster_text = "-<br>-<br>-<br>-<br>-"

    assert resolver.resolve(force_refresh=True).is_none
    assert resolver.cache.leader_name == "ALICE"
    assert resolver.cache.last_checked_at == checked_at


def test_empty_roster_without_cache_is_confirmed_no_party(host, clock, resolver: PartyIdentityResolver) -> None:
    host.roster_text = None

    assert resolver.resolve(force_refresh=True).is_none
    assert resolver.cache.leader_name is None
    assert resolver.cache.last_checked_at == clock.now

    # Confirmed state is cached like any other result.
    assert resolver.resolve().is_none
    assert host.roster_reads == 1


def test_read_failure_does_not_touch_cache(
    host, clock, resolver: PartyIdentityResolver, caplog: pytest.LogCaptureFixture
) -> None:
    host.roster_text = _roster("ALICE")
    resolver.resolve(force_refresh=True)
    before = resolver.cache
    clock.advance(1)
    host.fail_roster = True

    with caplog.at_level(logging.ERROR, logger="partysync.resolver"):
        identity = resolver.resolve(force_refresh=True)

    assert identity.is_none
    assert resolver.cache == before
    assert "Error getting current party identity" in caplog.text


def test_invalid_leader_does_not_touch_cache(host, resolver: PartyIdentityResolver) -> None:
    host.roster_text = _roster("ALICE")
    resolver.resolve(force_refresh=True)
    before = resolver.cache
    host.roster_text = _roster("xy", "ALICE")

    assert resolver.resolve(force_refresh=True).is_none
    assert resolver.cache == before


def test_non_canonical_leader_is_foreign_party(host, resolver: PartyIdentityResolver) -> None:
    host.roster_text = _roster("Big Bob", "Alice")

    identity = resolver.resolve(force_refresh=True)

    assert identity.kind == IdentityKind.FOREIGN_PARTY
    assert identity.name == "Big Bob"


def test_reset_clears_cache(host, resolver: PartyIdentityResolver) -> None:
    host.roster_text = _roster("ALICE")
    resolver.resolve(force_refresh=True)
    resolver.mark_awaiting_refresh()

    resolver.reset()

    cache = resolver.cache
    assert cache.leader_name is None
    assert cache.last_checked_at is None
    assert cache.awaiting_refresh is False
    assert resolver.current_leader() is None
