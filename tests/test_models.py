"""Tests for the pydantic value types."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from partysync.exceptions import RosterParseError
from partysync.models.group import GroupTarget, canonical_group_name, is_canonical
from partysync.models.identity import IdentityKind, PartyIdentity
from partysync.models.roster import RosterSnapshot
from partysync.models.team import TeamStatus
from partysync.state.events import EventKind, HostEvent

# ------------------------------------------------------------------
# TeamStatus
# ------------------------------------------------------------------


class TestTeamStatus:
    @pytest.mark.parametrize(
        ("flag_a", "flag_b", "expected"),
        [(0, 0, False), (1, 0, True), (0, 3, True), (2, 2, True), (-1, 0, False)],
    )
    def test_in_team_derived_from_raw_flags(self, flag_a: int, flag_b: int, expected: bool) -> None:
        assert TeamStatus(raw_flag_a=flag_a, raw_flag_b=flag_b).in_team is expected

    def test_default_is_not_in_team(self) -> None:
        assert TeamStatus().in_team is False

    def test_frozen(self) -> None:
        status = TeamStatus(raw_flag_a=1)
        with pytest.raises(ValidationError):
            status.raw_flag_a = 0  # type: ignore[misc]


# ------------------------------------------------------------------
# RosterSnapshot
# ------------------------------------------------------------------


class TestRosterSnapshot:
    def test_splits_on_delimiter_and_trims(self) -> None:
        roster = RosterSnapshot.from_text(" Alice <br>Bob<br>-<br>-<br>- ")
        assert roster.slots == ("Alice", "Bob", "-", "-", "-")
        assert roster.leader_slot == "Alice"
        assert roster.members == ["Alice", "Bob"]
        assert roster.is_empty is False

    def test_placeholder_roster_is_empty(self) -> None:
        assert RosterSnapshot.from_text("-<br>-<br>-<br>-<br>-").is_empty is True

    def test_blank_text_is_empty(self) -> None:
        roster = RosterSnapshot.from_text("   ")
        assert roster.slots == ()
        assert roster.is_empty is True
        assert roster.leader_slot is None

    def test_missing_text_raises(self) -> None:
        with pytest.raises(RosterParseError):
            RosterSnapshot.from_text(None)


# ------------------------------------------------------------------
# Group names
# ------------------------------------------------------------------


class TestGroupNames:
    @pytest.mark.parametrize("name", ["330WISEOLDMAN", "416JOHNCENA", "2301ABC", "301A1"])
    def test_canonical(self, name: str) -> None:
        assert is_canonical(name) is True

    @pytest.mark.parametrize(
        "name",
        [None, "", "416", "41JOHN", "416johncena", "416BIG BOB", "JOHNCENA416", "my hub"],
    )
    def test_not_canonical(self, name: str | None) -> None:
        assert is_canonical(name) is False

    def test_canonical_group_name_uppercases_leader(self) -> None:
        assert canonical_group_name(416, "JohnCena") == "416JOHNCENA"

    def test_group_target(self) -> None:
        target = GroupTarget.for_leader(330, "Alice")
        assert target.name == "330ALICE"
        assert target.is_canonical is True
        assert target.matches("330alice") is True
        assert target.matches(GroupTarget(name="330ALICE")) is True
        assert target.matches(None) is False
        assert GroupTarget(name="Friends Hub").is_canonical is False

    def test_group_target_rejects_blank_name(self) -> None:
        with pytest.raises(ValidationError):
            GroupTarget(name="  ")


# ------------------------------------------------------------------
# PartyIdentity / HostEvent
# ------------------------------------------------------------------


def test_party_identity_constructors() -> None:
    assert PartyIdentity.none().is_none is True
    assert PartyIdentity.none().name is None
    assert PartyIdentity.unchanged("ALICE").kind == IdentityKind.UNCHANGED
    assert PartyIdentity.leader_changed("BOB") == PartyIdentity(kind=IdentityKind.LEADER_CHANGED, name="BOB")
    assert PartyIdentity.foreign("Big Bob").kind == IdentityKind.FOREIGN_PARTY


def test_host_event_payload_validation() -> None:
    assert HostEvent.field_changed(6441).field_id == 6441
    assert HostEvent.tick().kind == EventKind.TICK
    with pytest.raises(ValidationError):
        HostEvent(kind=EventKind.FIELD_CHANGED)
    with pytest.raises(ValidationError):
        HostEvent(kind=EventKind.JOIN_DUE)

    due = HostEvent.join_due(GroupTarget(name="416BOB"), suppress_notifications=True)
    assert due.target is not None and due.target.name == "416BOB"
    assert due.suppress_notifications is True
