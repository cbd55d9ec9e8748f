from __future__ import annotations

import pytest

from partysync._constants import COMPOSITION_FIELD_ID, TEAM_FIELD_ID
from partysync.config import PartySyncConfig


class FakeHost:
    def __init__(
        self,
        *,
        world_id: int = 416,
        local_name: str | None = "Zezima",
        roster_text: str | None = None,
    ) -> None:
        self.world_id = world_id
        self.local_name = local_name
        self.roster_text = roster_text
        self.fields: dict[int, int] = {TEAM_FIELD_ID: 0, COMPOSITION_FIELD_ID: 0}
        self.fail_fields = False
        self.fail_roster = False
        self.roster_reads = 0

    def poll_field(self, field_id: int) -> int:
        if self.fail_fields:
            raise RuntimeError("client not ready")
        return self.fields.get(field_id, 0)

    def read_display_text(self, widget_id: str) -> str | None:
        self.roster_reads += 1
        if self.fail_roster:
            raise RuntimeError("widget lookup failed")
        return self.roster_text

    def current_world_id(self) -> int:
        return self.world_id

    def local_actor_name(self) -> str | None:
        return self.local_name

    def enter_team(self, roster_text: str | None = None) -> None:
        self.fields[TEAM_FIELD_ID] = 1
        if roster_text is not None:
            self.roster_text = roster_text

    def change_composition(self, roster_text: str) -> None:
        self.fields[COMPOSITION_FIELD_ID] += 1
        self.roster_text = roster_text

    def exit_team(self) -> None:
        self.fields[TEAM_FIELD_ID] = 0
        self.fields[COMPOSITION_FIELD_ID] = 0
        self.roster_text = None


class FakeTransport:
    def __init__(self) -> None:
        self.calls: list[str | None] = []
        self.fail_join = False
        self.fail_leave = False

    async def change_group(self, name: str | None) -> None:
        self.calls.append(name)
        if name is None and self.fail_leave:
            raise ConnectionError("party server unreachable")
        if name is not None and self.fail_join:
            raise ConnectionError("party server unreachable")


class FakeNotifier:
    def __init__(self) -> None:
        self.messages: list[str] = []

    def emit_message(self, text: str) -> None:
        self.messages.append(text)


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def config() -> PartySyncConfig:
    return PartySyncConfig(join_grace_delay=0.0)
