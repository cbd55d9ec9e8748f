"""Signal Reader: turns the two noisy host fields into a team status."""

from __future__ import annotations

import logging

from partysync.config import PartySyncConfig
from partysync.exceptions import FieldReadError
from partysync.host import TeamHost
from partysync.models.team import TeamStatus

_logger = logging.getLogger(__name__)


class SignalReader:
    """Polls the team-active and team-composition fields."""

    def __init__(self, host: TeamHost, config: PartySyncConfig) -> None:
        self._host = host
        self._team_field_id = config.team_field_id
        self._composition_field_id = config.composition_field_id

    def is_team_field(self, field_id: int) -> bool:
        return field_id == self._team_field_id

    def is_composition_field(self, field_id: int) -> bool:
        return field_id == self._composition_field_id

    def is_relevant_field(self, field_id: int) -> bool:
        return self.is_team_field(field_id) or self.is_composition_field(field_id)

    def _read(self, field_id: int) -> int:
        try:
            return int(self._host.poll_field(field_id))
        except Exception as exc:
            raise FieldReadError(f"Could not read field {field_id}: {exc}", field_id=field_id) from exc

    def poll(self) -> TeamStatus:
        """Read both fields. Any read failure degrades to "not in team"."""
        try:
            team_state = self._read(self._team_field_id)
            composition_state = self._read(self._composition_field_id)
        except FieldReadError as exc:
            _logger.warning("Error checking team status: %s", exc)
            return TeamStatus()

        status = TeamStatus(raw_flag_a=team_state, raw_flag_b=composition_state)
        _logger.debug(
            "Team status check - team field: %s, composition field: %s, in team: %s",
            team_state,
            composition_state,
            status.in_team,
        )
        return status

    @staticmethod
    def has_transitioned(previous: TeamStatus | None, current: TeamStatus) -> bool:
        """True when either raw field differs from the previous poll."""
        if previous is None:
            return True
        return not previous.same_flags(current)
