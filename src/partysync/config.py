"""Plugin configuration for partysync."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from partysync._constants import (
    COMPOSITION_FIELD_ID,
    DEFAULT_JOIN_GRACE_DELAY,
    DEFAULT_LEADER_CACHE_TTL,
    DEFAULT_RECHECK_INTERVAL_TICKS,
    TEAM_FIELD_ID,
)
from partysync.exceptions import PartySyncConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_number(env_key: str, value: str, cast: type[int] | type[float]) -> int | float:
    try:
        return cast(value)
    except ValueError as exc:
        raise PartySyncConfigError(f"{env_key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class PartySyncConfig:
    """Plugin configuration.

    Parameters
    ----------
    auto_leave_on_exit : bool
        Leave the party hub when the team context ends. Canonical hubs
        are always left; non-canonical hubs only with ``force_join_mode``.
    enable_notifications : bool
        Emit user-facing messages when joining or leaving party hubs.
    force_join_mode : bool
        Join the raid team's party hub even when already in a
        non-canonical (foreign) hub.
    leader_cache_ttl : float
        Seconds a resolved leader is reused before the roster display
        is parsed again (unless a refresh is forced).
    recheck_interval_ticks : int
        Number of host ticks between forced re-checks while in a team.
    join_grace_delay : float
        Seconds to wait before issuing a join, so that rapid
        consecutive switches collapse into one.
    team_field_id : int
        Host field signalling an active team instance.
    composition_field_id : int
        Host field signalling team-composition changes.
    """

    auto_leave_on_exit: bool = True
    enable_notifications: bool = True
    force_join_mode: bool = True
    leader_cache_ttl: float = DEFAULT_LEADER_CACHE_TTL
    recheck_interval_ticks: int = DEFAULT_RECHECK_INTERVAL_TICKS
    join_grace_delay: float = DEFAULT_JOIN_GRACE_DELAY
    team_field_id: int = TEAM_FIELD_ID
    composition_field_id: int = COMPOSITION_FIELD_ID

    def __post_init__(self) -> None:
        if self.leader_cache_ttl < 0:
            raise PartySyncConfigError(f"leader_cache_ttl must be >= 0, got {self.leader_cache_ttl}")
        if self.recheck_interval_ticks < 1:
            raise PartySyncConfigError(f"recheck_interval_ticks must be >= 1, got {self.recheck_interval_ticks}")
        if self.join_grace_delay < 0:
            raise PartySyncConfigError(f"join_grace_delay must be >= 0, got {self.join_grace_delay}")
        if self.team_field_id == self.composition_field_id:
            raise PartySyncConfigError("team_field_id and composition_field_id must differ")

    @classmethod
    def from_env(cls, **overrides: Any) -> PartySyncConfig:
        """Create configuration from environment variables.

        Reads the optional ``PARTYSYNC_*`` variables. Explicit keyword
        arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        PartySyncConfig
            Populated configuration.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        _ENV_BOOL_MAP = {
            "PARTYSYNC_AUTO_LEAVE_ON_EXIT": ("auto_leave_on_exit", True),
            "PARTYSYNC_ENABLE_NOTIFICATIONS": ("enable_notifications", True),
            "PARTYSYNC_FORCE_JOIN_MODE": ("force_join_mode", True),
        }
        for env_key, (field_name, default) in _ENV_BOOL_MAP.items():
            if field_name not in overrides:
                config_kwargs[field_name] = _env_bool(env.get(env_key), default)

        _ENV_NUMBER_MAP: dict[str, tuple[str, type[int] | type[float]]] = {
            "PARTYSYNC_LEADER_CACHE_TTL": ("leader_cache_ttl", float),
            "PARTYSYNC_RECHECK_INTERVAL_TICKS": ("recheck_interval_ticks", int),
            "PARTYSYNC_JOIN_GRACE_DELAY": ("join_grace_delay", float),
            "PARTYSYNC_TEAM_FIELD_ID": ("team_field_id", int),
            "PARTYSYNC_COMPOSITION_FIELD_ID": ("composition_field_id", int),
        }
        for env_key, (field_name, cast) in _ENV_NUMBER_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_number(env_key, val, cast)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
