"""Pure join/leave policy decisions.

This module contains no I/O: the controller feeds it the resolved
identity, the tracked group and the configuration, and acts on the
answer.
"""

from __future__ import annotations

from partysync.config import PartySyncConfig
from partysync.models.group import GroupTarget
from partysync.models.identity import IdentityKind, PartyIdentity


def is_fresh(*, last_checked_at: float | None, now: float, ttl: float) -> bool:
    """Whether a cached check is still inside the staleness window."""
    if last_checked_at is None:
        return False
    return (now - last_checked_at) < ttl


def is_valid_world(world_id: int | None) -> bool:
    return world_id is not None and world_id > 0


def should_block_join(
    config: PartySyncConfig,
    identity: PartyIdentity,
    current_group: GroupTarget | None,
) -> bool:
    """Stay put when in a foreign party hub and force join is off.

    A leader change is a team refresh and is never blocked.
    """
    if config.force_join_mode:
        return False
    if identity.kind == IdentityKind.LEADER_CHANGED:
        return False
    if identity.kind == IdentityKind.FOREIGN_PARTY:
        return True
    return current_group is not None and not current_group.is_canonical


def should_leave_on_exit(config: PartySyncConfig, current_group: GroupTarget | None) -> bool:
    """Exit policy when the team context ends.

    Canonical hubs are always left; foreign hubs only with force join.
    """
    if not config.auto_leave_on_exit or current_group is None:
        return False
    if current_group.is_canonical:
        return True
    return config.force_join_mode


def should_leave_on_teardown(current_group: GroupTarget | None) -> bool:
    return current_group is not None and current_group.is_canonical


def is_recheck_due(tick_counter: int, interval: int) -> bool:
    return tick_counter >= interval


def ticks_until_recheck(tick_counter: int, interval: int) -> int:
    return max(interval - tick_counter, 0)
