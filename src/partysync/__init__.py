"""partysync - keep raid team members converged on a shared party hub."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("partysync")
except PackageNotFoundError:
    __version__ = "0+local"
from partysync.client import PartySync
from partysync.config import PartySyncConfig
from partysync.controller import ConvergenceController
from partysync.exceptions import (
    FieldReadError,
    InvalidLeaderNameError,
    PartySyncConfigError,
    PartySyncError,
    RosterParseError,
    TransportError,
)
from partysync.host import GroupTransport, Notifier, TeamHost
from partysync.leader import extract_leader, validate_leader_name
from partysync.lifecycle import LifecycleGuard
from partysync.models import (
    GroupTarget,
    IdentityKind,
    PartyIdentity,
    RosterSnapshot,
    TeamStatus,
    canonical_group_name,
    is_canonical,
)
from partysync.resolver import PartyIdentityResolver
from partysync.signals import SignalReader
from partysync.state.session import ControllerPhase, LeaderCache, SessionState

__all__ = [
    "__version__",
    "ControllerPhase",
    "ConvergenceController",
    "FieldReadError",
    "GroupTarget",
    "GroupTransport",
    "IdentityKind",
    "InvalidLeaderNameError",
    "LeaderCache",
    "LifecycleGuard",
    "Notifier",
    "PartyIdentity",
    "PartyIdentityResolver",
    "PartySync",
    "PartySyncConfig",
    "PartySyncConfigError",
    "PartySyncError",
    "RosterParseError",
    "RosterSnapshot",
    "SessionState",
    "SignalReader",
    "TeamHost",
    "TeamStatus",
    "TransportError",
    "canonical_group_name",
    "extract_leader",
    "is_canonical",
    "validate_leader_name",
]
