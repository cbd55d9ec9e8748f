"""Custom exception hierarchy for partysync."""

from __future__ import annotations


class PartySyncError(Exception):
    """Base exception for all partysync errors."""


class PartySyncConfigError(PartySyncError):
    """Invalid or missing configuration."""


class FieldReadError(PartySyncError):
    """A host field could not be read.

    Transient: the Signal Reader defaults the affected fields to ``0``.
    """

    def __init__(self, message: str, *, field_id: int) -> None:
        self.field_id = field_id
        super().__init__(message)


class RosterParseError(PartySyncError):
    """The roster display text is missing or could not be read.

    Treated as "no roster yet", never fatal.
    """


class InvalidLeaderNameError(PartySyncError):
    """The first roster slot is not a usable leader name."""

    def __init__(self, message: str, *, candidate: str) -> None:
        self.candidate = candidate
        super().__init__(message)


class TransportError(PartySyncError):
    """Joining or leaving a party hub failed.

    ``target`` is the group that was being joined, or ``None`` for a leave.
    """

    def __init__(self, message: str, *, target: str | None = None) -> None:
        self.target = target
        super().__init__(message)
