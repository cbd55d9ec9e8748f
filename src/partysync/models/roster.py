"""Team roster snapshot parsed from the roster display text."""

from __future__ import annotations

from pydantic import Field

from partysync._constants import EMPTY_SLOT, ROSTER_DELIMITER
from partysync.exceptions import RosterParseError
from partysync.models._base import PartySyncModel


class RosterSnapshot(PartySyncModel):
    """Ordered roster slots, exactly as displayed.

    Slots may contain the empty-slot marker ``-``. Snapshots are
    recomputed on every read and never mutated.
    """

    slots: tuple[str, ...] = Field(default_factory=tuple)

    @classmethod
    def from_text(cls, text: str | None) -> RosterSnapshot:
        """Split a delimiter-joined roster blob into slots.

        Raises :class:`RosterParseError` when the text is missing or is
        not a string.
        """
        if text is None:
            raise RosterParseError("Roster text is missing")
        if not isinstance(text, str):
            raise RosterParseError(f"Roster text must be a string, got {type(text).__name__}")
        stripped = text.strip()
        if not stripped:
            return cls()
        return cls(slots=tuple(slot.strip() for slot in stripped.split(ROSTER_DELIMITER)))

    @property
    def is_empty(self) -> bool:
        """True when there are no slots or every slot is a placeholder."""
        return all(slot in ("", EMPTY_SLOT) for slot in self.slots)

    @property
    def leader_slot(self) -> str | None:
        """The first slot, which is authoritative for leader identity."""
        if not self.slots:
            return None
        return self.slots[0]

    @property
    def members(self) -> list[str]:
        return [slot for slot in self.slots if slot and slot != EMPTY_SLOT]
