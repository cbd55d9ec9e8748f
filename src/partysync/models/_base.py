"""Base model for partysync value types.

Every value type inherits from :class:`PartySyncModel` which provides:

* ``frozen=True`` so snapshots handed between components cannot be
  mutated after the fact.
* ``extra="forbid"`` so typos in keyword construction fail loudly.

Mutable state owned by a single component (session and leader cache)
lives in :mod:`partysync.state.session` and opts out of freezing.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class PartySyncModel(BaseModel):
    """Base for immutable partysync value types."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )
