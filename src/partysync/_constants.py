"""Internal constants shared across the library."""

import re

# ------------------------------------------------------------------
# Host fields (varbits) that signal raid-team membership
# ------------------------------------------------------------------

TEAM_FIELD_ID = 6440
COMPOSITION_FIELD_ID = 6441

# ------------------------------------------------------------------
# Roster display text
# ------------------------------------------------------------------

ROSTER_WIDGET_ID = "TobHud.NAMES"
ROSTER_DELIMITER = "<br>"
EMPTY_SLOT = "-"
ROSTER_SLOT_COUNT = 5
EMPTY_ROSTER_TEXT = ROSTER_DELIMITER.join([EMPTY_SLOT] * ROSTER_SLOT_COUNT)

LEADER_NAME_MIN_LENGTH = 3
LEADER_NAME_MAX_LENGTH = 12

# ------------------------------------------------------------------
# Canonical party hub names:  <world><LEADER>, e.g. 416JOHNCENA
# ------------------------------------------------------------------

CANONICAL_GROUP_PATTERN = re.compile(r"^\d{3,4}[A-Z0-9]+$")

# ------------------------------------------------------------------
# Timing defaults
# ------------------------------------------------------------------

DEFAULT_LEADER_CACHE_TTL: float = 10.0
DEFAULT_RECHECK_INTERVAL_TICKS: int = 30
DEFAULT_JOIN_GRACE_DELAY: float = 0.1
RECHECK_COUNTDOWN_TICKS: int = 3
