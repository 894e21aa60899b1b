"""Shared constants for hyprdrop."""

import os
from pathlib import Path

__all__ = [
    "DEFAULT_SETTLE_DELAY",
    "LEDGER_DELIMITER",
    "LEDGER_FILE",
    "NOTIFICATION_TITLE",
    "SPECIAL_WORKSPACE",
]

SPECIAL_WORKSPACE = "hyprdrop"

# Ledger file path - use XDG_STATE_HOME with fallback to ~/.local/state
_xdg_state_home = Path(os.environ.get("XDG_STATE_HOME") or Path.home() / ".local" / "state")
LEDGER_FILE = _xdg_state_home / "hyprdrop" / "addresses"
LEDGER_DELIMITER = "="

# Seconds to wait after a launch before looking for the new window
DEFAULT_SETTLE_DELAY = 0.5

NOTIFICATION_TITLE = "Hyprdrop"
