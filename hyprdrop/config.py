"""Runtime settings, gathered from the command line and the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from .constants import DEFAULT_SETTLE_DELAY, LEDGER_FILE, SPECIAL_WORKSPACE

if TYPE_CHECKING:
    import argparse
    import logging
    from collections.abc import Mapping

__all__ = ["BOOL_FALSE_STRINGS", "Settings", "coerce_to_bool"]

BOOL_FALSE_STRINGS = frozenset({"false", "no", "off", "0", "disabled"})


def coerce_to_bool(value: str | bool | None, default: bool = False) -> bool:
    """Coerce a value to boolean, handling loose typing.

    Args:
        value: The value to coerce
        default: Default value if value is None

    Returns:
        The boolean value

    Behavior:
        - None → default
        - Empty string → False
        - Explicit falsy strings ("false", "no", "off", "0", "disabled") → False
        - Any other non-empty string → True
        - Non-string values → bool(value)
    """
    if value is None:
        return default
    if isinstance(value, str):
        if not value.strip():
            return False
        return value.lower().strip() not in BOOL_FALSE_STRINGS
    return bool(value)


@dataclass
class Settings:
    """Everything a single invocation needs to know besides the compositor state."""

    command: str
    identifier: str
    args: list[str]
    background: bool = False
    debug: bool = False
    focus: bool = False
    notify: bool = True
    ledger_path: Path = LEDGER_FILE
    special_workspace: str = SPECIAL_WORKSPACE
    settle_delay: float = DEFAULT_SETTLE_DELAY

    @property
    def special_target(self) -> str:
        """Dispatcher target of the special workspace."""
        return f"special:{self.special_workspace}"

    @classmethod
    def from_args(cls, ns: argparse.Namespace, environ: Mapping[str, str] | None = None, log: logging.Logger | None = None) -> Settings:
        """Build settings from parsed arguments and environment variables.

        Recognized variables: HYPRDROP_LEDGER, HYPRDROP_SETTLE_DELAY, HYPRDROP_NOTIFY.

        Args:
            ns: parsed command line
            environ: environment mapping, defaults to os.environ
            log: logger used to report ignored values
        """
        env = os.environ if environ is None else environ
        settle_delay = DEFAULT_SETTLE_DELAY
        raw_delay = env.get("HYPRDROP_SETTLE_DELAY")
        if raw_delay:
            try:
                settle_delay = max(0.0, float(raw_delay))
            except ValueError:
                if log:
                    log.warning("Invalid HYPRDROP_SETTLE_DELAY %r, using %s", raw_delay, DEFAULT_SETTLE_DELAY)
        ledger = env.get("HYPRDROP_LEDGER")
        return cls(
            command=ns.command,
            identifier=ns.identifier,
            args=split_args(ns.args),
            background=ns.background,
            debug=ns.debug,
            focus=ns.focus,
            notify=coerce_to_bool(env.get("HYPRDROP_NOTIFY"), default=True),
            ledger_path=Path(ledger).expanduser() if ledger else LEDGER_FILE,
            settle_delay=settle_delay,
        )


def split_args(raw: str | None) -> list[str]:
    """Split the comma separated `--args` value, dropping empty items."""
    if not raw:
        return []
    return [item for item in raw.split(",") if item]
