"""Hyprdrop command line entry point."""

import argparse
import asyncio
import sys

import shtab

from .adapters.hyprland import HyprlandBackend
from .config import Settings
from .ipc_paths import get_control_socket
from .ledger import AddressLedger, FileLedgerStore
from .logging_setup import get_logger, init_logger
from .models import ExitCode, HyprdropError
from .planner import ToggleOutcome, Toggler

__all__ = ["get_parser", "main", "run"]


def get_parser() -> argparse.ArgumentParser:
    """Parses the command line arguments."""
    parser = argparse.ArgumentParser(
        prog="hyprdrop",
        description="Launch an Hyprland window, move it to a dropdown and toggle its visibility across workspaces.",
    )
    shtab.add_argument_to(parser, ["--print-completion"])
    parser.add_argument("command", metavar="COMMAND", help="Command to execute")
    parser.add_argument(
        "-i",
        "--identifier",
        required=True,
        help="Window identifier: the class or title given to the window when the application allows it, otherwise the one the application sets",
    )
    parser.add_argument("-a", "--args", help="Command arguments, as comma separated values")
    parser.add_argument("-b", "--background", action="store_true", help="Launch in the background")
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug mode")
    parser.add_argument("-f", "--focus", action="store_true", help="Also focus the window when showing it")
    parser.add_argument(
        "--log-file",
        metavar="filename",
        help="Also write logs to this file",
    ).complete = shtab.FILE  # type: ignore[attr-defined]
    return parser


async def run(settings: Settings) -> ToggleOutcome:
    """Toggle the window described by `settings` on the running Hyprland."""
    log = get_logger("hyprdrop")
    ledger = AddressLedger(FileLedgerStore(settings.ledger_path, get_logger("ledger")), log)
    toggler = Toggler(settings, HyprlandBackend(), ledger, log)
    return await toggler.run()


def main(argv: list[str] | None = None) -> None:
    """Run the command."""
    ns = get_parser().parse_args(argv)
    init_logger(filename=ns.log_file, force_debug=ns.debug)
    log = get_logger("startup")
    settings = Settings.from_args(ns, log=log)

    if not settings.identifier.strip():
        log.critical("The identifier can't be empty")
        sys.exit(ExitCode.USAGE_ERROR)
    if get_control_socket() is None:
        log.critical("HYPRLAND_INSTANCE_SIGNATURE is not set, is Hyprland running ?")
        sys.exit(ExitCode.ENV_ERROR)

    log.debug("Starting Hyprdrop...")
    try:
        outcome = asyncio.run(run(settings))
    except KeyboardInterrupt:
        sys.exit(ExitCode.USAGE_ERROR)
    except HyprdropError:
        log.critical("Command failed.")
        sys.exit(ExitCode.CONNECTION_ERROR)
    log.debug("Hyprdrop finished")
    sys.exit(ExitCode.SUCCESS if outcome.ok else ExitCode.COMMAND_ERROR)


if __name__ == "__main__":
    main()
