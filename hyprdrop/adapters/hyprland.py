"""Hyprland adapter."""

import shlex
from logging import Logger
from typing import cast

from ..constants import NOTIFICATION_TITLE
from ..ipc import hyprctl, hyprctl_json
from ..models import Exec, HyprdropError, LiveClient, Operation, WorkspaceDf, WorkspaceState
from .backend import EnvironmentBackend


class HyprlandBackend(EnvironmentBackend):
    """Hyprland backend implementation."""

    async def list_clients(self, *, log: Logger) -> list[LiveClient]:
        """Return a fresh snapshot of all windows.

        Args:
            log: Logger to use for this operation
        """
        clients = await hyprctl_json("clients", log)
        if not isinstance(clients, list):
            log.critical("Unexpected clients reply: %s", clients)
            raise HyprdropError
        return [LiveClient.from_json(client) for client in clients if isinstance(client, dict)]

    async def active_workspace(self, *, log: Logger) -> WorkspaceState:
        """Return the focused workspace.

        Args:
            log: Logger to use for this operation
        """
        workspace = await hyprctl_json("activeworkspace", log)
        if not isinstance(workspace, dict) or "id" not in workspace:
            log.critical("Unexpected activeworkspace reply: %s", workspace)
            raise HyprdropError
        return WorkspaceState.from_json(cast("WorkspaceDf", workspace))

    async def dispatch(self, operation: Operation, *, log: Logger) -> bool:
        """Execute one operation.

        Args:
            operation: The operation to execute
            log: Logger to use for this operation
        """
        return await hyprctl(operation.render(), log)

    async def notify(self, message: str, urgency: str = "normal", *, log: Logger) -> None:
        """Send a desktop notification using notify-send.

        Args:
            message: The notification message
            urgency: "low", "normal" or "critical"
            log: Logger to use for this operation
        """
        command = f"notify-send -u {urgency} {shlex.quote(NOTIFICATION_TITLE)} {shlex.quote(message)}"
        if not await self.dispatch(Exec(command), log=log):
            log.error("Failed to notify: %s", message)
