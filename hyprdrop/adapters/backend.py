"""Compositor boundary interface."""

from abc import ABC, abstractmethod
from logging import Logger

from ..models import LiveClient, Operation, WorkspaceState


class EnvironmentBackend(ABC):
    """Abstract base class for the compositor boundary.

    All methods that perform logging require a `log` parameter to be passed,
    so that calls get logged under the caller's logger.
    """

    @abstractmethod
    async def list_clients(self, *, log: Logger) -> list[LiveClient]:
        """Return a fresh snapshot of all windows.

        Raises HyprdropError if the compositor can't be reached.

        Args:
            log: Logger to use for this operation
        """

    @abstractmethod
    async def active_workspace(self, *, log: Logger) -> WorkspaceState:
        """Return the focused workspace.

        Raises HyprdropError if the compositor can't be reached.

        Args:
            log: Logger to use for this operation
        """

    @abstractmethod
    async def dispatch(self, operation: Operation, *, log: Logger) -> bool:
        """Execute one operation.

        Args:
            operation: The operation to execute
            log: Logger to use for this operation

        Returns:
            True if the compositor accepted it
        """

    @abstractmethod
    async def notify(self, message: str, urgency: str = "normal", *, log: Logger) -> None:
        """Send a desktop notification.

        Args:
            message: The notification message
            urgency: "low", "normal" or "critical"
            log: Logger to use for this operation
        """

    async def notify_error(self, message: str, *, log: Logger) -> None:
        """Send an error notification.

        Args:
            message: The notification message
            log: Logger to use for this operation
        """
        await self.notify(message, "critical", log=log)
