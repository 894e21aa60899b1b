"""Find the window a rule designates among the live clients."""

import logging
from collections.abc import Sequence

from .ledger import AddressLedger
from .models import ByOpaqueHandle, LiveClient, MatchRule

__all__ = ["ClientMatcher", "find_by_initial_title"]


def find_by_initial_title(token: str, live_clients: Sequence[LiveClient]) -> LiveClient | None:
    """Return the first client created with `token` as title."""
    for client in live_clients:
        if client.initial_title == token:
            return client
    return None


class ClientMatcher:
    """Evaluates match rules against a client snapshot.

    Clients are scanned in the order the compositor reported them, the first
    match wins.
    """

    def __init__(self, ledger: AddressLedger, log: logging.Logger) -> None:
        self.ledger = ledger
        self.log = log

    async def find(self, rule: MatchRule, live_clients: Sequence[LiveClient]) -> LiveClient | None:
        """Return the client matching `rule`, or None.

        Address based rules consult the ledger first, then fall back to the
        window whose initial title is the token. Nothing is recorded here.

        Args:
            rule: the rule to evaluate
            live_clients: current client snapshot
        """
        if not live_clients:
            return None

        if isinstance(rule, ByOpaqueHandle):
            address = await self.ledger.lookup(rule.key, live_clients)
            if address is None:
                client = find_by_initial_title(rule.key, live_clients)
                if client:
                    self.log.debug("Found address %s associated to initial title %s", client.address, rule.key)
                return client
            return next(client for client in live_clients if client.address == address)

        for client in live_clients:
            if rule.matches(client):
                self.log.debug("%s matches %s", client.address, rule.selector())
                return client
        return None
