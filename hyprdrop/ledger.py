"""Address ledger: remembers window addresses of applications that can't be identified otherwise.

The file holds one `rule_key=address` entry per line. It is read fully,
updated in memory and rewritten fully; concurrent invocations aren't
coordinated and the last writer wins.
"""

__all__ = ["AddressLedger", "FileLedgerStore", "LedgerStore", "MemoryLedgerStore"]

import logging
from collections.abc import Iterable
from pathlib import Path

from aiofiles import open as aiopen
from aiofiles import os as aios

from .constants import LEDGER_DELIMITER
from .ipc_paths import MINIMUM_ADDR_LEN
from .models import LiveClient


class LedgerStore:
    """Storage backend of the ledger."""

    async def load(self) -> dict[str, str]:
        """Return the stored rule_key -> address mapping."""
        raise NotImplementedError

    async def save(self, entries: dict[str, str]) -> None:
        """Replace the stored mapping with `entries`."""
        raise NotImplementedError


class MemoryLedgerStore(LedgerStore):
    """In-memory store."""

    def __init__(self, entries: dict[str, str] | None = None) -> None:
        self.entries = dict(entries or {})

    async def load(self) -> dict[str, str]:
        return dict(self.entries)

    async def save(self, entries: dict[str, str]) -> None:
        self.entries = dict(entries)


def parse_line(line: str) -> tuple[str, str] | None:
    """Parse a ledger line, returns None if malformed.

    The key is the user token and may contain the delimiter, addresses can't.
    """
    key, sep, address = line.strip().rpartition(LEDGER_DELIMITER)
    if not sep or not key or not address.startswith("0x") or len(address) < MINIMUM_ADDR_LEN:
        return None
    return key, address


class FileLedgerStore(LedgerStore):
    """Line oriented text file store."""

    def __init__(self, path: Path | str, log: logging.Logger) -> None:
        self.path = Path(path)
        self.log = log

    async def load(self) -> dict[str, str]:
        entries: dict[str, str] = {}
        if not await aios.path.exists(self.path):
            return entries
        async with aiopen(self.path, "rb") as f:
            raw_lines = await f.readlines()
        for lineno, raw_line in enumerate(raw_lines, 1):
            try:
                line = raw_line.decode("utf-8")
            except UnicodeDecodeError:
                self.log.warning("%s:%d: skipping undecodable entry %r", self.path, lineno, raw_line.rstrip(b"\n"))
                continue
            if not line.strip():
                continue
            parsed = parse_line(line)
            if parsed is None:
                self.log.warning("%s:%d: skipping malformed entry %r", self.path, lineno, line.rstrip("\n"))
                continue
            key, address = parsed
            entries[key] = address
        return entries

    async def save(self, entries: dict[str, str]) -> None:
        await aios.makedirs(self.path.parent, exist_ok=True)
        async with aiopen(self.path, "w", encoding="utf-8") as f:
            await f.write("".join(f"{key}{LEDGER_DELIMITER}{address}\n" for key, address in entries.items()))


class AddressLedger:
    """Maps a rule key (the user token) to the last known window address."""

    def __init__(self, store: LedgerStore, log: logging.Logger) -> None:
        self.store = store
        self.log = log
        self._entries: dict[str, str] | None = None

    async def entries(self) -> dict[str, str]:
        """Return the ledger content, loading it on first access."""
        if self._entries is None:
            self._entries = await self.store.load()
        return self._entries

    async def lookup(self, rule_key: str, live_clients: Iterable[LiveClient]) -> str | None:
        """Return the address recorded for `rule_key` if that window still exists.

        Args:
            rule_key: the user token
            live_clients: current client snapshot
        """
        address = (await self.entries()).get(rule_key)
        if address is None:
            return None
        if any(client.address == address for client in live_clients):
            return address
        self.log.debug("Stale address %s for %s", address, rule_key)
        return None

    async def record(self, rule_key: str, address: str) -> None:
        """Insert or replace the address of `rule_key` and persist the ledger."""
        entries = await self.entries()
        if entries.get(rule_key) == address:
            return
        entries[rule_key] = address
        await self.store.save(entries)
        self.log.debug("Recorded address %s for %s", address, rule_key)
