"""Talk to Hyprland over its control socket.

Every call opens a fresh connection, sends one request and waits for the
reply. There is no caching and no retry.
"""

__all__ = [
    "get_response",
    "hyprctl",
    "hyprctl_connection",
    "hyprctl_json",
]

import asyncio
import contextlib
import json
from collections.abc import AsyncIterator
from logging import Logger

from .ipc_paths import get_control_socket
from .models import HyprdropError, JSONResponse


@contextlib.asynccontextmanager
async def hyprctl_connection(logger: Logger) -> AsyncIterator[tuple[asyncio.StreamReader, asyncio.StreamWriter]]:
    """Open a connection to the control socket, closing it on exit."""
    path = get_control_socket()
    if path is None:
        logger.critical("HYPRLAND_INSTANCE_SIGNATURE is not set, is Hyprland running ?")
        raise HyprdropError
    try:
        reader, writer = await asyncio.open_unix_connection(path)
    except (FileNotFoundError, ConnectionRefusedError) as e:
        logger.critical("hyprctl socket not found! is it running ?")
        raise HyprdropError from e
    except OSError as e:
        logger.critical("Can't connect to hyprctl socket %s: %s", path, e)
        raise HyprdropError from e
    try:
        yield reader, writer
    finally:
        writer.close()
        with contextlib.suppress(OSError):
            await writer.wait_closed()


async def get_response(command: bytes, logger: Logger) -> JSONResponse:
    """Get the JSON response of `command` from the control socket."""
    async with hyprctl_connection(logger) as (reader, writer):
        try:
            writer.write(command)
            await writer.drain()
            reader_data = await reader.read()
        except OSError as e:
            logger.critical("Connection to hyprctl lost during %s: %s", command.decode(), e)
            raise HyprdropError from e
    decoded_data = reader_data.decode("utf-8", errors="replace")
    try:
        return json.loads(decoded_data)  # type: ignore[no-any-return]
    except json.JSONDecodeError as e:
        logger.critical("Unexpected reply to %s: %s", command.decode(), decoded_data.strip())
        raise HyprdropError from e


async def hyprctl_json(command: str, logger: Logger) -> JSONResponse:
    """Run an IPC query and return the JSON output."""
    logger.debug(command)
    return await get_response(f"-j/{command}".encode(), logger)


async def hyprctl(command: str, logger: Logger, base_command: str = "dispatch") -> bool:
    """Run an IPC command. Returns success value.

    Args:
        command: the command to send
        logger: logger to use in case of error
        base_command: type of command to send

    Returns:
        True on success
    """
    logger.debug("%s %s", base_command, command)
    async with hyprctl_connection(logger) as (ctl_reader, ctl_writer):
        try:
            ctl_writer.write(f"/{base_command} {command}".encode())
            await ctl_writer.drain()
            resp = await ctl_reader.read(100)
        except OSError as e:
            logger.critical("Connection to hyprctl lost during %s %s: %s", base_command, command, e)
            raise HyprdropError from e
    # remove "\n" from the response
    resp = b"".join(resp.split(b"\n"))
    if resp != b"ok":
        logger.error("FAILED %s: %s", command, resp.decode(errors="replace"))
        return False
    return True
