"""Location of Hyprland's control socket."""

import os
from pathlib import Path

__all__ = [
    "MINIMUM_ADDR_LEN",
    "get_control_socket",
    "get_ipc_folder",
]

MINIMUM_ADDR_LEN = 4  # "0x" + at least two hex digits

HYPRCTL_SOCKET = ".socket.sock"


def get_ipc_folder(signature: str | None = None) -> str | None:
    """Return the folder holding the sockets of the running Hyprland instance.

    Args:
        signature: instance signature, defaults to $HYPRLAND_INSTANCE_SIGNATURE

    Returns:
        The folder path, or None when not running under Hyprland
    """
    signature = signature or os.environ.get("HYPRLAND_INSTANCE_SIGNATURE")
    if not signature:
        return None
    runtime_dir = os.environ.get("XDG_RUNTIME_DIR", "")
    if runtime_dir and Path(f"{runtime_dir}/hypr/{signature}").exists():
        return f"{runtime_dir}/hypr/{signature}"
    return f"/tmp/hypr/{signature}"  # noqa: S108


def get_control_socket(signature: str | None = None) -> str | None:
    """Return the path of the hyprctl socket, or None when not under Hyprland."""
    folder = get_ipc_folder(signature)
    return f"{folder}/{HYPRCTL_SOCKET}" if folder else None
