"""Compositor adapters."""

from .backend import EnvironmentBackend
from .hyprland import HyprlandBackend

__all__ = ["EnvironmentBackend", "HyprlandBackend"]
