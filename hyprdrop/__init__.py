"""Hyprdrop - dropdown windows for Hyprland.

Launches an application, or toggles an existing window of it between a
hidden special workspace and the active workspace.
"""
