"""Per-application knowledge: how to launch a program and how to recognize its window.

Adding support for a program is a matter of adding a row to `APPLICATIONS`.
"""

import re
from dataclasses import dataclass

from .models import ApplicationKind, ByClassPattern, ByOpaqueHandle, ByTitlePattern, MatchRule

__all__ = [
    "APPLICATIONS",
    "DEFAULT_PROFILE",
    "ApplicationProfile",
    "build_launch_command",
    "derive_rule",
    "get_profile",
]


@dataclass(frozen=True)
class ApplicationProfile:
    """How a given program is launched and identified.

    Templates accept `{cmd}`, `{token}` and `{args}` (extra arguments joined by spaces).
    """

    kind: ApplicationKind
    launch: str
    launch_with_args: str
    # regex used with title-based identification, None means exact title equality
    title_pattern: str | None = None


_CLASS_FLAG = ApplicationProfile(
    ApplicationKind.CLASS_BASED,
    launch="{cmd} --class={token}",
    launch_with_args="{cmd} --class={token} -e {args}",
)

DEFAULT_PROFILE = ApplicationProfile(
    ApplicationKind.CLASS_BASED,
    launch="{cmd} --class={token}",
    launch_with_args="{cmd} --class={token} {args}",
)

APPLICATIONS: dict[str, ApplicationProfile] = {
    "alacritty": _CLASS_FLAG,
    "kitty": _CLASS_FLAG,
    "wezterm": ApplicationProfile(
        ApplicationKind.CLASS_BASED,
        launch="{cmd} start --class={token}",
        launch_with_args="{cmd} start --class={token} -- {args}",
    ),
    # foot only matches on the exact title, locked so the shell can't rename it
    "foot": ApplicationProfile(
        ApplicationKind.TITLE_BASED,
        launch="{cmd} --title={token} --override locked-title=yes",
        launch_with_args="{cmd} --title={token} --override locked-title=yes -e {args}",
    ),
    "konsole": ApplicationProfile(
        ApplicationKind.TITLE_BASED,
        launch="{cmd} -p tabtitle={token}",
        launch_with_args="{cmd} -p tabtitle={token} -e {args}",
        title_pattern="{token} — Konsole",
    ),
    # gnome-terminal ignores class and name, and rewrites its title once started:
    # only the initial title can be set, so the window address gets remembered
    "gnome-terminal": ApplicationProfile(
        ApplicationKind.OPAQUE_HANDLE_BASED,
        launch="{cmd} --title={token}",
        launch_with_args="{cmd} --title={token} -- {args}",
    ),
}


def get_profile(command: str) -> ApplicationProfile:
    """Return the profile of `command`, class based when unknown.

    Args:
        command: program name or path, as typed by the user
    """
    return APPLICATIONS.get(command.rsplit("/", 1)[-1], DEFAULT_PROFILE)


def derive_rule(profile: ApplicationProfile | ApplicationKind, token: str) -> MatchRule:
    """Return the rule identifying the window of `profile` launched with `token`.

    A bare `ApplicationKind` is accepted, title based kinds then compare titles exactly.

    Args:
        profile: application profile or kind
        token: the user chosen identifier
    """
    if isinstance(profile, ApplicationKind):
        profile = ApplicationProfile(profile, launch=DEFAULT_PROFILE.launch, launch_with_args=DEFAULT_PROFILE.launch_with_args)
    if profile.kind == ApplicationKind.TITLE_BASED:
        if profile.title_pattern is None:
            return ByTitlePattern(token, key=token, exact=True)
        return ByTitlePattern(profile.title_pattern.format(token=re.escape(token)), key=token)
    if profile.kind == ApplicationKind.OPAQUE_HANDLE_BASED:
        return ByOpaqueHandle(key=token)
    return ByClassPattern(f"^{re.escape(token)}$", key=token)


def build_launch_command(command: str, token: str, args: list[str], profile: ApplicationProfile | None = None) -> str:
    """Return the shell command starting `command` so that its window can be identified.

    Args:
        command: program to start
        token: the user chosen identifier
        args: extra arguments
        profile: application profile, looked up from `command` if not given
    """
    profile = profile or get_profile(command)
    if args:
        return profile.launch_with_args.format(cmd=command, token=token, args=" ".join(args))
    return profile.launch.format(cmd=command, token=token)
