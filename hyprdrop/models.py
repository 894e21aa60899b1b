"""Types shared by hyprdrop: Hyprland payloads, snapshots, rules and operations."""

import re
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import TypedDict

__all__ = [
    "ApplicationKind",
    "BringActiveToTop",
    "ByClassPattern",
    "ByOpaqueHandle",
    "ByTitlePattern",
    "Exec",
    "ExitCode",
    "FocusWindow",
    "HyprdropError",
    "LiveClient",
    "MatchRule",
    "MoveToWorkspace",
    "MoveToWorkspaceSilent",
    "Operation",
    "PlacementState",
    "WorkspaceDf",
    "WorkspaceState",
]

PlainTypes = float | str | dict[str, "PlainTypes"] | list["PlainTypes"]
JSONResponse = dict[str, PlainTypes] | list[dict[str, PlainTypes]] | PlainTypes


class WorkspaceDf(TypedDict):
    """Workspace definition."""

    id: int
    name: str


class HyprdropError(BaseException):
    """Used for errors which already triggered logging."""


class ExitCode(IntEnum):
    """Exit codes of the hyprdrop command."""

    SUCCESS = 0
    USAGE_ERROR = 1  # invalid arguments
    ENV_ERROR = 2  # not running under Hyprland
    CONNECTION_ERROR = 3  # cannot talk to the compositor
    COMMAND_ERROR = 4  # at least one dispatched step failed


class ApplicationKind(Enum):
    """How windows of an application can be recognized."""

    CLASS_BASED = "class"
    TITLE_BASED = "title"
    OPAQUE_HANDLE_BASED = "address"


class PlacementState(Enum):
    """Where the matched window currently is, relative to the active workspace."""

    HIDDEN = "hidden"
    ELSEWHERE = "elsewhere"
    ACTIVE_HERE = "active_here"
    ABSENT = "absent"


@dataclass(frozen=True)
class WorkspaceState:
    """A workspace as reported by Hyprland."""

    id: int
    name: str

    @classmethod
    def from_json(cls, data: WorkspaceDf) -> "WorkspaceState":
        """Build from a Hyprland workspace object."""
        return cls(id=int(data["id"]), name=str(data["name"]))


@dataclass(frozen=True)
class LiveClient:
    """Snapshot of a window, never cached across invocations."""

    address: str
    klass: str
    title: str
    initial_title: str
    workspace: WorkspaceState

    @classmethod
    def from_json(cls, data: dict) -> "LiveClient":
        """Build from one entry of `hyprctl -j clients`."""
        return cls(
            address=data["address"],
            klass=data.get("class", ""),
            title=data.get("title", ""),
            initial_title=data.get("initialTitle", ""),
            workspace=WorkspaceState.from_json(data["workspace"]),
        )


# Match rules {{{


@dataclass(frozen=True)
class ByClassPattern:
    """Match on the window class with a regular expression."""

    pattern: str
    key: str

    def matches(self, client: LiveClient) -> bool:
        """Return True if the client's class satisfies the pattern."""
        return re.search(self.pattern, client.klass) is not None

    def selector(self) -> str:
        """Hyprland window selector."""
        return f"class:{self.pattern}"


@dataclass(frozen=True)
class ByTitlePattern:
    """Match on the window title.

    With `exact`, `pattern` is the literal title and comparison is plain
    equality; otherwise `pattern` is a regular expression searched in the title.
    """

    pattern: str
    key: str
    exact: bool = False

    def matches(self, client: LiveClient) -> bool:
        """Return True if the client's title satisfies the rule."""
        if self.exact:
            return client.title == self.pattern
        return re.search(self.pattern, client.title) is not None

    def selector(self) -> str:
        """Hyprland window selector."""
        if self.exact:
            return f"title:^{re.escape(self.pattern)}$"
        return f"title:{self.pattern}"


@dataclass(frozen=True)
class ByOpaqueHandle:
    """Match through a previously captured window address.

    `key` is the user token, compared against the window's initial title when
    no usable address is known. `address` is filled once resolved.
    """

    key: str
    address: str | None = None

    def matches(self, client: LiveClient) -> bool:
        """Return True if the client is the resolved window."""
        return self.address is not None and client.address == self.address

    def selector(self) -> str:
        """Hyprland window selector."""
        if not self.address:
            msg = f"window address for {self.key!r} is not resolved"
            raise ValueError(msg)
        return f"address:{self.address}"


MatchRule = ByClassPattern | ByTitlePattern | ByOpaqueHandle

# }}}

# Operations {{{


@dataclass(frozen=True)
class Exec:
    """Run a command through the compositor."""

    command: str

    def render(self) -> str:
        """Dispatcher string."""
        return f"exec {self.command}"


@dataclass(frozen=True)
class MoveToWorkspaceSilent:
    """Move a window to a workspace without following it."""

    target: str
    rule: MatchRule

    def render(self) -> str:
        """Dispatcher string."""
        return f"movetoworkspacesilent {self.target},{self.rule.selector()}"


@dataclass(frozen=True)
class MoveToWorkspace:
    """Move a window to a workspace and follow it."""

    target: int
    rule: MatchRule

    def render(self) -> str:
        """Dispatcher string."""
        return f"movetoworkspace {self.target},{self.rule.selector()}"


@dataclass(frozen=True)
class FocusWindow:
    """Give focus to a window."""

    rule: MatchRule

    def render(self) -> str:
        """Dispatcher string."""
        return f"focuswindow {self.rule.selector()}"


@dataclass(frozen=True)
class BringActiveToTop:
    """Raise the focused window above other floating windows."""

    def render(self) -> str:
        """Dispatcher string."""
        return "bringactivetotop"


Operation = Exec | MoveToWorkspaceSilent | MoveToWorkspace | FocusWindow | BringActiveToTop

# }}}
