"""Decide and apply what a toggle does to the matched window.

A window is either hidden in the special workspace, shown on another
workspace, shown on the active one, or absent. Each state maps to a fixed
sequence of operations (`plan`) which `Toggler` executes one by one.

Showing a window that sits on a regular workspace always goes through the
special workspace first: moving it directly to the active workspace can
leave Hyprland frozen.
"""

__all__ = ["PlanOptions", "ToggleOutcome", "Toggler", "bind_rule", "classify", "plan"]

import asyncio
import dataclasses
import logging
from dataclasses import dataclass, field

from .adapters.backend import EnvironmentBackend
from .applications import ApplicationProfile, build_launch_command, derive_rule, get_profile
from .config import Settings
from .ledger import AddressLedger
from .matcher import ClientMatcher, find_by_initial_title
from .models import (
    ApplicationKind,
    BringActiveToTop,
    ByOpaqueHandle,
    Exec,
    FocusWindow,
    LiveClient,
    MatchRule,
    MoveToWorkspace,
    MoveToWorkspaceSilent,
    Operation,
    PlacementState,
    WorkspaceState,
)


@dataclass(frozen=True)
class PlanOptions:
    """Knobs affecting the generated plan."""

    special_target: str
    launch_command: str = ""
    background: bool = False
    focus: bool = False


@dataclass
class ToggleOutcome:
    """What happened during a toggle."""

    state: PlacementState
    operations: list[Operation] = field(default_factory=list)
    failed: list[Operation] = field(default_factory=list)
    recorded_address: str | None = None

    @property
    def ok(self) -> bool:
        """True when every operation succeeded."""
        return not self.failed


def classify(client: LiveClient | None, active: WorkspaceState, special_target: str) -> PlacementState:
    """Return the placement state of `client`.

    Args:
        client: the matched window
        active: the focused workspace
        special_target: name of the special workspace, as reported by Hyprland
    """
    if client is None:
        return PlacementState.ABSENT
    if client.workspace.name == special_target:
        return PlacementState.HIDDEN
    if client.workspace.id == active.id:
        return PlacementState.ACTIVE_HERE
    return PlacementState.ELSEWHERE


def bind_rule(rule: MatchRule, client: LiveClient | None) -> MatchRule:
    """Return the rule to dispatch with: address rules get the client's address."""
    if isinstance(rule, ByOpaqueHandle) and client is not None:
        return dataclasses.replace(rule, address=client.address)
    return rule


def plan(state: PlacementState, rule: MatchRule, active: WorkspaceState, options: PlanOptions) -> list[Operation]:
    """Return the operations bringing the window to the other visibility state.

    Args:
        state: current placement of the window
        rule: rule designating the window
        active: the focused workspace
        options: launch command and flags
    """
    if state == PlacementState.ABSENT:
        prefix = f"[workspace {options.special_target} silent] " if options.background else ""
        return [Exec(f"{prefix}{options.launch_command}")]

    hide = MoveToWorkspaceSilent(options.special_target, rule)
    if state == PlacementState.ACTIVE_HERE:
        return [hide]

    operations: list[Operation] = []
    if state == PlacementState.ELSEWHERE:
        # not already hidden: hop through the special workspace
        operations.append(hide)
    operations.append(MoveToWorkspace(active.id, rule))
    if options.focus:
        operations.append(FocusWindow(rule))
    # two floating windows on the same workspace: no way to know which one is in front
    operations.append(BringActiveToTop())
    return operations


class Toggler:
    """Runs one toggle: match, classify, plan, execute."""

    def __init__(self, settings: Settings, backend: EnvironmentBackend, ledger: AddressLedger, log: logging.Logger) -> None:
        self.settings = settings
        self.backend = backend
        self.ledger = ledger
        self.log = log
        self.matcher = ClientMatcher(ledger, log)
        self.profile: ApplicationProfile = get_profile(settings.command)

    @property
    def name(self) -> str:
        """Human readable `command:identifier`."""
        return f"{self.settings.command}:{self.settings.identifier}"

    async def run(self) -> ToggleOutcome:
        """Toggle the window, launching the application if needed."""
        settings = self.settings
        rule = derive_rule(self.profile, settings.identifier)
        clients = await self.backend.list_clients(log=self.log)
        active = await self.backend.active_workspace(log=self.log)

        client = await self.matcher.find(rule, clients)
        state = classify(client, active, settings.special_target)
        self.log.debug("%s is %s (active workspace: %s)", self.name, state.value, active.id)

        options = PlanOptions(
            special_target=settings.special_target,
            launch_command=build_launch_command(settings.command, settings.identifier, settings.args, self.profile),
            background=settings.background,
            focus=settings.focus,
        )
        outcome = ToggleOutcome(state=state, operations=plan(state, bind_rule(rule, client), active, options))
        for operation in outcome.operations:
            if not await self.backend.dispatch(operation, log=self.log):
                outcome.failed.append(operation)
                await self._report(f"Failed to run {operation.render()} for {self.name}")
            else:
                self.log.debug("Done: %s", operation.render())

        if state == PlacementState.ABSENT and outcome.ok and self.profile.kind == ApplicationKind.OPAQUE_HANDLE_BASED:
            outcome.recorded_address = await self._capture_address()
        return outcome

    async def _capture_address(self) -> str | None:
        """Remember the address of the window that was just launched, if it shows up."""
        if self.settings.settle_delay:
            await asyncio.sleep(self.settings.settle_delay)
        token = self.settings.identifier
        client = find_by_initial_title(token, await self.backend.list_clients(log=self.log))
        if client is None:
            self.log.info("No window with initial title %s found after launch, address not recorded", token)
            return None
        try:
            await self.ledger.record(token, client.address)
        except OSError as e:
            self.log.warning("Can't record address %s for %s: %s", client.address, token, e)
            return None
        return client.address

    async def _report(self, message: str) -> None:
        self.log.error(message)
        if self.settings.debug and self.settings.notify:
            await self.backend.notify_error(message, log=self.log)
