"""Interactive and direct build sessions as an explicit state machine.

SELECTING -> BUILDING -> (PACKAGING) -> REPORTING -> SELECTING | DONE

Interactive sessions return to SELECTING after every action until "exit" (or
end of input). Direct sessions start at BUILDING with a named target and stop
after REPORTING. Fatal errors (FatalError subclasses) propagate to the caller.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from enum import Enum

from flipclock_tooling.build.driver import BuildResult, build
from flipclock_tooling.build.targets import RUN_TARGET_NAME, BuildTarget, Platform, targets_for_host
from flipclock_tooling.config import BuildConfig
from flipclock_tooling.errors import InvalidSelectionError
from flipclock_tooling.package.stage import StagingArtifact, package
from flipclock_tooling.runner import ProcessRunner
from flipclock_tooling.toolchain import ToolchainStatus, ensure_cross_helper, probe

log = logging.getLogger(__name__)

EXIT_CHOICE = "exit"
PROMPT = "Please enter your choice: "


class SessionState(Enum):
    SELECTING = "selecting"
    BUILDING = "building"
    PACKAGING = "packaging"
    REPORTING = "reporting"
    DONE = "done"


def preflight(runner: ProcessRunner, config: BuildConfig, host: Platform) -> ToolchainStatus:
    """Probe the toolchain and install cross if needed. Raises on fatal conditions."""
    status = probe(runner, config, host)
    ensure_cross_helper(status, runner, config)
    return status


def resolve_selection(choice: str, targets: list[BuildTarget]) -> BuildTarget | None:
    """Map a menu number, target name or label to a target; None means exit.

    Numbers are 1-based in menu order with exit last. Raises InvalidSelectionError.
    """
    c = choice.strip().lower()
    if c.isdigit():
        idx = int(c)
        if 1 <= idx <= len(targets):
            return targets[idx - 1]
        if idx == len(targets) + 1:
            return None
    if c == EXIT_CHOICE:
        return None
    for t in targets:
        if c in (t.name, t.label.lower()):
            return t
    raise InvalidSelectionError(choice, [t.name for t in targets] + [EXIT_CHOICE])


class Session:
    def __init__(
        self,
        config: BuildConfig,
        runner: ProcessRunner,
        host: Platform,
        input_fn: Callable[[str], str] = input,
    ) -> None:
        self.config = config
        self.runner = runner
        self.host = host
        self.targets = targets_for_host(host, config)
        self.input_fn = input_fn
        self.state = SessionState.SELECTING
        self.history: list[SessionState] = []
        self._target: BuildTarget | None = None
        self._result: BuildResult | None = None
        self._artifact: StagingArtifact | None = None

    def menu_lines(self) -> list[str]:
        labels = [t.label for t in self.targets] + ["Exit"]
        return [f"{i}) {label}" for i, label in enumerate(labels, start=1)]

    def target_named(self, name: str) -> BuildTarget:
        """Direct-mode lookup. Raises InvalidSelectionError if the host does not offer name."""
        n = name.strip().lower()
        for t in self.targets:
            if t.name == n:
                return t
        raise InvalidSelectionError(name, [t.name for t in self.targets if t.is_release])

    def _enter(self, state: SessionState) -> None:
        log.debug("session %s -> %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)

    def _current_target(self) -> BuildTarget:
        if self._target is None:
            msg = f"No target selected in state {self.state.value}"
            raise RuntimeError(msg)
        return self._target

    def _current_result(self) -> BuildResult:
        if self._result is None:
            msg = f"No build result in state {self.state.value}"
            raise RuntimeError(msg)
        return self._result

    def _select(self) -> None:
        print()
        for line in self.menu_lines():
            print(line)
        try:
            choice = self.input_fn(PROMPT)
        except EOFError:
            print()
            self._enter(SessionState.DONE)
            return
        try:
            target = resolve_selection(choice, self.targets)
        except InvalidSelectionError as e:
            print(f"❌ {e}", file=sys.stderr)
            return
        if target is None:
            self._enter(SessionState.DONE)
            return
        self._target = target
        self._enter(SessionState.BUILDING)

    def _build(self) -> None:
        target = self._current_target()
        self._artifact = None
        self._result = build(target, self.runner, self.config)
        if self._result.succeeded and target.is_release:
            self._enter(SessionState.PACKAGING)
        else:
            self._enter(SessionState.REPORTING)

    def _package(self) -> None:
        self._artifact = package(self._current_result(), self.config)
        self._enter(SessionState.REPORTING)

    def _report(self, interactive: bool) -> None:
        r = self._current_result()
        if r.succeeded and r.target.name == RUN_TARGET_NAME:
            print("✅ Run finished")
        elif not r.succeeded and interactive:
            print("Returning to menu.", file=sys.stderr)
        self._enter(SessionState.SELECTING if interactive else SessionState.DONE)

    def _step(self, interactive: bool) -> None:
        if self.state is SessionState.SELECTING:
            self._select()
        elif self.state is SessionState.BUILDING:
            self._build()
        elif self.state is SessionState.PACKAGING:
            self._package()
        elif self.state is SessionState.REPORTING:
            self._report(interactive)

    def run_interactive(self) -> int:
        """Menu loop until exit. Build failures are reported and the menu comes back. Returns 0."""
        self._enter(SessionState.SELECTING)
        while self.state is not SessionState.DONE:
            self._step(interactive=True)
        return 0

    def run_direct(self, target: BuildTarget) -> int:
        """Build (and package) one target. Returns 0, or the external tool's exit status."""
        self._target = target
        self._enter(SessionState.BUILDING)
        while self.state is not SessionState.DONE:
            self._step(interactive=False)
        return self._current_result().returncode

    @property
    def last_result(self) -> BuildResult | None:
        return self._result

    @property
    def last_artifact(self) -> StagingArtifact | None:
        return self._artifact
