"""Process runner: the single seam between the build helper and external tools.

Everything that shells out (probe, install, build, clean) goes through a
ProcessRunner so tests can substitute a fake.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Protocol

log = logging.getLogger(__name__)

# Exit statuses reported when a command cannot be launched (shell convention).
COMMAND_NOT_FOUND = 127
COMMAND_NOT_EXECUTABLE = 126


class ProcessRunner(Protocol):
    def which(self, name: str) -> str | None:
        """Resolve an executable name on PATH, or None."""
        ...

    def run(
        self,
        cmd: list[str],
        cwd: Path | None = None,
        env: dict[str, str] | None = None,
    ) -> int:
        """Run cmd with inherited stdout/stderr and return its exit status."""
        ...


class SubprocessRunner:
    """ProcessRunner backed by shutil.which and subprocess.run (output streamed, not captured)."""

    def which(self, name: str) -> str | None:
        found = shutil.which(name)
        log.debug("which %s -> %s", name, found)
        return found

    def run(
        self,
        cmd: list[str],
        cwd: Path | None = None,
        env: dict[str, str] | None = None,
    ) -> int:
        log.debug("run %s (cwd=%s)", " ".join(cmd), cwd)
        if cwd is not None and not cwd.is_dir():
            print(f"❌ Working directory not found: {cwd}", file=sys.stderr)
            return COMMAND_NOT_FOUND
        try:
            r = subprocess.run(cmd, cwd=str(cwd) if cwd else None, env=env)
        except FileNotFoundError:
            print(f"❌ Command not found: {cmd[0]}", file=sys.stderr)
            return COMMAND_NOT_FOUND
        except PermissionError:
            print(f"❌ Command not executable: {cmd[0]}", file=sys.stderr)
            return COMMAND_NOT_EXECUTABLE
        return r.returncode
