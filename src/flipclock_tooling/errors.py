"""Error taxonomy for the flip clock build helper.

Fatal errors carry the process exit code; cli.main prints them as a single
line and exits. InvalidSelectionError is recoverable inside the interactive loop.
"""

from __future__ import annotations

from pathlib import Path


class FlipclockError(Exception):
    """Base class for all build helper errors."""


class FatalError(FlipclockError):
    """Aborts the whole run with exit_code."""

    exit_code = 1


class MissingRequiredToolchainError(FatalError):
    """The compiler front-end (cargo) is not on PATH."""


class DependencyInstallError(FatalError):
    """Installing the cross-compilation helper failed."""


class MissingPostBuildArtifactError(FatalError):
    """The build reported success but the expected binary does not exist."""

    def __init__(self, path: Path, target_name: str) -> None:
        self.path = path
        self.target_name = target_name
        super().__init__(
            f"Build for {target_name} reported success but no binary was found at {path}"
        )


class PackagingError(FatalError):
    """The staging directory could not be created or written."""


class ConfigError(FatalError):
    """Config file could not be read or has the wrong shape."""


class InvalidSelectionError(FlipclockError):
    """Menu choice or named target is not offered on this host."""

    def __init__(self, choice: str, valid: list[str] | None = None) -> None:
        self.choice = choice
        self.valid = list(valid or [])
        msg = f"invalid option {choice!r}"
        if self.valid:
            msg += f" (choose one of: {', '.join(self.valid)})"
        super().__init__(msg)
