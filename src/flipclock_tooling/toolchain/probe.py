"""Probe PATH for cargo (required), docker and cross (optional)."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass

from flipclock_tooling.build.targets import Platform
from flipclock_tooling.config import BuildConfig
from flipclock_tooling.errors import MissingRequiredToolchainError
from flipclock_tooling.runner import ProcessRunner

log = logging.getLogger(__name__)

RUSTUP_URL = "https://rustup.rs/"

DOCKER_INSTALL_HINTS: dict[Platform, str] = {
    Platform.LINUX: "Please install docker.io or docker-ce.",
    Platform.MACOS: "Please install Docker Desktop for Mac.",
    Platform.WINDOWS: "Please install Docker Desktop for Windows.",
}


@dataclass
class ToolchainStatus:
    compiler_present: bool
    container_engine_present: bool
    cross_helper_present: bool


def detect(runner: ProcessRunner, config: BuildConfig) -> ToolchainStatus:
    """Resolve the three tools on PATH, in order, without reporting anything."""
    return ToolchainStatus(
        compiler_present=runner.which(config.compiler) is not None,
        container_engine_present=runner.which(config.container_engine) is not None,
        cross_helper_present=runner.which(config.cross_helper) is not None,
    )


def probe(runner: ProcessRunner, config: BuildConfig, host: Platform) -> ToolchainStatus:
    """Detect tools and report. Raises MissingRequiredToolchainError if the compiler is absent."""
    status = detect(runner, config)
    if not status.compiler_present:
        msg = f"Rust ({config.compiler}) is not installed. Please install it from {RUSTUP_URL}"
        raise MissingRequiredToolchainError(msg)
    if not status.container_engine_present:
        log.debug("%s not found on PATH", config.container_engine)
        print(
            f"⚠️  {config.container_engine} is not found. Cross-compilation requires Docker.",
            file=sys.stderr,
        )
        print(f"    {DOCKER_INSTALL_HINTS[host]}", file=sys.stderr)
    return status
