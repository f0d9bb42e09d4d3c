"""Host-aware flip clock build (cargo run / cargo build / cross build)."""

from .driver import BuildResult, build, build_command, clean
from .targets import (
    PLATFORM_TRIPLES,
    RUN_TARGET_NAME,
    BuildTarget,
    Platform,
    detect_host_platform,
    targets_for_host,
)

__all__ = [
    "PLATFORM_TRIPLES",
    "RUN_TARGET_NAME",
    "BuildResult",
    "BuildTarget",
    "Platform",
    "build",
    "build_command",
    "clean",
    "detect_host_platform",
    "targets_for_host",
]
