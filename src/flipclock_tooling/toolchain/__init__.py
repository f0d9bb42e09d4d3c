"""Toolchain probing (cargo, docker, cross) and cross helper installation."""

from .install import ensure_cross_helper
from .probe import ToolchainStatus, detect, probe

__all__ = [
    "ToolchainStatus",
    "detect",
    "ensure_cross_helper",
    "probe",
]
