"""Install the cross helper with cargo when it is missing."""

from __future__ import annotations

import os

from flipclock_tooling.config import BuildConfig
from flipclock_tooling.errors import DependencyInstallError
from flipclock_tooling.runner import ProcessRunner
from flipclock_tooling.toolchain.probe import ToolchainStatus


def ensure_cross_helper(
    status: ToolchainStatus, runner: ProcessRunner, config: BuildConfig
) -> bool:
    """Install cross if absent and mark it present. Raises DependencyInstallError on failure."""
    if status.cross_helper_present:
        return True
    print(f"Info:  '{config.cross_helper}' tool not found. Installing via {config.compiler}...")
    rc = runner.run(list(config.install_command), env=config.build_env(dict(os.environ)))
    if rc != 0:
        cmd = " ".join(config.install_command)
        msg = f"Failed to install {config.cross_helper} ({cmd} exited {rc})"
        raise DependencyInstallError(msg)
    status.cross_helper_present = True
    print(f"✅ Installed {config.cross_helper}")
    return True
