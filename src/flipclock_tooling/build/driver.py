"""Drive cargo run / cargo build / cross build for one target.

Native release builds use the compiler front-end directly; foreign targets go
through the cross helper (which builds inside a container). Output is streamed
to the terminal by the runner, never buffered.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path

from flipclock_tooling.build.targets import BuildTarget
from flipclock_tooling.config import BuildConfig
from flipclock_tooling.runner import ProcessRunner

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildResult:
    target: BuildTarget
    succeeded: bool
    returncode: int
    artifact_path: Path | None = None


def build_command(target: BuildTarget, config: BuildConfig) -> list[str]:
    """Command line for target: cargo run, or {cargo|cross} build --target <triple> --release."""
    if not target.is_release:
        return [config.compiler, "run"]
    tool = config.cross_helper if target.uses_cross_helper else config.compiler
    return [tool, "build", "--target", target.triple, "--release"]


def build(target: BuildTarget, runner: ProcessRunner, config: BuildConfig) -> BuildResult:
    """Invoke the external build for target. Never raises on a nonzero exit."""
    cmd = build_command(target, config)
    if target.is_release:
        how = "cross" if target.uses_cross_helper else "native"
        print(f"🔨 Building for {target.platform.value} ({how}, {target.triple})...")
    else:
        print("🔨 Running locally...")
    rc = runner.run(cmd, cwd=config.project_root, env=config.build_env(dict(os.environ)))
    if rc != 0:
        what = f"Build failed for {target.name}" if target.is_release else "Run failed"
        print(f"❌ {what} (exit {rc})", file=sys.stderr)
        return BuildResult(target=target, succeeded=False, returncode=rc)
    if not target.is_release:
        return BuildResult(target=target, succeeded=True, returncode=0)
    artifact = config.project_root / target.output_path(config.binary_name)
    log.debug("Build for %s succeeded; expecting %s", target.name, artifact)
    return BuildResult(target=target, succeeded=True, returncode=0, artifact_path=artifact)


def clean(runner: ProcessRunner, config: BuildConfig) -> int:
    """cargo clean in the project root. Returns the tool's exit status."""
    print("🧹 Cleaning project...")
    rc = runner.run([config.compiler, "clean"], cwd=config.project_root)
    if rc != 0:
        print(f"❌ Clean failed (exit {rc})", file=sys.stderr)
    else:
        print("✅ Clean complete")
    return rc
