"""Stage a built binary (and font.ttf when present) into dist/ under its installable name."""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from flipclock_tooling.build.driver import BuildResult
from flipclock_tooling.build.targets import Platform
from flipclock_tooling.config import BuildConfig
from flipclock_tooling.errors import MissingPostBuildArtifactError, PackagingError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class StagingArtifact:
    directory_path: Path
    binary_destination: Path
    font_destination: Path | None = None


def ensure_staging_dir(path: Path) -> Path:
    """Create the staging directory if needed. Safe to call repeatedly."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def find_resource(name: str, base_dir: Path) -> Path | None:
    """First match of name in base_dir, then base_dir's parent; None if neither has it."""
    for d in (base_dir, base_dir.parent):
        candidate = d / name
        if candidate.is_file():
            return candidate
    log.debug("%s not found in %s or %s", name, base_dir, base_dir.parent)
    return None


def staged_name(result: BuildResult, config: BuildConfig) -> str:
    return f"{config.app_name}{result.target.output_extension}"


def install_hint(artifact: StagingArtifact, platform: Platform) -> str:
    if platform is Platform.WINDOWS:
        return (
            f"Right-click {artifact.binary_destination.name} and choose 'Install' "
            "to use it as your screensaver."
        )
    return f"Run it with: {artifact.binary_destination}"


def package(result: BuildResult, config: BuildConfig) -> StagingArtifact:
    """Copy the build output into config.dist_dir.

    Raises MissingPostBuildArtifactError (before touching the staging
    directory) when the expected binary does not exist, and PackagingError
    when the staging directory cannot be created or written.
    """
    if not result.succeeded or not result.target.is_release:
        msg = f"Cannot package {result.target.name}: not a successful release build"
        raise ValueError(msg)
    src = result.artifact_path or (
        config.project_root / result.target.output_path(config.binary_name)
    )
    if not src.is_file():
        raise MissingPostBuildArtifactError(src, result.target.name)

    out_dir = config.dist_dir
    dst = out_dir / staged_name(result, config)
    font_src = find_resource(config.font_name, config.project_root)
    font_dst = out_dir / config.font_name if font_src is not None else None
    try:
        ensure_staging_dir(out_dir)
        shutil.copy2(src, dst)
        if result.target.platform is not Platform.WINDOWS:
            dst.chmod(0o755)
        print(f"📦 Copying {src.name} -> {dst}")
        if font_src is not None and font_dst is not None:
            if font_src.resolve() == font_dst.resolve():
                log.debug("%s already in %s", config.font_name, out_dir)
            else:
                shutil.copy2(font_src, font_dst)
                print(f"📦 Copying {font_src} -> {font_dst}")
    except OSError as e:
        msg = f"Cannot stage into {out_dir}: {e}"
        raise PackagingError(msg) from e

    artifact = StagingArtifact(
        directory_path=out_dir, binary_destination=dst, font_destination=font_dst
    )
    print(f"✅ Packaged {result.target.name} build in {out_dir}")
    print(f"   {install_hint(artifact, result.target.platform)}")
    return artifact
