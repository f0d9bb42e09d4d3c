"""Artifact staging for finished release builds."""

from .stage import StagingArtifact, ensure_staging_dir, find_resource, package

__all__ = [
    "StagingArtifact",
    "ensure_staging_dir",
    "find_resource",
    "package",
]
