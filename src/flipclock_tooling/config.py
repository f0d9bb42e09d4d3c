"""Build helper configuration: defaults, optional flipclock.yaml, CLI overrides.

YAML format (every key optional):

    app_name: rust_flip_clock        # staged name, e.g. dist/rust_flip_clock.scr
    binary_name: rust_flip_clock     # cargo output name under target/{triple}/release
    dist_dir: dist                   # staging directory (relative to project root)
    font_name: font.ttf              # companion resource copied next to the binary
    compiler: cargo
    container_engine: docker
    cross_helper: cross
    install_command: [cargo, install, cross]
    triples:                         # platform -> rust target triple overrides
      windows: x86_64-pc-windows-gnu
    env:                             # extra environment for build commands
      RUSTFLAGS: "-C target-cpu=x86-64-v2"

Paths are resolved against project_root, never against the process cwd.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from flipclock_tooling.errors import ConfigError

log = logging.getLogger(__name__)

CONFIG_FILE_NAME = "flipclock.yaml"

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "rust_flip_clock",
    "binary_name": "rust_flip_clock",
    "dist_dir": "dist",
    "font_name": "font.ttf",
    "compiler": "cargo",
    "container_engine": "docker",
    "cross_helper": "cross",
    "install_command": ["cargo", "install", "cross"],
    "triples": {},
    "env": {},
}

# Always exported to build commands; keeps rustup from updating itself mid-build.
BASE_BUILD_ENV: dict[str, str] = {"RUSTUP_SKIP_SELF_UPDATE": "1"}


@dataclass(frozen=True)
class BuildConfig:
    project_root: Path
    dist_dir: Path
    app_name: str = "rust_flip_clock"
    binary_name: str = "rust_flip_clock"
    font_name: str = "font.ttf"
    compiler: str = "cargo"
    container_engine: str = "docker"
    cross_helper: str = "cross"
    install_command: tuple[str, ...] = ("cargo", "install", "cross")
    triples: dict[str, str] = field(default_factory=dict)
    env: dict[str, str] = field(default_factory=dict)

    def build_env(self, base: dict[str, str]) -> dict[str, str]:
        """Environment for build commands: base (usually os.environ) + BASE_BUILD_ENV + config env."""
        out = dict(base)
        out.update(BASE_BUILD_ENV)
        out.update(self.env)
        return out


def resolve_config(data: dict[str, Any] | None) -> dict[str, Any]:
    """Return config dict with defaults filled. Unknown keys are dropped with a warning."""
    out = dict(DEFAULT_CONFIG)
    if not data:
        return out
    for k, v in data.items():
        if k not in out:
            log.warning("Ignoring unknown config key %r", k)
            continue
        if v is not None:
            out[k] = v
    return out


def read_config_file(path: Path) -> dict[str, Any]:
    """Load a YAML config mapping. Raises ConfigError if unreadable or not a mapping."""
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        msg = f"Cannot read config {path}: {e}"
        raise ConfigError(msg) from e
    except yaml.YAMLError as e:
        msg = f"Invalid YAML in {path}: {e}"
        raise ConfigError(msg) from e
    if not isinstance(data, dict):
        msg = f"Config {path} must be a mapping, got {type(data).__name__}"
        raise ConfigError(msg)
    return data


def _str_map(value: Any, key: str) -> dict[str, str]:
    if not isinstance(value, dict):
        msg = f"Config key {key!r} must be a mapping"
        raise ConfigError(msg)
    return {str(k): str(v) for k, v in value.items()}


def load_config(
    project_root: Path,
    config_path: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> BuildConfig:
    """Build a BuildConfig from defaults, then the config file, then overrides.

    config_path defaults to project_root/flipclock.yaml and is optional in that
    case; an explicitly given config_path must exist.
    """
    root = project_root.resolve()
    if not root.is_dir():
        msg = f"Project root {root} is not a directory"
        raise ConfigError(msg)
    data: dict[str, Any] = {}
    if config_path is not None:
        data = read_config_file(config_path)
        log.debug("Loaded config from %s", config_path)
    else:
        default_path = root / CONFIG_FILE_NAME
        if default_path.is_file():
            data = read_config_file(default_path)
            log.debug("Loaded config from %s", default_path)

    merged = resolve_config(data)
    for k, v in (overrides or {}).items():
        if v is not None:
            merged[k] = v

    install = merged["install_command"]
    if isinstance(install, str):
        install = install.split()
    if not isinstance(install, (list, tuple)) or not install:
        msg = "Config key 'install_command' must be a non-empty list"
        raise ConfigError(msg)

    dist = Path(str(merged["dist_dir"]))
    return BuildConfig(
        project_root=root,
        dist_dir=dist if dist.is_absolute() else root / dist,
        app_name=str(merged["app_name"]),
        binary_name=str(merged["binary_name"]),
        font_name=str(merged["font_name"]),
        compiler=str(merged["compiler"]),
        container_engine=str(merged["container_engine"]),
        cross_helper=str(merged["cross_helper"]),
        install_command=tuple(str(x) for x in install),
        triples={k.lower(): v for k, v in _str_map(merged["triples"], "triples").items()},
        env=_str_map(merged["env"], "env"),
    )
