"""Build targets offered per host: run-locally plus one release build per platform."""

from __future__ import annotations

import platform as _platform
from dataclasses import dataclass
from enum import Enum

from flipclock_tooling.config import BuildConfig

RUN_TARGET_NAME = "run"

OUTPUT_PATH_TEMPLATE = "target/{triple}/release/{binary}{exe_suffix}"


class Platform(str, Enum):
    WINDOWS = "windows"
    LINUX = "linux"
    MACOS = "macos"


# platform -> default rust target triple (x86_64, matching the Justfile recipes)
PLATFORM_TRIPLES: dict[Platform, str] = {
    Platform.WINDOWS: "x86_64-pc-windows-gnu",
    Platform.LINUX: "x86_64-unknown-linux-gnu",
    Platform.MACOS: "x86_64-apple-darwin",
}

# Staged file extension; .scr makes Windows offer "Install" on the file.
INSTALLABLE_EXTENSIONS: dict[Platform, str] = {
    Platform.WINDOWS: ".scr",
    Platform.LINUX: "",
    Platform.MACOS: "",
}

PLATFORM_LABELS: dict[Platform, str] = {
    Platform.WINDOWS: "Windows",
    Platform.LINUX: "Linux",
    Platform.MACOS: "Mac",
}

# Release targets offered on each host, in menu order. Mac builds need the Apple SDK,
# so only a macOS host offers them.
HOST_RELEASE_PLATFORMS: dict[Platform, tuple[Platform, ...]] = {
    Platform.WINDOWS: (Platform.WINDOWS, Platform.LINUX),
    Platform.LINUX: (Platform.LINUX, Platform.WINDOWS),
    Platform.MACOS: (Platform.MACOS, Platform.WINDOWS, Platform.LINUX),
}


@dataclass(frozen=True)
class BuildTarget:
    name: str
    platform: Platform
    triple: str
    uses_cross_helper: bool
    output_path_template: str
    output_extension: str
    label: str

    @property
    def is_release(self) -> bool:
        return self.name != RUN_TARGET_NAME

    def output_path(self, binary_name: str) -> str:
        """Expected cargo output path (relative to project root). Empty for the run target."""
        if not self.output_path_template:
            return ""
        exe_suffix = ".exe" if "windows" in self.triple else ""
        return self.output_path_template.format(
            triple=self.triple, binary=binary_name, exe_suffix=exe_suffix
        )


def detect_host_platform(system: str | None = None) -> Platform:
    """Map platform.system() to a Platform. Unknown systems are treated as Linux."""
    s = (system if system is not None else _platform.system()).lower()
    if s.startswith("win") or s.startswith("cygwin") or s.startswith("msys"):
        return Platform.WINDOWS
    if s == "darwin":
        return Platform.MACOS
    return Platform.LINUX


def run_target(host: Platform) -> BuildTarget:
    label = "Run Locally (Mac)" if host is Platform.MACOS else "Run Locally"
    return BuildTarget(
        name=RUN_TARGET_NAME,
        platform=host,
        triple="",
        uses_cross_helper=False,
        output_path_template="",
        output_extension="",
        label=label,
    )


def release_target(platform: Platform, host: Platform, config: BuildConfig) -> BuildTarget:
    """Release target for platform as built from host: native when they match, else via cross."""
    triple = config.triples.get(platform.value, PLATFORM_TRIPLES[platform])
    return BuildTarget(
        name=platform.value,
        platform=platform,
        triple=triple,
        uses_cross_helper=platform is not host,
        output_path_template=OUTPUT_PATH_TEMPLATE,
        output_extension=INSTALLABLE_EXTENSIONS[platform],
        label=f"Build for {PLATFORM_LABELS[platform]} (Release)",
    )


def targets_for_host(host: Platform, config: BuildConfig) -> list[BuildTarget]:
    """Run target first, then the host's release targets in menu order."""
    return [run_target(host)] + [
        release_target(p, host, config) for p in HOST_RELEASE_PLATFORMS[host]
    ]
