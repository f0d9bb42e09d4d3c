"""Pytest fixtures for flip clock build helper tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from flipclock_tooling.config import BuildConfig, load_config


class FakeRunner:
    """ProcessRunner double: a fixed set of tools on PATH and scripted exit codes.

    results maps a command prefix (tuple of leading argv words) to an exit code
    or to a callable(cmd) -> int, so a fake build can drop a binary on disk.
    """

    def __init__(
        self,
        tools: set[str] | None = None,
        results: dict[tuple[str, ...], int | Callable[[list[str]], int]] | None = None,
    ) -> None:
        self.tools = set(tools if tools is not None else {"cargo", "docker", "cross"})
        self.results = dict(results or {})
        self.calls: list[list[str]] = []
        self.envs: list[dict[str, str] | None] = []

    def which(self, name: str) -> str | None:
        return f"/usr/bin/{name}" if name in self.tools else None

    def run(
        self,
        cmd: list[str],
        cwd: Path | None = None,
        env: dict[str, str] | None = None,
    ) -> int:
        self.calls.append(list(cmd))
        self.envs.append(env)
        best: tuple[str, ...] | None = None
        for prefix in self.results:
            if tuple(cmd[: len(prefix)]) == prefix and (best is None or len(prefix) > len(best)):
                best = prefix
        if best is None:
            return 0
        outcome = self.results[best]
        return outcome(cmd) if callable(outcome) else outcome


def drop_binary(root: Path, triple: str, name: str = "rust_flip_clock") -> Callable[[list[str]], int]:
    """Fake build outcome that writes target/{triple}/release/{name}[.exe] and exits 0."""

    def _build(cmd: list[str]) -> int:
        suffix = ".exe" if "windows" in triple else ""
        out = root / "target" / triple / "release" / f"{name}{suffix}"
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_bytes(b"\x7fELF fake binary")
        return 0

    return _build


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Project directory nested one level down so font lookup can reach a parent."""
    root = tmp_path / "flip_clock"
    root.mkdir()
    return root


@pytest.fixture
def config(project_root: Path) -> BuildConfig:
    return load_config(project_root)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()
