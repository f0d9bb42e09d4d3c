"""Tests for flipclock_tooling.toolchain (probe, ensure_cross_helper)."""

import pytest
from conftest import FakeRunner

from flipclock_tooling.build.targets import Platform


class TestProbe:
    def test_all_present(self, config, capsys) -> None:
        from flipclock_tooling.toolchain import probe

        status = probe(FakeRunner(), config, Platform.LINUX)
        assert status.compiler_present
        assert status.container_engine_present
        assert status.cross_helper_present
        _, err = capsys.readouterr()
        assert err == ""

    def test_missing_cargo_is_fatal_with_install_hint(self, config) -> None:
        from flipclock_tooling.errors import MissingRequiredToolchainError
        from flipclock_tooling.toolchain import probe

        with pytest.raises(MissingRequiredToolchainError, match="https://rustup.rs/") as exc:
            probe(FakeRunner(tools={"docker", "cross"}), config, Platform.LINUX)
        assert exc.value.exit_code == 1

    def test_missing_docker_warns_once_and_continues(self, config, capsys) -> None:
        from flipclock_tooling.toolchain import probe

        status = probe(FakeRunner(tools={"cargo", "cross"}), config, Platform.MACOS)
        assert status.compiler_present
        assert not status.container_engine_present
        _, err = capsys.readouterr()
        assert err.count("Cross-compilation requires Docker") == 1
        assert "Docker Desktop for Mac" in err

    def test_missing_docker_not_logged_as_warning(self, config, caplog) -> None:
        from flipclock_tooling.toolchain import probe

        with caplog.at_level("WARNING"):
            probe(FakeRunner(tools={"cargo", "cross"}), config, Platform.LINUX)
        assert caplog.records == []

    def test_linux_docker_hint(self, config, capsys) -> None:
        from flipclock_tooling.toolchain import probe

        probe(FakeRunner(tools={"cargo"}), config, Platform.LINUX)
        _, err = capsys.readouterr()
        assert "docker.io or docker-ce" in err

    def test_probe_order_is_compiler_engine_helper(self, config) -> None:
        from flipclock_tooling.toolchain import probe

        seen: list[str] = []
        runner = FakeRunner()
        real_which = runner.which

        def which(name: str) -> str | None:
            seen.append(name)
            return real_which(name)

        runner.which = which  # type: ignore[method-assign]
        probe(runner, config, Platform.LINUX)
        assert seen == ["cargo", "docker", "cross"]

    def test_probe_does_not_run_anything(self, config) -> None:
        from flipclock_tooling.toolchain import probe

        runner = FakeRunner(tools={"cargo"})
        probe(runner, config, Platform.LINUX)
        assert runner.calls == []


class TestEnsureCrossHelper:
    def test_noop_when_present(self, config) -> None:
        from flipclock_tooling.toolchain import ToolchainStatus, ensure_cross_helper

        runner = FakeRunner()
        status = ToolchainStatus(True, True, True)
        assert ensure_cross_helper(status, runner, config) is True
        assert runner.calls == []

    def test_installs_and_marks_present(self, config, capsys) -> None:
        from flipclock_tooling.toolchain import ToolchainStatus, ensure_cross_helper

        runner = FakeRunner(results={("cargo", "install", "cross"): 0})
        status = ToolchainStatus(True, True, False)
        assert ensure_cross_helper(status, runner, config) is True
        assert status.cross_helper_present is True
        assert runner.calls == [["cargo", "install", "cross"]]
        assert runner.envs[0]["RUSTUP_SKIP_SELF_UPDATE"] == "1"
        out, _ = capsys.readouterr()
        assert "'cross' tool not found" in out

    def test_install_failure_is_fatal(self, config) -> None:
        from flipclock_tooling.errors import DependencyInstallError
        from flipclock_tooling.toolchain import ToolchainStatus, ensure_cross_helper

        runner = FakeRunner(results={("cargo", "install"): 101})
        status = ToolchainStatus(True, False, False)
        with pytest.raises(DependencyInstallError, match="exited 101"):
            ensure_cross_helper(status, runner, config)
        assert status.cross_helper_present is False

    def test_uses_configured_install_command(self, tmp_path) -> None:
        from flipclock_tooling.config import load_config
        from flipclock_tooling.toolchain import ToolchainStatus, ensure_cross_helper

        cfg = load_config(tmp_path, overrides={"install_command": ["cargo", "binstall", "-y", "cross"]})
        runner = FakeRunner()
        ensure_cross_helper(ToolchainStatus(True, True, False), runner, cfg)
        assert runner.calls == [["cargo", "binstall", "-y", "cross"]]
