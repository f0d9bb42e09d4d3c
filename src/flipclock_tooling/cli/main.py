"""Main CLI entry point for the flip clock build helper."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable
from pathlib import Path

from flipclock_tooling.build.driver import clean
from flipclock_tooling.build.targets import Platform, detect_host_platform
from flipclock_tooling.cli.build import parse_build_argv
from flipclock_tooling.cli.parse_common import parse_flags, path_resolver, take_switch
from flipclock_tooling.config import BuildConfig, load_config
from flipclock_tooling.errors import FatalError, InvalidSelectionError
from flipclock_tooling.runner import ProcessRunner, SubprocessRunner
from flipclock_tooling.session import Session, preflight
from flipclock_tooling.toolchain import detect, probe

log = logging.getLogger(__name__)

GLOBAL_FLAGS = (
    ("project_root", "--project-root", Path.cwd, path_resolver),
    ("config", "--config", None, path_resolver),
    ("dist_dir", "--dist-dir", None, None),
    ("binary_name", "--binary-name", None, None),
    ("app_name", "--app-name", None, None),
)

USAGE = """\
Usage: flipclock [--project-root DIR] [--dist-dir DIR] [--config FILE]
                 [--binary-name NAME] [--app-name NAME] [-v] [command]
Commands:
  menu            - Interactive menu (default when no command is given)
  run             - cargo run on this host
  build <target>  - Release build for windows, linux or macos, staged into dist/
  clean           - cargo clean
  targets         - List targets offered on this host
  doctor          - Report cargo/docker/cross availability (installs nothing)
  exit            - Do nothing, exit 0"""


def configure_logging(verbose: bool) -> None:
    debug = verbose or os.environ.get("FLIPCLOCK_DEBUG", "").lower() in ("1", "true", "yes")
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def print_banner(host: Platform) -> None:
    name = {Platform.WINDOWS: "Windows", Platform.LINUX: "Linux", Platform.MACOS: "MacOS"}[host]
    print("=" * 42)
    print(f"Flip Clock Build Helper ({name})")
    print("=" * 42)


def _doctor(runner: ProcessRunner, config: BuildConfig) -> int:
    status = detect(runner, config)
    rows = [
        (config.compiler, status.compiler_present, "required"),
        (config.container_engine, status.container_engine_present, "optional, for cross builds"),
        (config.cross_helper, status.cross_helper_present, "optional, installed on demand"),
    ]
    for tool, present, note in rows:
        mark = "✅" if present else "❌"
        print(f"{mark} {tool:<8} ({note})")
    return 0 if status.compiler_present else 1


def _targets(session: Session) -> int:
    for t in session.targets:
        if not t.is_release:
            print(f"  {t.name:<8} {t.label}")
            continue
        how = "cross" if t.uses_cross_helper else "native"
        print(f"  {t.name:<8} {t.triple:<28} {how:<6} -> {t.output_path(session.config.binary_name)}")
    return 0


def run(
    argv: list[str],
    runner: ProcessRunner | None = None,
    input_fn: Callable[[str], str] = input,
    host: Platform | None = None,
) -> int:
    """Parse argv (without program name), dispatch, and return the process exit status."""
    opts, rest = parse_flags(argv, *GLOBAL_FLAGS)
    verbose, rest = take_switch(rest, "-v", "--verbose")
    configure_logging(verbose)
    if rest and rest[0] in ("-h", "--help", "help"):
        print(USAGE)
        return 0
    command = rest[0].lower() if rest else "menu"
    args = rest[1:]
    runner = runner or SubprocessRunner()
    host = host or detect_host_platform()

    try:
        config = load_config(
            opts["project_root"],
            opts["config"],
            overrides={
                "dist_dir": opts["dist_dir"],
                "binary_name": opts["binary_name"],
                "app_name": opts["app_name"],
            },
        )
        log.debug("config: %s", config)
        session = Session(config, runner, host, input_fn=input_fn)

        if command == "exit":
            return 0
        if command == "targets":
            return _targets(session)
        if command == "doctor":
            return _doctor(runner, config)
        if command == "clean":
            probe(runner, config, host)
            return clean(runner, config)
        if command == "build":
            target = session.target_named(parse_build_argv(args).target)
            print_banner(host)
            preflight(runner, config, host)
            return session.run_direct(target)
        if command == "run":
            print_banner(host)
            preflight(runner, config, host)
            return session.run_direct(session.target_named("run"))
        if command == "menu":
            print_banner(host)
            preflight(runner, config, host)
            return session.run_interactive()
    except FatalError as e:
        print(f"❌ {e}", file=sys.stderr)
        return e.exit_code
    except InvalidSelectionError as e:
        print(f"❌ Target not available on this host: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        # The child build is killed with us; dist/ may hold a partial copy.
        print("\nInterrupted", file=sys.stderr)
        return 130

    print(f"Error: Unknown command: {command}", file=sys.stderr)
    print(USAGE, file=sys.stderr)
    return 1


def main() -> None:
    """Console script entry point."""
    sys.exit(run(sys.argv[1:]))


if __name__ == "__main__":
    main()
