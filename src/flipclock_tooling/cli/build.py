"""`flipclock build <target>` argument parsing."""

import argparse

from flipclock_tooling.build.targets import Platform


def parse_build_argv(argv: list[str]) -> argparse.Namespace:
    """Parse argv after 'build'. Exits 2 with argparse usage on bad input."""
    ap = argparse.ArgumentParser(
        prog="flipclock build",
        description="Release build for one platform (native on the host, cross otherwise), then stage into dist/",
    )
    ap.add_argument(
        "target",
        type=str.lower,
        choices=[p.value for p in Platform],
        help="windows, linux or macos (macos only on a macOS host)",
    )
    return ap.parse_args(argv)
