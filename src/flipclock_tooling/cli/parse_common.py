"""Shared CLI argument parsing for global flags (--project-root, --dist-dir, --config, ...)."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any


def parse_flags(
    argv: list[str],
    *specs: tuple[str, str, Any, Callable[[str], Any] | None],
) -> tuple[dict[str, Any], list[str]]:
    """Pull global valued flags out of argv, wherever they appear around the command.

    Flags are described as (key, flag, default, converter) tuples, e.g.
    ("dist_dir", "--dist-dir", None, None). A callable default is called.
    Both "--dist-dir out" and "--dist-dir=out" are accepted; a flag with no
    value left after it stays in the returned argv for the command to reject.
    """
    result: dict[str, Any] = {}
    for key, _flag, default, _converter in specs:
        result[key] = default() if callable(default) else default

    rest: list[str] = []
    i = 0
    while i < len(argv):
        matched = False
        for key, flag_str, _default, converter in specs:
            if argv[i] == flag_str and i + 1 < len(argv):
                raw, step = argv[i + 1], 2
            elif argv[i].startswith(flag_str + "="):
                raw, step = argv[i][len(flag_str) + 1 :], 1
            else:
                continue
            result[key] = converter(raw) if converter else raw
            i += step
            matched = True
            break
        if not matched:
            rest.append(argv[i])
            i += 1
    return result, rest


def take_switch(argv: list[str], *names: str) -> tuple[bool, list[str]]:
    """Remove boolean switches (e.g. -v, --verbose) from argv. Returns (present, remaining argv)."""
    rest = [a for a in argv if a not in names]
    return len(rest) != len(argv), rest


def path_resolver(s: str) -> Path:
    """Resolve a path argument to absolute Path (e.g. --project-root, --config)."""
    return Path(s).expanduser().resolve()
