"""Runs external tools (alembic, uvicorn, docker, database CLIs).

Why a wrapper:
- One place decides working directory, output forwarding and what a missing
  executable looks like (exit code 127, like a shell).
- Tests swap the module-level functions with stubs instead of spawning
  processes.
"""

from __future__ import annotations

import shutil
import subprocess
import sys
from pathlib import Path
from typing import Callable, Sequence

COMMAND_NOT_FOUND = 127

OutputSink = Callable[[str], None]


def _default_sink(line: str) -> None:
    sys.stdout.write(line + "\n")
    sys.stdout.flush()


def run(
    args: Sequence[str],
    *,
    cwd: Path | None = None,
    on_output: OutputSink | None = None,
) -> int:
    """Run `args`, forwarding merged stdout/stderr line by line. Returns the exit code."""

    sink = on_output or _default_sink
    try:
        process = subprocess.Popen(
            list(args),
            cwd=str(cwd) if cwd else None,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError:
        sink(f"{args[0]}: command not found")
        return COMMAND_NOT_FOUND

    assert process.stdout is not None
    with process.stdout:
        for line in process.stdout:
            sink(line.rstrip("\n"))
    return process.wait()


def run_captured(args: Sequence[str], *, cwd: Path | None = None) -> tuple[int, str]:
    """Run `args` silently and return `(exit_code, stdout)`."""

    try:
        completed = subprocess.run(
            list(args),
            cwd=str(cwd) if cwd else None,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError:
        return COMMAND_NOT_FOUND, ""
    return completed.returncode, completed.stdout


def run_interactive(args: Sequence[str], *, cwd: Path | None = None) -> int:
    """Run with the terminal attached (REPLs, database consoles, `docker logs -f`)."""

    try:
        return subprocess.call(list(args), cwd=str(cwd) if cwd else None)
    except FileNotFoundError:
        return COMMAND_NOT_FOUND
    except KeyboardInterrupt:
        return 130


def is_command_available(command: str) -> bool:
    return shutil.which(command) is not None
