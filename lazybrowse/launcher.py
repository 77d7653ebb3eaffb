"""External program launch helpers.

Runs a program while temporarily leaving raw/alternate-screen TUI mode.
Returns an error message string instead of raising for UI-friendly handling.
"""

from __future__ import annotations

import contextlib
import logging
import os
import shlex
import subprocess
from collections.abc import Callable, Mapping
from typing import ContextManager

logger = logging.getLogger(__name__)


def resolve_program(default: str | None, env: str | None, environ: Mapping[str, str] | None = None) -> str | None:
    """Prefer a non-empty ``$env`` value over ``default``."""
    if env is None:
        return default
    environ = os.environ if environ is None else environ
    value = environ.get(env, "")
    return value if value else default


def build_command(program: str, arg: str | None = None, extra_args: str | None = None) -> list[str]:
    """Split ``program`` and ``extra_args`` shell-style and append ``arg``."""
    cmd = shlex.split(program)
    if extra_args:
        cmd.extend(shlex.split(extra_args))
    if arg is not None:
        cmd.append(arg)
    return cmd


def spawn(
    program: str,
    arg: str | None,
    cwd: str | None,
    extra_args: str | None,
    suspend: Callable[[], ContextManager[None]] | None = None,
) -> str | None:
    """Run ``program`` to completion with the terminal released.

    ``suspend`` returns a context manager that releases the terminal for the
    duration of the child; it is reacquired even when the launch fails.
    """
    try:
        cmd = build_command(program, arg, extra_args)
    except ValueError as exc:
        return f"Cannot run {program}: {exc}"
    if not cmd:
        return "Cannot run: empty command"

    logger.debug("spawn %r cwd=%r", cmd, cwd)
    scope = suspend() if suspend is not None else contextlib.nullcontext()
    with scope:
        try:
            subprocess.run(cmd, cwd=cwd, check=False)
        except (OSError, subprocess.SubprocessError) as exc:
            return f"Failed to launch {cmd[0]}: {exc}"
    return None


__all__ = [
    "build_command",
    "resolve_program",
    "spawn",
]
