"""Command-line front door for lazybrowse.

Parses CLI options, resolves the starting directory and default filter,
then dispatches into the interactive browser runtime.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from .entries import default_filter_source
from .errors import DirectoryUnreadable, StatError
from .paths import ROOT, ensure_readable_dir, normalize_path
from .runtime import run_browser
from .ui_theme import available_theme_names

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(debug_log: Path | None) -> None:
    """Send debug logging to ``debug_log``; stay silent without it."""
    if debug_log is None:
        return
    handler = logging.FileHandler(debug_log, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger("lazybrowse")
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)


def _initial_directory(raw: str | None) -> str:
    """Resolve the starting directory, falling back to cwd and then ``/``."""
    if raw is None:
        try:
            raw = os.getcwd()
        except OSError:
            raw = ROOT
    return normalize_path(os.path.abspath(raw))


def _is_privileged() -> bool:
    return os.geteuid() == 0


def _stdio_is_tty() -> bool:
    return os.isatty(sys.stdin.fileno()) and os.isatty(sys.stdout.fileno())


def main() -> None:
    """Parse CLI arguments and launch the browser on a directory."""
    parser = argparse.ArgumentParser(
        description="Browse a directory in the terminal and open entries with external programs."
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to browse. Defaults to current directory.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--debug-log", type=Path, default=None, metavar="PATH", help="Write debug logging to PATH.")
    args = parser.parse_args()

    if not _stdio_is_tty():
        raise SystemExit("stdin or stdout is not a tty")

    configure_logging(args.debug_log)

    path = _initial_directory(args.path)
    try:
        ensure_readable_dir(path)
    except DirectoryUnreadable as exc:
        raise SystemExit(str(exc)) from exc

    default_filter = default_filter_source(_is_privileged())
    logging.getLogger(__name__).debug("starting in %s with filter %r", path, default_filter)
    try:
        run_browser(path, default_filter, theme_name=args.theme, no_color=args.no_color)
    except StatError as exc:
        raise SystemExit(f"lstat: {exc}") from exc


if __name__ == "__main__":
    main()
