"""Command-line front door for lazyfm.

Parses CLI options, configures logging, resolves the start directory, and
dispatches into the interactive runtime.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from .logger import setup_logging
from .runtime import run_app

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Browse and manage files in a tabbed terminal UI.")
    parser.add_argument("path", nargs="?", default=None, help="Start directory. Defaults to current directory.")
    parser.add_argument("--config", type=Path, default=None, help="Path to a JSON config file.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Log verbosity for the log file (default: WARNING).",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Write logs here instead of the user log dir.")
    parser.add_argument("--style", default=None, help="Pygments style name for file previews.")
    return parser


def main(argv: list[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments and launch lazyfm in a directory.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path or default_path).expanduser()
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if not path.is_dir():
        raise SystemExit(f"Not a directory: {path}")

    run_app(path, args.config, args.style)


if __name__ == "__main__":
    main()
