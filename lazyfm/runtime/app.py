"""Runtime composition layer for lazyfm.

Loads configuration, builds the keymap and the session, and starts the loop.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from .. import config as config_mod
from ..config import load_app_config
from ..context import AppContext
from ..errors import KeymapError, format_error
from ..keymap import load_keymap
from ..render import render_screen
from .loop import run_main_loop
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def build_context(path: Path, config_path: Path | None = None, style: str | None = None) -> tuple[AppContext, dict]:
    """Create the session and keymap, or exit with a diagnostic.

    An invalid keymap or an unreadable start directory is fatal.
    """
    try:
        config = load_app_config(config_path)
        keymap = load_keymap(config.bindings)
    except KeymapError as exc:
        raise SystemExit(f"Invalid keymap: {exc}") from exc

    context = AppContext(
        sort_options=config.sort_options,
        style=style or config.style,
        config_path=config_path if config_path is not None else config_mod.CONFIG_PATH,
    )
    try:
        context.open_initial_tab(path)
    except OSError as exc:
        raise SystemExit(f"Cannot open {path}: {format_error(exc)}") from exc
    return context, keymap


def run_app(path: Path, config_path: Path | None = None, style: str | None = None) -> None:
    """Run the interactive file manager rooted at ``path``."""
    if not os.isatty(sys.stdin.fileno()) or not os.isatty(sys.stdout.fileno()):
        raise SystemExit("lazyfm needs an interactive terminal")

    context, keymap = build_context(path, config_path, style)
    logger.info("starting in %s", context.curr_tab().path)

    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)

    def render(ctx: AppContext, view, menu) -> None:
        render_screen(ctx, view, terminal.write, menu)

    with terminal.raw_mode():
        run_main_loop(context, keymap, terminal, stdin_fd, render)

    if context.operations:
        logger.warning("leaving with %d operation(s) still running", len(context.operations))


__all__ = ["build_context", "run_app"]
