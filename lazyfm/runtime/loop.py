"""Main interactive event loop for the file manager.

One thread reads keys, resolves them through the keymap, runs the resulting
command, and polls background file operations. Feature logic lives in the
commands; this module only wires input, execution and rendering together.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..commands import Command, View
from ..context import AppContext
from ..errors import KeymapError, format_error
from ..input import normalize_enter, read_key
from ..keymap import Keymap, KeymapNode, describe_options, resolve_keybind
from .operations import poll_operations
from .terminal import TerminalController

logger = logging.getLogger(__name__)

RenderFn = Callable[[AppContext, View, "list[str] | None"], None]


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    busy_key_timeout_ms: int = 100
    operation_poll_seconds: float = 0.0


def execute_command(context: AppContext, command: Command, view: View) -> None:
    """Run one command, turning its failure into a status-line error."""
    logger.debug("executing %s", command)
    try:
        command.execute(context, view)
    except (OSError, KeymapError) as exc:
        logger.info("%s failed: %s", command, exc)
        context.set_error(format_error(exc))
    context.dirty = True


def handle_key(
    context: AppContext,
    keymap: Keymap,
    key: str,
    view: View,
    read_next_key: Callable[[], str],
    show_options: Callable[[list[str], dict[str, KeymapNode]], None],
) -> None:
    """Resolve ``key`` (plus any chord continuation) and execute the command."""
    context.clear_status()
    try:
        command = resolve_keybind(keymap, normalize_enter(key), read_next_key, show_options)
    except KeymapError as exc:
        context.set_error(format_error(exc))
        return
    finally:
        context.dirty = True
    # Drop the chord prompt left by show_options.
    context.clear_status()
    if command is not None:
        execute_command(context, command, view)


def run_main_loop(
    context: AppContext,
    keymap: Keymap,
    terminal: TerminalController,
    stdin_fd: int,
    render: RenderFn,
    timing: RuntimeLoopTiming = RuntimeLoopTiming(),
) -> None:
    """Run until a command sets ``context.exit``.

    Blocks on input while idle. With operations in flight, input is read with
    a short timeout so progress and completions are picked up between keys.
    """

    def resume_tui() -> None:
        terminal.enable_tui_mode()
        context.dirty = True

    def confirm(prompt: str) -> bool:
        context.set_status(prompt)
        render(context, make_view(), None)
        answer = read_key(stdin_fd)
        context.clear_status()
        return answer in {"y", "Y"}

    def make_view() -> View:
        rows, columns = terminal.size()
        return View(
            rows=rows,
            columns=columns,
            confirm=confirm,
            suspend_tui=terminal.disable_tui_mode,
            resume_tui=resume_tui,
        )

    def read_next_key() -> str:
        return normalize_enter(read_key(stdin_fd))

    last_size: tuple[int, int] | None = None
    while not context.exit:
        view = make_view()

        def show_options(path: list[str], children: dict[str, KeymapNode]) -> None:
            context.set_status(" ".join(path) + " ...")
            render(context, view, describe_options(children))

        if (view.rows, view.columns) != last_size:
            last_size = (view.rows, view.columns)
            context.dirty = True
        if context.dirty:
            render(context, view, None)
            context.dirty = False

        if context.operations:
            poll_operations(context, timing.operation_poll_seconds)
            key = read_key(stdin_fd, timeout_ms=timing.busy_key_timeout_ms)
            if not key:
                continue
        else:
            key = read_key(stdin_fd)
            if not key:
                logger.info("stdin closed, leaving")
                break

        handle_key(context, keymap, key, view, read_next_key, show_options)


__all__ = ["RuntimeLoopTiming", "execute_command", "handle_key", "run_main_loop"]
