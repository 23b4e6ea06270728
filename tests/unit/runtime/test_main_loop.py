"""Event-loop wiring: key dispatch, chord menus, error surfacing, polling."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from types import SimpleNamespace

from lazyfm import input as input_mod
from lazyfm.commands import View, from_args
from lazyfm.context import AppContext
from lazyfm.history import canonical_path
from lazyfm.keymap import load_keymap
from lazyfm.runtime.loop import execute_command, handle_key, run_main_loop


class LoopTestCase(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.addCleanup(os.chdir, os.getcwd())
        self.root = canonical_path(Path(tmp.name))
        for name in ("a", "b", "c"):
            (self.root / name).write_text(name, encoding="utf-8")
        self.context = AppContext()
        self.context.open_initial_tab(self.root)
        self.keymap = load_keymap()
        self.frames: list[list[str] | None] = []
        self.terminal = SimpleNamespace(
            size=lambda: (10, 60),
            enable_tui_mode=lambda: None,
            disable_tui_mode=lambda: None,
        )

    def render(self, context, view, menu) -> None:
        self.frames.append(menu)

    def run_loop(self, data: bytes) -> None:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, data)
            os.close(write_fd)
            write_fd = -1
            run_main_loop(self.context, self.keymap, self.terminal, read_fd, self.render)
        finally:
            os.close(read_fd)
            if write_fd != -1:
                os.close(write_fd)


class DispatchTests(LoopTestCase):
    def test_execute_command_turns_os_error_into_status(self) -> None:
        execute_command(self.context, from_args("paste_files"), View())

        self.assertTrue(self.context.status_is_error)
        self.assertEqual(self.context.status_message, "Nothing to paste")

    def test_unknown_key_reports_error(self) -> None:
        handle_key(self.context, self.keymap, "F13", View(), lambda: "ESC", lambda path, children: None)

        self.assertTrue(self.context.status_is_error)
        self.assertEqual(self.context.status_message, "Unknown keycode: F13")

    def test_escape_mid_chord_runs_nothing(self) -> None:
        handle_key(self.context, self.keymap, "d", View(), lambda: "ESC", lambda path, children: None)

        self.assertFalse(self.context.status_is_error)
        self.assertEqual(self.context.status_message, "")
        self.assertIsNone(self.context.clipboard)


class RunMainLoopTests(LoopTestCase):
    def test_keys_drive_commands_until_quit(self) -> None:
        self.run_loop(b"jjq")

        self.assertTrue(self.context.exit)
        self.assertEqual(self.context.curr_listing().curr_entry().name, "c")
        self.assertIsNone(self.frames[0])

    def test_chord_renders_option_menu(self) -> None:
        self.run_loop(b"yyq")

        self.assertTrue(any(menu and "  y\tcopy_files" in menu for menu in self.frames))
        self.assertEqual(self.context.clipboard.paths, (self.root / "a",))

    def test_closed_stdin_ends_loop(self) -> None:
        self.run_loop(b"")

        self.assertFalse(self.context.exit)

    def test_finished_operations_are_joined_before_next_key(self) -> None:
        task = SimpleNamespace(
            kind="copy",
            disconnected=False,
            last_progress=None,
            tab_src=self.context.curr_tab().tab_id,
            tab_dest=self.context.curr_tab().tab_id,
            src_dir=self.root,
            dest_dir=self.root,
            join=lambda: None,
        )

        def poll(timeout: float = 0.0):
            task.disconnected = True
            return None

        task.drain = poll
        self.context.operations.append(task)
        (self.root / "d").write_text("d", encoding="utf-8")

        self.run_loop(b"q")

        self.assertTrue(self.context.exit)
        self.assertEqual(self.context.operations, [])
        self.assertEqual(len(self.context.curr_listing()), 4)


if __name__ == "__main__":
    unittest.main()
