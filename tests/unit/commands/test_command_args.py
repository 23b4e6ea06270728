"""Construction-time validation for every command name."""

from __future__ import annotations

import unittest
from pathlib import Path

from lazyfm.commands import (
    COMMANDS,
    ChangeDirectory,
    CursorMoveDown,
    NewDirectory,
    ParentDirectory,
    PasteFiles,
    SelectFiles,
    TabSwitch,
    from_args,
)
from lazyfm.errors import KeymapError


class FromArgsTests(unittest.TestCase):
    def test_unknown_command_name(self) -> None:
        with self.assertRaises(KeymapError) as caught:
            from_args("explode")
        self.assertEqual(str(caught.exception), "Unknown command: explode")

    def test_zero_arity_commands_reject_arguments(self) -> None:
        for name in ("quit", "force_quit", "new_tab", "close_tab", "copy_files", "reload_dir_list"):
            with self.subTest(name=name):
                self.assertEqual(from_args(name).name, name)
                with self.assertRaises(KeymapError):
                    from_args(name, ["extra"])

    def test_every_registered_command_is_named_after_its_key(self) -> None:
        for name, factory in COMMANDS.items():
            self.assertEqual(factory.name, name)

    def test_cd_variants(self) -> None:
        self.assertIsInstance(from_args("cd", [".."]), ParentDirectory)
        self.assertEqual(str(from_args("cd", [".."])), "cd ..")
        home = from_args("cd")
        self.assertIsInstance(home, ChangeDirectory)
        self.assertEqual(home.path, Path.home())
        self.assertEqual(from_args("cd", ["/tmp"]).path, Path("/tmp"))
        with self.assertRaises(KeymapError):
            from_args("cd", ["a", "b"])

    def test_cursor_move_count(self) -> None:
        self.assertEqual(from_args("cursor_move_down").movement, 1)
        command = from_args("cursor_move_up", ["5"])
        self.assertIsInstance(command, CursorMoveDown)
        self.assertEqual(command.movement, 5)
        with self.assertRaises(KeymapError):
            from_args("cursor_move_down", ["-1"])
        with self.assertRaises(KeymapError):
            from_args("cursor_move_down", ["many"])

    def test_tab_switch_requires_one_signed_integer(self) -> None:
        self.assertEqual(from_args("tab_switch", ["-1"]).movement, -1)
        self.assertIsInstance(from_args("tab_switch", ["2"]), TabSwitch)
        with self.assertRaises(KeymapError) as caught:
            from_args("tab_switch")
        self.assertEqual(caught.exception.message, "No option provided")
        with self.assertRaises(KeymapError):
            from_args("tab_switch", ["left"])

    def test_paste_flags(self) -> None:
        command = from_args("paste_files", ["--overwrite"])
        self.assertIsInstance(command, PasteFiles)
        self.assertTrue(command.options.overwrite)
        self.assertFalse(command.options.skip_exist)
        self.assertEqual(str(command), "paste_files --overwrite")
        with self.assertRaises(KeymapError) as caught:
            from_args("paste_files", ["--merge"])
        self.assertEqual(str(caught.exception), "paste_files: unknown option --merge")

    def test_select_flags(self) -> None:
        command = from_args("select_files", ["--toggle", "--all"])
        self.assertIsInstance(command, SelectFiles)
        self.assertTrue(command.toggle)
        self.assertTrue(command.all_entries)

    def test_mkdir_requires_a_path(self) -> None:
        with self.assertRaises(KeymapError) as caught:
            from_args("mkdir")
        self.assertIn("mkdir requires additional parameter", str(caught.exception))
        command = from_args("mkdir", ["one", "two/three"])
        self.assertIsInstance(command, NewDirectory)
        self.assertEqual(command.paths, (Path("one"), Path("two/three")))

    def test_rename_and_search_take_exactly_one(self) -> None:
        for name in ("rename", "search"):
            with self.subTest(name=name):
                with self.assertRaises(KeymapError):
                    from_args(name)
                with self.assertRaises(KeymapError):
                    from_args(name, ["a", "b"])
                self.assertEqual(from_args(name, ["x"]).name, name)


if __name__ == "__main__":
    unittest.main()
