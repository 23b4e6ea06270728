"""Frame composition: tab strip, listing column, preview column, status row."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from lazyfm.ansi import ANSI_ESCAPE_RE, display_width
from lazyfm.commands import View
from lazyfm.context import AppContext
from lazyfm.history import canonical_path
from lazyfm.render import build_frame, render_screen, scroll_start


def _plain(line: str) -> str:
    return ANSI_ESCAPE_RE.sub("", line)


class ScrollStartTests(unittest.TestCase):
    def test_keeps_cursor_centered_within_bounds(self) -> None:
        self.assertEqual(scroll_start(None, 0, 5), 0)
        self.assertEqual(scroll_start(3, 4, 5), 0)
        self.assertEqual(scroll_start(10, 40, 6), 7)
        self.assertEqual(scroll_start(39, 40, 6), 34)


class BuildFrameTests(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.addCleanup(os.chdir, os.getcwd())
        self.root = canonical_path(Path(tmp.name))
        (self.root / "docs").mkdir()
        (self.root / "docs" / "guide.md").write_text("# guide\n", encoding="utf-8")
        (self.root / "notes.txt").write_text("first line\nsecond line\n", encoding="utf-8")
        self.context = AppContext()
        self.context.open_initial_tab(self.root)
        self.view = View(rows=8, columns=60)

    def test_frame_fills_every_row(self) -> None:
        frame = build_frame(self.context, self.view)

        self.assertEqual(len(frame), self.view.rows)
        self.assertIn(str(self.root), _plain(frame[0]))
        self.assertIn("1:", _plain(frame[0]))

    def test_directory_under_cursor_is_previewed_through_cache(self) -> None:
        frame = build_frame(self.context, self.view)

        self.assertIn("docs/", _plain(frame[1]))
        self.assertIn("guide.md", _plain(frame[1]))
        self.assertIsNotNone(self.context.history.get(self.root / "docs"))

    def test_text_file_preview_shows_first_lines(self) -> None:
        self.context.curr_listing().index = 1

        frame = [_plain(line) for line in build_frame(self.context, self.view)]

        self.assertIn("first line", frame[1])
        self.assertIn("second line", frame[2])

    def test_listing_rows_fit_their_column(self) -> None:
        frame = build_frame(self.context, self.view)

        left_width = (self.view.columns * 3) // 5
        for line in frame[1:-1]:
            self.assertEqual(display_width(line.split("│", 1)[0]), left_width)

    def test_status_row_prefers_error_message(self) -> None:
        self.context.set_error("Filename already exists: x")

        frame = build_frame(self.context, self.view)

        self.assertIn("\033[1;31m", frame[-1])
        self.assertIn("Filename already exists: x", _plain(frame[-1]))

    def test_status_row_describes_cursor_entry(self) -> None:
        status = _plain(build_frame(self.context, self.view)[-1])

        self.assertTrue(status.startswith("d"))
        self.assertIn("1/2", status)

    def test_chord_menu_overlays_bottom_rows(self) -> None:
        frame = build_frame(self.context, self.view, menu=["  d\tcut_files", "  D\tdelete_files"])

        self.assertIn("cut_files", _plain(frame[-3]))
        self.assertIn("delete_files", _plain(frame[-2]))

    def test_render_screen_homes_cursor_and_writes_once(self) -> None:
        written: list[str] = []

        render_screen(self.context, self.view, written.append)

        self.assertEqual(len(written), 1)
        self.assertTrue(written[0].startswith("\033[H"))
        self.assertEqual(written[0].count("\r\n"), self.view.rows - 1)


if __name__ == "__main__":
    unittest.main()
