"""Copy/move workers, their progress channel and the controller join."""

from __future__ import annotations

import errno
import os
import tempfile
import time
import unittest
from pathlib import Path
from queue import Queue
from unittest import mock

from lazyfm.context import AppContext
from lazyfm.errors import WorkerError
from lazyfm.fileops import (
    OP_COPY,
    OP_MOVE,
    FileOperationTask,
    PasteOptions,
    ProgressReporter,
    ProgressSnapshot,
    copy_items,
    move_items,
    total_bytes,
)
from lazyfm.history import canonical_path
from lazyfm.runtime.operations import join_operation, poll_operations


class _NullReporter(ProgressReporter):
    def __init__(self) -> None:
        super().__init__(Queue(maxsize=1), 0)


class FileOpsTestCase(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.root = canonical_path(Path(tmp.name))
        self.src = self.root / "src"
        self.dest = self.root / "dest"
        self.src.mkdir()
        self.dest.mkdir()


class ProgressReporterTests(unittest.TestCase):
    def test_full_queue_keeps_newest_snapshots_in_order(self) -> None:
        queue: Queue = Queue(maxsize=3)
        reporter = ProgressReporter(queue, 10)

        for _ in range(5):
            reporter.advance(3, "file")

        snapshots = []
        while not queue.empty():
            snapshots.append(queue.get_nowait())
        self.assertEqual(len(snapshots), 3)
        self.assertEqual([snapshot.bytes_done for snapshot in snapshots], [9, 12, 15])
        self.assertEqual(reporter.bytes_done, 15)
        self.assertTrue(all(s.bytes_done <= s.bytes_total for s in snapshots))

    def test_describe_reports_percentage(self) -> None:
        snapshot = ProgressSnapshot(bytes_done=50, bytes_total=200, current_item="a.bin")
        self.assertEqual(snapshot.describe("copy"), "copy a.bin:  25.0% (50/200 bytes)")


class CopyMoveTests(FileOpsTestCase):
    def test_copy_tree_with_small_chunks(self) -> None:
        (self.src / "nested").mkdir()
        (self.src / "nested" / "data.bin").write_bytes(b"x" * 1000)
        queue: Queue = Queue(maxsize=1000)
        reporter = ProgressReporter(queue, total_bytes([self.src]))

        copy_items([self.src], self.dest, PasteOptions(buffer_size=64), reporter)

        self.assertEqual((self.dest / "src" / "nested" / "data.bin").read_bytes(), b"x" * 1000)
        self.assertTrue((self.src / "nested" / "data.bin").exists())
        self.assertEqual(reporter.bytes_done, 1000)
        self.assertGreater(queue.qsize(), 10)

    def test_existing_target_fails_without_flags(self) -> None:
        (self.src / "a").write_bytes(b"new")
        (self.dest / "a").write_bytes(b"old")

        with self.assertRaises(FileExistsError):
            copy_items([self.src / "a"], self.dest, PasteOptions(), _NullReporter())
        self.assertEqual((self.dest / "a").read_bytes(), b"old")

    def test_skip_exist_and_overwrite(self) -> None:
        (self.src / "a").write_bytes(b"new")
        (self.src / "b").write_bytes(b"bee")
        (self.dest / "a").write_bytes(b"old")

        copy_items([self.src / "a", self.src / "b"], self.dest, PasteOptions(skip_exist=True), _NullReporter())
        self.assertEqual((self.dest / "a").read_bytes(), b"old")
        self.assertEqual((self.dest / "b").read_bytes(), b"bee")

        copy_items([self.src / "a"], self.dest, PasteOptions(overwrite=True), _NullReporter())
        self.assertEqual((self.dest / "a").read_bytes(), b"new")

    def test_copy_into_itself_is_rejected(self) -> None:
        with self.assertRaises(OSError):
            copy_items([self.src], self.src, PasteOptions(), _NullReporter())

    def test_move_renames_within_device(self) -> None:
        (self.src / "a").write_bytes(b"data")

        move_items([self.src / "a"], self.dest, PasteOptions(), _NullReporter())

        self.assertFalse((self.src / "a").exists())
        self.assertEqual((self.dest / "a").read_bytes(), b"data")

    def test_move_across_devices_copies_then_deletes(self) -> None:
        (self.src / "tree").mkdir()
        (self.src / "tree" / "f").write_bytes(b"data")

        def cross_device(src, dst):
            raise OSError(errno.EXDEV, "Invalid cross-device link")

        with mock.patch("lazyfm.fileops.os.replace", side_effect=cross_device):
            move_items([self.src / "tree"], self.dest, PasteOptions(), _NullReporter())

        self.assertFalse((self.src / "tree").exists())
        self.assertEqual((self.dest / "tree" / "f").read_bytes(), b"data")

    def test_move_overwrite_merges_directories(self) -> None:
        (self.src / "tree").mkdir()
        (self.src / "tree" / "new").write_bytes(b"n")
        (self.dest / "tree").mkdir()
        (self.dest / "tree" / "kept").write_bytes(b"k")

        move_items([self.src / "tree"], self.dest, PasteOptions(overwrite=True), _NullReporter())

        self.assertEqual(sorted(os.listdir(self.dest / "tree")), ["kept", "new"])
        self.assertFalse((self.src / "tree").exists())


class FileOperationTaskTests(FileOpsTestCase):
    def test_successful_copy_closes_channel(self) -> None:
        (self.src / "a").write_bytes(b"abc")
        task = FileOperationTask(
            OP_COPY, [self.src / "a"], self.dest, PasteOptions(), tab_src=0, tab_dest=0, src_dir=self.src
        ).start()

        task.join()

        self.assertTrue(task.disconnected)
        self.assertEqual((self.dest / "a").read_bytes(), b"abc")

    def test_failure_surfaces_as_worker_error_on_join(self) -> None:
        (self.src / "a").write_bytes(b"abc")
        (self.dest / "a").write_bytes(b"old")
        task = FileOperationTask(
            OP_MOVE, [self.src / "a"], self.dest, PasteOptions(), tab_src=0, tab_dest=0, src_dir=self.src
        ).start()

        with self.assertRaises(WorkerError) as caught:
            task.join()

        self.assertEqual(caught.exception.operation, OP_MOVE)
        self.assertIsInstance(caught.exception.cause, FileExistsError)
        self.assertTrue(str(caught.exception).startswith("move failed: Filename already exists"))

    def test_poll_returns_none_after_disconnect(self) -> None:
        task = FileOperationTask(OP_COPY, [], self.dest, PasteOptions(), tab_src=0, tab_dest=0, src_dir=self.src)
        task.start()
        task.join()

        self.assertIsNone(task.poll(0.01))


class JoinOperationTests(FileOpsTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.addCleanup(os.chdir, os.getcwd())
        (self.src / "a").write_bytes(b"abc")
        self.context = AppContext()
        self.context.open_initial_tab(self.src)
        self.src_tab = self.context.curr_tab()
        self.dest_tab = self.context.new_tab()
        self.context.change_directory(self.dest)

    def _task(self, kind: str) -> FileOperationTask:
        return FileOperationTask(
            kind,
            [self.src / "a"],
            self.dest,
            PasteOptions(),
            tab_src=self.src_tab.tab_id,
            tab_dest=self.dest_tab.tab_id,
            src_dir=self.src,
        )

    def test_success_reloads_current_and_depreciates_background(self) -> None:
        task = self._task(OP_MOVE).start()
        self.context.operations.append(task)
        task._thread.join()

        while self.context.operations:
            poll_operations(self.context, timeout=0.05)

        self.assertEqual([entry.name for entry in self.context.curr_listing().contents], ["a"])
        self.assertTrue(self.context.history.get(self.src).need_update())
        self.assertEqual(self.context.status_message, "move complete")
        self.assertFalse(self.context.status_is_error)

    def test_full_progress_queue_is_drained_in_one_pass(self) -> None:
        (self.src / "big.bin").write_bytes(b"z" * 200)
        task = FileOperationTask(
            OP_COPY,
            [self.src / "big.bin"],
            self.dest,
            PasteOptions(buffer_size=1),
            tab_src=self.src_tab.tab_id,
            tab_dest=self.dest_tab.tab_id,
            src_dir=self.src,
        ).start()
        self.context.operations.append(task)

        # Every chunk is reported, so the queue fills up and keeps the newest.
        deadline = time.monotonic() + 5.0
        while time.monotonic() < deadline:
            pending = list(task._queue.queue)
            if task._queue.full() and pending[-1].bytes_done == 200:
                break
            time.sleep(0.01)

        calls = 0
        while self.context.operations and calls < 2:
            poll_operations(self.context, timeout=0.5)
            calls += 1

        self.assertEqual(self.context.operations, [])
        self.assertEqual(task.last_progress.bytes_done, 200)
        self.assertEqual(self.context.status_message, "copy complete")
        self.assertEqual((self.dest / "big.bin").read_bytes(), b"z" * 200)

    def test_success_rescans_third_tab_showing_source(self) -> None:
        self.context.new_tab()
        self.context.change_directory(self.src)
        third = self.context.curr_tab()
        task = self._task(OP_MOVE).start()
        task._thread.join()

        join_operation(self.context, task)

        self.assertNotIn(third.tab_id, (self.src_tab.tab_id, self.dest_tab.tab_id))
        self.assertEqual(self.context.curr_listing().contents, [])
        self.assertEqual(self.context.status_message, "move complete")

    def test_failure_reports_error_and_skips_reload(self) -> None:
        (self.dest / "a").write_bytes(b"old")
        task = self._task(OP_COPY).start()
        listing = self.context.curr_listing()
        task._thread.join()

        with mock.patch.object(listing, "update_contents") as update:
            join_operation(self.context, task)

        update.assert_not_called()
        self.assertTrue(self.context.status_is_error)
        self.assertIn("copy failed", self.context.status_message)
        self.assertFalse(self.context.history.get(self.src).need_update())


if __name__ == "__main__":
    unittest.main()
