from __future__ import annotations

import errno
import unittest

from lazyfm.errors import KeymapError, WorkerError, format_error


class ErrorFormattingTests(unittest.TestCase):
    def test_keymap_error_prefixes_command(self) -> None:
        self.assertEqual(str(KeymapError("cd", "Cannot find home directory")), "cd: Cannot find home directory")
        self.assertEqual(str(KeymapError(None, "Unknown keycode: x")), "Unknown keycode: x")

    def test_format_error_uses_strerror_and_filename(self) -> None:
        exc = FileExistsError(errno.EEXIST, "Filename already exists", "/tmp/a")
        self.assertEqual(format_error(exc), "Filename already exists: /tmp/a")
        self.assertEqual(format_error(FileNotFoundError(errno.ENOENT, "No files selected")), "No files selected")
        self.assertEqual(format_error(OSError("operations running")), "operations running")
        self.assertEqual(format_error(ValueError()), "ValueError")

    def test_worker_error_wraps_cause(self) -> None:
        cause = PermissionError(errno.EACCES, "Permission denied", "/root/x")
        error = WorkerError("copy", cause)

        self.assertIs(error.cause, cause)
        self.assertEqual(str(error), "copy failed: Permission denied: /root/x")


if __name__ == "__main__":
    unittest.main()
