"""Background copy/move workers and their progress channel.

Each paste runs on one daemon thread. The worker only touches the filesystem
and its own queue; the controller polls the queue, and once the worker has
closed it, joins the thread and reloads the affected tabs.
"""

from __future__ import annotations

import errno
import logging
import os
import shutil
import threading
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from queue import Empty, Full, Queue

from .errors import WorkerError

logger = logging.getLogger(__name__)

COPY_BUFFER_SIZE = 4 * 1024 * 1024
PROGRESS_QUEUE_SIZE = 64

OP_COPY = "copy"
OP_MOVE = "move"


@dataclass(frozen=True)
class ProgressSnapshot:
    bytes_done: int
    bytes_total: int
    current_item: str

    def describe(self, kind: str) -> str:
        percent = 100.0 if self.bytes_total <= 0 else (self.bytes_done / self.bytes_total) * 100.0
        return f"{kind} {self.current_item}: {percent:5.1f}% ({self.bytes_done}/{self.bytes_total} bytes)"


@dataclass(frozen=True)
class PasteOptions:
    overwrite: bool = False
    skip_exist: bool = False
    buffer_size: int = COPY_BUFFER_SIZE


@dataclass(frozen=True)
class Clipboard:
    """Paths staged by ``copy_files``/``cut_files`` for the next paste."""

    paths: tuple[Path, ...]
    kind: str
    source_dir: Path
    source_tab_id: int


class _Closed:
    """Sentinel marking the end of a worker's progress stream."""


_CLOSED = _Closed()


def total_bytes(paths: Iterable[Path]) -> int:
    """Sum regular-file sizes under ``paths`` without following symlinks."""
    total = 0
    for path in paths:
        try:
            st = os.lstat(path)
        except OSError:
            continue
        if os.path.isdir(path) and not os.path.islink(path):
            for root, _dirs, files in os.walk(path):
                for name in files:
                    try:
                        total += os.lstat(os.path.join(root, name)).st_size
                    except OSError:
                        continue
        else:
            total += st.st_size
    return total


class ProgressReporter:
    """Accumulates transferred bytes and publishes snapshots to a queue.

    When the queue is full the oldest pending snapshot makes room for the
    new one, so the newest progress always reaches the controller and
    ``bytes_done`` in the queued snapshots never decreases.
    """

    def __init__(self, queue: Queue, bytes_total: int) -> None:
        self._queue = queue
        self.bytes_total = bytes_total
        self.bytes_done = 0

    def advance(self, nbytes: int, current_item: str) -> None:
        self.bytes_done += max(0, nbytes)
        snapshot = ProgressSnapshot(
            bytes_done=self.bytes_done,
            bytes_total=max(self.bytes_total, self.bytes_done),
            current_item=current_item,
        )
        try:
            self._queue.put_nowait(snapshot)
        except Full:
            try:
                self._queue.get_nowait()
            except Empty:
                pass
            try:
                self._queue.put_nowait(snapshot)
            except Full:
                pass


def _target_exists(target: Path) -> bool:
    return os.path.lexists(target)


def _remove_path(path: Path) -> None:
    if os.path.isdir(path) and not os.path.islink(path):
        shutil.rmtree(path)
    else:
        os.remove(path)


def _copy_file(src: Path, target: Path, options: PasteOptions, reporter: ProgressReporter) -> None:
    if os.path.islink(src):
        if _target_exists(target):
            os.remove(target)
        os.symlink(os.readlink(src), target)
        reporter.advance(os.lstat(src).st_size, src.name)
        return
    if os.path.isdir(target) and not os.path.islink(target):
        raise IsADirectoryError(errno.EISDIR, "Cannot overwrite directory with file", str(target))
    with open(src, "rb") as reader, open(target, "wb") as writer:
        while True:
            chunk = reader.read(options.buffer_size)
            if not chunk:
                break
            writer.write(chunk)
            reporter.advance(len(chunk), src.name)
    shutil.copystat(src, target, follow_symlinks=False)


def _copy_tree(src: Path, target: Path, options: PasteOptions, reporter: ProgressReporter) -> None:
    os.makedirs(target, exist_ok=True)
    with os.scandir(src) as children:
        for child in children:
            child_src = Path(child.path)
            child_target = target / child.name
            if child.is_dir(follow_symlinks=False):
                _copy_tree(child_src, child_target, options, reporter)
                continue
            if _target_exists(child_target):
                if options.skip_exist:
                    reporter.advance(child.stat(follow_symlinks=False).st_size, child.name)
                    continue
                if not options.overwrite:
                    raise FileExistsError(errno.EEXIST, "Filename already exists", str(child_target))
            _copy_file(child_src, child_target, options, reporter)
    shutil.copystat(src, target, follow_symlinks=False)


def _check_destination(src: Path, target: Path, dest_dir: Path) -> None:
    if os.path.isdir(src) and not os.path.islink(src):
        resolved_src = src.resolve()
        resolved_dest = dest_dir.resolve()
        if resolved_dest == resolved_src or resolved_src in resolved_dest.parents:
            raise OSError(errno.EINVAL, "Cannot paste a directory into itself", str(target))
    if os.path.abspath(src) == os.path.abspath(target):
        raise FileExistsError(errno.EEXIST, "Source and destination are the same", str(target))


def copy_items(
    sources: Iterable[Path],
    dest_dir: Path,
    options: PasteOptions,
    reporter: ProgressReporter,
) -> None:
    """Copy each source into ``dest_dir``, reporting every written chunk."""
    for src in sources:
        target = dest_dir / src.name
        if _target_exists(target):
            if options.skip_exist:
                reporter.advance(total_bytes([src]), src.name)
                continue
            if not options.overwrite:
                raise FileExistsError(errno.EEXIST, "Filename already exists", str(target))
        _check_destination(src, target, dest_dir)
        if os.path.isdir(src) and not os.path.islink(src):
            _copy_tree(src, target, options, reporter)
        else:
            _copy_file(src, target, options, reporter)


def move_items(
    sources: Iterable[Path],
    dest_dir: Path,
    options: PasteOptions,
    reporter: ProgressReporter,
) -> None:
    """Move each source into ``dest_dir``.

    Same-device moves are a rename; across devices (or when merging into an
    existing directory) the source is copied and then removed.
    """
    for src in sources:
        target = dest_dir / src.name
        exists = _target_exists(target)
        if exists:
            if options.skip_exist:
                reporter.advance(total_bytes([src]), src.name)
                continue
            if not options.overwrite:
                raise FileExistsError(errno.EEXIST, "Filename already exists", str(target))
        _check_destination(src, target, dest_dir)

        src_is_dir = os.path.isdir(src) and not os.path.islink(src)
        merging = exists and src_is_dir and os.path.isdir(target)
        if not merging:
            size = total_bytes([src])
            try:
                os.replace(src, target)
            except OSError as exc:
                if exc.errno != errno.EXDEV:
                    raise
            else:
                reporter.advance(size, src.name)
                continue

        if src_is_dir:
            _copy_tree(src, target, options, reporter)
        else:
            _copy_file(src, target, options, reporter)
        _remove_path(src)


class FileOperationTask:
    """One copy or move running on its own worker thread.

    ``tab_src``/``tab_dest`` are tab ids, so completions still find the right
    tabs after others were opened or closed.
    """

    def __init__(
        self,
        kind: str,
        sources: Iterable[Path],
        dest_dir: Path,
        options: PasteOptions,
        *,
        tab_src: int,
        tab_dest: int,
        src_dir: Path,
    ) -> None:
        self.kind = kind
        self.sources = tuple(sources)
        self.dest_dir = dest_dir
        self.options = options
        self.tab_src = tab_src
        self.tab_dest = tab_dest
        self.src_dir = src_dir
        self.last_progress: ProgressSnapshot | None = None
        self.disconnected = False
        self._queue: Queue = Queue(maxsize=PROGRESS_QUEUE_SIZE)
        self._error: BaseException | None = None
        self._thread = threading.Thread(
            target=self._run,
            name=f"lazyfm-{kind}",
            daemon=True,
        )

    def start(self) -> FileOperationTask:
        logger.info("starting %s of %d item(s) into %s", self.kind, len(self.sources), self.dest_dir)
        self._thread.start()
        return self

    def _run(self) -> None:
        try:
            reporter = ProgressReporter(self._queue, total_bytes(self.sources))
            if self.kind == OP_MOVE:
                move_items(self.sources, self.dest_dir, self.options, reporter)
            else:
                copy_items(self.sources, self.dest_dir, self.options, reporter)
        except Exception as exc:
            logger.exception("%s into %s failed", self.kind, self.dest_dir)
            self._error = exc
        finally:
            self._queue.put(_CLOSED)

    def poll(self, timeout: float = 0.0) -> ProgressSnapshot | None:
        """Wait up to ``timeout`` seconds for one progress message.

        Returns the snapshot, or ``None`` on timeout. Sets ``disconnected``
        once the worker has closed its channel.
        """
        if self.disconnected:
            return None
        try:
            if timeout > 0:
                message = self._queue.get(timeout=timeout)
            else:
                message = self._queue.get_nowait()
        except Empty:
            return None
        if message is _CLOSED:
            self.disconnected = True
            return None
        self.last_progress = message
        return message

    def drain(self, timeout: float = 0.0) -> ProgressSnapshot | None:
        """Empty the progress queue and return the newest snapshot.

        Only the first read waits, for up to ``timeout`` seconds. Sets
        ``disconnected`` when the end-of-stream marker is reached.
        """
        newest = self.poll(timeout)
        while not self.disconnected:
            try:
                message = self._queue.get_nowait()
            except Empty:
                break
            if message is _CLOSED:
                self.disconnected = True
                break
            self.last_progress = newest = message
        return newest

    def join(self) -> None:
        """Join the worker, raising ``WorkerError`` when it failed."""
        while not self.disconnected:
            if self.poll(timeout=0.05) is None and not self._thread.is_alive() and self._queue.empty():
                break
        self._thread.join()
        if self._error is not None:
            raise WorkerError(self.kind, self._error) from self._error
        logger.info("%s into %s finished", self.kind, self.dest_dir)


__all__ = [
    "COPY_BUFFER_SIZE",
    "OP_COPY",
    "OP_MOVE",
    "Clipboard",
    "FileOperationTask",
    "PasteOptions",
    "ProgressReporter",
    "ProgressSnapshot",
    "copy_items",
    "move_items",
    "total_bytes",
]
