"""One directory's scanned contents plus cursor and selection state."""

from __future__ import annotations

import os
from pathlib import Path

from .entry import DirEntry
from .metadata import FileMetadata
from .sorting import SortOptions


def read_dir_list(directory: Path, sort_options: SortOptions) -> list[DirEntry]:
    """Scan, filter and sort the children of ``directory``.

    Children that vanish or cannot be stat'ed mid-scan are skipped. Failing to
    open ``directory`` itself raises ``OSError``.
    """
    accept = sort_options.filter_func()
    contents: list[DirEntry] = []
    with os.scandir(directory) as entries:
        for child in entries:
            if not accept(child.name):
                continue
            try:
                contents.append(DirEntry.from_scandir(child))
            except OSError:
                continue
    sort_options.sort_entries(contents)
    return contents


class DirectoryListing:
    """Materialized directory with an optional cursor.

    ``index`` is ``None`` exactly when ``contents`` is empty, otherwise it is a
    valid position in ``contents``.
    """

    def __init__(
        self,
        path: Path,
        contents: list[DirEntry],
        metadata: FileMetadata,
        index: int | None = None,
    ) -> None:
        self.path = path
        self.contents = contents
        self.metadata = metadata
        self.index = index
        self.outdated = False

    @classmethod
    def new(cls, path: Path, sort_options: SortOptions) -> DirectoryListing:
        contents = read_dir_list(path, sort_options)
        metadata = FileMetadata.from_path(path)
        index = 0 if contents else None
        return cls(path, contents, metadata, index)

    def __len__(self) -> int:
        return len(self.contents)

    def __repr__(self) -> str:
        return f"DirectoryListing({str(self.path)!r}, entries={len(self.contents)}, index={self.index})"

    def depreciate(self) -> None:
        self.outdated = True

    def need_update(self) -> bool:
        return self.outdated

    def modified_on_disk(self) -> bool:
        """Whether the live directory mtime is newer than the snapshot."""
        live = FileMetadata.from_path(self.path)
        return live.mtime_ns > self.metadata.mtime_ns

    def update_contents(self, sort_options: SortOptions) -> None:
        """Re-scan the directory, keeping the cursor in range.

        Everything is read before any attribute is assigned so a failed scan
        leaves the listing as it was.
        """
        contents = read_dir_list(self.path, sort_options)
        metadata = FileMetadata.from_path(self.path)

        if not contents:
            index = None
        elif self.index is None:
            index = 0
        elif self.index >= len(contents):
            index = len(contents) - 1
        else:
            index = self.index

        self.contents = contents
        self.metadata = metadata
        self.index = index
        self.outdated = False

    def curr_entry(self) -> DirEntry | None:
        if self.index is None or self.index >= len(self.contents):
            return None
        return self.contents[self.index]

    def index_of(self, path: Path) -> int | None:
        for idx, entry in enumerate(self.contents):
            if entry.path == path:
                return idx
        return None

    def selected_entries(self) -> list[DirEntry]:
        return [entry for entry in self.contents if entry.selected]

    def get_selected_paths(self) -> list[Path]:
        """Selected paths, or the cursor entry when nothing is selected."""
        selected = [entry.path for entry in self.selected_entries()]
        if selected:
            return selected
        curr = self.curr_entry()
        return [curr.path] if curr is not None else []

    def clear_selection(self) -> None:
        for entry in self.contents:
            entry.selected = False

    def move_cursor_to(self, index: int) -> None:
        """Clamp ``index`` into range and make it the cursor."""
        if not self.contents:
            self.index = None
            return
        self.index = max(0, min(index, len(self.contents) - 1))


__all__ = ["DirectoryListing", "read_dir_list"]
