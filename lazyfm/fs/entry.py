"""Directory entry rows carried by a listing."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from .metadata import FileMetadata


@dataclass(eq=False)
class DirEntry:
    """One child of a directory.

    Path, name and metadata are fixed at scan time; only ``selected`` changes.
    """

    path: Path
    metadata: FileMetadata
    selected: bool = field(default=False)

    @classmethod
    def from_scandir(cls, child: os.DirEntry) -> DirEntry:
        return cls(
            path=Path(child.path),
            metadata=FileMetadata.from_stat(child.stat(follow_symlinks=False)),
        )

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def is_dir(self) -> bool:
        """Whether the entry is a directory, following symlinks."""
        if self.metadata.is_dir:
            return True
        if self.metadata.is_symlink:
            return self.path.is_dir()
        return False

    def same_contents(self, other: DirEntry) -> bool:
        return self.path == other.path and self.metadata == other.metadata

    def __repr__(self) -> str:
        flag = "*" if self.selected else ""
        return f"DirEntry({self.name!r}{flag})"


__all__ = ["DirEntry"]
