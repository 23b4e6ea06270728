"""Metadata snapshots taken with ``lstat`` for entries and directories."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class FileMetadata:
    """Immutable stat snapshot; symlinks are described, not followed."""

    len: int
    mtime_ns: int
    mode: int
    file_type: str
    uid: int | None = None
    gid: int | None = None

    @classmethod
    def from_stat(cls, st: os.stat_result) -> FileMetadata:
        return cls(
            len=int(st.st_size),
            mtime_ns=int(st.st_mtime_ns),
            mode=stat.S_IMODE(st.st_mode),
            file_type=file_type_of(st.st_mode),
            uid=getattr(st, "st_uid", None) if os.name == "posix" else None,
            gid=getattr(st, "st_gid", None) if os.name == "posix" else None,
        )

    @classmethod
    def from_path(cls, path: Path) -> FileMetadata:
        """Snapshot ``path``; raises ``OSError`` when it cannot be stat'ed."""
        return cls.from_stat(os.lstat(path))

    @property
    def is_dir(self) -> bool:
        return self.file_type == "directory"

    @property
    def is_symlink(self) -> bool:
        return self.file_type == "symlink"


def file_type_of(mode: int) -> str:
    if stat.S_ISDIR(mode):
        return "directory"
    if stat.S_ISLNK(mode):
        return "symlink"
    if stat.S_ISREG(mode):
        return "file"
    return "other"


def format_mode(metadata: FileMetadata) -> str:
    """Render permission bits in ``ls -l`` style, e.g. ``drwxr-xr-x``."""
    prefix = {"directory": "d", "symlink": "l", "file": "-"}.get(metadata.file_type, "?")
    bits = []
    for shift in (6, 3, 0):
        triple = (metadata.mode >> shift) & 0o7
        bits.append("r" if triple & 0o4 else "-")
        bits.append("w" if triple & 0o2 else "-")
        bits.append("x" if triple & 0o1 else "-")
    return prefix + "".join(bits)


def format_size(size: int) -> str:
    if size >= 1024 * 1024 * 1024:
        return f"{size / (1024 * 1024 * 1024):.1f}G"
    if size >= 1024 * 1024:
        return f"{size / (1024 * 1024):.1f}M"
    if size >= 1024:
        return f"{size / 1024:.1f}K"
    return f"{size}B"


__all__ = ["FileMetadata", "file_type_of", "format_mode", "format_size"]
