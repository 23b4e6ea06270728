"""Filesystem model: metadata snapshots, entries, sort options, listings.

Nothing in this package knows about tabs or the terminal.
"""

from __future__ import annotations

from .entry import DirEntry
from .listing import DirectoryListing, read_dir_list
from .metadata import FileMetadata, format_mode, format_size
from .sorting import SORT_METHODS, SortOptions, natural_key

__all__ = [
    "DirEntry",
    "DirectoryListing",
    "read_dir_list",
    "FileMetadata",
    "format_mode",
    "format_size",
    "SORT_METHODS",
    "SortOptions",
    "natural_key",
]
