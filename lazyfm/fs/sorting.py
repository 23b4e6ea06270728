"""Sort and filter options applied when a directory is scanned."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, replace

from .entry import DirEntry

SORT_METHODS = ("natural", "lexical", "mtime", "size")
_DIGITS_RE = re.compile(r"(\d+)")


def natural_key(name: str) -> tuple:
    """Split digit runs so ``file2`` sorts before ``file10``."""
    return tuple(int(part) if part.isdigit() else part for part in _DIGITS_RE.split(name))


@dataclass(frozen=True)
class SortOptions:
    """Filter predicate and ordering for listings.

    Treated as an immutable input by listings and the cache; toggles build a
    new instance with ``with_show_hidden``.
    """

    show_hidden: bool = False
    method: str = "natural"
    directories_first: bool = True
    case_sensitive: bool = False
    reverse: bool = False

    def with_show_hidden(self, show_hidden: bool) -> SortOptions:
        return replace(self, show_hidden=show_hidden)

    def filter_func(self) -> Callable[[str], bool]:
        """Return a predicate over child names deciding visibility."""
        if self.show_hidden:
            return lambda _name: True
        return lambda name: not name.startswith(".")

    def sort_key(self) -> Callable[[DirEntry], object]:
        fold = (lambda text: text) if self.case_sensitive else str.lower
        if self.method == "mtime":
            return lambda entry: (-entry.metadata.mtime_ns, fold(entry.name))
        if self.method == "size":
            return lambda entry: (-entry.metadata.len, fold(entry.name))
        if self.method == "lexical":
            return lambda entry: fold(entry.name)
        return lambda entry: natural_key(fold(entry.name))

    def sort_entries(self, entries: list[DirEntry]) -> None:
        """Sort ``entries`` in place; directory grouping survives ``reverse``."""
        entries.sort(key=self.sort_key(), reverse=self.reverse)
        if self.directories_first:
            entries.sort(key=lambda entry: not entry.is_dir)


__all__ = ["SORT_METHODS", "SortOptions", "natural_key"]
