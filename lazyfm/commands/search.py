"""Incremental name search within the current listing."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from .base import Command, View, expect_arity

if TYPE_CHECKING:
    from ..context import AppContext


def search_listing(listing, pattern: str, step: int) -> int | None:
    """Index of the next entry after the cursor whose name contains ``pattern``.

    Searches in ``step`` direction and wraps around; matching is
    case-insensitive. The cursor entry itself is checked last.
    """
    count = len(listing.contents)
    if count == 0:
        return None
    needle = pattern.lower()
    start = listing.index if listing.index is not None else 0
    for offset in range(1, count + 1):
        idx = (start + step * offset) % count
        if needle in listing.contents[idx].name.lower():
            return idx
    return None


def _jump(context: AppContext, pattern: str, step: int) -> None:
    listing = context.curr_listing()
    found = search_listing(listing, pattern, step)
    if found is None:
        context.set_status(f"Pattern not found: {pattern}")
        return
    listing.index = found
    context.dirty = True


class Search(Command):
    name = "search"

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern

    @classmethod
    def from_args(cls, args: Sequence[str]) -> Command:
        expect_arity(cls.name, args, 1)
        return cls(args[0])

    def describe_args(self) -> str:
        return self.pattern

    def execute(self, context: AppContext, view: View) -> None:
        context.search_pattern = self.pattern
        _jump(context, self.pattern, 1)


class SearchNext(Command):
    name = "search_next"
    step = 1

    def execute(self, context: AppContext, view: View) -> None:
        if context.search_pattern is None:
            return
        _jump(context, context.search_pattern, self.step)


class SearchPrev(SearchNext):
    name = "search_prev"
    step = -1


__all__ = ["Search", "SearchNext", "SearchPrev", "search_listing"]
