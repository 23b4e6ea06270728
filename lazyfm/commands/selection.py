"""Selection set changes."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from .base import Command, View, parse_flags

if TYPE_CHECKING:
    from ..context import AppContext


class SelectFiles(Command):
    """Select (or with ``--toggle`` flip) the cursor entry or every entry.

    Acting on the cursor entry also advances the cursor by one, so repeated
    presses walk down the listing.
    """

    name = "select_files"
    FLAGS = ("--toggle", "--all")

    def __init__(self, toggle: bool = False, all_entries: bool = False) -> None:
        self.toggle = toggle
        self.all_entries = all_entries

    @classmethod
    def from_args(cls, args: Sequence[str]) -> Command:
        flags = parse_flags(cls.name, args, cls.FLAGS)
        return cls(toggle="--toggle" in flags, all_entries="--all" in flags)

    def describe_args(self) -> str:
        flags = []
        if self.toggle:
            flags.append("--toggle")
        if self.all_entries:
            flags.append("--all")
        return " ".join(flags)

    def execute(self, context: AppContext, view: View) -> None:
        listing = context.curr_listing()
        if self.all_entries:
            targets = list(listing.contents)
        else:
            curr = listing.curr_entry()
            targets = [curr] if curr is not None else []
        for entry in targets:
            entry.selected = (not entry.selected) if self.toggle else True
        if not self.all_entries and listing.index is not None:
            listing.move_cursor_to(listing.index + 1)
        context.dirty = True


__all__ = ["SelectFiles"]
