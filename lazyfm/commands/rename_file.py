"""Rename the entry under the cursor."""

from __future__ import annotations

import errno
import os
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from .base import Command, View, expect_arity

if TYPE_CHECKING:
    from ..context import AppContext


class RenameFile(Command):
    name = "rename"

    def __init__(self, path: Path) -> None:
        self.path = path

    @classmethod
    def from_args(cls, args: Sequence[str]) -> Command:
        expect_arity(cls.name, args, 1)
        return cls(Path(args[0]).expanduser())

    def describe_args(self) -> str:
        return str(self.path)

    def execute(self, context: AppContext, view: View) -> None:
        tab = context.curr_tab()
        listing = context.curr_listing()
        entry = listing.curr_entry()
        if entry is None:
            return

        new_path = Path(os.path.normpath(tab.path / self.path))
        if os.path.lexists(new_path):
            raise FileExistsError(errno.EEXIST, "Filename already exists", str(new_path))
        os.rename(entry.path, new_path)

        listing.update_contents(context.sort_options)
        renamed_index = listing.index_of(new_path)
        if renamed_index is not None:
            listing.index = renamed_index
        context.dirty = True


__all__ = ["RenameFile"]
