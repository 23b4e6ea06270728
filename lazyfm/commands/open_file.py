"""Open the entry under the cursor: enter directories, edit files."""

from __future__ import annotations

import errno
from typing import TYPE_CHECKING

from ..editor import launch_editor
from .base import Command, View

if TYPE_CHECKING:
    from ..context import AppContext


class OpenFile(Command):
    name = "open_file"

    def execute(self, context: AppContext, view: View) -> None:
        listing = context.curr_listing()
        entry = listing.curr_entry()
        if entry is None:
            raise FileNotFoundError(errno.ENOENT, "No files selected")
        if entry.is_dir:
            context.change_directory(entry.path, populate=False)
            return

        message = launch_editor(entry.path, view.suspend_tui, view.resume_tui)
        context.dirty = True
        if message is not None:
            context.set_error(message)
            return
        if listing.need_update() or listing.modified_on_disk():
            listing.update_contents(context.sort_options)


__all__ = ["OpenFile"]
