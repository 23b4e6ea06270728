"""Delete the selected entries after confirmation."""

from __future__ import annotations

import errno
import logging
import os
import shutil
from typing import TYPE_CHECKING

from .base import Command, View

if TYPE_CHECKING:
    from ..context import AppContext

logger = logging.getLogger(__name__)


class DeleteFiles(Command):
    name = "delete_files"

    def execute(self, context: AppContext, view: View) -> None:
        listing = context.curr_listing()
        paths = listing.get_selected_paths()
        if not paths:
            raise FileNotFoundError(errno.ENOENT, "No files selected")
        if not view.confirm(f"Delete {len(paths)} file(s)? (y/N)"):
            context.set_status("Delete cancelled")
            return

        try:
            for path in paths:
                logger.info("deleting %s", path)
                if os.path.isdir(path) and not os.path.islink(path):
                    shutil.rmtree(path)
                else:
                    os.remove(path)
        finally:
            # Deleted directories may be cached anywhere below or beside this one.
            context.history.depreciate_all_entries()
            listing.update_contents(context.sort_options)
            context.dirty = True
        context.set_status(f"Deleted {len(paths)} file(s)")


__all__ = ["DeleteFiles"]
