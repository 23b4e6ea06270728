"""Re-scan the current listing on demand."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import Command, View

if TYPE_CHECKING:
    from ..context import AppContext


class ReloadDirList(Command):
    name = "reload_dir_list"

    def execute(self, context: AppContext, view: View) -> None:
        context.curr_listing().update_contents(context.sort_options)
        context.dirty = True


__all__ = ["ReloadDirList"]
