"""Hidden-file visibility toggle."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .. import config
from .base import Command, View

if TYPE_CHECKING:
    from ..context import AppContext


class ToggleHiddenFiles(Command):
    name = "toggle_hidden"

    def execute(self, context: AppContext, view: View) -> None:
        show_hidden = not context.sort_options.show_hidden
        context.set_show_hidden(show_hidden)
        if context.config_path is not None:
            config.save_show_hidden(show_hidden, context.config_path)
        context.set_status("Showing hidden files" if show_hidden else "Hiding hidden files")


__all__ = ["ToggleHiddenFiles"]
