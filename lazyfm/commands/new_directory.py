"""``mkdir``: create one or more directories relative to the current tab."""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from ..errors import KeymapError
from .base import Command, View

if TYPE_CHECKING:
    from ..context import AppContext


class NewDirectory(Command):
    name = "mkdir"

    def __init__(self, paths: Sequence[Path]) -> None:
        self.paths = tuple(paths)

    @classmethod
    def from_args(cls, args: Sequence[str]) -> Command:
        if not args:
            raise KeymapError(cls.name, "mkdir requires additional parameter")
        return cls([Path(arg).expanduser() for arg in args])

    def describe_args(self) -> str:
        return " ".join(str(path) for path in self.paths)

    def execute(self, context: AppContext, view: View) -> None:
        base = context.curr_tab().path
        try:
            for path in self.paths:
                os.makedirs(path if path.is_absolute() else base / path)
        finally:
            context.curr_listing().update_contents(context.sort_options)
            context.dirty = True


__all__ = ["NewDirectory"]
