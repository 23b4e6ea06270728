"""Directory navigation commands: ``cd`` and its ``..`` form."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from ..errors import KeymapError
from .base import Command, View, expect_arity

if TYPE_CHECKING:
    from ..context import AppContext


class ChangeDirectory(Command):
    name = "cd"

    def __init__(self, path: Path) -> None:
        self.path = path

    @classmethod
    def from_args(cls, args: Sequence[str]) -> Command:
        expect_arity(cls.name, args, 0, 1)
        if not args:
            try:
                home = Path.home()
            except RuntimeError as exc:
                raise KeymapError(cls.name, "Cannot find home directory") from exc
            return cls(home)
        if args[0] == "..":
            return ParentDirectory()
        return cls(Path(args[0]).expanduser())

    def describe_args(self) -> str:
        return str(self.path)

    def execute(self, context: AppContext, view: View) -> None:
        # Relative targets resolve against the tab, never the process cwd.
        target = self.path if self.path.is_absolute() else context.curr_tab().path / self.path
        context.change_directory(target)


class ParentDirectory(Command):
    name = "parent_directory"

    def __str__(self) -> str:
        return "cd .."

    def execute(self, context: AppContext, view: View) -> None:
        curr_path = context.curr_tab().path
        parent = curr_path.parent
        if parent == curr_path:
            return
        context.change_directory(parent, populate=False)


__all__ = ["ChangeDirectory", "ParentDirectory"]
