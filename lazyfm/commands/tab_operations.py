"""Tab switching, creation and closing."""

from __future__ import annotations

from collections.abc import Sequence

from ..context import AppContext, wrap_tab_index
from ..errors import KeymapError
from .base import Command, View, parse_signed


class TabSwitch(Command):
    name = "tab_switch"

    def __init__(self, movement: int) -> None:
        self.movement = movement

    @classmethod
    def from_args(cls, args: Sequence[str]) -> Command:
        if len(args) != 1:
            raise KeymapError(cls.name, "No option provided")
        return cls(parse_signed(cls.name, args[0]))

    def describe_args(self) -> str:
        return str(self.movement)

    def execute(self, context: AppContext, view: View) -> None:
        new_index = wrap_tab_index(context.curr_tab_index, self.movement, len(context.tabs))
        context.switch_tab(new_index)


class NewTab(Command):
    name = "new_tab"

    def execute(self, context: AppContext, view: View) -> None:
        context.new_tab()


class CloseTab(Command):
    name = "close_tab"

    def execute(self, context: AppContext, view: View) -> None:
        if len(context.tabs) <= 1 and context.operations:
            raise OSError("operations running in background, use force_quit to quit")
        context.close_tab()


__all__ = ["TabSwitch", "NewTab", "CloseTab"]
