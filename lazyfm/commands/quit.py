"""Leaving the session."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import Command, View

if TYPE_CHECKING:
    from ..context import AppContext


class Quit(Command):
    name = "quit"

    def execute(self, context: AppContext, view: View) -> None:
        if context.operations:
            raise OSError("operations running in background, use force_quit to quit")
        context.exit = True


class ForceQuit(Command):
    name = "force_quit"

    def execute(self, context: AppContext, view: View) -> None:
        context.exit = True


__all__ = ["Quit", "ForceQuit"]
