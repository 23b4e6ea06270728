"""Cursor movement within the current listing."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from .base import Command, View, expect_arity, parse_count

if TYPE_CHECKING:
    from ..context import AppContext


def _move_cursor(context: AppContext, delta: int) -> None:
    listing = context.curr_listing()
    if listing.index is None:
        return
    previous = listing.index
    listing.move_cursor_to(listing.index + delta)
    if listing.index != previous:
        context.dirty = True


class CursorMoveDown(Command):
    name = "cursor_move_down"

    def __init__(self, movement: int = 1) -> None:
        self.movement = movement

    @classmethod
    def from_args(cls, args: Sequence[str]) -> Command:
        expect_arity(cls.name, args, 0, 1)
        if not args:
            return cls()
        return cls(parse_count(cls.name, args[0]))

    def describe_args(self) -> str:
        return str(self.movement)

    def execute(self, context: AppContext, view: View) -> None:
        _move_cursor(context, self.movement)


class CursorMoveUp(CursorMoveDown):
    name = "cursor_move_up"

    def execute(self, context: AppContext, view: View) -> None:
        _move_cursor(context, -self.movement)


class CursorMoveHome(Command):
    name = "cursor_move_home"

    def execute(self, context: AppContext, view: View) -> None:
        listing = context.curr_listing()
        if listing.index is not None:
            _move_cursor(context, -listing.index)


class CursorMoveEnd(Command):
    name = "cursor_move_end"

    def execute(self, context: AppContext, view: View) -> None:
        listing = context.curr_listing()
        if listing.index is not None:
            _move_cursor(context, len(listing) - 1 - listing.index)


class CursorMovePageUp(Command):
    name = "cursor_move_page_up"

    def execute(self, context: AppContext, view: View) -> None:
        _move_cursor(context, -view.content_rows)


class CursorMovePageDown(Command):
    name = "cursor_move_page_down"

    def execute(self, context: AppContext, view: View) -> None:
        _move_cursor(context, view.content_rows)


__all__ = [
    "CursorMoveDown",
    "CursorMoveUp",
    "CursorMoveHome",
    "CursorMoveEnd",
    "CursorMovePageUp",
    "CursorMovePageDown",
]
