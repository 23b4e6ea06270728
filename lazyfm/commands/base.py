"""Command base class and construction-time argument validation."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from ..errors import KeymapError

if TYPE_CHECKING:
    from ..context import AppContext


def _confirm_yes(_prompt: str) -> bool:
    return True


def _noop() -> None:
    return None


@dataclass(frozen=True)
class View:
    """Read-only view geometry plus the few UI capabilities commands need."""

    rows: int = 24
    columns: int = 80
    confirm: Callable[[str], bool] = _confirm_yes
    suspend_tui: Callable[[], None] = _noop
    resume_tui: Callable[[], None] = _noop

    @property
    def content_rows(self) -> int:
        """Rows available for listing entries (minus header and status line)."""
        return max(1, self.rows - 2)


class Command:
    """A fully validated, executable command.

    Subclasses set ``name`` and build themselves through ``from_args``, which
    raises ``KeymapError`` on bad arguments. ``execute`` raises ``OSError`` or
    ``KeymapError``; on failure the session is left untouched.
    """

    name: ClassVar[str] = ""

    @classmethod
    def from_args(cls, args: Sequence[str]) -> Command:
        expect_arity(cls.name, args, 0)
        return cls()

    def execute(self, context: AppContext, view: View) -> None:
        raise NotImplementedError

    def describe_args(self) -> str:
        return ""

    def __str__(self) -> str:
        args = self.describe_args()
        return f"{self.name} {args}" if args else self.name

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self}>"


def expect_arity(name: str, args: Sequence[str], *allowed: int) -> None:
    if len(args) in allowed:
        return
    expected = " or ".join(str(count) for count in allowed)
    raise KeymapError(name, f"Expected {expected} argument(s), got {len(args)}")


def parse_count(name: str, raw: str) -> int:
    """Parse a non-negative integer argument."""
    try:
        value = int(raw)
    except ValueError as exc:
        raise KeymapError(name, f"invalid integer value: {raw!r}") from exc
    if value < 0:
        raise KeymapError(name, f"value must be >= 0, got {value}")
    return value


def parse_signed(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError as exc:
        raise KeymapError(name, f"invalid integer value: {raw!r}") from exc


def parse_flags(name: str, args: Sequence[str], known: Sequence[str]) -> set[str]:
    """Validate ``--flag`` style options and return the ones present."""
    flags: set[str] = set()
    for arg in args:
        if arg not in known:
            raise KeymapError(name, f"unknown option {arg}")
        flags.add(arg)
    return flags


__all__ = ["Command", "View", "expect_arity", "parse_count", "parse_flags", "parse_signed"]
