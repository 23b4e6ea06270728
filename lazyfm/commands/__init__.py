"""Command vocabulary and name-based construction.

``from_args`` is the only way keymaps build commands; it validates arity and
argument syntax so malformed commands fail at configuration-load time.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..errors import KeymapError
from .base import Command, View
from .change_directory import ChangeDirectory, ParentDirectory
from .cursor_move import (
    CursorMoveDown,
    CursorMoveEnd,
    CursorMoveHome,
    CursorMovePageDown,
    CursorMovePageUp,
    CursorMoveUp,
)
from .delete_files import DeleteFiles
from .file_operations import CopyFiles, CutFiles, PasteFiles
from .new_directory import NewDirectory
from .open_file import OpenFile
from .quit import ForceQuit, Quit
from .reload_dir import ReloadDirList
from .rename_file import RenameFile
from .search import Search, SearchNext, SearchPrev
from .selection import SelectFiles
from .show_hidden import ToggleHiddenFiles
from .tab_operations import CloseTab, NewTab, TabSwitch

COMMANDS: dict[str, type[Command]] = {
    command.name: command
    for command in (
        ChangeDirectory,
        ParentDirectory,
        CopyFiles,
        CursorMoveDown,
        CursorMoveUp,
        CursorMoveHome,
        CursorMoveEnd,
        CursorMovePageUp,
        CursorMovePageDown,
        CutFiles,
        DeleteFiles,
        ForceQuit,
        NewDirectory,
        OpenFile,
        PasteFiles,
        Quit,
        ReloadDirList,
        RenameFile,
        Search,
        SearchNext,
        SearchPrev,
        SelectFiles,
        TabSwitch,
        NewTab,
        CloseTab,
        ToggleHiddenFiles,
    )
}


def from_args(command: str, args: Sequence[str] = ()) -> Command:
    """Build a validated command from its name and string arguments."""
    factory = COMMANDS.get(command)
    if factory is None:
        raise KeymapError(None, f"Unknown command: {command}")
    return factory.from_args(list(args))


__all__ = [
    "COMMANDS",
    "Command",
    "View",
    "from_args",
    "ChangeDirectory",
    "ParentDirectory",
    "CopyFiles",
    "CutFiles",
    "PasteFiles",
    "CursorMoveDown",
    "CursorMoveUp",
    "CursorMoveHome",
    "CursorMoveEnd",
    "CursorMovePageUp",
    "CursorMovePageDown",
    "DeleteFiles",
    "ForceQuit",
    "Quit",
    "NewDirectory",
    "OpenFile",
    "ReloadDirList",
    "RenameFile",
    "Search",
    "SearchNext",
    "SearchPrev",
    "SelectFiles",
    "TabSwitch",
    "NewTab",
    "CloseTab",
    "ToggleHiddenFiles",
]
