"""Clipboard commands and the paste that starts a background worker."""

from __future__ import annotations

import errno
from collections.abc import Sequence
from typing import TYPE_CHECKING

from ..fileops import OP_COPY, OP_MOVE, Clipboard, FileOperationTask, PasteOptions
from .base import Command, View, parse_flags

if TYPE_CHECKING:
    from ..context import AppContext


def _stage_clipboard(context: AppContext, kind: str) -> None:
    tab = context.curr_tab()
    listing = context.curr_listing()
    paths = listing.get_selected_paths()
    if not paths:
        raise FileNotFoundError(errno.ENOENT, "No files selected")
    context.clipboard = Clipboard(
        paths=tuple(paths),
        kind=kind,
        source_dir=tab.path,
        source_tab_id=tab.tab_id,
    )
    verb = "copy" if kind == OP_COPY else "cut"
    context.set_status(f"{len(paths)} item(s) ready to {verb}")


class CopyFiles(Command):
    name = "copy_files"

    def execute(self, context: AppContext, view: View) -> None:
        _stage_clipboard(context, OP_COPY)


class CutFiles(Command):
    name = "cut_files"

    def execute(self, context: AppContext, view: View) -> None:
        _stage_clipboard(context, OP_MOVE)


class PasteFiles(Command):
    name = "paste_files"
    FLAGS = ("--overwrite", "--skip_exist")

    def __init__(self, options: PasteOptions | None = None) -> None:
        self.options = options if options is not None else PasteOptions()

    @classmethod
    def from_args(cls, args: Sequence[str]) -> Command:
        flags = parse_flags(cls.name, args, cls.FLAGS)
        return cls(
            PasteOptions(
                overwrite="--overwrite" in flags,
                skip_exist="--skip_exist" in flags,
            )
        )

    def describe_args(self) -> str:
        flags = []
        if self.options.overwrite:
            flags.append("--overwrite")
        if self.options.skip_exist:
            flags.append("--skip_exist")
        return " ".join(flags)

    def execute(self, context: AppContext, view: View) -> None:
        clipboard = context.clipboard
        if clipboard is None:
            raise FileNotFoundError(errno.ENOENT, "Nothing to paste")
        tab = context.curr_tab()
        task = FileOperationTask(
            clipboard.kind,
            clipboard.paths,
            tab.path,
            self.options,
            tab_src=clipboard.source_tab_id,
            tab_dest=tab.tab_id,
            src_dir=clipboard.source_dir,
        )
        task.start()
        context.operations.append(task)
        if clipboard.kind == OP_MOVE:
            # Cut paths no longer exist at their source once moved.
            context.clipboard = None
        context.set_status(f"{clipboard.kind} of {len(clipboard.paths)} item(s) started")


__all__ = ["CopyFiles", "CutFiles", "PasteFiles"]
