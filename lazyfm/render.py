"""Frame composition for the terminal view.

``build_frame`` turns session state into screen rows; ``render_screen`` writes
them. Neither mutates tab state. The preview column reads child directories
through the cache without checking them out.
"""

from __future__ import annotations

import time
from collections.abc import Callable

from .ansi import clip_ansi_line, display_width, fit_ansi_line
from .commands import View
from .context import AppContext
from .fs import DirEntry, DirectoryListing, format_mode, format_size
from .preview import preview_file_lines

DIR_SGR = "\033[1;34m"
LINK_SGR = "\033[36m"
SELECTED_SGR = "\033[1;33m"
ERROR_SGR = "\033[1;31m"
RESET = "\033[0m"


def selected_with_ansi(text: str) -> str:
    """Apply cursor styling without discarding existing ANSI colors."""
    if not text:
        return text
    return "\033[7m" + text.replace(RESET, "\033[0;7m") + RESET


def scroll_start(index: int | None, total: int, rows: int) -> int:
    """First visible row keeping ``index`` roughly centered."""
    if index is None or total <= rows:
        return 0
    return max(0, min(index - rows // 2, total - rows))


def format_entry(entry: DirEntry, width: int) -> str:
    marker = "*" if entry.selected else " "
    name = entry.name + ("/" if entry.is_dir else "")
    if entry.selected:
        sgr = SELECTED_SGR
    elif entry.metadata.is_symlink:
        sgr = LINK_SGR
    elif entry.is_dir:
        sgr = DIR_SGR
    else:
        sgr = ""
    size = "" if entry.is_dir else format_size(entry.metadata.len)
    label = f"{marker}{name}"
    gap = max(1, width - display_width(label) - len(size))
    text = f"{label}{' ' * gap}{size}"
    return f"{sgr}{fit_ansi_line(text, width)}{RESET}" if sgr else fit_ansi_line(text, width)


def listing_rows(listing: DirectoryListing, rows: int, width: int, with_cursor: bool = True) -> list[str]:
    start = scroll_start(listing.index, len(listing.contents), rows)
    out: list[str] = []
    for idx in range(start, min(len(listing.contents), start + rows)):
        line = format_entry(listing.contents[idx], width)
        if with_cursor and idx == listing.index:
            line = selected_with_ansi(line)
        out.append(line)
    if not listing.contents:
        out.append(fit_ansi_line(" (empty)", width))
    return out


def preview_rows(context: AppContext, entry: DirEntry | None, rows: int, width: int) -> list[str]:
    if entry is None or width <= 0:
        return []
    if entry.is_dir:
        try:
            child = context.history.get_mut_or_create(entry.path, context.sort_options)
        except OSError as exc:
            return [fit_ansi_line(f" ({exc.strerror or exc})", width)]
        return listing_rows(child, rows, width, with_cursor=False)
    return [clip_ansi_line(line, width) + RESET for line in preview_file_lines(entry.path, rows, context.style)]


def tab_strip(context: AppContext) -> str:
    labels = []
    for idx, tab in enumerate(context.tabs):
        label = f" {idx + 1}:{tab.title} "
        labels.append(selected_with_ansi(label) if idx == context.curr_tab_index else label)
    return "".join(labels)


def status_text(context: AppContext, listing: DirectoryListing) -> str:
    if context.status_message:
        if context.status_is_error:
            return f"{ERROR_SGR}{context.status_message}{RESET}"
        return context.status_message
    for task in context.operations:
        if task.last_progress is not None:
            return task.last_progress.describe(task.kind)
    entry = listing.curr_entry()
    if entry is None:
        return ""
    modified = time.strftime("%Y-%m-%d %H:%M", time.localtime(entry.metadata.mtime_ns / 1e9))
    position = f"{(listing.index or 0) + 1}/{len(listing.contents)}"
    return f"{format_mode(entry.metadata)}  {format_size(entry.metadata.len)}  {modified}  {position}"


def build_frame(context: AppContext, view: View, menu: list[str] | None = None) -> list[str]:
    """Compose one full frame of ``view.rows`` lines."""
    width = max(1, view.columns)
    content_rows = view.content_rows
    listing = context.curr_listing()

    strip = tab_strip(context)
    header_width = max(0, width - display_width(strip))
    header = fit_ansi_line(f"\033[1m{context.curr_tab().path}", header_width) + RESET + strip

    left_width = max(1, (width * 3) // 5)
    right_width = max(0, width - left_width - 1)
    left = listing_rows(listing, content_rows, left_width)
    right = preview_rows(context, listing.curr_entry(), content_rows, right_width)

    body: list[str] = []
    for row in range(content_rows):
        left_cell = left[row] if row < len(left) else " " * left_width
        right_cell = right[row] if row < len(right) else ""
        body.append(f"{left_cell}│{right_cell}")

    if menu:
        shown = menu[-content_rows:]
        for offset, item in enumerate(shown):
            body[content_rows - len(shown) + offset] = selected_with_ansi(fit_ansi_line(item.expandtabs(8), width))

    status = fit_ansi_line(status_text(context, listing), width)
    return [header, *body, status]


def render_screen(
    context: AppContext,
    view: View,
    write: Callable[[str], None],
    menu: list[str] | None = None,
) -> None:
    lines = build_frame(context, view, menu)
    write("\033[H" + "\r\n".join(f"{line}\033[K" for line in lines) + RESET)


__all__ = ["build_frame", "render_screen", "scroll_start", "selected_with_ansi"]
