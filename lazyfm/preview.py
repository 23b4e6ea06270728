"""Text previews for the file under the cursor.

Pygments is imported on first use to keep startup fast.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

PREVIEW_MAX_BYTES = 64 * 1024
DEFAULT_STYLE = "monokai"


@lru_cache(maxsize=None)
def _formatter_for_style(style: str):
    """Return a cached 256-color formatter, falling back to the default style."""
    from pygments.formatters import Terminal256Formatter
    from pygments.styles import get_style_by_name
    from pygments.util import ClassNotFound

    try:
        get_style_by_name(style)
    except ClassNotFound:
        style = DEFAULT_STYLE
    return Terminal256Formatter(style=style)


def highlight_source(source: str, path: Path, style: str = DEFAULT_STYLE) -> str:
    """Colorize ``source`` using a lexer picked from the file name."""
    from pygments import highlight
    from pygments.lexers import TextLexer, get_lexer_for_filename
    from pygments.util import ClassNotFound

    try:
        lexer = get_lexer_for_filename(path.name, source)
    except ClassNotFound:
        lexer = TextLexer()
    return highlight(source, lexer, _formatter_for_style(style))


def preview_file_lines(path: Path, max_lines: int, style: str = DEFAULT_STYLE) -> list[str]:
    """First ``max_lines`` rendered lines of a text file.

    Unreadable files yield a one-line message instead of raising.
    """
    if max_lines <= 0:
        return []
    try:
        with path.open("rb") as handle:
            data = handle.read(PREVIEW_MAX_BYTES)
    except OSError as exc:
        return [f"({exc.strerror or exc})"]
    if b"\x00" in data:
        return ["(binary file)"]
    text = data.decode("utf-8", errors="replace")
    head = "\n".join(text.splitlines()[:max_lines])
    if not head:
        return []
    return highlight_source(head, path, style).splitlines()[:max_lines]


__all__ = ["highlight_source", "preview_file_lines"]
