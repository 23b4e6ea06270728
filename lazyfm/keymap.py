"""Keymap trees and chorded key resolution.

A keymap maps key tokens to either a command (``KeymapLeaf``) or a nested
keymap (``KeymapComposite``) that waits for more keys. Resolution walks the
tree with an explicit loop so every depth handles ``ESC`` and unknown keys
the same way.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from .commands import Command, from_args
from .config import KeymapBinding
from .errors import KeymapError

ESCAPE_KEY = "ESC"


@dataclass(frozen=True)
class KeymapLeaf:
    command: Command


@dataclass
class KeymapComposite:
    children: dict[str, KeymapNode] = field(default_factory=dict)


KeymapNode = KeymapLeaf | KeymapComposite
Keymap = dict[str, KeymapNode]


DEFAULT_BINDINGS: tuple[KeymapBinding, ...] = (
    KeymapBinding(("q",), "quit"),
    KeymapBinding(("Q",), "force_quit"),
    KeymapBinding(("UP",), "cursor_move_up"),
    KeymapBinding(("k",), "cursor_move_up"),
    KeymapBinding(("DOWN",), "cursor_move_down"),
    KeymapBinding(("j",), "cursor_move_down"),
    KeymapBinding(("HOME",), "cursor_move_home"),
    KeymapBinding(("END",), "cursor_move_end"),
    KeymapBinding(("G",), "cursor_move_end"),
    KeymapBinding(("PAGE_UP",), "cursor_move_page_up"),
    KeymapBinding(("PAGE_DOWN",), "cursor_move_page_down"),
    KeymapBinding(("LEFT",), "cd", ("..",)),
    KeymapBinding(("h",), "cd", ("..",)),
    KeymapBinding(("RIGHT",), "open_file"),
    KeymapBinding(("l",), "open_file"),
    KeymapBinding(("ENTER",), "open_file"),
    KeymapBinding(("TAB",), "tab_switch", ("1",)),
    KeymapBinding(("SHIFT_TAB",), "tab_switch", ("-1",)),
    KeymapBinding(("CTRL_T",), "new_tab"),
    KeymapBinding(("W",), "close_tab"),
    KeymapBinding((" ",), "select_files", ("--toggle",)),
    KeymapBinding(("v",), "select_files", ("--toggle", "--all")),
    KeymapBinding(("y", "y"), "copy_files"),
    KeymapBinding(("d", "d"), "cut_files"),
    KeymapBinding(("d", "D"), "delete_files"),
    KeymapBinding(("DELETE",), "delete_files"),
    KeymapBinding(("p", "p"), "paste_files"),
    KeymapBinding(("p", "o"), "paste_files", ("--overwrite",)),
    KeymapBinding(("p", "s"), "paste_files", ("--skip_exist",)),
    KeymapBinding(("g", "h"), "cd"),
    KeymapBinding(("g", "r"), "cd", ("/",)),
    KeymapBinding(("g", "g"), "cursor_move_home"),
    KeymapBinding(("g", "t"), "tab_switch", ("1",)),
    KeymapBinding(("g", "T"), "tab_switch", ("-1",)),
    KeymapBinding(("n",), "search_next"),
    KeymapBinding(("N",), "search_prev"),
    KeymapBinding(("z", "h"), "toggle_hidden"),
    KeymapBinding(("CTRL_R",), "reload_dir_list"),
)


def insert_binding(keymap: Keymap, keys: tuple[str, ...], command: Command) -> None:
    """Bind ``keys`` to ``command``, replacing whatever was bound there.

    A later binding wins: binding a prefix replaces the chord below it, and
    binding through an existing single-key command replaces that command.
    """
    node_map = keymap
    for key in keys[:-1]:
        node = node_map.get(key)
        if not isinstance(node, KeymapComposite):
            node = KeymapComposite()
            node_map[key] = node
        node_map = node.children
    node_map[keys[-1]] = KeymapLeaf(command)


def build_keymap(bindings: Iterable[KeymapBinding]) -> Keymap:
    """Construct every bound command; raises ``KeymapError`` on the first bad one."""
    keymap: Keymap = {}
    for binding in bindings:
        if not binding.keys:
            raise KeymapError(binding.command, "binding has no keys")
        try:
            command = from_args(binding.command, binding.args)
        except KeymapError as exc:
            raise KeymapError(
                exc.command or binding.command,
                f"{exc.message} (keys: {' '.join(binding.keys)})",
            ) from exc
        insert_binding(keymap, binding.keys, command)
    return keymap


def load_keymap(user_bindings: Iterable[KeymapBinding] = ()) -> Keymap:
    """Default keymap with user bindings layered on top."""
    return build_keymap([*DEFAULT_BINDINGS, *user_bindings])


def describe_options(children: dict[str, KeymapNode]) -> list[str]:
    """Menu rows listing the next keys of a chord, sorted."""
    rows: list[str] = []
    for key, node in children.items():
        label = str(node.command) if isinstance(node, KeymapLeaf) else "..."
        shown = "SPACE" if key == " " else key
        rows.append(f"  {shown}\t{label}")
    rows.sort()
    return rows


def resolve_keybind(
    keymap: Keymap,
    key: str,
    read_next_key: Callable[[], str],
    show_options: Callable[[list[str], dict[str, KeymapNode]], None],
) -> Command | None:
    """Resolve ``key`` (and any chord continuation) into one command.

    Returns ``None`` when ``ESC`` aborts the sequence at any depth. Raises
    ``KeymapError`` naming the full key path when a key has no binding.
    ``read_next_key`` blocks until the next key arrives.
    """
    path = [key]
    node_map = keymap
    while True:
        if path[-1] == ESCAPE_KEY:
            return None
        node = node_map.get(path[-1])
        if node is None:
            raise KeymapError(None, f"Unknown keycode: {' '.join(path)}")
        if isinstance(node, KeymapLeaf):
            return node.command
        show_options(list(path), node.children)
        node_map = node.children
        path.append(read_next_key())


__all__ = [
    "DEFAULT_BINDINGS",
    "ESCAPE_KEY",
    "Keymap",
    "KeymapComposite",
    "KeymapLeaf",
    "KeymapNode",
    "build_keymap",
    "describe_options",
    "insert_binding",
    "load_keymap",
    "resolve_keybind",
]
