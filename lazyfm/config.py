"""Persistent JSON config helpers.

Stores hidden-file preference, sort options, preview style and keymap
overrides. Preferences load defensively: malformed or missing values fall
back to defaults. Keymap entries load strictly because a bad binding must
fail before the UI starts.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_config_dir

from .errors import KeymapError
from .fs import SORT_METHODS, SortOptions

APP_NAME = "lazyfm"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH


@dataclass(frozen=True)
class KeymapBinding:
    """One key sequence bound to a command name and its string arguments."""

    keys: tuple[str, ...]
    command: str
    args: tuple[str, ...] = ()


@dataclass(frozen=True)
class AppConfig:
    sort_options: SortOptions = field(default_factory=SortOptions)
    style: str = "monokai"
    bindings: tuple[KeymapBinding, ...] = ()


def _resolve_path(path: Path | None) -> Path:
    return path if path is not None else CONFIG_PATH


def load_config(path: Path | None = None) -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    config_path = _resolve_path(path)
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object], path: Path | None = None) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are ignored to keep runtime behavior non-fatal when
    config cannot be written.
    """
    config_path = _resolve_path(path)
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def _bool_or(value: object, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def load_show_hidden(path: Path | None = None) -> bool:
    """Return persisted hidden-file visibility preference.

    Only explicit boolean values are accepted; any other type falls back to
    ``False``.
    """
    return _bool_or(load_config(path).get("show_hidden"), False)


def save_show_hidden(show_hidden: bool, path: Path | None = None) -> None:
    """Persist hidden-file visibility preference as a boolean."""
    config = load_config(path)
    config["show_hidden"] = bool(show_hidden)
    save_config(config, path)


def parse_sort_options(data: dict[str, object]) -> SortOptions:
    defaults = SortOptions()
    show_hidden = _bool_or(data.get("show_hidden"), defaults.show_hidden)
    raw_sort = data.get("sort")
    if not isinstance(raw_sort, dict):
        return SortOptions(show_hidden=show_hidden)
    method = raw_sort.get("method")
    return SortOptions(
        show_hidden=show_hidden,
        method=method if method in SORT_METHODS else defaults.method,
        directories_first=_bool_or(raw_sort.get("directories_first"), defaults.directories_first),
        case_sensitive=_bool_or(raw_sort.get("case_sensitive"), defaults.case_sensitive),
        reverse=_bool_or(raw_sort.get("reverse"), defaults.reverse),
    )


def _string_list(value: object, what: str, position: int) -> tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise KeymapError(None, f"keymap entry {position}: {what} must be a list of strings")
    return tuple(value)


def parse_keymap_bindings(data: dict[str, object]) -> tuple[KeymapBinding, ...]:
    """Validate the ``keymap`` section shape; raises ``KeymapError``."""
    raw_keymap = data.get("keymap")
    if raw_keymap is None:
        return ()
    if not isinstance(raw_keymap, list):
        raise KeymapError(None, "keymap must be a list of bindings")

    bindings: list[KeymapBinding] = []
    for position, raw in enumerate(raw_keymap):
        if not isinstance(raw, dict):
            raise KeymapError(None, f"keymap entry {position}: expected an object")
        command = raw.get("command")
        if not isinstance(command, str) or not command:
            raise KeymapError(None, f"keymap entry {position}: missing command name")
        keys = _string_list(raw.get("keys"), "keys", position)
        if not keys or any(not key for key in keys):
            raise KeymapError(command, f"keymap entry {position}: keys must be non-empty")
        args = _string_list(raw.get("args", []), "args", position)
        bindings.append(KeymapBinding(keys=keys, command=command, args=args))
    return tuple(bindings)


def load_app_config(path: Path | None = None) -> AppConfig:
    data = load_config(path)
    style = data.get("style")
    return AppConfig(
        sort_options=parse_sort_options(data),
        style=style.strip() if isinstance(style, str) and style.strip() else "monokai",
        bindings=parse_keymap_bindings(data),
    )


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "AppConfig",
    "KeymapBinding",
    "load_app_config",
    "load_config",
    "save_config",
    "load_show_hidden",
    "save_show_hidden",
    "parse_sort_options",
    "parse_keymap_bindings",
]
