"""Session state owned by the controller thread.

Tabs, the directory cache, in-flight file operations, the clipboard and the
status line all live on ``AppContext``. Every mutation that can fail is
staged first and swapped in only on success, so a failed command leaves the
session exactly as it was.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from .fs import DirectoryListing, SortOptions
from .history import DirectoryHistory, canonical_path
from .tab import Tab

if TYPE_CHECKING:
    from .fileops import Clipboard, FileOperationTask

logger = logging.getLogger(__name__)


def wrap_tab_index(index: int, delta: int, tab_count: int) -> int:
    """Move ``index`` by ``delta`` modulo ``tab_count`` in either direction."""
    if tab_count <= 0:
        return 0
    return (index + delta) % tab_count


@dataclass
class AppContext:
    sort_options: SortOptions = field(default_factory=SortOptions)
    style: str = "monokai"
    config_path: Path | None = None
    tabs: list[Tab] = field(default_factory=list)
    curr_tab_index: int = 0
    history: DirectoryHistory = field(default_factory=DirectoryHistory)
    operations: list[FileOperationTask] = field(default_factory=list)
    clipboard: Clipboard | None = None
    search_pattern: str | None = None
    status_message: str = ""
    status_is_error: bool = False
    dirty: bool = True
    exit: bool = False
    _next_tab_id: int = 0

    # -- status line -----------------------------------------------------

    def set_status(self, message: str) -> None:
        self.status_message = message
        self.status_is_error = False
        self.dirty = True

    def set_error(self, message: str) -> None:
        self.status_message = message
        self.status_is_error = True
        self.dirty = True

    def clear_status(self) -> None:
        if self.status_message:
            self.status_message = ""
            self.status_is_error = False
            self.dirty = True

    # -- tab lookup ------------------------------------------------------

    def curr_tab(self) -> Tab:
        return self.tabs[self.curr_tab_index]

    def curr_listing(self) -> DirectoryListing:
        tab = self.curr_tab()
        if tab.listing is None:
            raise RuntimeError(f"tab {tab.tab_id} at {tab.path} has no checked-out listing")
        return tab.listing

    def tab_by_id(self, tab_id: int) -> Tab | None:
        for tab in self.tabs:
            if tab.tab_id == tab_id:
                return tab
        return None

    def _allocate_tab_id(self) -> int:
        tab_id = self._next_tab_id
        self._next_tab_id += 1
        return tab_id

    # -- navigation ------------------------------------------------------

    def open_initial_tab(self, path: Path) -> Tab:
        """Create the first tab at ``path``; errors propagate to the caller."""
        path = canonical_path(path)
        self.history.populate_to_root(path, self.sort_options)
        listing = self.history.pop_or_create(path, self.sort_options)
        os.chdir(path)
        tab = Tab(tab_id=self._allocate_tab_id(), path=path, listing=listing)
        self.tabs.append(tab)
        self.curr_tab_index = len(self.tabs) - 1
        self.dirty = True
        return tab

    def change_directory(self, path: Path, populate: bool = True) -> None:
        """Point the current tab at ``path``.

        The outgoing listing is checked into the cache before the incoming one
        is checked out, so a tab re-entering its own directory gets the same
        listing back. On failure the original listing is restored.
        """
        path = canonical_path(path)
        tab = self.curr_tab()
        old_listing = self.curr_listing()
        self.history.insert(tab.path, old_listing)
        tab.listing = None
        try:
            if populate:
                self.history.populate_to_root(path, self.sort_options)
            new_listing = self.history.pop_or_create(path, self.sort_options)
            try:
                os.chdir(path)
            except OSError:
                self.history.insert(path, new_listing)
                raise
        except OSError:
            tab.listing = self.history.take(tab.path) or old_listing
            raise

        tab.path = path
        tab.listing = new_listing
        self.dirty = True
        logger.debug("tab %d now at %s", tab.tab_id, path)

    def _hand_over(self, outgoing: Tab, incoming: Tab) -> None:
        """Check ``outgoing``'s listing in and check ``incoming``'s out."""
        os.chdir(incoming.path)
        old_listing = outgoing.listing
        if old_listing is not None:
            self.history.insert(outgoing.path, old_listing)
            outgoing.listing = None
        try:
            new_listing = self.history.pop_or_create(incoming.path, self.sort_options)
        except OSError:
            if old_listing is not None:
                outgoing.listing = self.history.take(outgoing.path) or old_listing
            os.chdir(outgoing.path)
            raise
        incoming.listing = new_listing

    def switch_tab(self, new_index: int) -> None:
        """Make ``tabs[new_index]`` current, re-scanning its listing if stale."""
        if new_index == self.curr_tab_index:
            listing = self.curr_listing()
            if listing.need_update():
                listing.update_contents(self.sort_options)
                self.dirty = True
            return
        outgoing = self.curr_tab()
        incoming = self.tabs[new_index]
        self._hand_over(outgoing, incoming)
        self.curr_tab_index = new_index
        self.dirty = True

    def new_tab(self) -> Tab:
        """Open a tab at the current path and switch to it."""
        tab = Tab(tab_id=self._allocate_tab_id(), path=self.curr_tab().path)
        self.tabs.append(tab)
        try:
            self.switch_tab(len(self.tabs) - 1)
        except OSError:
            self.tabs.pop()
            raise
        return tab

    def close_tab(self) -> None:
        """Close the current tab; the last remaining tab exits the session."""
        if len(self.tabs) <= 1:
            self.exit = True
            return
        closing_index = self.curr_tab_index
        if closing_index + 1 < len(self.tabs):
            next_index = closing_index + 1
        else:
            next_index = closing_index - 1
        closing = self.tabs[closing_index]
        self._hand_over(closing, self.tabs[next_index])
        del self.tabs[closing_index]
        # Tabs after the closed one shift left by one.
        self.curr_tab_index = next_index if next_index < closing_index else closing_index
        self.dirty = True
        logger.debug("closed tab %d", closing.tab_id)

    def reload_tab(self, tab_id: int) -> None:
        """Bring one tab's listing up to date after an external change.

        The current tab is re-scanned now; a background tab's cached listing
        is marked stale and re-scanned when it is checked out again.
        """
        tab = self.tab_by_id(tab_id)
        if tab is None:
            return
        if tab.listing is not None:
            tab.listing.update_contents(self.sort_options)
            self.dirty = True
        else:
            self.history.depreciate(tab.path)

    def set_show_hidden(self, show_hidden: bool) -> None:
        """Switch hidden-file visibility and re-scan the current listing."""
        options = self.sort_options.with_show_hidden(show_hidden)
        self.curr_listing().update_contents(options)
        self.sort_options = options
        self.history.depreciate_all_entries()
        self.dirty = True


__all__ = ["AppContext", "wrap_tab_index"]
