"""Path-keyed cache of inactive directory listings.

A listing is either checked into this cache or checked out by exactly one
tab. ``pop_or_create`` checks one out and ``insert`` checks it back in; the
controller thread is the only caller, so no locking is involved.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from .fs import DirectoryListing, SortOptions

logger = logging.getLogger(__name__)


def canonical_path(path: Path) -> Path:
    """Absolute, normalized form used as the cache key."""
    return Path(os.path.normpath(os.path.abspath(path)))


class DirectoryHistory:
    """Cache of listings for directories visited during this process."""

    def __init__(self) -> None:
        self._listings: dict[Path, DirectoryListing] = {}

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, Path):
            return False
        return canonical_path(path) in self._listings

    def __len__(self) -> int:
        return len(self._listings)

    def __iter__(self) -> Iterator[Path]:
        return iter(self._listings)

    def get(self, path: Path) -> DirectoryListing | None:
        return self._listings.get(canonical_path(path))

    def populate_to_root(self, path: Path, sort_options: SortOptions) -> None:
        """Cache every ancestor of ``path`` with its cursor on the next hop.

        ``path`` itself is not cached. Ancestors already in the cache are left
        as they are, stale or not.
        """
        path = canonical_path(path)
        chain = list(reversed(path.parents))
        hops = chain[1:] + [path]
        for ancestor, next_hop in zip(chain, hops):
            if ancestor in self._listings:
                continue
            listing = DirectoryListing.new(ancestor, sort_options)
            index = listing.index_of(next_hop)
            if index is not None:
                listing.index = index
            self._listings[ancestor] = listing

    def pop_or_create(self, path: Path, sort_options: SortOptions) -> DirectoryListing:
        """Check out the listing for ``path``, re-scanning it when stale.

        When the re-scan fails the listing stays in the cache and the
        ``OSError`` propagates.
        """
        path = canonical_path(path)
        listing = self._listings.get(path)
        if listing is None:
            return DirectoryListing.new(path, sort_options)

        if listing.need_update() or listing.modified_on_disk():
            logger.debug("re-scanning stale listing %s", path)
            listing.update_contents(sort_options)
        del self._listings[path]
        return listing

    def take(self, path: Path) -> DirectoryListing | None:
        """Remove and return the cached listing as-is, without any re-scan."""
        return self._listings.pop(canonical_path(path), None)

    def insert(self, path: Path, listing: DirectoryListing) -> None:
        self._listings[canonical_path(path)] = listing

    def get_mut_or_create(self, path: Path, sort_options: SortOptions) -> DirectoryListing:
        """Return the cached listing for ``path`` without checking it out."""
        path = canonical_path(path)
        listing = self._listings.get(path)
        if listing is None:
            listing = DirectoryListing.new(path, sort_options)
            self._listings[path] = listing
        return listing

    def depreciate(self, path: Path) -> bool:
        """Mark the cached listing for ``path`` stale; return whether it was cached."""
        listing = self._listings.get(canonical_path(path))
        if listing is None:
            return False
        listing.depreciate()
        return True

    def depreciate_all_entries(self) -> None:
        for listing in self._listings.values():
            listing.depreciate()


__all__ = ["DirectoryHistory", "canonical_path"]
