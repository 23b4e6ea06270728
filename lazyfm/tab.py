"""Navigation tabs."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .fs import DirectoryListing


@dataclass(eq=False)
class Tab:
    """One navigation context.

    ``listing`` is the listing checked out of the directory cache while this
    tab is current; background tabs hold ``None`` and check their listing
    out again when they are switched to.
    """

    tab_id: int
    path: Path
    listing: DirectoryListing | None = None

    @property
    def title(self) -> str:
        return self.path.name or str(self.path)


__all__ = ["Tab"]
