"""Render surface abstraction."""

from __future__ import annotations

import abc


class RenderSurface(abc.ABC):
    """The host a feed is rendered on.

    Exposes the three capabilities the scroll driver and the link harvester
    need: the current content extent, a command to move the viewport, and the
    list of rendered link targets.
    """

    @abc.abstractmethod
    async def get_extent(self) -> int:
        """Return the current scrollable content height."""

    @abc.abstractmethod
    async def set_extent(self, extent: int) -> None:
        """Scroll the viewport to the given offset."""

    @abc.abstractmethod
    async def list_links(self) -> list[str]:
        """Return the target URLs of every rendered link element."""
