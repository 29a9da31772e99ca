"""渲染面模块"""

from .base import RenderSurface
from .snapshot_surface import HtmlSnapshotSurface
from .playwright_surface import PlaywrightSurface

__all__ = [
    "RenderSurface",
    "HtmlSnapshotSurface",
    "PlaywrightSurface",
]
