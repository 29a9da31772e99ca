"""FeedSpider - 无限滚动信息流的链接采集工具"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

__version__ = "0.1.0"

if TYPE_CHECKING:
    from .crawler.scroll_driver import ScrollDriver as ScrollDriver
    from .extractor.link_harvester import LinkHarvester as LinkHarvester
    from .output.exporter import ResultExporter as ResultExporter
    from .pipeline.runner import run_harvest as run_harvest

__all__ = [
    "__version__",
    "ScrollDriver",
    "LinkHarvester",
    "ResultExporter",
    "run_harvest",
]


def __getattr__(name: str) -> Any:
    """Lazy exports to avoid importing playwright at package import time."""
    if name == "ScrollDriver":
        from .crawler.scroll_driver import ScrollDriver

        return ScrollDriver
    if name == "LinkHarvester":
        from .extractor.link_harvester import LinkHarvester

        return LinkHarvester
    if name == "ResultExporter":
        from .output.exporter import ResultExporter

        return ResultExporter
    if name == "run_harvest":
        from .pipeline.runner import run_harvest

        return run_harvest
    raise AttributeError(f"module 'feedspider' has no attribute '{name}'")
