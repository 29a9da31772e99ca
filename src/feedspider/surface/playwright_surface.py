"""基于 Playwright Page 的渲染面实现"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import RenderSurface

if TYPE_CHECKING:
    from playwright.async_api import Page


_EXTENT_SCRIPT = "() => document.body.scrollHeight"
_SCROLL_SCRIPT = "(extent) => window.scrollTo(0, extent)"
# a.href 返回浏览器解析后的绝对地址
_LINKS_SCRIPT = "(elements) => elements.map((a) => a.href)"


class PlaywrightSurface(RenderSurface):
    """在真实浏览器页面上执行滚动与链接读取"""

    def __init__(self, page: "Page", link_selector: str = "a"):
        """
        Args:
            page: Playwright 页面对象
            link_selector: 链接元素选择器
        """
        self.page = page
        self.link_selector = link_selector

    async def get_extent(self) -> int:
        extent = await self.page.evaluate(_EXTENT_SCRIPT)
        return int(extent or 0)

    async def set_extent(self, extent: int) -> None:
        await self.page.evaluate(_SCROLL_SCRIPT, extent)

    async def list_links(self) -> list[str]:
        hrefs = await self.page.eval_on_selector_all(self.link_selector, _LINKS_SCRIPT)
        return [href for href in hrefs or [] if href]
