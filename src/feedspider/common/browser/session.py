"""浏览器会话管理"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeout
from playwright.async_api import Error as PlaywrightError

from ..config import config
from ..exceptions import BrowserError, PageLoadError
from ..logger import get_logger
from .engine import BrowserEngine, get_browser_engine, shutdown_browser_engine

logger = get_logger(__name__)


class BrowserSession:
    """浏览器会话管理器

    在内部使用 BrowserEngine 的页面上下文，对外只暴露 Page 与导航操作。
    """

    def __init__(
        self,
        headless: bool | None = None,
        viewport_width: int | None = None,
        viewport_height: int | None = None,
        auth_file: str | None = None,
    ):
        self.headless = headless if headless is not None else config.browser.headless
        self.viewport_width = viewport_width or config.browser.viewport_width
        self.viewport_height = viewport_height or config.browser.viewport_height
        self.auth_file = auth_file or config.browser.auth_file

        self._engine: BrowserEngine | None = None
        self._page: Page | None = None
        self._page_context = None

    async def start(self) -> Page:
        """启动浏览器并返回 Page

        Raises:
            BrowserError: 浏览器无法启动或页面无法创建
        """
        page_context = None
        try:
            self._engine = await get_browser_engine(
                headless=self.headless,
                timeout_ms=config.browser.timeout_ms,
            )
            page_context = self._engine.page(
                viewport={"width": self.viewport_width, "height": self.viewport_height},
                auth_file=self.auth_file,
                headless=self.headless,
            )
            self._page = await page_context.__aenter__()
        except PlaywrightError as e:
            raise BrowserError(f"浏览器启动失败: {e.message}") from e

        self._page_context = page_context
        return self._page

    async def stop(self) -> None:
        """关闭浏览器会话"""
        if self._page_context:
            try:
                await self._page_context.__aexit__(None, None, None)
            except PlaywrightError as e:
                logger.debug(f"[Session] 关闭页面失败: {e}")

        self._page = None
        self._page_context = None
        # 不关闭全局引擎，它是单例

    @property
    def page(self) -> Page | None:
        return self._page

    async def navigate(self, url: str, wait_until: str = "domcontentloaded") -> None:
        """导航到指定 URL

        Raises:
            PageLoadError: 页面在超时时间内未加载完成
        """
        if not self._page:
            raise RuntimeError("Browser session not started")
        try:
            await self._page.goto(url, wait_until=wait_until)
        except PlaywrightTimeout as e:
            raise PageLoadError(url, "页面加载超时") from e
        except PlaywrightError as e:
            raise PageLoadError(url, f"页面加载失败 ({e.message})") from e

    async def wait_for_stable(self, timeout_ms: int = 3000) -> None:
        """等待页面稳定(网络空闲)"""
        if not self._page:
            return
        try:
            await self._page.wait_for_load_state("networkidle", timeout=timeout_ms)
        except PlaywrightTimeout:
            # 信息流页面常驻长连接，超时不算错误
            pass


@asynccontextmanager
async def create_browser_session(
    headless: bool | None = None,
    viewport_width: int | None = None,
    viewport_height: int | None = None,
    auth_file: str | None = None,
    close_engine: bool = False,
) -> AsyncGenerator[BrowserSession, None]:
    """创建浏览器会话的上下文管理器"""
    session = BrowserSession(
        headless=headless,
        viewport_width=viewport_width,
        viewport_height=viewport_height,
        auth_file=auth_file,
    )
    try:
        await session.start()
        yield session
    finally:
        await session.stop()
        if close_engine:
            # CLI 单次运行后关闭全局引擎，避免事件循环结束时残留连接
            try:
                await shutdown_browser_engine()
            except PlaywrightError as e:
                logger.debug(f"[Session] 关闭浏览器引擎失败: {e}")
