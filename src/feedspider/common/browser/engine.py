"""
浏览器引擎

进程内共享一个 Chromium 实例；每次采集开一个独立的 Context，
Context 携带视口尺寸与（可选的）登录态文件。
"""

import asyncio
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncGenerator, Optional

from loguru import logger
from playwright.async_api import Browser, BrowserContext, Page, async_playwright
from playwright_stealth import Stealth

_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/128.0.0.0 Safari/537.36"
)


class BrowserEngine:
    """共享浏览器实例

    浏览器在第一次取页面时启动；所属事件循环变化、连接断开或 headless 取值变化时重启。
    """

    def __init__(self, headless: bool = True, timeout_ms: int = 30000):
        self.headless = headless
        self.timeout_ms = timeout_ms

        self._stealth_cm: Optional[Any] = None
        self._browser: Optional[Browser] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    def _is_reusable(self, headless: bool) -> bool:
        return (
            self._browser is not None
            and self._browser.is_connected()
            and self._loop is asyncio.get_running_loop()
            and self.headless == headless
        )

    async def _launch(self, headless: bool) -> Browser:
        if self._is_reusable(headless):
            return self._browser

        if self._browser is not None and self._loop is asyncio.get_running_loop():
            logger.info(f"[Engine] 重启浏览器 (headless={headless})")
            await self.close()

        # Stealth 包装的 Playwright 降低信息流页面对自动化的识别
        self._stealth_cm = Stealth().use_async(async_playwright())
        playwright = await self._stealth_cm.__aenter__()
        self._browser = await playwright.chromium.launch(
            headless=headless,
            args=["--disable-blink-features=AutomationControlled"],
        )
        self._loop = asyncio.get_running_loop()
        self.headless = headless
        logger.debug(f"[Engine] 浏览器已启动 (headless={headless})")
        return self._browser

    @asynccontextmanager
    async def page(
        self,
        viewport: dict[str, int],
        auth_file: Optional[str] = None,
        headless: Optional[bool] = None,
    ) -> AsyncGenerator[Page, None]:
        """
        打开一个新页面，退出时关闭页面所在的 Context。

        Args:
            viewport: 视口尺寸，如 {"width": 1280, "height": 720}
            auth_file: 登录态文件（Playwright storage_state），文件存在时加载
            headless: 覆盖引擎默认的 headless 设置
        """
        browser = await self._launch(self.headless if headless is None else headless)

        storage_state = None
        if auth_file and Path(auth_file).is_file():
            logger.debug(f"[Engine] 复用登录态: {auth_file}")
            storage_state = auth_file

        context: BrowserContext = await browser.new_context(
            viewport=viewport,
            user_agent=_USER_AGENT,
            storage_state=storage_state,
        )
        try:
            page = await context.new_page()
            page.set_default_timeout(self.timeout_ms)
            yield page
        finally:
            await context.close()

    async def close(self) -> None:
        """关闭浏览器与 Playwright 驱动"""
        if self._browser is not None:
            await self._browser.close()
        if self._stealth_cm is not None:
            await self._stealth_cm.__aexit__(None, None, None)
        self._browser = None
        self._stealth_cm = None
        self._loop = None


_engine: Optional[BrowserEngine] = None


async def get_browser_engine(headless: bool = True, timeout_ms: int = 30000) -> BrowserEngine:
    """返回进程内共享的引擎，只有第一次调用的参数生效"""
    global _engine
    if _engine is None:
        _engine = BrowserEngine(headless=headless, timeout_ms=timeout_ms)
    return _engine


async def shutdown_browser_engine() -> None:
    """关闭共享引擎"""
    global _engine
    if _engine is not None:
        await _engine.close()
        _engine = None
