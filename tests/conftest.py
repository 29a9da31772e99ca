"""pytest 全局配置和 fixtures

提供测试所需的基础设施和 Mock 对象。
"""

from __future__ import annotations

import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# 添加项目路径
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from feedspider.surface.base import RenderSurface  # noqa: E402


# ============================================================================
# 渲染面与时钟替身
# ============================================================================


class ScriptedSurface(RenderSurface):
    """按脚本变化高度的渲染面

    初始高度为 extents[0]，每收到一次滚动指令前进到下一个值，到末尾后保持不变。
    """

    def __init__(self, extents: list[int], links: list[str] | None = None):
        self.extents = list(extents)
        self.links = list(links or [])
        self.index = 0
        self.scroll_commands: list[int] = []

    async def get_extent(self) -> int:
        return self.extents[self.index]

    async def set_extent(self, extent: int) -> None:
        self.scroll_commands.append(extent)
        if self.index < len(self.extents) - 1:
            self.index += 1

    async def list_links(self) -> list[str]:
        return list(self.links)


class FakeClock:
    """休眠时直接推进时间的时钟

    lag_ms 为每次休眠额外推进的毫秒数，用于模拟调度受限。
    """

    def __init__(self, lag_ms: float = 0.0):
        self.now = 0.0
        self.lag_ms = lag_ms
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds + self.lag_ms / 1000


@pytest.fixture
def fake_clock():
    """不真正等待的时钟"""
    return FakeClock()


@pytest.fixture
def make_clock():
    """构造带延迟的时钟"""
    def _make(lag_ms: float = 0.0) -> FakeClock:
        return FakeClock(lag_ms)
    return _make


@pytest.fixture
def make_surface():
    """构造脚本化渲染面"""
    def _make(extents: list[int], links: list[str] | None = None) -> ScriptedSurface:
        return ScriptedSurface(extents, links)
    return _make


@pytest.fixture
def make_driver(fake_clock):
    """构造使用假时钟的滚动驱动（默认参数与生产配置一致）"""
    from feedspider.crawler import ScrollDriver

    def _make(surface: RenderSurface, clock: FakeClock | None = None, **kwargs) -> ScrollDriver:
        clock = clock or fake_clock
        options = {
            "poll_interval_ms": 500,
            "timeout_ms": 10_000,
            "max_retries": 3,
            "settle_ms": 1000,
            "max_iterations": 2000,
            "throttle_slack_ms": 200,
        }
        options.update(kwargs)
        return ScrollDriver(surface, sleep=clock.sleep, clock=clock, **options)

    return _make


# ============================================================================
# Mock Fixtures
# ============================================================================


@pytest.fixture
def mock_page():
    """模拟 Playwright Page 对象"""
    page = AsyncMock()
    page.url = "https://www.tiktok.com/@alice"
    page.evaluate = AsyncMock(return_value=None)
    page.eval_on_selector_all = AsyncMock(return_value=[])
    page.goto = AsyncMock()
    page.wait_for_load_state = AsyncMock()
    page.set_default_timeout = MagicMock()
    return page


@pytest.fixture
def feed_links():
    """一个主页上常见的链接组合"""
    return [
        "https://www.tiktok.com/@alice/video/1",
        "https://www.tiktok.com/@bob/video/2",
        "https://www.tiktok.com/@alice/photo/3",
        "https://www.tiktok.com/@alice/video/1",
        "https://www.tiktok.com/explore",
        "https://www.tiktok.com/@alice",
    ]


# ============================================================================
# 临时目录 Fixture
# ============================================================================


@pytest.fixture
def temp_output_dir(tmp_path):
    """创建临时输出目录"""
    output_dir = tmp_path / "output"
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir
