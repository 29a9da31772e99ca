"""采集流水线

按顺序组合三个组件：
1. ScrollDriver 滚动到内容不再增长
2. LinkHarvester 提取主导作者的链接
3. ResultExporter 写出结果文件

等价于 ``driver.run(lambda: exporter.export(harvester.extract(), ...))``。
"""

from __future__ import annotations

import asyncio
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING, Any

from playwright.async_api import Error as PlaywrightError

from ..common.browser import create_browser_session
from ..common.exceptions import BrowserError
from ..common.logger import get_logger
from ..common.types import CallbackMode, HarvestResult
from ..crawler import ScrollDriver
from ..extractor import LinkHarvester
from ..output import ResultExporter
from ..surface import HtmlSnapshotSurface, PlaywrightSurface

if TYPE_CHECKING:
    from ..surface.base import RenderSurface

logger = get_logger(__name__)


async def run_harvest(
    surface: "RenderSurface",
    mode: CallbackMode | str = CallbackMode.NONE,
    output_dir: str | Path | None = None,
    run_date: date | None = None,
    cancel_event: asyncio.Event | None = None,
    driver: ScrollDriver | None = None,
) -> dict[str, Any]:
    """在给定渲染面上运行完整的采集流程

    Args:
        surface: 渲染面
        mode: 回调模式；EVERY_ITERATION 时每轮滚动后都会重新导出（覆盖同名文件）
        output_dir: 输出目录，默认从配置读取
        run_date: 文件名日期，默认当天
        cancel_event: 取消事件
        driver: 自定义滚动驱动（默认基于 surface 新建）

    Returns:
        执行摘要
    """
    driver = driver or ScrollDriver(surface)
    harvester = LinkHarvester(surface)
    exporter = ResultExporter(output_dir=output_dir)
    run_date = run_date or date.today()

    state: dict[str, Any] = {"result": None, "path": None, "exports": 0}

    async def _extract_and_export() -> None:
        result: HarvestResult = await harvester.extract()
        state["result"] = result
        state["path"] = exporter.export(result, result.owner, run_date)
        state["exports"] += 1

    report = await driver.run(_extract_and_export, mode, cancel_event=cancel_event)

    result: HarvestResult | None = state["result"]
    summary: dict[str, Any] = {
        "owner": result.owner if result else None,
        "link_count": len(result.links) if result else 0,
        "video_count": result.video_count if result else 0,
        "photo_count": result.photo_count if result else 0,
        "candidate_count": result.candidate_count if result else 0,
        "output_file": str(state["path"]) if state["path"] else None,
        "exports": state["exports"],
        "scroll": report.model_dump(mode="json"),
    }
    logger.info(f"[Pipeline] 完成: owner={summary['owner']}, links={summary['link_count']}")
    return summary


async def run_feed_harvest(
    feed_url: str,
    mode: CallbackMode | str = CallbackMode.NONE,
    output_dir: str | Path | None = None,
    headless: bool | None = None,
    auth_file: str | None = None,
    cancel_event: asyncio.Event | None = None,
) -> dict[str, Any]:
    """打开信息流页面并采集

    Raises:
        PageLoadError: 页面无法打开
        BrowserError: 浏览器无法启动，或滚动、读取链接时页面崩溃
    """
    async with create_browser_session(
        headless=headless,
        auth_file=auth_file,
        close_engine=True,
    ) as session:
        logger.info(f"[Pipeline] 打开页面: {feed_url}")
        await session.navigate(feed_url)
        await session.wait_for_stable()
        surface = PlaywrightSurface(session.page)
        try:
            return await run_harvest(
                surface,
                mode=mode,
                output_dir=output_dir,
                cancel_event=cancel_event,
            )
        except PlaywrightError as e:
            raise BrowserError(f"页面操作失败: {e.message}") from e


async def run_snapshot_harvest(
    snapshot_path: str | Path,
    base_url: str | None = None,
    output_dir: str | Path | None = None,
) -> dict[str, Any]:
    """从已保存的 HTML 页面采集

    快照高度固定，不需要真实等待，因此使用最小的轮询参数。

    Raises:
        SnapshotError: 快照无法读取或解析
    """
    surface = HtmlSnapshotSurface.from_file(snapshot_path, base_url=base_url)
    driver = ScrollDriver(
        surface,
        poll_interval_ms=1,
        timeout_ms=1,
        max_retries=0,
        settle_ms=0,
    )
    return await run_harvest(surface, output_dir=output_dir, driver=driver)
