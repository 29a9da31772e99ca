"""CLI 入口"""

from __future__ import annotations

import asyncio
import threading
from contextlib import contextmanager
from typing import Any, Optional

import typer
from rich.panel import Panel
from rich.table import Table

from .common.config import config
from .common.exceptions import FeedSpiderError, ValidationError
from .common.logger import console, get_logger, setup_file_logging, teardown_file_logging
from .common.types import CallbackMode
from .common.validators import validate_feed_url, validate_snapshot_file
from .pipeline import run_feed_harvest, run_snapshot_harvest

logger = get_logger(__name__)

app = typer.Typer(
    name="feedspider",
    help="FeedSpider CLI - 信息流链接采集工具",
    add_completion=False,
)


def run_async_safely(coro):
    """在 CLI 同步上下文中安全执行协程。"""
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        # 没有运行中的事件循环，直接使用 asyncio.run
        return asyncio.run(coro)

    # 已有运行中的事件循环，需要在新线程中创建新的事件循环
    result_holder: dict[str, Any] = {"result": None, "error": None}

    def _runner():
        try:
            result_holder["result"] = asyncio.run(coro)
        except BaseException as exc:  # noqa: BLE001
            result_holder["error"] = exc

    thread = threading.Thread(target=_runner, daemon=True)
    thread.start()
    thread.join()

    if result_holder["error"] is not None:
        raise result_holder["error"]
    return result_holder["result"]


def _render_summary(summary: dict[str, Any], title: str) -> None:
    scroll = summary["scroll"]

    table = Table(title=title, show_header=False)
    table.add_column("项目", style="bold")
    table.add_column("值")
    table.add_row("主导作者", str(summary["owner"]))
    table.add_row("保留链接", f"{summary['link_count']} (视频 {summary['video_count']} / 图片 {summary['photo_count']})")
    table.add_row("候选链接", str(summary["candidate_count"]))
    table.add_row("滚动轮数", str(scroll["iterations"]))
    table.add_row("结束状态", scroll["state"])
    table.add_row("调度受限", str(scroll["throttle_events"]))
    table.add_row("输出文件", str(summary["output_file"]))
    console.print(table)


@contextmanager
def _file_logging(log_file: str):
    """在命令执行期间把日志额外写入 log_file（为空时不做任何事）"""
    if not log_file:
        yield
        return

    handler = setup_file_logging(log_file)
    logger.info(f"[Log] 日志文件: {log_file}")
    try:
        yield
    finally:
        teardown_file_logging(handler)


def _fail(message: str) -> None:
    console.print(Panel(f"[red]{message}[/red]", title="执行错误", style="red"))
    raise typer.Exit(1)


@app.command("harvest")
def harvest_command(
    feed_url: str = typer.Option(
        ...,
        "--url",
        "-u",
        help="信息流主页 URL",
    ),
    every_iteration: bool = typer.Option(
        False,
        "--every-iteration",
        help="每轮滚动后都导出一次（默认只在滚动结束后导出）",
    ),
    headless: Optional[bool] = typer.Option(
        None,
        "--headless/--no-headless",
        help="是否使用无头模式（默认读取 HEADLESS 配置）",
    ),
    auth_file: str = typer.Option(
        "",
        "--auth-file",
        help="登录态文件（Playwright storage_state）",
    ),
    output_dir: str = typer.Option(
        "",
        "--output",
        "-o",
        help="输出目录（默认从配置读取）",
    ),
    log_file: str = typer.Option(
        config.logging.file,
        "--log-file",
        help="额外写入的日志文件（默认读取 LOG_FILE 配置）",
    ),
):
    """
    打开信息流页面，滚动到底并导出主导作者的视频与图片链接

    示例:
        feedspider harvest --url "https://www.tiktok.com/@alice"
    """
    try:
        feed_url = validate_feed_url(feed_url)
        config.validate_values()
    except FeedSpiderError as e:
        _fail(str(e))

    mode = CallbackMode.EVERY_ITERATION if every_iteration else CallbackMode.NONE
    effective_headless = config.browser.headless if headless is None else headless
    console.print(
        Panel(
            f"[bold]页面 URL:[/bold] {feed_url}\n"
            f"[bold]导出时机:[/bold] {'每轮滚动' if every_iteration else '滚动结束'}\n"
            f"[bold]无头模式:[/bold] {effective_headless}\n"
            f"[bold]输出目录:[/bold] {output_dir or config.export.output_dir}",
            title="信息流采集",
            style="cyan",
        )
    )

    with _file_logging(log_file):
        try:
            summary = run_async_safely(
                run_feed_harvest(
                    feed_url,
                    mode=mode,
                    output_dir=output_dir or None,
                    headless=headless,
                    auth_file=auth_file or None,
                )
            )
        except KeyboardInterrupt:
            console.print("\n[yellow]用户中断[/yellow]")
            raise typer.Exit(130)
        except FeedSpiderError as e:
            logger.debug("[Harvest] 采集失败", exc_info=True)
            _fail(str(e))

    _render_summary(summary, "采集完成")


@app.command("snapshot")
def snapshot_command(
    snapshot_file: str = typer.Option(
        ...,
        "--file",
        "-f",
        help="已保存的页面 HTML 文件",
    ),
    base_url: str = typer.Option(
        "",
        "--base-url",
        help="用于补全相对链接的页面地址",
    ),
    output_dir: str = typer.Option(
        "",
        "--output",
        "-o",
        help="输出目录（默认从配置读取）",
    ),
    log_file: str = typer.Option(
        config.logging.file,
        "--log-file",
        help="额外写入的日志文件（默认读取 LOG_FILE 配置）",
    ),
):
    """
    从已保存的页面 HTML 中导出主导作者的视频与图片链接

    示例:
        feedspider snapshot --file saved/alice.html --base-url "https://www.tiktok.com/@alice"
    """
    try:
        snapshot_path = validate_snapshot_file(snapshot_file)
        base = validate_feed_url(base_url, required=False)
    except ValidationError as e:
        _fail(str(e))

    with _file_logging(log_file):
        try:
            summary = run_async_safely(
                run_snapshot_harvest(snapshot_path, base_url=base, output_dir=output_dir or None)
            )
        except FeedSpiderError as e:
            _fail(str(e))

    _render_summary(summary, "快照导出完成")


def main():
    """CLI 入口点

    供 pyproject.toml 中 [project.scripts] 调用。
    """
    app()


if __name__ == "__main__":
    main()
