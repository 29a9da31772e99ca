"""配置管理"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .constants import (
    DEFAULT_DOMAIN_MARKER,
    DEFAULT_EXPORT_SUFFIX,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_MAX_RETRIES,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_OWNER_SIGIL,
    DEFAULT_PAGE_TIMEOUT_MS,
    DEFAULT_PHOTO_SEGMENT,
    DEFAULT_POLL_INTERVAL_MS,
    DEFAULT_SCROLL_TIMEOUT_MS,
    DEFAULT_SETTLE_MS,
    DEFAULT_THROTTLE_SLACK_MS,
    DEFAULT_VIDEO_SEGMENT,
)
from .exceptions import ConfigError

# 加载 .env 文件
load_dotenv()


class BrowserConfig(BaseModel):
    """浏览器配置"""

    headless: bool = Field(default_factory=lambda: os.getenv("HEADLESS", "false").lower() == "true")
    viewport_width: int = Field(default_factory=lambda: int(os.getenv("VIEWPORT_WIDTH", "1280")))
    viewport_height: int = Field(default_factory=lambda: int(os.getenv("VIEWPORT_HEIGHT", "720")))
    timeout_ms: int = Field(
        default_factory=lambda: int(os.getenv("STEP_TIMEOUT_MS", str(DEFAULT_PAGE_TIMEOUT_MS)))
    )
    # 登录态文件（Playwright storage_state），用于需要登录才能浏览的主页
    auth_file: str = Field(
        default_factory=lambda: os.getenv("AUTH_FILE", str(Path(".auth") / "default.json"))
    )


class ScrollConfig(BaseModel):
    """滚动驱动配置

    一个等待窗口内：每隔 poll_interval_ms 检查一次页面高度，
    未增长时最多重新滚动 max_retries 次，累计等待达到 timeout_ms 即判定停滞。
    """

    # 轮询间隔（毫秒）
    poll_interval_ms: int = Field(
        default_factory=lambda: int(os.getenv("SCROLL_POLL_INTERVAL_MS", str(DEFAULT_POLL_INTERVAL_MS)))
    )
    # 单个等待窗口的超时（毫秒）
    timeout_ms: int = Field(
        default_factory=lambda: int(os.getenv("SCROLL_TIMEOUT_MS", str(DEFAULT_SCROLL_TIMEOUT_MS)))
    )
    # 单个等待窗口内的重试次数
    max_retries: int = Field(
        default_factory=lambda: int(os.getenv("SCROLL_MAX_RETRIES", str(DEFAULT_MAX_RETRIES)))
    )
    # 高度增长后的稳定等待（毫秒）
    settle_ms: int = Field(
        default_factory=lambda: int(os.getenv("SCROLL_SETTLE_MS", str(DEFAULT_SETTLE_MS)))
    )
    # 会话最大迭代次数（防止超长信息流无限滚动）
    max_iterations: int = Field(
        default_factory=lambda: int(os.getenv("SCROLL_MAX_ITERATIONS", str(DEFAULT_MAX_ITERATIONS)))
    )
    # 调度受限判定阈值（毫秒）
    throttle_slack_ms: int = Field(
        default_factory=lambda: int(
            os.getenv("SCROLL_THROTTLE_SLACK_MS", str(DEFAULT_THROTTLE_SLACK_MS))
        )
    )


class HarvestConfig(BaseModel):
    """链接采集配置"""

    # URL 中标识站点域名的片段，其后一段即作者段
    domain_marker: str = Field(
        default_factory=lambda: os.getenv("HARVEST_DOMAIN_MARKER", DEFAULT_DOMAIN_MARKER)
    )
    owner_sigil: str = Field(
        default_factory=lambda: os.getenv("HARVEST_OWNER_SIGIL", DEFAULT_OWNER_SIGIL)
    )
    video_segment: str = Field(
        default_factory=lambda: os.getenv("HARVEST_VIDEO_SEGMENT", DEFAULT_VIDEO_SEGMENT)
    )
    photo_segment: str = Field(
        default_factory=lambda: os.getenv("HARVEST_PHOTO_SEGMENT", DEFAULT_PHOTO_SEGMENT)
    )


class ExportConfig(BaseModel):
    """导出配置"""

    output_dir: str = Field(default_factory=lambda: os.getenv("OUTPUT_DIR", DEFAULT_OUTPUT_DIR))
    suffix: str = Field(default_factory=lambda: os.getenv("EXPORT_SUFFIX", DEFAULT_EXPORT_SUFFIX))


class LogConfig(BaseModel):
    """日志配置"""

    level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    # 非空时 CLI 额外把日志写入该文件
    file: str = Field(default_factory=lambda: os.getenv("LOG_FILE", ""))
    show_locals: bool = Field(
        default_factory=lambda: os.getenv("LOG_SHOW_LOCALS", "false").lower() == "true"
    )


class Config(BaseModel):
    """全局配置"""

    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    scroll: ScrollConfig = Field(default_factory=ScrollConfig)
    harvest: HarvestConfig = Field(default_factory=HarvestConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LogConfig = Field(default_factory=LogConfig)

    @classmethod
    def load(cls) -> "Config":
        """加载配置"""
        return cls()

    def validate_values(self) -> None:
        """校验取值范围

        Raises:
            ConfigError: 存在非法配置项时
        """
        scroll = self.scroll
        if scroll.poll_interval_ms <= 0:
            raise ConfigError(f"SCROLL_POLL_INTERVAL_MS 必须为正数: {scroll.poll_interval_ms}")
        if scroll.timeout_ms <= 0:
            raise ConfigError(f"SCROLL_TIMEOUT_MS 必须为正数: {scroll.timeout_ms}")
        if scroll.max_retries < 0:
            raise ConfigError(f"SCROLL_MAX_RETRIES 不能为负数: {scroll.max_retries}")
        if scroll.settle_ms < 0:
            raise ConfigError(f"SCROLL_SETTLE_MS 不能为负数: {scroll.settle_ms}")
        if scroll.max_iterations <= 0:
            raise ConfigError(f"SCROLL_MAX_ITERATIONS 必须为正数: {scroll.max_iterations}")
        if not self.harvest.domain_marker:
            raise ConfigError("HARVEST_DOMAIN_MARKER 不能为空")
        if not self.export.suffix:
            raise ConfigError("EXPORT_SUFFIX 不能为空")


# 全局配置实例
config = Config.load()
