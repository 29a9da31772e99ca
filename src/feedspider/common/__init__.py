"""Common模块 - 公共工具和基础设施

该模块提供：
- 全局配置管理
- 类型定义
- 日志系统
- 异常类
- 常量定义
- 输入验证
"""

from .config import config, Config
from .logger import get_logger, console, setup_file_logging
from .exceptions import (
    FeedSpiderError,
    InvalidArgumentError,
    BrowserError,
    PageLoadError,
    SnapshotError,
    ExportError,
    ValidationError,
    URLValidationError,
    ConfigError,
)
from .constants import (
    DEFAULT_POLL_INTERVAL_MS,
    DEFAULT_MAX_RETRIES,
    DEFAULT_MAX_ITERATIONS,
    NO_OWNER_PLACEHOLDER,
)

__all__ = [
    # 配置
    "config",
    "Config",
    # 日志
    "get_logger",
    "console",
    "setup_file_logging",
    # 异常
    "FeedSpiderError",
    "InvalidArgumentError",
    "BrowserError",
    "PageLoadError",
    "SnapshotError",
    "ExportError",
    "ValidationError",
    "URLValidationError",
    "ConfigError",
    # 常量
    "DEFAULT_POLL_INTERVAL_MS",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_MAX_ITERATIONS",
    "NO_OWNER_PLACEHOLDER",
]
