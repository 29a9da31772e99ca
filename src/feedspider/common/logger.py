"""日志

所有模块日志器都挂在 ``feedspider`` 根日志器之下：控制台输出由根日志器上的
RichHandler 统一负责，文件输出通过 setup_file_logging 一次性挂到根日志器上。
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from .config import config

ROOT_LOGGER_NAME = "feedspider"

FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"

# CLI 与日志共用的控制台
console = Console()


def _root_logger() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if any(isinstance(h, RichHandler) for h in root.handlers):
        return root

    # 未知级别名回退到 INFO
    level = logging.getLevelName(config.logging.level)
    root.setLevel(level if isinstance(level, int) else logging.INFO)

    handler = RichHandler(
        console=console,
        show_path=False,
        markup=True,
        rich_tracebacks=True,
        tracebacks_show_locals=config.logging.show_locals,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    root.addHandler(handler)
    root.propagate = False
    return root


def get_logger(name: str) -> logging.Logger:
    """返回 feedspider 根日志器下的子日志器

    Args:
        name: 通常为 __name__；不在 feedspider 命名空间下的名称会被挂到根日志器之下

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("[Harvest] 开始")
    """
    _root_logger()
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def get_crawler_logger() -> logging.Logger:
    """滚动驱动使用的日志器"""
    return get_logger(f"{ROOT_LOGGER_NAME}.crawler")


def setup_file_logging(log_file: str | Path, level: int = logging.DEBUG) -> logging.FileHandler:
    """把所有 feedspider 日志额外写入文件

    Args:
        log_file: 日志文件路径，父目录不存在时自动创建
        level: 文件日志级别（仍受根日志器级别限制）

    Returns:
        新挂载的文件处理器，交给 teardown_file_logging 释放
    """
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    _root_logger().addHandler(handler)
    return handler


def teardown_file_logging(handler: logging.Handler) -> None:
    """卸下并关闭 setup_file_logging 挂载的处理器"""
    logging.getLogger(ROOT_LOGGER_NAME).removeHandler(handler)
    handler.close()
