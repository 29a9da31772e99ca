"""
文件操作工具模块

主要功能：
- 目录创建
- 文件字节读取
- 经临时文件中转的原子写入
"""

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from loguru import logger


# ==================== 目录操作 ====================

def ensure_directory(path: Union[str, Path]) -> bool:
    """
    确保目录存在，如果不存在则创建

    Args:
        path: 目录路径

    Returns:
        bool: 成功返回 True，失败返回 False

    Example:
        >>> ensure_directory("data/output")
        True
    """
    try:
        p = Path(path)
        if not p.exists():
            p.mkdir(parents=True, exist_ok=True)
            logger.debug(f"Created directory: {p}")
        return True
    except OSError as e:
        logger.error(f"[FS_CREATE_ERROR] Failed to create directory {path}: {e}")
        return False


# ==================== 文件操作 ====================

def load_bytes(file_path: Union[str, Path]) -> Optional[bytes]:
    """
    以字节形式读取文件

    不做解码，编码交给调用方（如 HTML 解析器按文档声明自行识别）。

    Args:
        file_path: 文件路径

    Returns:
        文件内容，文件不存在或读取失败返回 None
    """
    path = Path(file_path)
    if not path.is_file():
        logger.warning(f"[FS_READ_WARN] File not found: {file_path}")
        return None

    try:
        return path.read_bytes()
    except OSError as e:
        logger.error(f"[FS_READ_ERROR] Failed to read {file_path}: {e}")
        return None


def write_text_atomic(file_path: Union[str, Path], content: str, encoding: str = "utf-8") -> Path:
    """
    原子写入文本文件

    先写入同目录下的临时文件，再整体替换目标文件，保证目标文件不会出现半写状态。
    无论成功与否，临时文件都会被清理。

    Args:
        file_path: 目标文件路径
        content: 文本内容
        encoding: 文本编码（默认 utf-8）

    Returns:
        Path: 目标文件路径

    Raises:
        OSError: 写入或替换失败时
    """
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".part", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="\n") as f:
            f.write(content)
        os.replace(tmp_name, path)
        logger.debug(f"Saved file: {path}")
    finally:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)

    return path

