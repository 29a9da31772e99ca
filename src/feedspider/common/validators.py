"""命令行输入校验

feed 地址、快照文件和导出文件名中的作者名都在这里规整，
校验失败统一抛出 ValidationError 的子类，由 CLI 转成错误面板。
"""

from __future__ import annotations

import re
from pathlib import Path
from urllib.parse import urlsplit

from .constants import MAX_URL_LENGTH, NO_OWNER_PLACEHOLDER, VALID_URL_SCHEMES
from .exceptions import URLValidationError, ValidationError

# Windows 与 POSIX 文件名中都不能出现的字符，外加空白
_UNSAFE_NAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f\s]+')

MAX_OWNER_COMPONENT_LENGTH = 100


def validate_feed_url(url: str | None, required: bool = True) -> str | None:
    """校验 feed 页面地址

    Args:
        url: 用户输入的地址
        required: 为 False 时空输入返回 None（如 snapshot 的 --base-url）

    Returns:
        去掉首尾空白的地址；可选且为空时返回 None

    Raises:
        URLValidationError: 地址为空（必填时）、过长、协议或主机缺失
    """
    candidate = (url or "").strip()
    if not candidate:
        if required:
            raise URLValidationError("", "URL 不能为空")
        return None

    if len(candidate) > MAX_URL_LENGTH:
        raise URLValidationError(candidate[:80] + "...", f"URL 长度超过 {MAX_URL_LENGTH} 字符")

    try:
        parts = urlsplit(candidate)
    except ValueError as e:
        raise URLValidationError(candidate, f"URL 解析失败: {e}") from e

    scheme = parts.scheme.lower()
    if not scheme:
        raise URLValidationError(candidate, "缺少协议 (http/https)")
    if scheme not in VALID_URL_SCHEMES:
        raise URLValidationError(candidate, f"不支持的协议: {parts.scheme}")
    if not parts.hostname:
        raise URLValidationError(candidate, "缺少域名")

    return candidate


def validate_snapshot_file(path: str | Path | None) -> Path:
    """校验快照文件路径，返回绝对路径"""
    raw = str(path or "").strip()
    if not raw:
        raise ValidationError("快照文件路径不能为空")

    snapshot = Path(raw).expanduser()
    if not snapshot.exists():
        raise ValidationError(f"快照文件不存在: {raw}")
    if not snapshot.is_file():
        raise ValidationError(f"快照路径不是文件: {raw}")
    return snapshot.resolve()


def owner_file_component(owner: str) -> str:
    """把作者名转换为可以放进导出文件名的片段

    非法字符与空白折叠为单个下划线；首尾的点和下划线去掉，避免生成隐藏文件
    或 ``..`` 这类路径片段；清理后为空时使用占位作者名。
    """
    component = _UNSAFE_NAME_CHARS.sub("_", owner or "").strip("._")
    if not component:
        return NO_OWNER_PLACEHOLDER
    return component[:MAX_OWNER_COMPONENT_LENGTH]
