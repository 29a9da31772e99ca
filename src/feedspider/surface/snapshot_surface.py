"""基于已保存 HTML 页面的渲染面实现

用于离线处理：在浏览器中手动滚动到底后"另存为"页面，再从快照中提取链接。
快照的高度不会增长，因此滚动驱动会在第一个等待窗口后结束。
"""

from __future__ import annotations

from pathlib import Path
from urllib.parse import urljoin

from lxml import etree
from lxml import html as lxml_html

from ..common.exceptions import SnapshotError
from ..common.utils import load_bytes
from .base import RenderSurface

_UTF8_PARSER = lxml_html.HTMLParser(encoding="utf-8")


def _parse(html_content: str | bytes):
    """解析 HTML

    统一按字节解析：带 ``<?xml ... encoding=...?>`` 声明的 XHTML 快照以 str 传给
    lxml 会抛出 ValueError。能按 UTF-8 解码的内容固定用 UTF-8，其余交给 lxml
    按文档声明识别编码。
    """
    if isinstance(html_content, str):
        return lxml_html.fromstring(html_content.encode("utf-8"), parser=_UTF8_PARSER)
    try:
        html_content.decode("utf-8")
    except UnicodeDecodeError:
        return lxml_html.fromstring(html_content)
    return lxml_html.fromstring(html_content, parser=_UTF8_PARSER)


class HtmlSnapshotSurface(RenderSurface):
    """从 HTML 快照中读取链接的静态渲染面"""

    def __init__(self, html_content: str | bytes, base_url: str | None = None):
        """
        Args:
            html_content: 页面 HTML（文本或原始字节）
            base_url: 用于补全相对链接的页面地址

        Raises:
            SnapshotError: HTML 无法解析时
        """
        self.base_url = base_url
        try:
            self._tree = _parse(html_content)
        except (etree.ParserError, ValueError) as e:
            raise SnapshotError("<memory>", f"无法解析 ({e})") from e

    @classmethod
    def from_file(cls, path: str | Path, base_url: str | None = None) -> "HtmlSnapshotSurface":
        """从文件加载快照

        Raises:
            SnapshotError: 文件不存在、不可读或无法解析时
        """
        content = load_bytes(path)
        if content is None:
            raise SnapshotError(str(path))
        if not content.strip():
            raise SnapshotError(str(path), "为空")
        try:
            return cls(content, base_url=base_url)
        except SnapshotError as e:
            raise SnapshotError(str(path), e.reason) from e

    async def get_extent(self) -> int:
        # 静态快照没有可增长的内容，以链接数量作为固定高度
        return len(self._tree.xpath("//a[@href]"))

    async def set_extent(self, extent: int) -> None:
        # 静态快照无需滚动
        return None

    async def list_links(self) -> list[str]:
        links: list[str] = []
        for href in self._tree.xpath("//a/@href"):
            href = str(href).strip()
            if not href:
                continue
            links.append(urljoin(self.base_url, href) if self.base_url else href)
        return links
