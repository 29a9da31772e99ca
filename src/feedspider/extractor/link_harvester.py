"""内容链接采集与作者归属

从渲染面读取所有链接，按视频/图片分类去重，并通过计票确定主导作者：
1. 视频链接在前、图片链接在后，按出现顺序依次计票
2. 只有计数严格大于当前最大值时才更换领先者，因此平票时先到达最大值者胜出
3. 无法解析作者的链接计入当前领先者，不会新开计数项
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from ..common.config import config
from ..common.constants import NO_OWNER_PLACEHOLDER
from ..common.logger import get_logger
from ..common.types import HarvestedLink, HarvestResult, LinkKind

if TYPE_CHECKING:
    from ..surface.base import RenderSurface

logger = get_logger(__name__)


def classify_link(
    url: str,
    video_segment: str = "/video/",
    photo_segment: str = "/photo/",
) -> LinkKind:
    """根据路径片段判断链接类型，同时包含两者时按视频处理"""
    if video_segment in url:
        return LinkKind.VIDEO
    if photo_segment in url:
        return LinkKind.PHOTO
    return LinkKind.OTHER


def extract_owner(url: str, domain_marker: str = "tiktok.com", sigil: str = "@") -> str:
    """从 URL 中解析作者名

    找到第一个包含站点域名的路径段，其后一段若以 sigil 开头，去掉 sigil 即为作者名。

    Returns:
        作者名；域名段缺失、作者段缺失或不带 sigil 时返回空字符串

    Example:
        >>> extract_owner("https://www.tiktok.com/@alice/video/1")
        'alice'
    """
    parts = url.split("/")
    domain_index = next((i for i, part in enumerate(parts) if domain_marker in part), None)
    if domain_index is None or domain_index + 1 >= len(parts):
        return ""

    designator = parts[domain_index + 1]
    if not designator.startswith(sigil):
        return ""
    return designator[len(sigil):]


def dedupe(urls: Iterable[str]) -> list[str]:
    """按首次出现顺序去重"""
    seen: set[str] = set()
    unique: list[str] = []
    for url in urls:
        if url not in seen:
            seen.add(url)
            unique.append(url)
    return unique


def tally_owners(owners: Iterable[str]) -> tuple[str | None, dict[str, int]]:
    """按顺序计票

    Args:
        owners: 作者名序列，空字符串表示无法解析

    Returns:
        (领先者, 计数表)；没有任何可解析作者时领先者为 None
    """
    tally: dict[str, int] = {}
    leader: str | None = None
    leader_count = 0

    for owner in owners:
        # 无作者的链接并入当前领先者
        name = owner or leader
        if name is None:
            continue
        tally[name] = tally.get(name, 0) + 1
        if tally[name] > leader_count:
            leader = name
            leader_count = tally[name]

    return leader, tally


class LinkHarvester:
    """链接采集器

    每次 extract() 都基于渲染面当前的完整链接列表重新计算，不保留状态，
    因此对同一页面重复调用得到相同结果。
    """

    def __init__(
        self,
        surface: "RenderSurface",
        domain_marker: str | None = None,
        owner_sigil: str | None = None,
        video_segment: str | None = None,
        photo_segment: str | None = None,
    ):
        harvest = config.harvest
        self.surface = surface
        self.domain_marker = domain_marker or harvest.domain_marker
        self.owner_sigil = owner_sigil or harvest.owner_sigil
        self.video_segment = video_segment or harvest.video_segment
        self.photo_segment = photo_segment or harvest.photo_segment

    async def extract(self) -> HarvestResult:
        """提取主导作者的视频与图片链接"""
        raw_urls = [url for url in await self.surface.list_links() if url]

        videos: list[str] = []
        photos: list[str] = []
        for url in raw_urls:
            kind = classify_link(url, self.video_segment, self.photo_segment)
            if kind == LinkKind.VIDEO:
                videos.append(url)
            elif kind == LinkKind.PHOTO:
                photos.append(url)

        candidates = [
            self._to_link(url, LinkKind.VIDEO) for url in dedupe(videos)
        ] + [
            self._to_link(url, LinkKind.PHOTO) for url in dedupe(photos)
        ]

        leader, tally = tally_owners(link.owner for link in candidates)
        owner = leader or NO_OWNER_PLACEHOLDER
        links = [link for link in candidates if link.owner == owner]

        unresolved = sum(1 for link in candidates if not link.owner)
        if unresolved:
            logger.debug(f"[Harvest] {unresolved} 条链接无法解析作者，已并入领先者计数")
        logger.info(
            f"[Harvest] 读取 {len(raw_urls)} 个链接，候选 {len(candidates)} 条，"
            f"主导作者 {owner}，保留 {len(links)} 条"
        )

        return HarvestResult(
            links=links,
            owner=owner,
            candidate_count=len(candidates),
            owner_tally=tally,
        )

    def _to_link(self, url: str, kind: LinkKind) -> HarvestedLink:
        return HarvestedLink(
            raw_url=url,
            kind=kind,
            owner=extract_owner(url, self.domain_marker, self.owner_sigil),
        )
