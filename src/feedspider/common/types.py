"""核心数据类型定义"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# 滚动会话
# ============================================================================


class CallbackMode(str, Enum):
    """回调触发时机"""

    NONE = "none"  # 滚动结束后执行一次
    EVERY_ITERATION = "every_iteration"  # 每次迭代稳定后执行


class ScrollState(str, Enum):
    """滚动状态机的状态"""

    SCROLLING = "scrolling"
    WAITING = "waiting"
    GROWN = "grown"
    STALLED = "stalled"
    CEILING_HIT = "ceiling_hit"
    CANCELLED = "cancelled"


class ScrollSession(BaseModel):
    """单次采集运行期间的滚动计数器"""

    previous_height: int = Field(default=0, ge=0, description="上一次观测到的页面高度")
    loop_count: int = Field(default=0, description="已执行的外层迭代次数")
    retry_count: int = Field(default=0, description="当前等待窗口内的重试次数")
    accumulated_wait_ms: float = Field(default=0.0, description="当前等待窗口已等待的毫秒数")
    total_retries: int = Field(default=0, description="整个会话的重试总数")
    throttle_events: int = Field(default=0, description="调度受限诊断次数")

    def reset_window(self) -> None:
        """开始新的等待窗口"""
        self.retry_count = 0
        self.accumulated_wait_ms = 0.0


class ScrollReport(BaseModel):
    """滚动会话结果摘要"""

    state: ScrollState = Field(..., description="终止状态")
    iterations: int = Field(..., description="执行的外层迭代次数")
    height_changed: bool = Field(..., description="最后一次迭代是否观测到高度增长")
    final_height: int = Field(default=0, description="结束时的页面高度")
    total_retries: int = Field(default=0, description="重试总数")
    throttle_events: int = Field(default=0, description="调度受限诊断次数")


# ============================================================================
# 链接采集
# ============================================================================


class LinkKind(str, Enum):
    """链接类型"""

    VIDEO = "video"
    PHOTO = "photo"
    OTHER = "other"


class HarvestedLink(BaseModel):
    """采集到的单条内容链接（不可变）"""

    model_config = ConfigDict(frozen=True)

    raw_url: str = Field(..., description="原始 URL")
    kind: LinkKind = Field(..., description="链接类型")
    owner: str = Field(default="", description="作者名（无法解析时为空）")


class HarvestResult(BaseModel):
    """一次提取的结果：仅包含主导作者的链接，视频在前、图片在后"""

    links: list[HarvestedLink] = Field(default_factory=list)
    owner: str = Field(..., description="主导作者")
    candidate_count: int = Field(default=0, description="作者过滤前的候选链接数")
    owner_tally: dict[str, int] = Field(default_factory=dict, description="作者计数表")

    @property
    def urls(self) -> list[str]:
        return [link.raw_url for link in self.links]

    @property
    def video_count(self) -> int:
        return sum(1 for link in self.links if link.kind == LinkKind.VIDEO)

    @property
    def photo_count(self) -> int:
        return sum(1 for link in self.links if link.kind == LinkKind.PHOTO)
