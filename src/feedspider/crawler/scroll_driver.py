"""无限滚动驱动

反复把视口滚动到当前内容底部，并等待页面加载出更多内容。

状态流转:
    SCROLLING -> WAITING -> GROWN       继续下一轮
                         -> STALLED     结束（到底或卡住，两者不作区分）
    达到迭代上限                -> CEILING_HIT 结束
    取消事件被设置              -> CANCELLED   结束
"""

from __future__ import annotations

import asyncio
import inspect
import time
from typing import TYPE_CHECKING, Any, Awaitable, Callable

from ..common.config import config
from ..common.exceptions import InvalidArgumentError
from ..common.logger import get_crawler_logger
from ..common.types import CallbackMode, ScrollReport, ScrollSession, ScrollState

if TYPE_CHECKING:
    from ..surface.base import RenderSurface

logger = get_crawler_logger()

IterationCallback = Callable[[], Any]
SleepFn = Callable[[float], Awaitable[Any]]
ClockFn = Callable[[], float]


def _resolve_mode(mode: CallbackMode | str | None) -> CallbackMode:
    if mode is None:
        return CallbackMode.NONE
    if isinstance(mode, CallbackMode):
        return mode
    try:
        return CallbackMode(mode)
    except ValueError:
        raise InvalidArgumentError(f"无效的回调模式: {mode!r}") from None


async def _invoke(callback: IterationCallback) -> None:
    result = callback()
    if inspect.isawaitable(result):
        await result


class ScrollDriver:
    """滚动驱动器

    单协程执行，每次只有一个滚动指令在途，下一轮开始前必须观测到上一轮的结果。
    sleep 与 clock 可注入，便于在测试中不真正等待。
    """

    def __init__(
        self,
        surface: "RenderSurface",
        poll_interval_ms: int | None = None,
        timeout_ms: int | None = None,
        max_retries: int | None = None,
        settle_ms: int | None = None,
        max_iterations: int | None = None,
        throttle_slack_ms: int | None = None,
        sleep: SleepFn | None = None,
        clock: ClockFn | None = None,
    ):
        """初始化

        Args:
            surface: 渲染面
            poll_interval_ms: 轮询间隔，默认从配置读取
            timeout_ms: 单个等待窗口的超时，默认从配置读取
            max_retries: 单个等待窗口内的重试次数，默认从配置读取
            settle_ms: 高度增长后的稳定等待，默认从配置读取
            max_iterations: 会话迭代上限，默认从配置读取
            throttle_slack_ms: 调度受限判定阈值，默认从配置读取
            sleep: 异步休眠函数（秒），默认 asyncio.sleep
            clock: 单调时钟（秒），默认 time.monotonic
        """
        scroll = config.scroll
        self.surface = surface
        self.poll_interval_ms = poll_interval_ms if poll_interval_ms is not None else scroll.poll_interval_ms
        self.timeout_ms = timeout_ms if timeout_ms is not None else scroll.timeout_ms
        self.max_retries = max_retries if max_retries is not None else scroll.max_retries
        self.settle_ms = settle_ms if settle_ms is not None else scroll.settle_ms
        self.max_iterations = max_iterations if max_iterations is not None else scroll.max_iterations
        self.throttle_slack_ms = (
            throttle_slack_ms if throttle_slack_ms is not None else scroll.throttle_slack_ms
        )
        self._sleep_fn = sleep or asyncio.sleep
        self._clock = clock or time.monotonic

        self.session = ScrollSession()
        self.state = ScrollState.SCROLLING

    async def run(
        self,
        callback: IterationCallback | None = None,
        mode: CallbackMode | str | None = CallbackMode.NONE,
        cancel_event: asyncio.Event | None = None,
    ) -> ScrollReport:
        """滚动直到内容不再增长

        Args:
            callback: 回调，可以是普通函数或协程函数；抛出的异常会直接向上传播
            mode: NONE 在结束后执行一次回调，EVERY_ITERATION 在每轮稳定后执行
            cancel_event: 设置后在下一个状态边界结束会话

        Returns:
            ScrollReport: 会话摘要

        Raises:
            InvalidArgumentError: 回调不可调用或模式无效（在任何滚动之前）
        """
        if callback is not None and not callable(callback):
            raise InvalidArgumentError("传入的回调不是可调用对象")
        resolved_mode = _resolve_mode(mode)

        self.session = ScrollSession()
        session = self.session
        height_changed = False

        logger.info("[Scroll] 开始滚动...")

        while True:
            if self._cancelled(cancel_event):
                self._transition(ScrollState.CANCELLED)
                break
            if session.loop_count >= self.max_iterations:
                logger.warning(f"[Scroll] 达到迭代上限 {self.max_iterations}，停止滚动")
                self._transition(ScrollState.CEILING_HIT)
                break

            session.loop_count += 1
            session.reset_window()
            self._transition(ScrollState.SCROLLING)
            session.previous_height = await self._scroll_to_bottom()

            self._transition(ScrollState.WAITING)
            outcome = await self._wait_for_growth(cancel_event)
            self._transition(outcome)
            height_changed = outcome == ScrollState.GROWN

            if not height_changed:
                if outcome == ScrollState.STALLED:
                    logger.info("[Scroll] 已到达底部或等待超时")
                break

            # 等待页面完成渲染
            await self._sleep(self.settle_ms)

            if resolved_mode == CallbackMode.EVERY_ITERATION and callback is not None:
                await _invoke(callback)

        if resolved_mode == CallbackMode.NONE and callback is not None:
            await _invoke(callback)

        report = ScrollReport(
            state=self.state,
            iterations=session.loop_count,
            height_changed=height_changed,
            final_height=await self.surface.get_extent(),
            total_retries=session.total_retries,
            throttle_events=session.throttle_events,
        )
        logger.info(
            f"[Scroll] 滚动结束: state={report.state.value}, iterations={report.iterations}, "
            f"retries={report.total_retries}, height={report.final_height}"
        )
        return report

    async def _wait_for_growth(self, cancel_event: asyncio.Event | None) -> ScrollState:
        """单个等待窗口：轮询高度，必要时重新滚动

        窗口按时钟从进入时开始计时，渲染面读取与滚动指令本身的耗时同样计入；
        计时不少于已请求的休眠总时长，时钟异常时窗口也会推进到超时。
        """
        session = self.session
        window_started = self._clock()
        requested_ms = 0.0

        while True:
            session.accumulated_wait_ms = max((self._clock() - window_started) * 1000, requested_ms)
            if session.accumulated_wait_ms >= self.timeout_ms:
                return ScrollState.STALLED
            if self._cancelled(cancel_event):
                return ScrollState.CANCELLED

            requested_ms += await self._sleep(self.poll_interval_ms)
            current = await self.surface.get_extent()
            if current > session.previous_height:
                logger.debug(f"[Scroll] 高度增长 {session.previous_height} -> {current}")
                return ScrollState.GROWN

            if session.retry_count < self.max_retries:
                requested_ms += await self._sleep(self.poll_interval_ms)
                session.previous_height = await self._scroll_to_bottom()
                session.retry_count += 1
                session.total_retries += 1
                logger.debug(f"[Scroll] 高度未变化，重试滚动 {session.retry_count}/{self.max_retries}")

    async def _scroll_to_bottom(self) -> int:
        """记录当前高度并滚动到该位置，返回滚动前的高度"""
        height = await self.surface.get_extent()
        await self.surface.set_extent(height)
        return height

    async def _sleep(self, duration_ms: float) -> float:
        """休眠并返回请求时长（毫秒），实际耗时超出阈值时输出调度受限诊断"""
        started = self._clock()
        await self._sleep_fn(duration_ms / 1000)
        elapsed_ms = (self._clock() - started) * 1000

        if elapsed_ms - duration_ms > self.throttle_slack_ms:
            self.session.throttle_events += 1
            logger.warning(
                f"[Scroll] 调度受限: 请求休眠 {duration_ms:.0f}ms，实际 {elapsed_ms:.0f}ms"
            )
        return float(duration_ms)

    def _transition(self, state: ScrollState) -> None:
        logger.debug(f"[Scroll] {self.state.value} -> {state.value} (loop={self.session.loop_count})")
        self.state = state

    @staticmethod
    def _cancelled(cancel_event: asyncio.Event | None) -> bool:
        return cancel_event is not None and cancel_event.is_set()
