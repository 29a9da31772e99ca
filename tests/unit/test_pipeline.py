"""采集流水线测试"""

from contextlib import asynccontextmanager
from datetime import date

import pytest
from playwright.async_api import Error as PlaywrightError

from feedspider.common.exceptions import BrowserError
from feedspider.common.types import CallbackMode
from feedspider.pipeline import run_feed_harvest, run_harvest, run_snapshot_harvest


LINKS = [
    "https://www.tiktok.com/@alice/video/1",
    "https://www.tiktok.com/@bob/video/2",
    "https://www.tiktok.com/@alice/photo/3",
]


class TestRunHarvest:
    """完整流程测试"""

    @pytest.mark.asyncio
    async def test_exports_once_after_scrolling(self, make_surface, make_driver, temp_output_dir):
        surface = make_surface([100, 250, 250], LINKS)

        summary = await run_harvest(
            surface,
            output_dir=temp_output_dir,
            run_date=date(2025, 3, 7),
            driver=make_driver(surface),
        )

        assert summary["owner"] == "alice"
        assert summary["link_count"] == 2
        assert summary["exports"] == 1
        assert summary["scroll"]["iterations"] == 2
        output = temp_output_dir / "alice_2025_03_07_TiktokData.txt"
        assert summary["output_file"] == str(output)
        assert output.read_text(encoding="utf-8").splitlines() == [LINKS[0], LINKS[2]]

    @pytest.mark.asyncio
    async def test_every_iteration_exports_per_settled_iteration(
        self, make_surface, make_driver, temp_output_dir
    ):
        surface = make_surface([100, 200, 300, 300], LINKS)

        summary = await run_harvest(
            surface,
            mode=CallbackMode.EVERY_ITERATION,
            output_dir=temp_output_dir,
            run_date=date(2025, 3, 7),
            driver=make_driver(surface),
        )

        assert summary["exports"] == 2
        assert len(list(temp_output_dir.iterdir())) == 1

    @pytest.mark.asyncio
    async def test_every_iteration_without_growth_exports_nothing(
        self, make_surface, make_driver, temp_output_dir
    ):
        surface = make_surface([100], LINKS)

        summary = await run_harvest(
            surface,
            mode=CallbackMode.EVERY_ITERATION,
            output_dir=temp_output_dir,
            driver=make_driver(surface),
        )

        assert summary["exports"] == 0
        assert summary["owner"] is None
        assert summary["output_file"] is None


class TestSnapshotHarvest:
    """快照采集测试"""

    @pytest.mark.asyncio
    async def test_snapshot_file(self, tmp_path, temp_output_dir):
        html = "".join(f'<a href="{url}">x</a>' for url in LINKS)
        snapshot = tmp_path / "feed.html"
        snapshot.write_text(f"<html><body>{html}</body></html>", encoding="utf-8")

        summary = await run_snapshot_harvest(snapshot, output_dir=temp_output_dir)

        assert summary["owner"] == "alice"
        assert summary["scroll"]["state"] == "stalled"
        assert summary["scroll"]["iterations"] == 1
        assert summary["exports"] == 1


class TestFeedHarvest:
    """在线采集错误包装测试（不启动真实浏览器）"""

    @pytest.mark.asyncio
    async def test_page_crash_while_scrolling_becomes_browser_error(
        self, monkeypatch, mock_page, temp_output_dir
    ):
        mock_page.evaluate.side_effect = PlaywrightError("Target page, context or browser has been closed")

        class _Engine:
            @asynccontextmanager
            async def page(self, **kwargs):
                yield mock_page

        async def _engine(**kwargs):
            return _Engine()

        monkeypatch.setattr("feedspider.common.browser.session.get_browser_engine", _engine)

        with pytest.raises(BrowserError) as exc_info:
            await run_feed_harvest("https://www.tiktok.com/@alice", output_dir=temp_output_dir)

        assert "has been closed" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, PlaywrightError)
        mock_page.goto.assert_awaited_once()
        assert list(temp_output_dir.iterdir()) == []
