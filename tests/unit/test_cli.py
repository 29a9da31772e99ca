"""CLI 测试"""

import pytest
from playwright.async_api import Error as PlaywrightError
from typer.testing import CliRunner

from feedspider.cli import app

runner = CliRunner()


def test_snapshot_command_exports(tmp_path):
    snapshot = tmp_path / "feed.html"
    snapshot.write_text(
        '<a href="/@alice/video/1">a</a><a href="/@alice/photo/2">b</a><a href="/@bob/video/3">c</a>',
        encoding="utf-8",
    )
    output_dir = tmp_path / "out"

    result = runner.invoke(
        app,
        [
            "snapshot",
            "--file", str(snapshot),
            "--base-url", "https://www.tiktok.com/@alice",
            "--output", str(output_dir),
        ],
    )

    assert result.exit_code == 0, result.output
    exported = list(output_dir.glob("alice_*_TiktokData.txt"))
    assert len(exported) == 1
    assert exported[0].read_text(encoding="utf-8").splitlines() == [
        "https://www.tiktok.com/@alice/video/1",
        "https://www.tiktok.com/@alice/photo/2",
    ]


def test_snapshot_command_missing_file(tmp_path):
    result = runner.invoke(app, ["snapshot", "--file", str(tmp_path / "missing.html")])

    assert result.exit_code == 1


def test_harvest_command_rejects_invalid_url():
    result = runner.invoke(app, ["harvest", "--url", "ftp://example.com/feed"])

    assert result.exit_code == 1


def test_harvest_command_reports_missing_browser(monkeypatch, tmp_path):
    async def _broken_engine(**kwargs):
        raise PlaywrightError("Executable doesn't exist at /ms-playwright/chromium/chrome")

    monkeypatch.setattr("feedspider.common.browser.session.get_browser_engine", _broken_engine)

    result = runner.invoke(
        app,
        ["harvest", "--url", "https://www.tiktok.com/@alice", "--output", str(tmp_path / "out")],
    )

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "浏览器启动失败" in result.output


def _summary(output_file: str) -> dict:
    return {
        "owner": "alice",
        "link_count": 0,
        "video_count": 0,
        "photo_count": 0,
        "candidate_count": 0,
        "output_file": output_file,
        "exports": 1,
        "scroll": {"state": "stalled", "iterations": 1, "throttle_events": 0},
    }


@pytest.mark.parametrize(
    "flags, expected",
    [([], None), (["--headless"], True), (["--no-headless"], False)],
)
def test_harvest_command_headless_defaults_to_config(monkeypatch, tmp_path, flags, expected):
    captured = {}

    async def _fake_harvest(feed_url, **kwargs):
        captured.update(kwargs)
        return _summary(str(tmp_path / "alice.txt"))

    monkeypatch.setattr("feedspider.cli.run_feed_harvest", _fake_harvest)

    result = runner.invoke(app, ["harvest", "--url", "https://www.tiktok.com/@alice", *flags])

    assert result.exit_code == 0, result.output
    assert captured["headless"] is expected


def test_snapshot_command_writes_log_file(tmp_path):
    snapshot = tmp_path / "feed.html"
    snapshot.write_text('<a href="https://www.tiktok.com/@alice/video/1">a</a>', encoding="utf-8")
    log_file = tmp_path / "logs" / "feedspider.log"

    result = runner.invoke(
        app,
        [
            "snapshot",
            "--file", str(snapshot),
            "--output", str(tmp_path / "out"),
            "--log-file", str(log_file),
        ],
    )

    assert result.exit_code == 0, result.output
    content = log_file.read_text(encoding="utf-8")
    assert "[Pipeline]" in content
    assert "[Scroll] 滚动结束" in content
