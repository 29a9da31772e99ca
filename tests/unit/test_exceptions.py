"""异常类单元测试"""

import pytest
from feedspider.common.exceptions import (
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


class TestExceptionHierarchy:
    """异常类层次结构测试"""

    def test_base_exception(self):
        """测试基础异常"""
        with pytest.raises(FeedSpiderError):
            raise FeedSpiderError("基础错误")

    def test_invalid_argument_inheritance(self):
        assert issubclass(InvalidArgumentError, FeedSpiderError)

    def test_browser_error_inheritance(self):
        """测试浏览器错误继承关系"""
        error = PageLoadError("https://www.tiktok.com/@alice")
        assert isinstance(error, BrowserError)
        assert isinstance(error, FeedSpiderError)
        assert error.url == "https://www.tiktok.com/@alice"

    def test_validation_error_inheritance(self):
        error = URLValidationError("bad", "格式无效")
        assert isinstance(error, ValidationError)
        assert isinstance(error, FeedSpiderError)

    def test_config_error_inheritance(self):
        assert issubclass(ConfigError, FeedSpiderError)


class TestExceptionMessages:
    """异常消息测试"""

    def test_page_load_error_message(self):
        error = PageLoadError("https://example.com", "超时")
        assert "超时" in str(error)
        assert "https://example.com" in str(error)

    def test_snapshot_error_message(self):
        error = SnapshotError("/tmp/feed.html", "为空")
        assert "/tmp/feed.html" in str(error)
        assert error.reason == "为空"

    def test_export_error_message(self):
        error = ExportError("/tmp/out/alice.txt")
        assert "/tmp/out/alice.txt" in str(error)
        assert error.path == "/tmp/out/alice.txt"

    def test_url_validation_error_message(self):
        error = URLValidationError("invalid-url", "格式无效")
        assert "invalid-url" in str(error)
        assert "格式无效" in str(error)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
